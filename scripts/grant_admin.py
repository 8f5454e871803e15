#!/usr/bin/env python3
"""
管理者許可リストにアカウントを追加する。

  python -m scripts.grant_admin admin@example.com
"""
import sys

from app.db import Base, SessionLocal, engine
from app.models.account import Account
from app.services.identity import grant_admin


def main(argv):
    if len(argv) != 2:
        print("usage: grant_admin.py EMAIL", file=sys.stderr)
        return 2

    email = argv[1].strip().lower()
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        account = db.query(Account).filter(Account.email == email).first()
        if not account:
            print(f"account not found: {email} (sign up first)", file=sys.stderr)
            return 1
        grant_admin(db, account.id)
        print(f"granted admin: {email} ({account.id})")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main(sys.argv))
