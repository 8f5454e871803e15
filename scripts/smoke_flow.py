#!/usr/bin/env python3
"""
起動中のサーバーに対して 申請 → 承認 → 公開 → 推薦 の流れを一通り叩く。
管理者アカウントは事前に作っておくこと:

  python -m scripts.grant_admin admin@example.com
  ADMIN_EMAIL=admin@example.com ADMIN_PASSWORD=... python scripts/smoke_flow.py
"""
import json
import os
import sys
import uuid
from urllib import request, error

BASE_URL = os.environ.get("BASE_URL", "http://127.0.0.1:8000")


def api(method, path, body=None, token=None):
    url = BASE_URL + path
    data = None
    headers = {}
    if body is not None:
        data = json.dumps(body).encode("utf-8")
        headers["Content-Type"] = "application/json"
    if token:
        headers["Authorization"] = f"Bearer {token}"
    req = request.Request(url, data=data, headers=headers, method=method)
    try:
        with request.urlopen(req, timeout=10) as resp:
            payload = resp.read().decode("utf-8")
            return resp.status, json.loads(payload) if payload else None
    except error.HTTPError as e:
        payload = e.read().decode("utf-8")
        try:
            return e.code, json.loads(payload)
        except ValueError:
            return e.code, {"detail": payload}


def must_ok(status, data, label):
    if status < 200 or status >= 300:
        raise RuntimeError(f"{label} failed: {status} {data}")
    return data


def sign_in(email, password):
    status, data = api("POST", "/api/auth/sign_in", {"email": email, "password": password})
    return must_ok(status, data, "sign_in")["access_token"]


def sign_up(email, password):
    status, data = api("POST", "/api/auth/sign_up", {"email": email, "password": password})
    return must_ok(status, data, "sign_up")["access_token"]


def submit(full_name, email, specialties="", token=None):
    status, data = api(
        "POST",
        "/api/profiles",
        {"full_name": full_name, "email": email, "specialties": specialties},
        token=token,
    )
    return must_ok(status, data, f"submit {full_name}")


def approve(profile_id, token):
    status, data = api("POST", f"/api/admin/profiles/{profile_id}/approve", token=token)
    return must_ok(status, data, "approve")


def publish(profile_id, token):
    status, data = api(
        "POST",
        f"/api/admin/profiles/{profile_id}/visibility",
        {"public_visible": True},
        token=token,
    )
    return must_ok(status, data, "visibility")


def endorse(profile_id, token):
    status, data = api("POST", f"/api/profiles/{profile_id}/endorse", token=token)
    return must_ok(status, data, "endorse")


def public_ids():
    status, data = api("GET", "/api/directory")
    return {p["id"] for p in must_ok(status, data, "directory")["items"]}


def main():
    admin_email = os.environ.get("ADMIN_EMAIL")
    admin_password = os.environ.get("ADMIN_PASSWORD")
    if not admin_email or not admin_password:
        print("ADMIN_EMAIL / ADMIN_PASSWORD are required", file=sys.stderr)
        return 2

    admin_token = sign_in(admin_email, admin_password)
    suffix = uuid.uuid4().hex[:8]

    jane = submit("Jane Doe", f"jane-{suffix}@example.com", "ASL Interpreter, Captioner")
    assert jane["status"] == "pending", jane
    print(f"[ok] submitted {jane['id']} (pending)")

    approved = approve(jane["id"], admin_token)
    assert approved["status"] == "approved", approved
    assert jane["id"] not in public_ids()
    print("[ok] approved (not yet public)")

    publish(jane["id"], admin_token)
    assert jane["id"] in public_ids()
    print("[ok] published")

    member_email = f"member-{suffix}@example.com"
    member_token = sign_up(member_email, "smoke-pass")
    member = submit("Smoke Member", member_email, token=member_token)
    approve(member["id"], admin_token)

    first = endorse(jane["id"], member_token)
    assert first["endorsed"] and first["endorsement_count"] == 1, first
    second = endorse(jane["id"], member_token)
    assert not second["endorsed"] and second["endorsement_count"] == 0, second
    print("[ok] endorsement toggled on and off")

    print("smoke flow passed")
    return 0


if __name__ == "__main__":
    sys.exit(main())
