# tests/test_profiles.py

import uuid

from starlette.testclient import TestClient
from sqlalchemy.orm import Session

from app.models.endorsement import Endorsement
from app.models.profile import Profile
from app.services.identity import grant_admin


def _submit_profile(
    client: TestClient,
    full_name: str = "Alice",
    specialties: str | list[str] = "",
    headers: dict | None = None,
    **extra,
):
    """テスト用のプロフィール申請ヘルパー"""
    payload = {
        "full_name": full_name,
        "email": f"{full_name.replace(' ', '.').lower()}@example.com",
        "specialties": specialties,
        **extra,
    }
    res = client.post("/api/profiles", json=payload, headers=headers or {})
    assert res.status_code == 201
    return res.json()


def _sign_up(client: TestClient, email: str) -> dict:
    res = client.post("/api/auth/sign_up", json={"email": email, "password": "secret-pass"})
    assert res.status_code == 201
    body = res.json()
    return {"account_id": body["account_id"], "headers": {"Authorization": f"Bearer {body['access_token']}"}}


def test_submit_creates_pending_hidden_profile(client: TestClient, db: Session):
    created = _submit_profile(
        client,
        "Jane Doe",
        specialties="ASL Interpreter, Captioner, ",
        phone="",
        bio="Interpreter based in Austin",
    )

    assert created["status"] == "pending"
    assert created["public_visible"] is False
    assert created["specialties"] == ["ASL Interpreter", "Captioner"]
    assert created["approved_at"] is None
    assert created["user_id"] is None

    stored = db.get(Profile, created["id"])
    assert stored.phone is None  # 空文字は NULL で保存
    assert stored.bio == "Interpreter based in Austin"


def test_submit_accepts_specialties_list(client: TestClient, db: Session):
    created = _submit_profile(client, "Sam", specialties=[" Captioner ", ""])
    assert created["specialties"] == ["Captioner"]


def test_submit_ignores_status_fields_in_payload(client: TestClient, db: Session):
    created = _submit_profile(client, "Sneaky", status="approved", public_visible=True)
    assert created["status"] == "pending"
    assert created["public_visible"] is False


def test_submit_links_signed_in_account(client: TestClient, db: Session):
    account = _sign_up(client, "alice@example.com")
    created = _submit_profile(client, "Alice", headers=account["headers"])
    assert created["user_id"] == account["account_id"]

    res = client.get("/api/auth/me", headers=account["headers"])
    assert res.json()["profile_id"] == created["id"]
    assert res.json()["profile_status"] == "pending"


def test_get_profile_detail(client: TestClient, db: Session):
    created = _submit_profile(client, "TestUser")

    res = client.get(f"/api/profiles/{created['id']}")
    assert res.status_code == 200

    body = res.json()
    assert body["profile"]["id"] == created["id"]
    assert body["profile"]["full_name"] == "TestUser"
    assert body["endorsements"] == []
    assert body["endorsement_count"] == 0
    assert body["has_endorsed"] is False


def test_has_endorsed_is_false_for_unapproved_viewer(client: TestClient, db: Session):
    """承認前のプロフィールから推薦行があっても、閲覧者は推薦済み扱いにならない"""
    target = _submit_profile(client, "Target")
    viewer = _sign_up(client, "viewer@example.com")
    own = _submit_profile(client, "Viewer", headers=viewer["headers"])
    assert own["status"] == "pending"

    db.add(Endorsement(id=str(uuid.uuid4()), endorser_id=own["id"], endorsed_id=target["id"]))
    db.commit()

    res = client.get(f"/api/profiles/{target['id']}", headers=viewer["headers"])
    assert res.status_code == 200
    assert res.json()["endorsement_count"] == 1
    assert res.json()["has_endorsed"] is False


def test_get_nonexistent_profile_returns_404(client: TestClient, db: Session):
    """存在しないプロフィールを取得しようとすると 404"""
    res = client.get("/api/profiles/nonexistent-id-123")
    assert res.status_code == 404
    assert res.json()["detail"] == "Profile not found"


# -----------------------------
# 管理 API
# -----------------------------
def test_admin_endpoints_require_admin(client: TestClient, db: Session):
    created = _submit_profile(client, "Target")
    member = _sign_up(client, "member@example.com")

    res = client.post(f"/api/admin/profiles/{created['id']}/approve")
    assert res.status_code == 401

    res = client.post(f"/api/admin/profiles/{created['id']}/approve", headers=member["headers"])
    assert res.status_code == 403

    res = client.get("/api/admin/profiles", headers=member["headers"])
    assert res.status_code == 403


def test_admin_reject_and_listing(client: TestClient, db: Session):
    admin = _sign_up(client, "admin@example.com")
    grant_admin(db, admin["account_id"])

    a = _submit_profile(client, "Applicant A")
    b = _submit_profile(client, "Applicant B")

    res = client.post(
        f"/api/admin/profiles/{a['id']}/reject",
        json={"reason": "Missing portfolio"},
        headers=admin["headers"],
    )
    assert res.status_code == 200
    assert res.json()["status"] == "rejected"
    assert res.json()["admin_notes"] == "Missing portfolio"

    # 理由なし → "Rejected"
    res = client.post(f"/api/admin/profiles/{b['id']}/reject", headers=admin["headers"])
    assert res.status_code == 200
    assert res.json()["admin_notes"] == "Rejected"

    res = client.get("/api/admin/profiles", params={"status": "rejected"}, headers=admin["headers"])
    assert res.status_code == 200
    assert {p["id"] for p in res.json()} == {a["id"], b["id"]}

    res = client.get("/api/admin/stats", headers=admin["headers"])
    assert res.json() == {"pending": 0, "approved": 0, "rejected": 2}

    res = client.get("/api/admin/profiles", params={"status": "archived"}, headers=admin["headers"])
    assert res.status_code == 422


def test_admin_approve_unknown_profile_returns_404(client: TestClient, db: Session):
    admin = _sign_up(client, "admin@example.com")
    grant_admin(db, admin["account_id"])

    res = client.post("/api/admin/profiles/missing/approve", headers=admin["headers"])
    assert res.status_code == 404


# -----------------------------
# お問い合わせ
# -----------------------------
def test_contact_message_is_stored_and_listed_for_admin(client: TestClient, db: Session):
    res = client.post(
        "/api/contact",
        json={"name": "Visitor", "email": "visitor@example.com", "message": "Hello!"},
    )
    assert res.status_code == 201
    assert res.json()["subject"] is None

    admin = _sign_up(client, "admin@example.com")
    grant_admin(db, admin["account_id"])

    res = client.get("/api/admin/contact_messages", headers=admin["headers"])
    assert res.status_code == 200
    assert [m["message"] for m in res.json()] == ["Hello!"]

    res = client.get("/api/admin/contact_messages")
    assert res.status_code == 401
