from starlette.testclient import TestClient
from sqlalchemy.orm import Session

from app.services.identity import grant_admin


def _sign_up(client: TestClient, email: str) -> tuple[dict, str]:
    res = client.post("/api/auth/sign_up", json={"email": email, "password": "secret-pass"})
    assert res.status_code == 201
    return {"Authorization": f"Bearer {res.json()['access_token']}"}, res.json()["account_id"]


def _submit(client: TestClient, payload: dict, headers: dict | None = None) -> dict:
    res = client.post("/api/profiles", json=payload, headers=headers or {})
    assert res.status_code == 201
    return res.json()


def _public_ids(client: TestClient) -> set[str]:
    res = client.get("/api/directory")
    assert res.status_code == 200
    return {p["id"] for p in res.json()["items"]}


def test_submit_approve_publish_endorse_flow(client: TestClient, db: Session):
    """
    申請 → 承認 → 公開 → 推薦 → 推薦取り消し までの一連の流れ
    """
    # 管理者（自分のプロフィールも持っている）
    admin_headers, admin_account_id = _sign_up(client, "admin@example.com")
    grant_admin(db, admin_account_id)
    admin_profile = _submit(
        client,
        {"full_name": "Admin Person", "email": "admin@example.com"},
        headers=admin_headers,
    )

    # ❶ 申請
    jane = _submit(
        client,
        {
            "full_name": "Jane Doe",
            "email": "jane@x.com",
            "specialties": "ASL Interpreter, Captioner",
        },
    )
    assert jane["status"] == "pending"
    assert jane["public_visible"] is False
    assert jane["specialties"] == ["ASL Interpreter", "Captioner"]
    assert jane["id"] not in _public_ids(client)

    # ❷ 承認
    res = client.post(f"/api/admin/profiles/{jane['id']}/approve", headers=admin_headers)
    assert res.status_code == 200
    approved = res.json()
    assert approved["status"] == "approved"
    assert approved["approved_at"] is not None
    assert approved["approved_by"] == admin_profile["id"]
    # 承認しただけでは公開されない
    assert approved["public_visible"] is False
    assert jane["id"] not in _public_ids(client)

    # ❸ 公開
    res = client.post(
        f"/api/admin/profiles/{jane['id']}/visibility",
        json={"public_visible": True},
        headers=admin_headers,
    )
    assert res.status_code == 200
    assert res.json()["public_visible"] is True
    assert jane["id"] in _public_ids(client)

    # メンバー A（承認済みプロフィールを持つ）
    a_headers, _ = _sign_up(client, "member.a@example.com")
    member_a = _submit(
        client,
        {"full_name": "Member A", "email": "member.a@example.com"},
        headers=a_headers,
    )
    res = client.post(f"/api/admin/profiles/{member_a['id']}/approve", headers=admin_headers)
    assert res.status_code == 200

    # ❹ 推薦
    res = client.post(f"/api/profiles/{jane['id']}/endorse", headers=a_headers)
    assert res.status_code == 200
    assert res.json()["endorsed"] is True
    assert res.json()["endorsement_count"] == 1

    res = client.get(f"/api/profiles/{jane['id']}", headers=a_headers)
    detail = res.json()
    assert detail["endorsement_count"] == 1
    assert detail["has_endorsed"] is True
    assert detail["endorsements"][0]["endorser"]["id"] == member_a["id"]

    res = client.get("/api/directory")
    counts = {p["id"]: p["endorsement_count"] for p in res.json()["items"]}
    assert counts[jane["id"]] == 1

    # ❺ 推薦取り消し
    res = client.post(f"/api/profiles/{jane['id']}/endorse", headers=a_headers)
    assert res.status_code == 200
    assert res.json()["endorsed"] is False
    assert res.json()["endorsement_count"] == 0

    # メンバー一覧（ログイン必須）には承認済み全員が出る
    res = client.get("/api/members", headers=a_headers)
    assert res.status_code == 200
    ids = {p["id"] for p in res.json()["items"]}
    assert ids == {jane["id"], member_a["id"]}


def test_revoked_profile_leaves_public_directory(client: TestClient, db: Session):
    admin_headers, admin_account_id = _sign_up(client, "admin@example.com")
    grant_admin(db, admin_account_id)

    jane = _submit(client, {"full_name": "Jane Doe", "email": "jane@x.com"})
    client.post(f"/api/admin/profiles/{jane['id']}/approve", headers=admin_headers)
    client.post(
        f"/api/admin/profiles/{jane['id']}/visibility",
        json={"public_visible": True},
        headers=admin_headers,
    )
    assert jane["id"] in _public_ids(client)

    res = client.post(
        f"/api/admin/profiles/{jane['id']}/reject",
        json={"reason": "Revoked"},
        headers=admin_headers,
    )
    assert res.status_code == 200
    # 公開フラグは残るが、承認済みでないので表には出ない
    assert res.json()["public_visible"] is True
    assert res.json()["approved_at"] is not None
    assert jane["id"] not in _public_ids(client)


def test_pending_member_cannot_endorse(client: TestClient, db: Session):
    headers, _ = _sign_up(client, "newbie@example.com")
    _submit(client, {"full_name": "Newbie", "email": "newbie@example.com"}, headers=headers)
    target = _submit(client, {"full_name": "Target", "email": "target@example.com"})

    res = client.post(f"/api/profiles/{target['id']}/endorse", headers=headers)
    assert res.status_code == 403

    res = client.post(f"/api/profiles/{target['id']}/endorse")
    assert res.status_code == 401
