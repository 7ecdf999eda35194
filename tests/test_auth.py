from datetime import datetime, timedelta, timezone

from asset_inventory.core.bootstrap import ensure_default_admin
from asset_inventory.core.config import settings
from asset_inventory.core.hashing import hash_password, verify_password
from asset_inventory.models.users import User, UserRole, UserSession

from conftest import bearer, create_user, login


def test_password_hash_is_salted():
    first = hash_password("s3cret!")
    second = hash_password("s3cret!")

    assert first != second
    assert verify_password("s3cret!", first)
    assert verify_password("s3cret!", second)
    assert not verify_password("wrong", first)


def test_verify_password_rejects_malformed_hash():
    assert not verify_password("anything", "not-a-hash")
    assert not verify_password("anything", "md5$1$abc$def")


def test_default_admin_seeded_once(db_session):
    first = ensure_default_admin(db_session)
    second = ensure_default_admin(db_session)

    assert first.id == second.id
    assert first.role == UserRole.ADMIN
    assert db_session.query(User).filter(User.username == settings.DEFAULT_ADMIN_USERNAME).count() == 1


def test_login_returns_session_and_user(client, db_session):
    create_user(db_session, username="bob", password="hunter22")

    response = login(client, "bob", "hunter22")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["session_id"]
    assert body["user"]["username"] == "bob"
    assert body["user"]["role"] == "user"
    assert "password_hash" not in body["user"]

    user_session = db_session.query(UserSession).filter(UserSession.id == body["session_id"]).one()
    lifetime = user_session.expires_at - datetime.now(timezone.utc).replace(tzinfo=None)
    assert timedelta(hours=settings.SESSION_EXPIRE_HOURS - 1) < lifetime <= timedelta(hours=settings.SESSION_EXPIRE_HOURS)


def test_login_rejects_bad_password(client, db_session):
    create_user(db_session, username="bob", password="hunter22")

    response = login(client, "bob", "wrong-password")

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid username or password"


def test_login_rejects_inactive_user(client, db_session):
    create_user(db_session, username="carol", password="hunter22", is_active=False)

    response = login(client, "carol", "hunter22")

    assert response.status_code == 401


def test_validate_session_returns_user(client, db_session):
    create_user(db_session, username="bob", password="hunter22")
    session_id = login(client, "bob", "hunter22").json()["session_id"]

    response = client.post("/auth/validate-session", json={"session_id": session_id})

    assert response.status_code == 200
    assert response.json()["user"]["username"] == "bob"


def test_validate_session_unknown_token(client):
    response = client.post("/auth/validate-session", json={"session_id": "nope"})

    assert response.status_code == 200
    assert response.json() == {"user": None}


def test_expired_session_is_removed_on_lookup(client, db_session):
    create_user(db_session, username="bob", password="hunter22")
    session_id = login(client, "bob", "hunter22").json()["session_id"]

    user_session = db_session.query(UserSession).filter(UserSession.id == session_id).one()
    user_session.expires_at = datetime.now(timezone.utc).replace(tzinfo=None) - timedelta(minutes=1)
    db_session.commit()

    response = client.post("/auth/validate-session", json={"session_id": session_id})

    assert response.json() == {"user": None}
    assert db_session.query(UserSession).filter(UserSession.id == session_id).count() == 0


def test_logout_deletes_session(client, db_session):
    create_user(db_session, username="bob", password="hunter22")
    session_id = login(client, "bob", "hunter22").json()["session_id"]

    response = client.post("/auth/logout", json={"session_id": session_id})

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert client.get("/categories", headers=bearer(session_id)).status_code == 401


def test_protected_routes_require_session(client):
    assert client.get("/inventory").status_code == 401
    assert client.get("/dashboard/stats", headers=bearer("bogus")).status_code == 401


def test_health_check_is_public(client):
    response = client.get("/")

    assert response.status_code == 200
    assert "running" in response.json()["message"]
