"""Tests for user registration and bearer-token authentication."""
from datetime import timedelta

from sqlalchemy import event as sa_event
from sqlalchemy.orm import Session

from app.models.user import User
from app.security import create_access_token
from tests.conftest import create_test_user, auth


class TestUserRegistration:
    """User create / me / get."""

    def test_register_user(self, client):
        data = create_test_user(client, name="Alice", email="Alice@Example.com")
        assert data["name"] == "Alice"
        assert data["email"] == "alice@example.com"
        assert data["token_type"] == "bearer"
        assert data["access_token"]
        assert "user_id" in data

    def test_register_duplicate_email(self, client):
        create_test_user(client, name="Alice", email="alice@example.com")
        resp = client.post("/api/users/", json={"name": "Other Alice", "email": "alice@example.com"})
        assert resp.status_code == 409

    def test_register_email_taken_between_check_and_insert(self, client, db_engine):
        """A row inserted by another writer after the lookup still yields 409."""
        fired = []

        def _insert_same_email(session, flush_context, instances):
            if fired:
                return
            fired.append(True)
            with db_engine.begin() as conn:
                conn.execute(User.__table__.insert().values(name="Racer", email="alice@example.com"))

        sa_event.listen(Session, "before_flush", _insert_same_email)
        try:
            resp = client.post("/api/users/", json={"name": "Alice", "email": "alice@example.com"})
        finally:
            sa_event.remove(Session, "before_flush", _insert_same_email)

        assert resp.status_code == 409
        assert resp.json()["detail"] == "A user with this email already exists"
        assert create_test_user(client, name="Bob")["email"] == "bob@example.com"

    def test_register_invalid_email(self, client):
        resp = client.post("/api/users/", json={"name": "Nobody", "email": "not-an-email"})
        assert resp.status_code == 400

    def test_me(self, client):
        user = create_test_user(client, name="Bob")
        resp = client.get("/api/users/me", headers=auth(user))
        assert resp.status_code == 200
        assert resp.json()["user_id"] == user["user_id"]

    def test_get_user(self, client):
        alice = create_test_user(client, name="Alice")
        bob = create_test_user(client, name="Bob")
        resp = client.get(f"/api/users/{bob['user_id']}", headers=auth(alice))
        assert resp.status_code == 200
        assert resp.json()["name"] == "Bob"

    def test_get_user_not_found(self, client):
        alice = create_test_user(client, name="Alice")
        resp = client.get("/api/users/00000000-0000-0000-0000-000000000000", headers=auth(alice))
        assert resp.status_code == 404


class TestAuthentication:
    """Every slot and swap route needs a valid bearer token."""

    def test_missing_token(self, client):
        resp = client.get("/api/events/")
        assert resp.status_code == 401
        assert resp.json()["error"] == "AuthenticationError"

    def test_garbage_token(self, client):
        resp = client.get("/api/swappable-slots", headers={"Authorization": "Bearer not.a.jwt"})
        assert resp.status_code == 401

    def test_expired_token(self, client):
        user = create_test_user(client)
        token = create_access_token(user["user_id"], expires_delta=timedelta(seconds=-5))
        resp = client.get("/api/events/", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401
        assert resp.json()["detail"] == "Token has expired"

    def test_token_for_unknown_user(self, client):
        token = create_access_token("ghost-user-id")
        resp = client.get("/api/events/", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401

    def test_health_is_public(self, client):
        resp = client.get("/api/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}
