from datetime import timedelta

from core.security import generate_token, hash_token
from db.models import EmailVerificationToken, PasswordResetToken, User
from services.auth_service import AuthService
from utils.dates import utcnow


def register_body(secret, **overrides):
    body = {
        "name": "Jamie Rivera",
        "email": "Jamie@Example.com",
        "password": secret,
        "confirmPassword": secret,
    }
    body.update(overrides)
    return body


def body_errors(response):
    return response.json()["error"]["details"]["errors"]


class TestRegister:

    def test_creates_player_account(self, client, password):
        response = client.post("/api/auth/register", json=register_body(password))

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["user"]["email"] == "jamie@example.com"
        assert data["user"]["name"] == "Jamie Rivera"

    def test_duplicate_email(self, client, password):
        client.post("/api/auth/register", json=register_body(password))
        response = client.post("/api/auth/register", json=register_body(password, email="jamie@example.com"))

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "CONFLICT"

    def test_weak_password(self, client, password):
        response = client.post("/api/auth/register", json=register_body(password, password="short", confirmPassword="short"))

        assert response.status_code == 422
        body = response.json()
        assert body["success"] is False
        assert "password" in body["error"]["details"]["errors"]

    def test_mismatched_confirmation(self, client, password):
        response = client.post("/api/auth/register", json=register_body(password, confirmPassword=password + "x"))

        assert response.status_code == 422
        assert body_errors(response)["confirmPassword"] == ["Passwords do not match"]


class TestLogin:

    def test_returns_token_and_sets_cookie(self, client, make_user, password):
        user = make_user(email="pat@example.com")
        response = client.post("/api/auth/login", json={"email": "PAT@example.com", "password": password})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["accessToken"]
        assert data["user"]["id"] == user.id
        assert "cnebl_session=" in response.headers["set-cookie"]
        assert "httponly" in response.headers["set-cookie"].lower()

    def test_wrong_password(self, client, make_user):
        make_user(email="pat@example.com")
        response = client.post("/api/auth/login", json={"email": "pat@example.com", "password": "nope"})

        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Invalid email or password"

    def test_inactive_user_cannot_log_in(self, client, make_user, password):
        make_user(email="gone@example.com", is_active=False)
        response = client.post("/api/auth/login", json={"email": "gone@example.com", "password": password})
        assert response.status_code == 401


class TestMe:

    def test_requires_auth(self, client):
        response = client.get("/api/auth/me")
        assert response.status_code == 401

    def test_bearer_token(self, client, make_user, auth_headers):
        user = make_user(name="Pat Catcher")
        response = client.get("/api/auth/me", headers=auth_headers(user))

        assert response.status_code == 200
        assert response.json()["data"]["fullName"] == "Pat Catcher"

    def test_garbage_token(self, client):
        response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401


class TestPasswordReset:

    def test_same_answer_for_unknown_email(self, client, make_user):
        make_user(email="known@example.com")
        known = client.post("/api/auth/forgot-password", json={"email": "known@example.com"})
        unknown = client.post("/api/auth/forgot-password", json={"email": "nobody@example.com"})

        assert known.status_code == unknown.status_code == 200
        assert known.json() == unknown.json()
        assert PasswordResetToken.select().count() == 1

    def test_reset_with_token(self, client, make_user, password):
        user = make_user(email="reset@example.com")
        token = generate_token()
        PasswordResetToken.create(user=user, token_hash=hash_token(token), expires_at=utcnow() + timedelta(hours=1))
        new = "Brand-New-Pa55"

        response = client.post("/api/auth/reset-password", json={"token": token, "password": new, "confirmPassword": new})
        assert response.status_code == 200

        login = client.post("/api/auth/login", json={"email": "reset@example.com", "password": new})
        assert login.status_code == 200

        again = client.post("/api/auth/reset-password", json={"token": token, "password": new, "confirmPassword": new})
        assert again.status_code == 400
        assert again.json()["error"]["message"] == "Invalid or expired reset token"

    def test_expired_token(self, client, make_user):
        user = make_user()
        token = generate_token()
        PasswordResetToken.create(user=user, token_hash=hash_token(token), expires_at=utcnow() - timedelta(minutes=1))
        new = "Brand-New-Pa55"

        response = client.post("/api/auth/reset-password", json={"token": token, "password": new, "confirmPassword": new})
        assert response.status_code == 400


class TestEmailVerification:

    def test_register_then_verify(self, client, password):
        client.post("/api/auth/register", json=register_body(password))
        user = User.get_by_email("jamie@example.com")
        assert not user.email_verified

        token = AuthService.issue_verification_token(user)
        response = client.post("/api/auth/verify-email", json={"token": token})

        assert response.status_code == 200
        assert User.get_by_id(user.id).email_verified


def test_purge_expired_tokens(make_user):
    user = make_user()
    PasswordResetToken.create(user=user, token_hash=hash_token("old"), expires_at=utcnow() - timedelta(days=1))
    PasswordResetToken.create(user=user, token_hash=hash_token("live"), expires_at=utcnow() + timedelta(days=1))
    EmailVerificationToken.create(
        user=user, token_hash=hash_token("used"), expires_at=utcnow() + timedelta(days=1), used_at=utcnow(),
    )

    assert AuthService.purge_expired_tokens() == 2
    assert [t.token_hash for t in PasswordResetToken.select()] == [hash_token("live")]
