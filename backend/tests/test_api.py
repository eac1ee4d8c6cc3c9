"""
AudioCraft Backend: API Endpoint Tests
======================================

What:  End-to-end request/response contract of every route, through the full
       middleware and exception-handler stack.
How:   HTTPX AsyncClient over ASGITransport (see conftest.test_client).
"""

import io
from datetime import timedelta
from unittest.mock import AsyncMock, patch

import pytest
from fastapi import UploadFile
from httpx import ASGITransport, AsyncClient

from audiocraft.exceptions import ValidationError
from audiocraft.models.account import Account, SubscriptionStatus
from audiocraft.routes.audio import enhance_audio
from audiocraft.services.auth_service import auth_service

WAV = ("track.wav", b"RIFF\x24\x00\x00\x00WAVEfmt ", "audio/wav")


def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


async def enhance(client, token, settings="{}", with_file=True):
    files = {"audio": WAV} if with_file else None
    return await client.post(
        "/api/audio/enhance",
        headers=auth_headers(token),
        files=files,
        data={"settings": settings},
    )


class TestSignup:

    @pytest.mark.asyncio
    async def test_signup_returns_token_and_public_user(self, test_client):
        response = await test_client.post(
            "/api/auth/signup", json={"email": "a@x.com", "password": "pw1"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["token"]
        assert body["user"]["email"] == "a@x.com"
        assert body["user"]["freeTracksLeft"] == 3
        assert body["user"]["subscription"] == {"status": "none"}
        assert set(body["user"]) == {"id", "email", "freeTracksLeft", "subscription"}

    @pytest.mark.asyncio
    async def test_duplicate_signup_is_rejected(self, test_client, signed_up):
        await signed_up("a@x.com", "pw1")

        response = await test_client.post(
            "/api/auth/signup", json={"email": "a@x.com", "password": "different"}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "conflict"
        assert response.json()["message"] == "User already exists"

    @pytest.mark.asyncio
    async def test_missing_password_is_a_generic_server_error(self, test_client):
        response = await test_client.post("/api/auth/signup", json={"email": "a@x.com"})
        assert response.status_code == 500
        assert response.json()["error"] == "internal_server_error"
        assert response.json()["message"] == "Server error"

    @pytest.mark.asyncio
    async def test_malformed_json_is_a_generic_server_error(self, test_client):
        response = await test_client.post(
            "/api/auth/signup",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 500
        assert response.json()["error"] == "internal_server_error"


class TestLogin:

    @pytest.mark.asyncio
    async def test_login_returns_verifiable_token(self, test_client, signed_up):
        await signed_up("a@x.com", "pw1")

        response = await test_client.post(
            "/api/auth/login", json={"email": "a@x.com", "password": "pw1"}
        )
        assert response.status_code == 200
        token = response.json()["token"]

        verify = await test_client.get("/api/auth/verify", headers=auth_headers(token))
        assert verify.status_code == 200
        assert verify.json()["user"]["email"] == "a@x.com"

    @pytest.mark.asyncio
    async def test_wrong_password_matches_unknown_email(self, test_client, signed_up):
        await signed_up("a@x.com", "pw1")

        wrong = await test_client.post(
            "/api/auth/login", json={"email": "a@x.com", "password": "nope"}
        )
        unknown = await test_client.post(
            "/api/auth/login", json={"email": "ghost@x.com", "password": "pw1"}
        )

        assert wrong.status_code == unknown.status_code == 401
        assert wrong.json()["message"] == unknown.json()["message"] == "Invalid credentials"
        assert wrong.json()["error"] == unknown.json()["error"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body", [{"email": "a@x.com"}, {"password": "pw1"}, {}]
    )
    async def test_missing_fields_are_invalid_credentials(self, test_client, signed_up, body):
        await signed_up("a@x.com", "pw1")

        response = await test_client.post("/api/auth/login", json=body)

        assert response.status_code == 401
        assert response.json()["error"] == "unauthenticated"
        assert response.json()["message"] == "Invalid credentials"


class TestVerify:

    @pytest.mark.asyncio
    async def test_missing_token(self, test_client):
        response = await test_client.get("/api/auth/verify")
        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    @pytest.mark.asyncio
    async def test_garbage_token(self, test_client):
        response = await test_client.get("/api/auth/verify", headers=auth_headers("garbage"))
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_expired_token(self, test_client, signed_up):
        _, body = await signed_up()
        expired = auth_service.create_access_token(
            body["user"]["id"], expires_delta=timedelta(seconds=-1)
        )

        response = await test_client.get("/api/auth/verify", headers=auth_headers(expired))
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_account_gone_after_store_reset(self, test_client, signed_up, store):
        token, _ = await signed_up()
        store.clear()

        response = await test_client.get("/api/auth/verify", headers=auth_headers(token))
        assert response.status_code == 404
        assert response.json()["message"] == "User not found"


class TestEnhance:

    @pytest.mark.asyncio
    async def test_three_free_tracks_then_forbidden(self, test_client, signed_up, store):
        token, _ = await signed_up("a@x.com", "pw1")

        remaining = []
        for _ in range(3):
            response = await enhance(test_client, token)
            assert response.status_code == 200
            body = response.json()
            assert body["success"] is True
            assert body["message"] == "Audio enhancement complete"
            assert body["fileId"]
            remaining.append(body["creditsRemaining"])
        assert remaining == [2, 1, 0]

        fourth = await enhance(test_client, token)
        assert fourth.status_code == 403
        assert fourth.json()["error"] == "credits_exhausted"
        assert store.get_by_email("a@x.com").free_tracks_left == 0

    @pytest.mark.asyncio
    async def test_active_subscription_never_charged(self, test_client, signed_up, store):
        token, _ = await signed_up()
        store.get_by_email("a@x.com").subscription = SubscriptionStatus.ACTIVE

        for _ in range(5):
            response = await enhance(test_client, token)
            assert response.status_code == 200
            assert response.json()["creditsRemaining"] == 3

    @pytest.mark.asyncio
    async def test_malformed_settings_are_ignored(self, test_client, signed_up):
        token, _ = await signed_up()
        response = await enhance(test_client, token, settings="{{{ not json")
        assert response.status_code == 200
        assert response.json()["creditsRemaining"] == 2

    @pytest.mark.asyncio
    async def test_upload_is_discarded(self, test_client, signed_up, upload_dir):
        token, _ = await signed_up()
        await enhance(test_client, token)
        assert list(upload_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_request_without_file(self, test_client, signed_up):
        token, _ = await signed_up()
        response = await enhance(test_client, token, with_file=False)
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_requires_token(self, test_client):
        response = await test_client.post("/api/audio/enhance", files={"audio": WAV})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_oversized_upload_is_rejected_before_charging(
        self, test_client, signed_up, store, monkeypatch
    ):
        from audiocraft.config import settings
        monkeypatch.setattr(settings, "max_upload_size", 8)
        token, _ = await signed_up()

        response = await enhance(test_client, token)

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"
        assert store.get_by_email("a@x.com").free_tracks_left == 3

    @pytest.mark.asyncio
    async def test_reported_size_is_checked_before_reading(self, store, upload_dir, monkeypatch):
        from audiocraft.config import settings
        monkeypatch.setattr(settings, "max_upload_size", 8)
        account = store.add(Account(email="a@x.com", password_hash="h", free_tracks_left=3))
        upload = UploadFile(file=io.BytesIO(b"x" * 64), size=64, filename="big.wav")
        upload.read = AsyncMock(return_value=b"x" * 64)

        with pytest.raises(ValidationError):
            await enhance_audio(audio=upload, settings=None, account=account, store=store)

        upload.read.assert_not_awaited()
        assert upload.file.closed
        assert account.free_tracks_left == 3


class TestPayments:

    @pytest.mark.asyncio
    async def test_create_checkout(self, test_client):
        first = await test_client.post("/api/payments/create-checkout", json={"plan": "pro"})
        second = await test_client.post("/api/payments/create-checkout", json={"plan": "pro"})

        assert first.status_code == 200
        body = first.json()
        assert body["success"] is True
        assert "pro" in body["checkoutUrl"]
        assert body["sessionId"] != second.json()["sessionId"]

    @pytest.mark.asyncio
    async def test_checkout_without_plan_still_succeeds(self, test_client):
        response = await test_client.post("/api/payments/create-checkout", json={})
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["checkoutUrl"].endswith("/mock_unspecified_session")
        assert body["sessionId"].startswith("cs_mock_")

    @pytest.mark.asyncio
    async def test_webhook_acknowledges_raw_bytes(self, test_client, signed_up, store):
        await signed_up()
        response = await test_client.post(
            "/api/payments/webhook",
            content=b"\x00\x01 raw provider payload",
            headers={"Content-Type": "application/octet-stream"},
        )

        assert response.status_code == 200
        assert response.json() == {"received": True}
        assert store.get_by_email("a@x.com").subscription == SubscriptionStatus.NONE


class TestProfile:

    @pytest.mark.asyncio
    async def test_profile_includes_created_at(self, test_client, signed_up):
        token, signup_body = await signed_up()

        response = await test_client.get("/api/users/profile", headers=auth_headers(token))

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == signup_body["user"]["id"]
        assert body["freeTracksLeft"] == 3
        assert body["subscription"] == {"status": "none"}
        assert body["createdAt"]
        assert "password" not in str(body).lower()

    @pytest.mark.asyncio
    async def test_profile_reflects_spent_credits(self, test_client, signed_up):
        token, _ = await signed_up()
        await enhance(test_client, token)

        response = await test_client.get("/api/users/profile", headers=auth_headers(token))
        assert response.json()["freeTracksLeft"] == 2

    @pytest.mark.asyncio
    async def test_profile_requires_token(self, test_client):
        response = await test_client.get("/api/users/profile")
        assert response.status_code == 401


class TestHealthAndErrors:

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/api/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "OK"
        assert body["environment"] == "test"
        assert body["timestamp"]

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, test_client):
        response = await test_client.get("/api/health", headers={"X-Request-ID": "trace-123"})
        assert response.headers["X-Request-ID"] == "trace-123"

    @pytest.mark.asyncio
    async def test_unexpected_error_is_generic(self, store, upload_dir):
        from audiocraft.database import get_account_store
        from audiocraft.main import app

        app.dependency_overrides[get_account_store] = lambda: store
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        try:
            with patch(
                "audiocraft.routes.payments.payment_service.create_checkout",
                side_effect=RuntimeError("stripe key /etc/secret leaked"),
            ):
                async with AsyncClient(transport=transport, base_url="http://test") as client:
                    response = await client.post(
                        "/api/payments/create-checkout", json={"plan": "pro"}
                    )
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        assert response.json()["error"] == "internal_server_error"
        assert "secret" not in response.text
