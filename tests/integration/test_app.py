"""Integration tests for create_app() wiring.

The real lifespan runs (AsyncMongoClient connects lazily, so nothing touches
the network); only the store and the mail relay are swapped for fakes.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt
import pytest
from fastapi.testclient import TestClient

from app import create_app
from config import AppSettings, EmailSettings, JWTSettings, OtpSettings
from dependencies import get_email_provider, get_otp_repository
from infrastructure.email.smtp import SmtpMailProvider

SECRET = "app-wiring-test-secret-long-enough-for-hs256"


def _auth(sub: str = "U1") -> dict:
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {
            "iss": "powergym",
            "aud": "powergym.api",
            "sub": sub,
            "exp": int((now + timedelta(minutes=5)).timestamp()),
        },
        SECRET,
        algorithm="HS256",
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def settings(monkeypatch) -> AppSettings:
    monkeypatch.setenv("MONGODB_URI", "mongodb://localhost:27017/")
    return AppSettings(
        jwt=JWTSettings(jwt_secret=SECRET, jwt_public_key=""),
        email=EmailSettings(email_provider="smtp"),
        otp=OtpSettings(otp_ttl_ms=300_000),
    )


class TestCreateApp:
    def test_lifespan_builds_configured_provider(self, settings):
        app = create_app(settings)
        with TestClient(app):
            assert isinstance(app.state.email_provider, SmtpMailProvider)
            assert app.state.settings is settings

    def test_routes_registered(self, settings):
        paths = set(create_app(settings).openapi()["paths"])
        assert {"/health", "/sendEmailOTP", "/verifyEmailOTP"} <= paths

    def test_issue_and_verify_through_real_dependencies(
        self, settings, otp_repo, email_provider
    ):
        app = create_app(settings)
        app.dependency_overrides[get_otp_repository] = lambda: otp_repo
        app.dependency_overrides[get_email_provider] = lambda: email_provider

        with TestClient(app) as client:
            resp = client.post("/sendEmailOTP", json={"email": "a@x.com"}, headers=_auth())
            assert resp.status_code == 200

            record = otp_repo.records["U1"]
            # OTP_TTL_MS flows into both the record and the email text
            assert record.expires_at - record.issued_at == timedelta(minutes=5)
            assert "5 minutes" in email_provider.sent[0]["text_body"]
            assert email_provider.sent[0]["subject"] == "Your PowerGYM Verification Code"

            resp = client.post(
                "/verifyEmailOTP",
                json={"otp": record.code, "email": "a@x.com"},
                headers=_auth(),
            )
            assert resp.status_code == 200
            assert resp.json() == {"success": True}
