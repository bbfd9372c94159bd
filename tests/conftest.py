"""
Shared test configuration and fakes.

- pydantic-settings never reads the project's real .env file; tests control
  config exclusively through monkeypatch.setenv().
- In-memory stand-ins for the OTP store, the mail relay and the clock.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest

from schemas.models.otp import OtpRecordDoc


@pytest.fixture(autouse=True)
def disable_dotenv_loading(monkeypatch):
    """Prevent pydantic-settings from loading .env files in all tests."""
    import pydantic_settings.sources.providers.dotenv as ps_dotenv

    monkeypatch.setattr(ps_dotenv, "dotenv_values", lambda *a, **kw: {})


class InMemoryOtpRepository:
    """Dict-backed OtpRepository; stores copies so callers can't alias state."""

    def __init__(self) -> None:
        self.records: dict[str, OtpRecordDoc] = {}
        self.upserts = 0

    async def upsert_otp(self, record: OtpRecordDoc) -> None:
        self.upserts += 1
        self.records[record.principal_id] = record.model_copy(deep=True)

    async def get_otp(self, principal_id: str) -> Optional[OtpRecordDoc]:
        record = self.records.get(principal_id)
        return record.model_copy(deep=True) if record is not None else None

    async def mark_verified(self, principal_id: str, code: str) -> bool:
        record = self.records.get(principal_id)
        if record is None or record.code != code:
            return False
        self.records[principal_id] = record.model_copy(update={"verified": True})
        return True


class FakeEmailProvider:
    def __init__(self, result: bool = True, error: Optional[Exception] = None) -> None:
        self.result = result
        self.error = error
        self.sent: list[dict] = []
        self.enabled = True

    async def send_mail(
        self, to_email: str, subject: str, text_body: str, html_body: str
    ) -> bool:
        self.sent.append(
            {
                "to_email": to_email,
                "subject": subject,
                "text_body": text_body,
                "html_body": html_body,
            }
        )
        if self.error is not None:
            raise self.error
        return self.result


class FakeClock:
    def __init__(self, start: Optional[datetime] = None) -> None:
        self.now = start or datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def otp_repo() -> InMemoryOtpRepository:
    return InMemoryOtpRepository()


@pytest.fixture
def email_provider() -> FakeEmailProvider:
    return FakeEmailProvider()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
