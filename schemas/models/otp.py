"""
OTP record document model.

Maps to the `otp-codes` MongoDB collection: one document per principal,
``_id`` is the principal id. Every issuance replaces the document wholesale;
verification only ever flips ``verified`` to True.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import Field, field_validator

from schemas.models.base import MongoBaseModel
from shared.datetime_utils import ensure_utc


class OtpRecordDoc(MongoBaseModel):
    """Document model for the `otp-codes` collection."""

    email: str
    code: str = Field(pattern=r"^[1-9][0-9]{5}$")
    issued_at: datetime
    expires_at: datetime
    verified: bool = False

    @field_validator("issued_at", "expires_at")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    @property
    def principal_id(self) -> str:
        return self.id

    def is_expired(self, now: datetime) -> bool:
        """True once *now* is strictly past ``expires_at``."""
        return ensure_utc(now) > self.expires_at
