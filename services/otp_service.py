"""
Email OTP issuance and verification.

Per principal the stored record is a two-state machine:

    pending --(verify with matching email + code before expiry)--> verified

Every issuance replaces the record with a fresh pending one, which is the
only way out of an expired or superseded state. Expiry and mismatches never
change the record.
"""

from __future__ import annotations

import random
from datetime import datetime, timedelta
from typing import Callable, Optional

from errors import (
    AppError,
    AuthenticationError,
    DeadlineExceededError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from infrastructure.email.protocol import EmailProvider
from repositories.protocol import OtpRepository
from schemas.dto.responses.common import MessageResponse
from schemas.models.otp import OtpRecordDoc
from services.otp_email import OtpEmailComposer
from shared.datetime_utils import utc_now
from shared.generators import generate_otp_code
from shared.logging import get_logger, mask_email

log = get_logger(__name__)

OTP_TTL_MS = 600_000


class OtpService:
    def __init__(
        self,
        repository: OtpRepository,
        email_provider: EmailProvider,
        composer: Optional[OtpEmailComposer] = None,
        *,
        ttl_ms: int = OTP_TTL_MS,
        clock: Callable[[], datetime] = utc_now,
        rng: Optional[random.Random] = None,
    ) -> None:
        if ttl_ms <= 0 or ttl_ms % 60_000:
            raise ValueError("ttl_ms must be a positive whole number of minutes")
        self._repo = repository
        self._email = email_provider
        self._composer = composer or OtpEmailComposer(ttl_minutes=ttl_ms // 60_000)
        self._ttl = timedelta(milliseconds=ttl_ms)
        self._clock = clock
        self._rng = rng

    async def send_otp(
        self, principal_id: Optional[str], email: Optional[str]
    ) -> MessageResponse:
        """Issue a fresh code for *principal_id* and email it to *email*.

        Raises:
            AuthenticationError: no authenticated principal.
            ValidationError: email missing or blank.
            InternalError: storing the record, composing or sending the
                email failed. The stored record is left in place.
        """
        if not principal_id:
            raise AuthenticationError("User must be logged in to request OTP.")
        if not email or not email.strip():
            raise ValidationError("Email address is required.", field="email")

        issued_at = self._clock()
        record = OtpRecordDoc(
            _id=principal_id,
            email=email,
            code=generate_otp_code(self._rng),
            issued_at=issued_at,
            expires_at=issued_at + self._ttl,
            verified=False,
        )

        try:
            await self._repo.upsert_otp(record)
            message = self._composer.compose(record.code)
            sent = await self._email.send_mail(
                email, message.subject, message.text_body, message.html_body
            )
        except Exception as e:
            log.error(
                "otp_send_error",
                principal_id=principal_id,
                to_email=mask_email(email),
                error=str(e),
                error_type=type(e).__name__,
            )
            raise InternalError("Failed to send OTP email.") from e

        if not sent:
            log.error(
                "otp_email_send_failed",
                principal_id=principal_id,
                to_email=mask_email(email),
            )
            raise InternalError("Failed to send OTP email.")

        log.info(
            "otp_issued",
            principal_id=principal_id,
            to_email=mask_email(email),
            expires_at=record.expires_at.isoformat(),
        )
        return MessageResponse(success=True, message="OTP sent successfully")

    async def verify_otp(
        self,
        principal_id: Optional[str],
        otp: Optional[str],
        email: Optional[str],
    ) -> MessageResponse:
        """Check *otp* and *email* against the principal's record.

        Checks run in a fixed order and the first failure wins: caller,
        required fields, record presence, email, expiry, code. A record that
        is already verified verifies again with the same inputs.
        """
        if not principal_id:
            raise AuthenticationError("User must be logged in.")
        if not otp or not email:
            raise ValidationError("OTP and email are required.")

        try:
            record = await self._repo.get_otp(principal_id)
            if record is None:
                raise NotFoundError("No OTP request found.")
            if record.email != email:
                raise ValidationError("Email does not match OTP request.", field="email")
            if record.is_expired(self._clock()):
                raise DeadlineExceededError("OTP has expired.")
            if record.code != otp:
                raise ValidationError("Invalid OTP code.", field="otp")
            if not await self._repo.mark_verified(principal_id, record.code):
                # Superseded by a newer issuance after the read above.
                raise ValidationError("Invalid OTP code.", field="otp")
        except AppError as e:
            log.warning(
                "otp_verification_failed",
                principal_id=principal_id,
                reason=e.error_code,
                detail=e.message,
            )
            raise
        except Exception as e:
            log.error(
                "otp_verification_error",
                principal_id=principal_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise InternalError("Verification failed.") from e

        log.info("otp_verified_success", principal_id=principal_id)
        return MessageResponse(success=True)
