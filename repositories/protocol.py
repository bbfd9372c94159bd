"""OtpRepository protocol — services depend on this, not on MongoDB."""

from typing import Optional, Protocol

from schemas.models.otp import OtpRecordDoc


class OtpRepository(Protocol):
    async def upsert_otp(self, record: OtpRecordDoc) -> None: ...

    async def get_otp(self, principal_id: str) -> Optional[OtpRecordDoc]: ...

    async def mark_verified(self, principal_id: str, code: str) -> bool: ...
