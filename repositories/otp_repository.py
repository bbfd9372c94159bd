"""MongoDB implementation of OtpRepository.

One document per principal in the `otp-codes` collection. Writes are single
document operations, so MongoDB's per-document atomicity is all the
coordination there is: racing issuances are last-write-wins.
"""

from __future__ import annotations

from typing import Optional

from pymongo.asynchronous.collection import AsyncCollection

from schemas.models.otp import OtpRecordDoc
from shared.logging import get_logger

log = get_logger(__name__)


class MongoOtpRepository:
    def __init__(self, collection: AsyncCollection) -> None:
        self._col = collection

    async def upsert_otp(self, record: OtpRecordDoc) -> None:
        """Create or fully replace the principal's record."""
        await self._col.replace_one(
            {"_id": record.principal_id},
            record.to_mongo(include_id=False),
            upsert=True,
        )

    async def get_otp(self, principal_id: str) -> Optional[OtpRecordDoc]:
        doc = await self._col.find_one({"_id": principal_id})
        return OtpRecordDoc.from_mongo(doc)

    async def mark_verified(self, principal_id: str, code: str) -> bool:
        """Set ``verified`` on the record, only if it still holds *code*.

        Returns False when the record was replaced by a newer issuance
        between the read and this write.
        """
        result = await self._col.update_one(
            {"_id": principal_id, "code": code},
            {"$set": {"verified": True}},
        )
        if result.matched_count == 0:
            log.warning(
                "otp_mark_verified_no_match",
                principal_id=principal_id,
            )
            return False
        return True
