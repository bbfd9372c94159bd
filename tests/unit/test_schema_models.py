"""Unit tests for document models and DTOs."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError as PydanticValidationError

from schemas.dto.requests.otp import SendOtpRequest, VerifyOtpRequest
from schemas.dto.responses.common import MessageResponse
from schemas.models.otp import OtpRecordDoc

ISSUED = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


def _raw(**overrides) -> dict:
    base = {
        "_id": "user-1",
        "email": "a@x.com",
        "code": "482913",
        "issued_at": ISSUED,
        "expires_at": ISSUED + timedelta(minutes=10),
        "verified": False,
    }
    base.update(overrides)
    return base


class TestOtpRecordDoc:
    def test_from_mongo_none(self):
        assert OtpRecordDoc.from_mongo(None) is None

    def test_from_mongo_round_fields(self):
        doc = OtpRecordDoc.from_mongo(_raw())
        assert doc.principal_id == "user-1"
        assert doc.email == "a@x.com"
        assert doc.code == "482913"
        assert doc.verified is False

    def test_naive_datetimes_become_utc(self):
        doc = OtpRecordDoc.from_mongo(
            _raw(issued_at=datetime(2025, 1, 15, 12, 0), expires_at=datetime(2025, 1, 15, 12, 10))
        )
        assert doc.issued_at.tzinfo == timezone.utc
        assert doc.expires_at == ISSUED + timedelta(minutes=10)

    def test_to_mongo_keys(self):
        data = OtpRecordDoc.from_mongo(_raw()).to_mongo()
        assert set(data) == {"_id", "email", "code", "issued_at", "expires_at", "verified"}

    def test_to_mongo_without_id(self):
        data = OtpRecordDoc.from_mongo(_raw()).to_mongo(include_id=False)
        assert "_id" not in data
        assert "id" not in data

    @pytest.mark.parametrize("code", ["012345", "12345", "1234567", "abcdef", ""])
    def test_code_must_be_six_digits_without_leading_zero(self, code):
        with pytest.raises(PydanticValidationError):
            OtpRecordDoc.from_mongo(_raw(code=code))

    def test_empty_principal_rejected(self):
        with pytest.raises(PydanticValidationError):
            OtpRecordDoc.from_mongo(_raw(_id=""))

    def test_is_expired_is_strict(self):
        doc = OtpRecordDoc.from_mongo(_raw())
        assert doc.is_expired(doc.expires_at) is False
        assert doc.is_expired(doc.expires_at + timedelta(milliseconds=1)) is True
        assert doc.is_expired(ISSUED) is False


class TestDtos:
    def test_send_request_email_optional(self):
        assert SendOtpRequest().email is None
        assert SendOtpRequest(email="a@x.com").email == "a@x.com"

    def test_verify_request_fields_optional(self):
        req = VerifyOtpRequest.model_validate({"otp": "123456"})
        assert req.otp == "123456"
        assert req.email is None

    def test_message_response_excludes_none(self):
        assert MessageResponse(success=True).model_dump(exclude_none=True) == {"success": True}
