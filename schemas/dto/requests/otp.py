"""
Request DTOs for the OTP callable endpoints.

SendOtpRequest    — POST /sendEmailOTP
VerifyOtpRequest  — POST /verifyEmailOTP

Fields are optional at the schema level: presence is checked by the service
after authentication so error kinds come out in the documented order.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict


class SendOtpRequest(BaseModel):
    """Request body for POST /sendEmailOTP."""

    model_config = ConfigDict(populate_by_name=True)

    email: Optional[str] = None


class VerifyOtpRequest(BaseModel):
    """Request body for POST /verifyEmailOTP.

    ``otp`` is the 6-digit code that was emailed to ``email``.
    """

    model_config = ConfigDict(populate_by_name=True)

    otp: Optional[str] = None
    email: Optional[str] = None
