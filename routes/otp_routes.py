"""
Email OTP callable endpoints.

POST /sendEmailOTP    — issue a code for the caller and email it
POST /verifyEmailOTP  — verify a code for the caller

The caller is identified by the bearer token, never by the payload.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from dependencies import get_current_principal, get_otp_service
from schemas.dto.requests.otp import SendOtpRequest, VerifyOtpRequest
from schemas.dto.responses.common import ErrorResponse, MessageResponse
from services.otp_service import OtpService

router = APIRouter(
    tags=["otp"],
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)


@router.post(
    "/sendEmailOTP",
    response_model=MessageResponse,
    response_model_exclude_none=True,
)
async def send_email_otp(
    body: SendOtpRequest,
    principal_id: str = Depends(get_current_principal),
    service: OtpService = Depends(get_otp_service),
) -> MessageResponse:
    return await service.send_otp(principal_id, body.email)


@router.post(
    "/verifyEmailOTP",
    response_model=MessageResponse,
    response_model_exclude_none=True,
    responses={404: {"model": ErrorResponse}, 504: {"model": ErrorResponse}},
)
async def verify_email_otp(
    body: VerifyOtpRequest,
    principal_id: str = Depends(get_current_principal),
    service: OtpService = Depends(get_otp_service),
) -> MessageResponse:
    return await service.verify_otp(principal_id, body.otp, body.email)
