"""
FastAPI dependency providers.

All injectable dependencies are defined here as plain functions used with
FastAPI's Depends() system. Tests swap them via app.dependency_overrides.
"""

from __future__ import annotations

from typing import Optional

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from config import AppSettings
from errors import AuthenticationError
from infrastructure.email.protocol import EmailProvider
from repositories.otp_repository import MongoOtpRepository
from services.otp_email import OtpEmailComposer
from services.otp_service import OtpService
from shared.jwt_utils import verify_access_jwt
from shared.logging import get_logger

log = get_logger(__name__)

_bearer = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> AppSettings:
    """Return the AppSettings instance stored on app.state."""
    return request.app.state.settings


async def get_db(request: Request):
    """Return the async MongoDB database from app.state."""
    return request.app.state.db


def get_email_provider(request: Request) -> EmailProvider:
    """Return the mail provider built in the app lifespan."""
    return request.app.state.email_provider


def get_email_composer(request: Request) -> OtpEmailComposer:
    """Return the email composer built in the app lifespan."""
    return request.app.state.otp_email_composer


async def get_otp_repository(
    db=Depends(get_db), settings: AppSettings = Depends(get_settings)
) -> MongoOtpRepository:
    return MongoOtpRepository(db[settings.otp.otp_collection])


async def get_otp_service(
    repository: MongoOtpRepository = Depends(get_otp_repository),
    email_provider: EmailProvider = Depends(get_email_provider),
    composer: OtpEmailComposer = Depends(get_email_composer),
    settings: AppSettings = Depends(get_settings),
) -> OtpService:
    return OtpService(
        repository, email_provider, composer, ttl_ms=settings.otp.otp_ttl_ms
    )


async def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    settings: AppSettings = Depends(get_settings),
) -> str:
    """Resolve the caller's principal id from the bearer token.

    Raises AuthenticationError for a missing, malformed or invalid token.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Authentication required.")
    try:
        claims = verify_access_jwt(credentials.credentials, settings.jwt)
    except jwt.InvalidTokenError as e:
        log.info("auth_token_rejected", reason=type(e).__name__)
        raise AuthenticationError("Invalid or expired token.") from e
    return str(claims["sub"])
