"""
FastAPI application factory.
create_app() is the single entry point for building the app.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pymongo.asynchronous.mongo_client import AsyncMongoClient

from config import AppSettings, EmailSettings
from errors import register_error_handlers
from infrastructure.email.protocol import EmailProvider
from infrastructure.email.smtp import SmtpMailProvider
from infrastructure.email.zeptomail import ZeptoMailProvider
from infrastructure.http_client import HttpClient
from routes.health_routes import router as health_router
from routes.otp_routes import router as otp_router
from services.otp_email import OtpEmailComposer
from shared.logging import get_logger, setup_logging

log = get_logger(__name__)


def build_email_provider(
    settings: EmailSettings, http_client: HttpClient
) -> EmailProvider:
    """Pick the mail relay named by EMAIL_PROVIDER."""
    if settings.email_provider == "smtp":
        return SmtpMailProvider(settings)
    return ZeptoMailProvider(settings, http_client)


def create_app(settings: Optional[AppSettings] = None) -> FastAPI:
    """Create and return a fully configured FastAPI application."""
    if settings is None:
        settings = AppSettings()

    setup_logging(
        log_level=settings.logging.log_level,
        log_format=settings.logging.log_format,
        env=settings.env,
    )

    # Initialise Sentry before anything else so it captures startup errors
    if settings.sentry.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry.sentry_dsn,
            send_default_pii=settings.sentry.sentry_send_pii,
            traces_sample_rate=settings.sentry.sentry_traces_sample_rate,
            profiles_sample_rate=settings.sentry.sentry_profile_sample_rate,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # ── Startup ──────────────────────────────────────────────────────────
        mongo_client: AsyncMongoClient = AsyncMongoClient(settings.db.mongodb_uri)
        app.state.mongo_client = mongo_client
        app.state.db = mongo_client[settings.db.db_name]
        app.state.settings = settings

        http_client = HttpClient(timeout=settings.email.email_timeout_seconds)
        app.state.http_client = http_client
        app.state.email_provider = build_email_provider(settings.email, http_client)
        app.state.otp_email_composer = OtpEmailComposer(
            app_name=settings.app_name,
            ttl_minutes=settings.otp.otp_ttl_ms // 60_000,
        )

        log.info(
            "app_started",
            env=settings.env,
            db_name=settings.db.db_name,
            email_provider=settings.email.email_provider,
        )

        yield

        # ── Shutdown ─────────────────────────────────────────────────────────
        await http_client.aclose()
        await mongo_client.close()

    app = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        docs_url=settings.docs_url,
        redoc_url=None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    app.include_router(health_router)
    app.include_router(otp_router)

    return app
