"""Unit tests for the AppError hierarchy and exception handlers."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel

from errors import (
    AppError,
    AuthenticationError,
    DeadlineExceededError,
    InternalError,
    NotFoundError,
    ValidationError,
    register_error_handlers,
)


class TestAppErrorSubclasses:
    @pytest.mark.parametrize(
        "cls, status, code",
        [
            (ValidationError, 400, "invalid_argument"),
            (AuthenticationError, 401, "unauthenticated"),
            (NotFoundError, 404, "not_found"),
            (DeadlineExceededError, 504, "deadline_exceeded"),
            (InternalError, 500, "internal"),
        ],
    )
    def test_status_and_code(self, cls, status, code):
        e = cls("boom")
        assert isinstance(e, AppError)
        assert e.status_code == status
        assert e.error_code == code
        assert e.message == "boom"

    def test_base_defaults_to_internal(self):
        e = AppError("x")
        assert e.status_code == 500
        assert e.error_code == "internal"


class TestAppErrorToDict:
    def test_basic(self):
        e = NotFoundError("No OTP request found.")
        assert e.to_dict() == {"error": "No OTP request found.", "code": "not_found"}

    def test_field_included_when_set(self):
        e = ValidationError("Invalid OTP code.", field="otp")
        assert e.to_dict()["field"] == "otp"

    def test_no_optional_keys_when_absent(self):
        d = DeadlineExceededError("OTP has expired.").to_dict()
        assert "field" not in d
        assert "details" not in d


class _Body(BaseModel):
    value: int


def _app() -> FastAPI:
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/typed")
    async def typed():
        raise DeadlineExceededError("OTP has expired.")

    @app.get("/boom")
    async def boom():
        raise RuntimeError("database password is hunter2")

    @app.post("/body")
    async def body(payload: _Body):
        return {"ok": True}

    return app


class TestHandlers:
    def test_app_error_rendered_verbatim(self):
        with TestClient(_app()) as client:
            resp = client.get("/typed")
        assert resp.status_code == 504
        assert resp.json() == {"error": "OTP has expired.", "code": "deadline_exceeded"}

    def test_unhandled_exception_is_generic_internal(self):
        with TestClient(_app(), raise_server_exceptions=False) as client:
            resp = client.get("/boom")
        assert resp.status_code == 500
        body = resp.json()
        assert body["code"] == "internal"
        assert "hunter2" not in body["error"]

    def test_request_validation_is_invalid_argument(self):
        with TestClient(_app()) as client:
            resp = client.post("/body", content=b"{not json", headers={"Content-Type": "application/json"})
        assert resp.status_code == 400
        assert resp.json()["code"] == "invalid_argument"
