"""Composition of the OTP verification email (subject, text and HTML bodies)."""

from __future__ import annotations

import os
from dataclasses import dataclass

from jinja2 import Environment, FileSystemLoader, select_autoescape

_DEFAULT_TEMPLATE_DIR = os.path.join(
    os.path.dirname(os.path.dirname(__file__)),
    "templates",
    "emails",
)


@dataclass(frozen=True)
class OtpEmail:
    subject: str
    text_body: str
    html_body: str


class OtpEmailComposer:
    def __init__(
        self,
        app_name: str = "PowerGYM",
        ttl_minutes: int = 10,
        template_dir: str = _DEFAULT_TEMPLATE_DIR,
    ) -> None:
        self._app_name = app_name
        self._ttl_minutes = ttl_minutes
        self._jinja = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=select_autoescape(["html", "xml"]),
        )

    def compose(self, otp_code: str) -> OtpEmail:
        html_body = self._jinja.get_template("otp_verification.html").render(
            otp_code=otp_code,
            app_name=self._app_name,
            ttl_minutes=self._ttl_minutes,
        )
        text_body = (
            f"Your verification code is: {otp_code}. "
            f"It expires in {self._ttl_minutes} minutes."
        )
        return OtpEmail(
            subject=f"Your {self._app_name} Verification Code",
            text_body=text_body,
            html_body=html_body,
        )
