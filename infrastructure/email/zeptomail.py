"""ZeptoMail implementation of EmailProvider.

Sends through the ZeptoMail transactional API over the shared HttpClient.
Failures are logged and reported as ``False``; callers decide what that
means for their operation.
"""

from config import EmailSettings
from infrastructure.http_client import HttpClient
from shared.logging import get_logger, mask_email

log = get_logger(__name__)

_ZEPTO_API_URL = "https://api.zeptomail.in/v1.1/email"


class ZeptoMailProvider:
    def __init__(self, settings: EmailSettings, http_client: HttpClient) -> None:
        self._settings = settings
        self._http = http_client

    @property
    def enabled(self) -> bool:
        return bool(self._settings.zepto_api_token)

    def _auth_header(self) -> str:
        token = self._settings.zepto_api_token
        if not token.startswith("Zoho-enczapikey "):
            token = f"Zoho-enczapikey {token}"
        return token

    async def send_mail(
        self, to_email: str, subject: str, text_body: str, html_body: str
    ) -> bool:
        if not self.enabled:
            log.error("zepto_mail_send_failed", reason="token_not_configured")
            return False

        payload: dict = {
            "from": {
                "address": self._settings.email_from_address,
                "name": self._settings.email_from_name,
            },
            "to": [{"email_address": {"address": to_email, "name": to_email}}],
            "subject": subject,
            "htmlbody": html_body,
            "textbody": text_body,
        }
        headers = {"Authorization": self._auth_header(), "Content-Type": "application/json"}

        try:
            response = await self._http.post(
                _ZEPTO_API_URL, json=payload, headers=headers
            )
        except Exception as e:
            log.error(
                "email_send_error",
                to_email=mask_email(to_email),
                subject=subject,
                error=str(e),
                error_type=type(e).__name__,
            )
            return False

        if response.status_code in (200, 201, 202):
            log.info("email_sent_success", to_email=mask_email(to_email), subject=subject)
            return True
        log.error(
            "email_sent_failed",
            to_email=mask_email(to_email),
            subject=subject,
            status_code=response.status_code,
            response=response.text[:200],
        )
        return False
