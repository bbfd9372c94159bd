"""EmailProvider protocol — services depend on this, not the concrete implementation."""

from typing import Protocol


class EmailProvider(Protocol):
    async def send_mail(
        self, to_email: str, subject: str, text_body: str, html_body: str
    ) -> bool: ...
