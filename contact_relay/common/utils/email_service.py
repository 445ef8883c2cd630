"""
Outbound email delivery through the Resend HTTP API.
"""
import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx
import jinja2

from contact_relay.common.config import Settings

logger = logging.getLogger(__name__)

# contact_relay/common/utils/email_service.py -> contact_relay/templates/emails
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
TEMPLATE_DIR = os.path.join(BASE_DIR, "templates", "emails")

template_loader = jinja2.FileSystemLoader(searchpath=TEMPLATE_DIR)
html_env = jinja2.Environment(loader=template_loader, autoescape=True, trim_blocks=True, lstrip_blocks=True)
text_env = jinja2.Environment(loader=template_loader, autoescape=False, trim_blocks=True, lstrip_blocks=True)


def render_template(template_name: str, context: Dict[str, Any]) -> str:
    env = html_env if template_name.endswith(".html") else text_env
    try:
        template = env.get_template(template_name)
        return template.render(**context)
    except jinja2.TemplateError:
        logger.exception("Error rendering template %s", template_name)
        raise


@dataclass
class OutboundEmailPayload:
    """A single message as the provider expects it."""
    from_email: str
    to: List[str]
    reply_to: str
    subject: str
    html: str
    text: str
    tags: List[Dict[str, str]] = field(default_factory=list)

    def to_provider_json(self) -> Dict[str, Any]:
        return {
            "from": self.from_email,
            "to": self.to,
            "reply_to": self.reply_to,
            "subject": self.subject,
            "html": self.html,
            "text": self.text,
            "tags": self.tags,
        }


@dataclass
class EmailSendResult:
    """Result of handing a message to the provider."""
    success: bool
    status_code: int
    email_id: Optional[str] = None
    error: Any = None


class ResendClient:
    """Thin async client for the Resend ``/emails`` endpoint."""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = settings.RESEND_API_KEY
        self.api_url = settings.RESEND_API_URL
        self.timeout = settings.RESEND_TIMEOUT_SECONDS
        self.transport = transport

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    async def send(self, payload: OutboundEmailPayload) -> EmailSendResult:
        """
        POST one message to the provider. Never retries.

        Transport errors and timeouts propagate to the caller.
        """
        async with httpx.AsyncClient(transport=self.transport, timeout=self.timeout) as client:
            response = await client.post(
                self.api_url,
                headers=self.headers,
                json=payload.to_provider_json(),
            )

        raw_body = response.text
        try:
            data = json.loads(raw_body) if raw_body else None
        except ValueError:
            data = None

        if not response.is_success:
            logger.error("Resend error: %s %s", response.status_code, raw_body)
            return EmailSendResult(
                success=False,
                status_code=response.status_code,
                error=data if data is not None else raw_body,
            )

        email_id = data.get("id") if isinstance(data, dict) else None
        if email_id is not None:
            email_id = str(email_id)
        logger.info("Email accepted by Resend (id=%s)", email_id)
        return EmailSendResult(success=True, status_code=response.status_code, email_id=email_id)
