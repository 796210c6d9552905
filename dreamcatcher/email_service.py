"""
Email Service using Resend
Templates are written in MJML and compiled to HTML right before sending
"""

import logging
from typing import Optional, Union

import resend
from fastapi import Request
from mjml import mjml_to_html
from sqlalchemy.orm import Session

from .config import Settings
from .models import AppSetting

logger = logging.getLogger(__name__)

DEFAULT_SENDER_NAME = "Dreamcatcher Film"
DEFAULT_FROM_EMAIL = "no-reply@dreamcatcherfilms.co.uk"


class EmailDeliveryError(Exception):
    """Raised when Resend rejects or fails to deliver a message"""


def compile_mjml_to_html(mjml_content: str) -> str:
    """Compile MJML template to production-ready HTML"""
    result = mjml_to_html(mjml_content)
    # mjml_to_html returns a dict with 'html' and 'errors' keys
    if isinstance(result, dict):
        if result.get("errors"):
            logger.warning(f"MJML compilation warnings: {result['errors']}")
        return result.get("html", "")
    return str(result)


def get_sender_details(db: Session) -> tuple[str, str]:
    """Sender name and address configured by the admin (app_settings), with defaults"""
    rows = db.query(AppSetting).filter(AppSetting.key.in_(["senderName", "fromEmail"])).all()
    values = {row.key: row.value for row in rows}
    return (
        values.get("senderName") or DEFAULT_SENDER_NAME,
        values.get("fromEmail") or DEFAULT_FROM_EMAIL,
    )


def format_sender(name: str, address: str) -> str:
    return f"{name} <{address}>"


def studio_sender(db: Session) -> str:
    return format_sender(*get_sender_details(db))


class Mailer:
    """Thin wrapper over the Resend SDK; without an API key every send is logged and skipped"""

    def __init__(self, api_key: Optional[str], default_from: str):
        self.api_key = api_key
        self.default_from = default_from
        if api_key:
            resend.api_key = api_key

    @classmethod
    def from_settings(cls, settings: Settings) -> "Mailer":
        if not settings.resend_api_key:
            logger.warning("⚠️ RESEND_API_KEY not set - emails will be logged and skipped")
        return cls(settings.resend_api_key, settings.email_from_address)

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    def send_email(
        self,
        to: Union[str, list[str]],
        subject: str,
        mjml_content: str,
        from_address: Optional[str] = None,
        reply_to: Optional[str] = None,
    ) -> Optional[dict]:
        """
        Send one email.

        Returns:
            Resend response dict, or None when sending is disabled

        Raises:
            EmailDeliveryError: If Resend fails
        """
        recipients = [to] if isinstance(to, str) else to
        if not self.enabled:
            logger.info(f"📭 Email disabled, skipping '{subject}' to {recipients}")
            return None

        try:
            email_data = {
                "from": from_address or self.default_from,
                "to": recipients,
                "subject": subject,
                "html": compile_mjml_to_html(mjml_content),
            }
            if reply_to:
                email_data["reply_to"] = reply_to

            logger.info(f"📧 Sending email via Resend to: {recipients}")
            response = resend.Emails.send(email_data)
            logger.info(f"✅ Email sent successfully via Resend: {response}")
            return response
        except Exception as e:
            logger.error(f"❌ Email send error to {recipients}: {e}")
            raise EmailDeliveryError(str(e)) from e

    def send_batch(self, messages: list[dict]) -> Optional[list]:
        """
        Send several emails in one Resend batch call.

        Each message is a dict with to, subject, mjml_content and optional
        from_address / reply_to.
        """
        if not self.enabled:
            logger.info(f"📭 Email disabled, skipping batch of {len(messages)} emails")
            return None

        try:
            payload = []
            for message in messages:
                item = {
                    "from": message.get("from_address") or self.default_from,
                    "to": [message["to"]],
                    "subject": message["subject"],
                    "html": compile_mjml_to_html(message["mjml_content"]),
                }
                if message.get("reply_to"):
                    item["reply_to"] = message["reply_to"]
                payload.append(item)

            logger.info(f"📧 Sending batch of {len(payload)} emails via Resend")
            response = resend.Batch.send(payload)
            logger.info("✅ Batch sent successfully via Resend")
            return response
        except Exception as e:
            logger.error(f"❌ Batch email send error: {e}")
            raise EmailDeliveryError(str(e)) from e


def send_quietly(mailer, **kwargs) -> bool:
    """Send an email whose failure must not affect the caller's outcome"""
    try:
        mailer.send_email(**kwargs)
        return True
    except EmailDeliveryError as e:
        logger.warning(f"⚠️ Notification email '{kwargs.get('subject')}' not delivered: {e}")
        return False


def get_mailer(request: Request):
    return request.app.state.mailer
