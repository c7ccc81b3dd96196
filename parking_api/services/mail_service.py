# parking_api/services/mail_service.py
"""
Outgoing mail over SMTP (STARTTLS).
With MAIL_ENABLED off the message is logged instead of delivered, so local
runs and tests never need an SMTP server. Errors propagate to the caller;
notification_service decides what a failure means.
"""

import smtplib
from email.message import EmailMessage
from typing import Iterable, Sequence, Tuple

from parking_api.config import settings
from parking_api.utils.logger import get_logger

logger = get_logger(__name__)

# (filename, content, mime type)
Attachment = Tuple[str, bytes, str]


class MailNotConfigured(RuntimeError):
    pass


def build_message(recipients: Sequence[str], subject: str, html: str,
                  attachments: Iterable[Attachment] = ()) -> EmailMessage:
    msg = EmailMessage()
    msg["Subject"] = subject
    msg["From"] = settings.MAIL_SENDER or "no-reply@localhost"
    msg["To"] = ", ".join(recipients)
    msg.set_content("This message requires an HTML capable mail client.")
    msg.add_alternative(html, subtype="html")
    for filename, content, mime_type in attachments:
        maintype, subtype = mime_type.split("/", 1)
        msg.add_attachment(content, maintype=maintype, subtype=subtype, filename=filename)
    return msg


def send_email(recipients: Sequence[str], subject: str, html: str,
               attachments: Iterable[Attachment] = ()) -> bool:
    """Send one message. Returns False when delivery is disabled, True when handed to SMTP."""
    recipients = [r for r in recipients if r]
    if not recipients:
        logger.warning(f"Mail '{subject}' has no recipients, skipped")
        return False

    msg = build_message(recipients, subject, html, attachments)
    # False only means "not delivered"; callers treat it as success, failures raise
    if not settings.MAIL_ENABLED:
        logger.info(f"[MAIL disabled] to={recipients} subject='{subject}'")
        return False
    if not settings.MAIL_USERNAME or not settings.MAIL_PASSWORD:
        raise MailNotConfigured("MAIL_USERNAME / MAIL_PASSWORD are not set")

    with smtplib.SMTP(settings.MAIL_SERVER, settings.MAIL_PORT, timeout=settings.MAIL_TIMEOUT_SECONDS) as smtp:
        if settings.MAIL_USE_TLS:
            smtp.starttls()
        smtp.login(settings.MAIL_USERNAME, settings.MAIL_PASSWORD)
        smtp.send_message(msg)
    logger.info(f"Mail sent to {recipients}: '{subject}'")
    return True
