"""Registration confirmation email.

Delivery is switched off unless ``CONFIRMATION_EMAIL_ENABLED`` is set; the
registration handler does not call this module.
"""

from __future__ import annotations

import logging

from flask import current_app
from flask_mail import Message

from backend.intake.extensions import mail

logger = logging.getLogger(__name__)

SUBJECT = 'Registration Confirmation'


def build_confirmation_message(email: str, name: str) -> Message:
    sender = current_app.config.get('MAIL_DEFAULT_SENDER') or 'noreply@registration.com'
    body = (
        f"Hello {name},\n\n"
        "Thank you for registering with us!\n\n"
        "We have received your registration and will process it shortly.\n\n"
        "Best regards,\n"
        "Registration Team"
    )
    return Message(
        subject=SUBJECT,
        body=body,
        recipients=[email],
        sender=sender,
        charset='utf-8',
    )


def send_confirmation_email(email: str, name: str) -> bool:
    """Send the confirmation email. Returns True only when a message was sent."""
    if not current_app.config.get('CONFIRMATION_EMAIL_ENABLED'):
        logger.debug(f"Confirmation email disabled, not sending to {email}")
        return False

    msg = build_confirmation_message(email, name)
    try:
        logger.info(f"Attempting to send confirmation email to {email}")
        mail.send(msg)
        logger.info(f"Confirmation email sent to {email}")
        return True
    except Exception:
        logger.exception(f"Failed to send confirmation email to {email}")
        return False
