"""
Contact form relay.

Turns a decoded request body into a validated ContactSubmission and
formats the notification email sent to the site administrator.
"""

import html
import logging
import re
from collections.abc import Mapping
from email.message import EmailMessage
from typing import Any

from landing_site.core.errors import ContactValidationError
from landing_site.core.mailer import SmtpMailer
from landing_site.models.contact import ContactSubmission

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "email", "profession", "message")

# local@domain.tld, nothing stricter
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

MISSING_FIELDS_MESSAGE = "Please fill in all fields"
INVALID_EMAIL_MESSAGE = "Please enter a valid email address"


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email) is not None


def parse_submission(payload: Any) -> ContactSubmission:
    """
    Validate a raw request body.

    Args:
        payload: Decoded JSON object or form fields. Anything that is not a
            mapping is treated as an empty body.

    Returns:
        ContactSubmission: the validated submission

    Raises:
        ContactValidationError: a field is missing or empty, or the email
            does not look like local@domain.tld
    """
    if not isinstance(payload, Mapping):
        payload = {}

    if any(not payload.get(field) for field in REQUIRED_FIELDS):
        logger.info("Validation failed: Missing required fields")
        raise ContactValidationError(MISSING_FIELDS_MESSAGE)

    if not is_valid_email(str(payload["email"])):
        logger.info("Validation failed: Invalid email format")
        raise ContactValidationError(INVALID_EMAIL_MESSAGE)

    return ContactSubmission(**{field: str(payload[field]) for field in REQUIRED_FIELDS})


def format_subject(submission: ContactSubmission) -> str:
    # Header values cannot carry line breaks
    name = " ".join(submission.name.splitlines()).strip()
    return f"New Contact Form Submission from {name}"


def format_text(submission: ContactSubmission) -> str:
    return (
        f"Name: {submission.name}\n"
        f"Email: {submission.email}\n"
        f"Profession: {submission.profession}\n"
        f"Message: {submission.message}\n"
    )


def format_html(submission: ContactSubmission) -> str:
    name, email, profession, message = (
        html.escape(value)
        for value in (submission.name, submission.email, submission.profession, submission.message)
    )
    return (
        "<h3>New Contact Form Submission</h3>\n"
        f"<p><strong>Name:</strong> {name}</p>\n"
        f"<p><strong>Email:</strong> {email}</p>\n"
        f"<p><strong>Profession:</strong> {profession}</p>\n"
        f"<p><strong>Message:</strong> {message}</p>\n"
    )


def build_notification(submission: ContactSubmission, sender_email: str, admin_email: str) -> EmailMessage:
    """Build the email sent to the administrator for one submission."""
    return SmtpMailer.create_message(
        sender_email=sender_email,
        recipient_email=admin_email,
        subject=format_subject(submission),
        text=format_text(submission),
        html=format_html(submission),
    )
