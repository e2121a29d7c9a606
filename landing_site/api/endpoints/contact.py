"""
Contact form endpoint.

Validates the submission, relays it to the administrator by email and
reports the outcome as JSON.
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from typing import Any, Dict, Optional
import logging

from landing_site.api.deps import get_app_settings, get_mailer
from landing_site.core.config import Settings
from landing_site.core.errors import ContactValidationError, DeliveryError
from landing_site.core.mailer import SmtpMailer
from landing_site.core.relay import REQUIRED_FIELDS, build_notification, parse_submission
from landing_site.models.contact import ContactResponse

router = APIRouter()
logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Message sent successfully"
FAILURE_MESSAGE = "Failed to send message. Please try again later."


async def read_payload(request: Request) -> Dict[str, Any]:
    """
    Decode a JSON or URL-encoded form body.

    Other content types, malformed JSON and non-object JSON all give an
    empty payload, which the relay then rejects as incomplete.
    """
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()

    if content_type == "application/json":
        try:
            payload = await request.json()
        except ValueError:
            logger.warning("Could not decode JSON body")
            return {}
        return payload if isinstance(payload, dict) else {}

    if content_type == "application/x-www-form-urlencoded":
        form = await request.form()
        return dict(form)

    return {}


def contact_response(status_code: int, success: bool, message: str, error: Optional[str] = None) -> JSONResponse:
    body = ContactResponse(success=success, message=message, error=error)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@router.post("/contact")
async def submit_contact(
    payload: Dict[str, Any] = Depends(read_payload),
    settings: Settings = Depends(get_app_settings),
    mailer: SmtpMailer = Depends(get_mailer),
):
    """
    Relay a contact form submission to the administrator.

    Returns:
        200 on delivery, 400 when the submission is incomplete or the email
        is malformed, 500 when the mail server could not be reached or
        refused the message.
    """
    received = {field: payload.get(field) for field in REQUIRED_FIELDS}
    logger.info(f"Received contact form submission: {received}")

    try:
        submission = parse_submission(payload)
    except ContactValidationError as e:
        return contact_response(status.HTTP_400_BAD_REQUEST, False, e.message)

    logger.info(f"Sending contact email from {settings.email_user} to {settings.admin_email}")

    try:
        message = build_notification(submission, settings.email_user, settings.admin_email)
        response = await mailer.send(message)
    except DeliveryError as e:
        logger.error(f"Error sending email: {e.details()}")
        return contact_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, False, FAILURE_MESSAGE,
            error=e.message if settings.is_development else None,
        )
    except Exception as e:
        logger.exception(f"Unexpected error sending email: {str(e)}")
        return contact_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, False, FAILURE_MESSAGE,
            error=str(e) if settings.is_development else None,
        )

    logger.info(f"✅ Email sent successfully: {response}")
    return contact_response(status.HTTP_200_OK, True, SUCCESS_MESSAGE)
