"""
SMTP mailer used to relay contact form submissions.

One instance is built at startup from the settings and shared by every
request. It only holds connection parameters; each send opens its own
SMTP connection through aiosmtplib.
"""

import logging
from email.message import EmailMessage
from typing import Optional

import aiosmtplib

from landing_site.core.config import Settings
from landing_site.core.errors import DeliveryError

logger = logging.getLogger(__name__)


class SmtpMailer:
    """
        Mailing class, used to create outbound messages and send them through
        the configured SMTP server
    """

    def __init__(self, hostname: str, port: int, username: str, password: str,
                 use_tls: bool = True, timeout: Optional[float] = None):
        self.hostname = hostname
        self.port = port
        self.username = username
        self._password = password
        self.use_tls = use_tls
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "SmtpMailer":
        return cls(
            hostname=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.email_user,
            password=settings.email_pass,
            use_tls=settings.smtp_use_tls,
            timeout=settings.smtp_timeout,
        )

    @staticmethod
    def create_message(sender_email: str, recipient_email: str,
                       subject: str, text: str, html: str) -> EmailMessage:
        """Create the message with plain-text and HTML versions."""
        message = EmailMessage()
        message["From"] = sender_email
        message["To"] = recipient_email
        message["Subject"] = subject
        message.set_content(text)
        message.add_alternative(html, subtype="html")
        return message

    def _connection_args(self) -> dict:
        return dict(
            hostname=self.hostname,
            port=self.port,
            username=self.username,
            password=self._password,
            use_tls=self.use_tls,
            timeout=self.timeout,
        )

    async def send(self, message: EmailMessage) -> str:
        """
        Send a single message. There is no retry; any transport failure is
        raised as a DeliveryError.

        Returns:
            str: the server's final response line
        """
        try:
            errors, response = await aiosmtplib.send(message, **self._connection_args())
        except aiosmtplib.SMTPResponseException as e:
            raise DeliveryError(e.message, code=e.code, response=str(e)) from e
        except aiosmtplib.SMTPException as e:
            raise DeliveryError(str(e)) from e
        except OSError as e:
            raise DeliveryError(str(e), code=e.errno) from e

        if errors:
            # Only one recipient per message, so any refusal is a failure
            raise DeliveryError(f"Recipients refused: {', '.join(errors)}", response=response)
        return response

    async def verify(self) -> bool:
        """Connect and authenticate once, logging the outcome instead of raising."""
        try:
            smtp = aiosmtplib.SMTP(
                hostname=self.hostname,
                port=self.port,
                use_tls=self.use_tls,
                timeout=self.timeout,
            )
            async with smtp:
                await smtp.login(self.username, self._password)
        except (aiosmtplib.SMTPException, OSError) as e:
            logger.error(f"Transporter verification failed: {str(e)}")
            return False

        logger.info("Server is ready to send emails")
        return True
