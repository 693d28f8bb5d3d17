"""Outgoing mail for account notifications."""

import logging
import smtplib
import ssl
from email.message import EmailMessage

from app.config import get_settings

logger = logging.getLogger(__name__)

RESET_TEXT = """Hello {name},

Someone asked to reset the password of your {app_name} account.
Open the link below to choose a new one:

{reset_url}

The link expires in {minutes} minutes. If you did not ask for this,
ignore this message and your password stays the same.
"""

RESET_HTML = """<html>
<body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
  <p>Hello {name},</p>
  <p>Someone asked to reset the password of your {app_name} account.</p>
  <p><a href="{reset_url}" style="background-color: #15803D; color: white;
        padding: 10px 20px; text-decoration: none; border-radius: 6px;">Choose a new password</a></p>
  <p>The link expires in {minutes} minutes. If you did not ask for this,
     ignore this message and your password stays the same.</p>
</body>
</html>
"""


class EmailService:
    """Sends mail through the configured SMTP relay.

    With ``SMTP_HOST`` empty, messages are logged and dropped, which is how
    development and test runs work.
    """

    def __init__(self):
        self.settings = get_settings()

    @property
    def enabled(self) -> bool:
        """Whether an SMTP host is configured."""
        return bool(self.settings.smtp_host)

    def _connect(self) -> smtplib.SMTP:
        s = self.settings
        if s.smtp_use_tls:
            server = smtplib.SMTP_SSL(
                s.smtp_host, s.smtp_port, context=ssl.create_default_context(), timeout=10
            )
        else:
            server = smtplib.SMTP(s.smtp_host, s.smtp_port, timeout=10)
            server.starttls()
        if s.smtp_user and s.smtp_password:
            server.login(s.smtp_user, s.smtp_password)
        return server

    def send(self, to_email: str, subject: str, text: str, html: str | None = None) -> bool:
        """Send one message.

        Args:
            to_email: Recipient address.
            subject: Subject line.
            text: Plain text body.
            html: Optional HTML alternative.

        Returns:
            bool: True if the relay accepted the message.
        """
        if not self.enabled:
            logger.info(f"SMTP not configured, not sending '{subject}' to {to_email}")
            return False

        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = f"{self.settings.smtp_from_name} <{self.settings.smtp_from_email}>"
        msg["To"] = to_email
        msg.set_content(text)
        if html:
            msg.add_alternative(html, subtype="html")

        try:
            with self._connect() as server:
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Could not send '{subject}' to {to_email}: {e}")
            return False

        logger.info(f"Sent '{subject}' to {to_email}")
        return True

    def send_password_reset_email(self, to_email: str, name: str, reset_url: str) -> bool:
        """Mail a password reset link."""
        values = {
            "name": name,
            "app_name": self.settings.app_name,
            "reset_url": reset_url,
            "minutes": self.settings.password_reset_expire_minutes,
        }
        return self.send(
            to_email,
            f"{self.settings.app_name} password reset",
            RESET_TEXT.format(**values),
            RESET_HTML.format(**values),
        )


_email_service: EmailService | None = None


def get_email_service() -> EmailService:
    """Get the email service singleton."""
    global _email_service
    if _email_service is None:
        _email_service = EmailService()
    return _email_service
