"""
SMTP Email Sender

Sends password reset codes over SMTP. When no SMTP host is configured the
message is logged instead (development mode).
"""

import asyncio
import logging
import smtplib
import ssl
from email.mime.text import MIMEText
from typing import Optional

from storefront_auth.app.services.email_sender import IEmailSender

logger = logging.getLogger(__name__)


def redact_email(email: str) -> str:
    """Redact an email address for logging"""
    if "@" not in email:
        return "redacted"
    local, domain = email.split("@", 1)
    return f"{local[:2]}***@{domain}"


class SmtpEmailSender(IEmailSender):
    def __init__(
        self,
        *,
        smtp_host: Optional[str] = None,
        smtp_port: int = 587,
        smtp_user: Optional[str] = None,
        smtp_password: Optional[str] = None,
        smtp_use_tls: bool = True,
        from_email: Optional[str] = None,
        otp_ttl_minutes: int = 10,
    ) -> None:
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.smtp_user = smtp_user
        self.smtp_password = smtp_password
        self.smtp_use_tls = smtp_use_tls
        self.from_email = from_email or smtp_user
        self.otp_ttl_minutes = otp_ttl_minutes

    @property
    def is_configured(self) -> bool:
        return bool(self.smtp_host and self.from_email)

    async def send_password_reset_otp(self, to_email: str, otp: int) -> bool:
        subject = "Password Reset OTP"
        body = (
            f"Your OTP for password reset is: {otp}\n\n"
            f"This code will expire in {self.otp_ttl_minutes} minutes.\n"
            "If you did not request a password reset, please ignore this email."
        )
        return await asyncio.to_thread(self._send, to_email, subject, body)

    def _send(self, to_email: str, subject: str, body: str) -> bool:
        if not self.is_configured:
            logger.info(
                f"SMTP not configured, email to {redact_email(to_email)} "
                f"not sent (subject: {subject})"
            )
            return True

        msg = MIMEText(body, "plain", "utf-8")
        msg["Subject"] = subject
        msg["From"] = self.from_email
        msg["To"] = to_email

        try:
            with smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=10) as server:
                if self.smtp_use_tls:
                    server.starttls(context=ssl.create_default_context())
                if self.smtp_user and self.smtp_password:
                    server.login(self.smtp_user, self.smtp_password)
                server.sendmail(self.from_email, [to_email], msg.as_string())
        except (smtplib.SMTPException, OSError) as exc:
            logger.error(
                f"Failed to send email to {redact_email(to_email)}: "
                f"{exc.__class__.__name__}"
            )
            return False

        logger.info(f"Email sent to {redact_email(to_email)} (subject: {subject})")
        return True
