import smtplib
import os
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
import logging

logger = logging.getLogger(__name__)


class EmailService:
    """Transactional e-mail over SMTP"""

    def __init__(self):
        self.smtp_server = os.getenv("SMTP_HOST", "smtp.gmail.com")
        self.smtp_port = int(os.getenv("SMTP_PORT", "587"))
        self.smtp_username = os.getenv("SMTP_USER")
        self.smtp_password = os.getenv("SMTP_PASS")
        self.from_email = os.getenv("MAIL_FROM", self.smtp_username)
        self.from_name = os.getenv("MAIL_FROM_NAME", "TutorMitra")

    def is_configured(self) -> bool:
        return bool(self.smtp_username and self.smtp_password)

    def send(self, to_email: str, subject: str, html: str) -> bool:
        """
        Sends an HTML e-mail.

        Args:
            to_email: Recipient address
            subject: Subject line
            html: HTML body

        Returns:
            bool: True when the message was handed to the SMTP server
        """
        if not to_email:
            logger.warning(f"No recipient for e-mail '{subject}', skipping")
            return False
        if not self.is_configured():
            logger.warning(f"SMTP not configured, e-mail '{subject}' to {to_email} not sent")
            return False

        try:
            msg = MIMEMultipart()
            msg["From"] = f"{self.from_name} <{self.from_email}>"
            msg["To"] = to_email
            msg["Subject"] = subject
            msg.attach(MIMEText(html, "html"))

            server = smtplib.SMTP(self.smtp_server, self.smtp_port)
            server.starttls()
            server.login(self.smtp_username, self.smtp_password)
            server.sendmail(self.from_email, to_email, msg.as_string())
            server.quit()

            logger.info(f"E-mail '{subject}' sent to {to_email}")
            return True

        except Exception as e:
            logger.error(f"Error sending e-mail '{subject}' to {to_email}: {e}")
            return False


email_service = EmailService()
