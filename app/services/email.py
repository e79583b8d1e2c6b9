"""
Error report mailer.

Unhandled exceptions caught by the global handler in app.main are mailed to
the addresses listed in ERROR_TO.
"""

import os
import smtplib
import logging
import traceback
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from datetime import datetime

logger = logging.getLogger(__name__)


class ErrorReportService:
    """Sends error reports via SMTP"""

    def __init__(self):
        self.smtp_host = os.getenv("SMTP_HOST")
        self.smtp_port = int(os.getenv("SMTP_PORT", "587"))
        self.smtp_user = os.getenv("SMTP_USER")
        self.smtp_pass = os.getenv("SMTP_PASS")
        self.smtp_use_tls = os.getenv("SMTP_USE_TLS", "true").lower() in {
            "1",
            "true",
            "yes",
        }
        self.from_addr = os.getenv("ERROR_FROM", "errors@tutormitra.local")
        self.to_addrs = [
            addr.strip()
            for addr in os.getenv("ERROR_TO", "").split(",")
            if addr.strip()
        ]

    def is_configured(self) -> bool:
        return bool(
            self.smtp_host and self.smtp_user and self.smtp_pass and self.to_addrs
        )

    def send_error_email(self, error_data: dict) -> bool:
        """
        Send an error report.

        Args:
            error_data: Dictionary containing error information
                - path: Request path
                - method: HTTP method
                - client: Client IP
                - user: User id or e-mail (optional)
                - exception: Exception object
                - timestamp: Error timestamp
        """
        if not self.is_configured():
            logger.warning("Error reporting not configured, skipping error email")
            return False

        try:
            msg = MIMEMultipart("alternative")
            msg["Subject"] = (
                f"[TutorMitra Backend][{os.getenv('ENV', 'development')}] ERROR"
            )
            msg["From"] = self.from_addr
            msg["To"] = ", ".join(self.to_addrs)
            msg.attach(MIMEText(self._generate_error_html(error_data), "html", "utf-8"))

            server = smtplib.SMTP(self.smtp_host, self.smtp_port)
            if self.smtp_use_tls:
                server.starttls()
            server.login(self.smtp_user, self.smtp_pass)
            server.send_message(msg)
            server.quit()

            logger.info(f"Error email sent to {', '.join(self.to_addrs)}")
            return True

        except Exception as e:
            logger.error(f"Failed to send error email: {e}")
            return False

    def _generate_error_html(self, error_data: dict) -> str:
        path = error_data.get("path", "Unknown")
        method = error_data.get("method", "Unknown")
        client = error_data.get("client", "Unknown")
        user = error_data.get("user", "Anonymous")
        exception = error_data.get("exception")
        timestamp = error_data.get(
            "timestamp", datetime.utcnow().strftime("%Y-%m-%d %H:%M:%S")
        )

        if exception is not None:
            lines = traceback.format_exception(
                type(exception), exception, exception.__traceback__
            )
            traceback_html = "".join(
                f"<div>{line.strip()}</div>" for line in lines if line.strip()
            )
        else:
            traceback_html = "<div>No traceback available</div>"

        return f"""
        <html>
        <body style="font-family: sans-serif;">
            <h2 style="color: #dc3545;">Error Report</h2>
            <p>TutorMitra Backend &bull; {os.getenv('ENV', 'development').upper()}</p>
            <p>{timestamp} UTC</p>
            <table>
                <tr><td><strong>Endpoint</strong></td><td>{method} {path}</td></tr>
                <tr><td><strong>User</strong></td><td>{user}</td></tr>
                <tr><td><strong>Client IP</strong></td><td>{client}</td></tr>
            </table>
            <h3>Stack Trace</h3>
            <pre style="background: #1e1e1e; color: #d4d4d4; padding: 12px;">{traceback_html}</pre>
        </body>
        </html>
        """


error_report_service = ErrorReportService()
