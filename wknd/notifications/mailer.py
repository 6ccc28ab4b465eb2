import logging
import aiosmtplib
from email.message import EmailMessage
from email.utils import make_msgid
from typing import Optional

from wknd.config import Settings
from wknd.exceptions import NotificationError

logger = logging.getLogger(__name__)

QR_CONTENT_ID = "qrcode"


class InlineImage:
    """PNG bytes referenced from the HTML body as ``cid:<content_id>``"""

    def __init__(self, content: bytes, filename: str = "ticket-qr-code.png", content_id: str = QR_CONTENT_ID):
        self.content = content
        self.filename = filename
        self.content_id = content_id


class Mailer:
    """Sends transactional email through the configured SMTP account"""

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        sender: Optional[str] = None,
        timeout: float = 30.0,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender or username
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "Mailer":
        return cls(
            host=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            username=settings.EMAIL_USER,
            password=settings.EMAIL_APP_PASSWORD,
        )

    def build_message(
        self,
        recipient: str,
        subject: str,
        html_body: str,
        inline_image: Optional[InlineImage] = None,
    ) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = recipient
        message["Subject"] = subject
        message["Message-ID"] = make_msgid(domain=self.sender.split("@")[-1] if "@" in self.sender else None)
        message.set_content("This message requires an HTML capable email client.")
        message.add_alternative(html_body, subtype="html")

        if inline_image is not None:
            # Attach to the HTML part so the cid reference resolves inline
            html_part = message.get_payload()[-1]
            html_part.add_related(
                inline_image.content,
                maintype="image",
                subtype="png",
                cid=f"<{inline_image.content_id}>",
                filename=inline_image.filename,
                disposition="inline",
            )
        return message

    async def send(
        self,
        recipient: str,
        subject: str,
        html_body: str,
        inline_image: Optional[InlineImage] = None,
    ) -> None:
        message = self.build_message(recipient, subject, html_body, inline_image)
        try:
            await aiosmtplib.send(
                message,
                hostname=self.host,
                port=self.port,
                username=self.username or None,
                password=self.password or None,
                use_tls=True,
                timeout=self.timeout,
            )
        except (aiosmtplib.SMTPException, OSError) as exc:
            logger.error("Email to %s failed: %s", recipient, exc)
            raise NotificationError("Failed to send email") from exc
        logger.info("Email '%s' sent to %s", subject, recipient)
