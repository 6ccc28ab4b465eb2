from typing import Dict, Any
from io import BytesIO
import json
import logging

import qrcode
from qrcode import constants
from PIL import Image
from starlette.concurrency import run_in_threadpool

from wknd.config import Settings
from wknd.exceptions import PersistenceError, ValidationError
from wknd.helpers import make_identifier, now_utc
from wknd.notifications.mailer import InlineImage, Mailer
from wknd.notifications.rendering import render_ticket_email, ticket_email_subject
from wknd.payments.schemas import GenerateTicketRequest, TicketIssueResult
from wknd.payments.store import BookingStore

logger = logging.getLogger(__name__)

QR_SIZE = 300
QR_BORDER = 2
QR_DARK = "#000000"
QR_LIGHT = "#FFFFFF"

class TicketIssuer:
    """Issues event tickets after a verified payment.

    A ticket is considered issued once its holder has been emailed. Saving
    the ticket record is best effort; the email is not, so a delivery
    failure fails the whole operation even when the record was saved.
    Issuance is not idempotent: every call creates a new ticket.
    """

    def __init__(self, store: BookingStore, mailer: Mailer, settings: Settings):
        self.store = store
        self.mailer = mailer
        self.settings = settings

    async def issue(self, request: GenerateTicketRequest) -> TicketIssueResult:
        if not all([request.payment_reference, request.email, request.event_id, request.full_name]):
            raise ValidationError("Missing required fields")

        issued_at = now_utc()
        ticket_id = make_identifier(self.settings.TICKET_PREFIX, request.event_id, "-")
        ticket_data = self._ticket_payload(ticket_id, request, issued_at.isoformat())

        # Blocking work runs in the threadpool
        qr_png = await run_in_threadpool(self.generate_qr_code_image, json.dumps(ticket_data))
        persisted = await run_in_threadpool(self._persist, ticket_data, issued_at)

        html_body = render_ticket_email(request.full_name, ticket_data)
        await self.mailer.send(
            request.email,
            ticket_email_subject(ticket_data),
            html_body,
            InlineImage(qr_png),
        )

        logger.info("Ticket %s issued for payment %s", ticket_id, request.payment_reference)
        return TicketIssueResult(ticket_id=ticket_id, persisted=persisted, notified=True)

    def generate_qr_code_image(self, data: str) -> bytes:
        """Encode data as a square two-color PNG QR code"""
        qr = qrcode.QRCode(
            version=None,
            error_correction=constants.ERROR_CORRECT_M,
            box_size=10,
            border=QR_BORDER,
        )
        qr.add_data(data)
        qr.make(fit=True)

        qr_image = qr.make_image(fill_color=QR_DARK, back_color=QR_LIGHT).get_image()

        # Nearest neighbour keeps the palette to exactly two colors
        qr_image = qr_image.convert("RGB").resize((QR_SIZE, QR_SIZE), Image.NEAREST)

        buffer = BytesIO()
        qr_image.save(buffer, format="PNG")
        return buffer.getvalue()

    def _ticket_payload(self, ticket_id: str, request: GenerateTicketRequest, issued_at: str) -> Dict[str, Any]:
        return {
            "ticketId": ticket_id,
            "eventId": request.event_id,
            "fullName": request.full_name,
            "email": request.email,
            "paymentReference": request.payment_reference,
            "eventTitle": self.settings.EVENT_TITLE,
            "eventDate": self.settings.EVENT_DATE,
            "eventLocation": self.settings.EVENT_LOCATION,
            "issuedAt": issued_at,
        }

    def _persist(self, ticket_data: Dict[str, Any], issued_at) -> bool:
        reference = ticket_data["paymentReference"]
        try:
            existing = self.store.get_tickets_by_reference(reference)
            if existing:
                logger.warning(
                    "Payment %s already has %d ticket(s); issuing another",
                    reference, len(existing),
                )
            self.store.save_ticket(ticket_data, issued_at)
        except PersistenceError:
            logger.exception("Ticket %s was not saved", ticket_data["ticketId"])
            return False
        return True
