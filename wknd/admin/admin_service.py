from typing import Callable, Dict, List, Optional, Tuple
from datetime import datetime, timezone
from sqlalchemy import func, desc
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool
import csv
import io
import logging

from wknd.admin.schemas import (
    AdminPayment, AdminTicket, AdminUserSummary, DashboardStats, ReplyRequest
)
from wknd.config import settings
from wknd.database import persistence_guard
from wknd.exceptions import NotFoundError, NotificationError, ValidationError
from wknd.helpers import format_amount, to_iso, to_major_units
from wknd.messages.schemas import ContactMessage as ContactMessageOut
from wknd.models import Booking, ContactMessage, Payment, Ticket
from wknd.notifications.mailer import Mailer
from wknd.notifications.rendering import render_reply_email, reply_email_subject

logger = logging.getLogger(__name__)

EXPORT_HEADERS: Dict[str, List[str]] = {
    "users": ["Full Name", "Email", "Phone", "Created At"],
    "tickets": ["Ticket ID", "Full Name", "Email", "Event", "Payment Reference", "Created At"],
    "payments": ["Reference", "Email", "Amount", "Status", "Created At"],
}

class AdminManagementService:
    """Read models and actions behind the admin dashboard"""

    def __init__(self, db: Session, mailer: Optional[Mailer] = None):
        self.db = db
        self.mailer = mailer

    # Listings
    def list_users(self) -> List[AdminUserSummary]:
        """Distinct booking contacts, keeping each email's first booking"""
        with persistence_guard(self.db, "fetch users"):
            bookings = self.db.query(Booking).order_by(Booking.created_at, Booking.id).all()

        users: Dict[str, AdminUserSummary] = {}
        for booking in bookings:
            if booking.email not in users:
                users[booking.email] = AdminUserSummary(
                    email=booking.email,
                    full_name=booking.full_name,
                    phone=booking.phone,
                    created_at=booking.created_at,
                )
        return list(reversed(list(users.values())))

    def list_tickets(self) -> List[AdminTicket]:
        with persistence_guard(self.db, "fetch tickets"):
            tickets = self.db.query(Ticket).order_by(desc(Ticket.created_at), desc(Ticket.id)).all()

        return [
            AdminTicket(
                ticket_id=t.ticket_id,
                full_name=t.full_name,
                email=t.email,
                event_id=t.event_id,
                event_title=t.event_title or settings.EVENT_TITLE,
                payment_reference=t.payment_reference,
                created_at=t.created_at,
            )
            for t in tickets
        ]

    def list_messages(self) -> List[ContactMessageOut]:
        with persistence_guard(self.db, "fetch messages"):
            messages = (
                self.db.query(ContactMessage)
                .order_by(desc(ContactMessage.created_at), desc(ContactMessage.id))
                .all()
            )
        return [ContactMessageOut.from_model(m) for m in messages]

    def list_payments(self) -> List[AdminPayment]:
        with persistence_guard(self.db, "fetch payments"):
            payments = self.db.query(Payment).order_by(desc(Payment.created_at), desc(Payment.id)).all()

        return [
            AdminPayment(
                reference=p.reference,
                email=p.email,
                amount=to_major_units(p.amount_minor),
                status=p.status,
                created_at=p.created_at,
            )
            for p in payments
        ]

    def get_stats(self) -> DashboardStats:
        with persistence_guard(self.db, "fetch stats"):
            total_users = self.db.query(func.count(func.distinct(Booking.email))).scalar() or 0
            total_tickets = self.db.query(Ticket).count()
            revenue_minor = self.db.query(func.sum(Payment.amount_minor)).filter(
                Payment.status == "success"
            ).scalar() or 0
            pending_messages = self.db.query(ContactMessage).filter(
                ContactMessage.replied == False  # noqa: E712
            ).count()

        return DashboardStats(
            total_users=total_users,
            total_tickets=total_tickets,
            total_revenue=to_major_units(revenue_minor),
            pending_messages=pending_messages,
        )

    # Actions
    async def reply_to_message(self, request: ReplyRequest) -> ContactMessage:
        """Mark a message replied, then email the reply.

        The replied flag is committed before the email is attempted and is
        not reverted when sending fails.
        """
        if not request.message_id or not request.reply_text or not request.recipient_email:
            raise ValidationError("Missing required fields")

        message = await run_in_threadpool(self._mark_replied, request.message_id, request.reply_text)

        try:
            await self.mailer.send(
                request.recipient_email,
                reply_email_subject(),
                render_reply_email(request.reply_text),
            )
        except NotificationError as exc:
            logger.error("Reply to message %s not delivered: %s", message.id, exc.message)
            raise NotificationError("Failed to send reply") from exc

        logger.info("Reply sent for message %s to %s", message.id, request.recipient_email)
        return message

    def _mark_replied(self, message_id: int, reply_text: str) -> ContactMessage:
        with persistence_guard(self.db, "update message"):
            message = self.db.query(ContactMessage).filter(ContactMessage.id == message_id).first()
            if message is None:
                raise NotFoundError("Message not found")
            message.replied = True
            message.replied_at = datetime.now(timezone.utc)
            message.reply_text = reply_text
            self.db.commit()
            self.db.refresh(message)
        return message

    # Export
    def export_csv(self, data_type: str) -> Tuple[str, str]:
        """Return (filename, csv content) for users, tickets or payments"""
        if data_type not in EXPORT_HEADERS:
            raise ValidationError("Invalid export type")

        row_builders: Dict[str, Callable[[], List[List[str]]]] = {
            "users": self._user_rows,
            "tickets": self._ticket_rows,
            "payments": self._payment_rows,
        }
        content = self._generate_csv(EXPORT_HEADERS[data_type], row_builders[data_type]())
        return f"{data_type}.csv", content

    def _user_rows(self) -> List[List[str]]:
        return [
            [u.full_name or "", u.email or "", u.phone or "", to_iso(u.created_at)]
            for u in self.list_users()
        ]

    def _ticket_rows(self) -> List[List[str]]:
        return [
            [t.ticket_id, t.full_name, t.email, t.event_title, t.payment_reference, to_iso(t.created_at)]
            for t in self.list_tickets()
        ]

    def _payment_rows(self) -> List[List[str]]:
        return [
            [p.reference, p.email or "", format_amount(p.amount), p.status, to_iso(p.created_at)]
            for p in self.list_payments()
        ]

    def _generate_csv(self, headers: List[str], rows: List[List[str]]) -> str:
        """Header row as-is, every data cell quoted"""
        output = io.StringIO()
        csv.writer(output, lineterminator="\n").writerow(headers)
        csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator="\n").writerows(rows)
        return output.getvalue()
