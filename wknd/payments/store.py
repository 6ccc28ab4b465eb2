from typing import Any, Dict, List, Optional
from datetime import datetime
from sqlalchemy.orm import Session

from wknd.database import persistence_guard
from wknd.models import Booking, Payment, Ticket
from wknd.payments.schemas import BookingStatus

class BookingStore:
    """Accessors for bookings, payment snapshots and tickets"""

    def __init__(self, db: Session):
        self.db = db

    def save_booking(
        self,
        reference: str,
        event_id: str,
        email: str,
        full_name: str,
        phone: str,
        amount_minor: int,
        currency: str,
    ) -> Booking:
        booking = Booking(
            reference=reference,
            event_id=event_id,
            email=email,
            full_name=full_name,
            phone=phone,
            amount_minor=amount_minor,
            currency=currency,
            status=BookingStatus.PENDING.value,
            payment_status=BookingStatus.PENDING.value,
        )
        with persistence_guard(self.db, "save booking"):
            self.db.add(booking)
            self.db.commit()
            self.db.refresh(booking)
        return booking

    def get_booking_by_reference(self, reference: str) -> Optional[Booking]:
        with persistence_guard(self.db, "load booking"):
            return self.db.query(Booking).filter(Booking.reference == reference).first()

    def mark_booking_completed(self, reference: str, payment_data: Dict[str, Any]) -> Optional[Booking]:
        """Flip a booking to completed; bookings never move back to pending"""
        with persistence_guard(self.db, "update booking status"):
            booking = self.db.query(Booking).filter(Booking.reference == reference).first()
            if booking is None:
                return None
            booking.status = BookingStatus.COMPLETED.value
            booking.payment_status = BookingStatus.COMPLETED.value
            booking.payment_data = payment_data
            self.db.commit()
            self.db.refresh(booking)
        return booking

    def save_payment(self, transaction: Dict[str, Any]) -> Payment:
        customer = transaction.get("customer") or {}
        payment = Payment(
            reference=transaction.get("reference", ""),
            amount_minor=transaction.get("amount") or 0,
            currency=transaction.get("currency"),
            status=transaction.get("status", ""),
            email=customer.get("email") or transaction.get("email"),
            channel=transaction.get("channel"),
            paid_at=transaction.get("paid_at") or transaction.get("paidAt"),
            transaction=transaction,
        )
        with persistence_guard(self.db, "save payment"):
            self.db.add(payment)
            self.db.commit()
            self.db.refresh(payment)
        return payment

    def save_ticket(self, ticket_data: Dict[str, Any], issued_at: datetime) -> Ticket:
        ticket = Ticket(
            ticket_id=ticket_data["ticketId"],
            event_id=ticket_data["eventId"],
            full_name=ticket_data["fullName"],
            email=ticket_data["email"],
            payment_reference=ticket_data["paymentReference"],
            event_title=ticket_data.get("eventTitle"),
            event_date=ticket_data.get("eventDate"),
            event_location=ticket_data.get("eventLocation"),
            issued_at=issued_at,
        )
        with persistence_guard(self.db, "save ticket"):
            self.db.add(ticket)
            self.db.commit()
            self.db.refresh(ticket)
        return ticket

    def get_tickets_by_reference(self, payment_reference: str) -> List[Ticket]:
        with persistence_guard(self.db, "load tickets"):
            return (
                self.db.query(Ticket)
                .filter(Ticket.payment_reference == payment_reference)
                .order_by(Ticket.id)
                .all()
            )
