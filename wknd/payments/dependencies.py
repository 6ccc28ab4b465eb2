from fastapi import Depends, Request
from sqlalchemy.orm import Session

from wknd.config import settings
from wknd.database import get_db
from wknd.notifications.mailer import Mailer
from wknd.payments.gateway import PaystackClient
from wknd.payments.service import PaymentService
from wknd.payments.store import BookingStore
from wknd.payments.ticket_service import TicketIssuer

def get_gateway(request: Request) -> PaystackClient:
    """Paystack client created at application startup"""
    return request.app.state.gateway

def get_mailer(request: Request) -> Mailer:
    return request.app.state.mailer

def get_booking_store(db: Session = Depends(get_db)) -> BookingStore:
    return BookingStore(db)

def get_payment_service(
    gateway: PaystackClient = Depends(get_gateway),
    store: BookingStore = Depends(get_booking_store),
) -> PaymentService:
    return PaymentService(gateway, store, settings)

def get_ticket_issuer(
    mailer: Mailer = Depends(get_mailer),
    store: BookingStore = Depends(get_booking_store),
) -> TicketIssuer:
    return TicketIssuer(store, mailer, settings)
