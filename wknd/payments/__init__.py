"""
Payments & Ticketing Module

This module drives the booking flow of the 234 WKND event backend:

- create-payment: initialize a Paystack transaction and record a pending booking
- verify-payment: confirm the transaction with Paystack, store the payment
  snapshot and complete the booking
- generate-ticket: build a QR-coded ticket, store it and email it to the holder

The client application calls the three steps in sequence; the server keeps no
flow state between them.

Key Components:
- gateway.py: async Paystack client (initialize / verify transaction)
- store.py: booking, payment and ticket persistence
- service.py: payment initialization and verification
- ticket_service.py: ticket identifiers, QR encoding and delivery
- router.py: FastAPI endpoints under /api/payments
"""

from .router import router
from .gateway import PaystackClient
from .service import PaymentService
from .ticket_service import TicketIssuer
from .store import BookingStore

__all__ = [
    "router",
    "PaystackClient",
    "PaymentService",
    "TicketIssuer",
    "BookingStore",
]
