from pydantic import BaseModel, BeforeValidator, EmailStr
from typing import Annotated, Optional, Dict, Any
from datetime import datetime
from decimal import Decimal
from enum import Enum

from wknd.helpers import to_major_units
from wknd.schemas import CamelModel

class BookingStatus(str, Enum):
    """Booking status enumeration"""
    PENDING = "pending"
    COMPLETED = "completed"

def _stringify(value):
    # Clients send numeric event ids as JSON numbers
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value

LooseStr = Annotated[Optional[str], BeforeValidator(_stringify)]

# Requests
class CreatePaymentRequest(CamelModel):
    """Payment initialization request; presence is checked by the service"""
    email: Optional[EmailStr] = None
    full_name: Optional[str] = None
    phone: LooseStr = None
    event_id: LooseStr = None
    amount: Optional[Decimal] = None

class GenerateTicketRequest(CamelModel):
    payment_reference: Optional[str] = None
    email: Optional[EmailStr] = None
    event_id: LooseStr = None
    full_name: Optional[str] = None

# Service results
class PaymentInitialization(BaseModel):
    authorization_url: str
    access_code: str
    reference: str
    persisted: bool

class PaymentVerification(BaseModel):
    transaction: Dict[str, Any]
    persisted: bool

class TicketIssueResult(BaseModel):
    """Outcome of a ticket issuance: the store write is best effort, the email is not"""
    ticket_id: str
    persisted: bool
    notified: bool

# Responses
class CreatePaymentResponse(CamelModel):
    authorization_url: str
    access_code: str
    reference: str

class VerifyPaymentResponse(CamelModel):
    success: bool = True
    data: Dict[str, Any]

class GenerateTicketResponse(CamelModel):
    success: bool = True
    ticket_id: str
    message: str = "Ticket generated and sent successfully"

class BookingOut(CamelModel):
    reference: str
    event_id: str
    email: str
    full_name: str
    phone: str
    amount: float
    currency: str
    status: BookingStatus
    payment_status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_booking(cls, booking) -> "BookingOut":
        return cls(
            reference=booking.reference,
            event_id=booking.event_id,
            email=booking.email,
            full_name=booking.full_name,
            phone=booking.phone,
            amount=to_major_units(booking.amount_minor),
            currency=booking.currency,
            status=booking.status,
            payment_status=booking.payment_status,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
        )
