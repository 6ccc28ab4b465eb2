from fastapi import APIRouter, Depends

from wknd.payments.dependencies import get_payment_service, get_ticket_issuer
from wknd.payments.schemas import (
    BookingOut, CreatePaymentRequest, CreatePaymentResponse,
    GenerateTicketRequest, GenerateTicketResponse, VerifyPaymentResponse
)
from wknd.payments.service import PaymentService
from wknd.payments.ticket_service import TicketIssuer

router = APIRouter()

@router.post("/create-payment", response_model=CreatePaymentResponse)
async def create_payment(
    request: CreatePaymentRequest,
    payment_service: PaymentService = Depends(get_payment_service)
):
    """Initialize a Paystack transaction and record a pending booking"""
    initialization = await payment_service.create_payment(request)
    return CreatePaymentResponse(
        authorization_url=initialization.authorization_url,
        access_code=initialization.access_code,
        reference=initialization.reference
    )

@router.get("/verify-payment/{reference}", response_model=VerifyPaymentResponse)
async def verify_payment(
    reference: str,
    payment_service: PaymentService = Depends(get_payment_service)
):
    """Verify a transaction with Paystack and complete its booking"""
    verification = await payment_service.verify_payment(reference)
    return VerifyPaymentResponse(success=True, data=verification.transaction)

@router.post("/generate-ticket", response_model=GenerateTicketResponse)
async def generate_ticket(
    request: GenerateTicketRequest,
    issuer: TicketIssuer = Depends(get_ticket_issuer)
):
    """Generate a QR ticket and email it to the holder"""
    result = await issuer.issue(request)
    return GenerateTicketResponse(ticket_id=result.ticket_id)

@router.get("/bookings/{reference}", response_model=BookingOut)
def get_booking(
    reference: str,
    payment_service: PaymentService = Depends(get_payment_service)
):
    """Get booking details by payment reference"""
    return payment_service.get_booking(reference)
