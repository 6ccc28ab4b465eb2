import logging
from decimal import Decimal

from starlette.concurrency import run_in_threadpool

from wknd.config import Settings
from wknd.exceptions import GatewayError, NotFoundError, PersistenceError, ValidationError
from wknd.helpers import make_identifier, to_minor_units
from wknd.payments.gateway import PaystackClient
from wknd.payments.schemas import (
    BookingOut, CreatePaymentRequest, PaymentInitialization, PaymentVerification
)
from wknd.payments.store import BookingStore

logger = logging.getLogger(__name__)


class PaymentService:
    """Payment half of the booking flow: initialize and verify Paystack transactions.

    The gateway call decides the outcome of each operation. Store writes
    that follow a successful gateway call are best effort: a failure is
    logged and reported through the ``persisted`` flag of the result,
    never raised, because the payment itself already happened.
    """

    def __init__(self, gateway: PaystackClient, store: BookingStore, settings: Settings):
        self.gateway = gateway
        self.store = store
        self.settings = settings

    async def create_payment(self, request: CreatePaymentRequest) -> PaymentInitialization:
        if not all([request.email, request.full_name, request.phone, request.event_id, request.amount]):
            raise ValidationError("Missing required fields")
        if request.amount <= 0:
            raise ValidationError("Amount must be greater than zero")

        reference = make_identifier(self.settings.REFERENCE_PREFIX, request.event_id, "_")
        total = request.amount + Decimal(self.settings.SERVICE_FEE)
        amount_minor = to_minor_units(total)

        data = await self.gateway.initialize_transaction(
            email=request.email,
            amount_minor=amount_minor,
            reference=reference,
            metadata=self._metadata(request),
        )

        persisted = True
        try:
            await run_in_threadpool(
                self.store.save_booking,
                reference=reference,
                event_id=request.event_id,
                email=request.email,
                full_name=request.full_name,
                phone=request.phone,
                amount_minor=amount_minor,
                currency=self.settings.CURRENCY,
            )
        except PersistenceError:
            # Payment can still proceed without the local booking
            logger.exception("Booking %s was not saved", reference)
            persisted = False

        return PaymentInitialization(
            authorization_url=data.get("authorization_url", ""),
            access_code=data.get("access_code", ""),
            reference=data.get("reference") or reference,
            persisted=persisted,
        )

    async def verify_payment(self, reference: str) -> PaymentVerification:
        if not reference:
            raise ValidationError("Payment reference is required")

        transaction = await self.gateway.verify_transaction(reference)
        if transaction.get("status") != "success":
            logger.info("Transaction %s not successful: %s", reference, transaction.get("status"))
            raise GatewayError("Payment was not successful")

        persisted = True
        try:
            await run_in_threadpool(self._record_verification, reference, transaction)
        except PersistenceError:
            logger.exception("Verified payment %s was not recorded", reference)
            persisted = False

        return PaymentVerification(transaction=transaction, persisted=persisted)

    def _record_verification(self, reference: str, transaction: dict) -> None:
        self.store.save_payment(transaction)
        if self.store.mark_booking_completed(reference, transaction) is None:
            logger.warning("Verified payment %s has no matching booking", reference)

    def get_booking(self, reference: str) -> BookingOut:
        booking = self.store.get_booking_by_reference(reference)
        if booking is None:
            raise NotFoundError("Booking not found")
        return BookingOut.from_booking(booking)

    @staticmethod
    def _metadata(request: CreatePaymentRequest) -> dict:
        return {
            "eventId": request.event_id,
            "fullName": request.full_name,
            "phone": request.phone,
            "custom_fields": [
                {"display_name": "Event ID", "variable_name": "event_id", "value": request.event_id},
                {"display_name": "Full Name", "variable_name": "full_name", "value": request.full_name},
                {"display_name": "Phone", "variable_name": "phone", "value": request.phone},
            ],
        }
