from typing import List
from sqlalchemy.orm import Session

from wknd.database import persistence_guard
from wknd.exceptions import NotFoundError, ValidationError
from wknd.models import SponsorInquiry
from wknd.sponsors.schemas import InquiryStatus, SponsorInquiryCreate

VALID_STATUSES = [status.value for status in InquiryStatus]

class SponsorService:
    """Sponsorship inquiries submitted from the partners page"""

    def __init__(self, db: Session):
        self.db = db

    def list_inquiries(self) -> List[SponsorInquiry]:
        with persistence_guard(self.db, "fetch inquiries"):
            return self.db.query(SponsorInquiry).order_by(SponsorInquiry.id).all()

    def create_inquiry(self, request: SponsorInquiryCreate) -> SponsorInquiry:
        if not all([request.company_name, request.contact_person, request.email, request.message]):
            raise ValidationError("Company name, contact person, email, and message are required")

        inquiry = SponsorInquiry(
            company_name=request.company_name,
            contact_person=request.contact_person,
            email=request.email,
            phone=request.phone or None,
            budget=request.budget or None,
            message=request.message,
            status=InquiryStatus.PENDING.value,
        )
        with persistence_guard(self.db, "create inquiry"):
            self.db.add(inquiry)
            self.db.commit()
            self.db.refresh(inquiry)
        return inquiry

    def get_inquiry(self, inquiry_id: int) -> SponsorInquiry:
        with persistence_guard(self.db, "fetch inquiry"):
            inquiry = self.db.query(SponsorInquiry).filter(SponsorInquiry.id == inquiry_id).first()
        if inquiry is None:
            raise NotFoundError("Inquiry not found")
        return inquiry

    def update_status(self, inquiry_id: int, status: str) -> SponsorInquiry:
        inquiry = self.get_inquiry(inquiry_id)
        if status not in VALID_STATUSES:
            raise ValidationError("Invalid status. Must be one of: " + ", ".join(VALID_STATUSES))

        with persistence_guard(self.db, "update inquiry"):
            inquiry.status = status
            self.db.commit()
            self.db.refresh(inquiry)
        return inquiry

    def list_by_status(self, status: str) -> List[SponsorInquiry]:
        with persistence_guard(self.db, "fetch inquiries by status"):
            return (
                self.db.query(SponsorInquiry)
                .filter(SponsorInquiry.status == status)
                .order_by(SponsorInquiry.id)
                .all()
            )
