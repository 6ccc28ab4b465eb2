from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from wknd.database import get_db
from wknd.sponsors.schemas import (
    InquiryStatusUpdate, SponsorInquiry, SponsorInquiryCreate,
    SponsorInquiryList, SponsorInquiryResponse
)
from wknd.sponsors.service import SponsorService

router = APIRouter()

@router.get("", response_model=SponsorInquiryList)
def get_all_inquiries(db: Session = Depends(get_db)):
    """Get all sponsor inquiries"""
    inquiries = [SponsorInquiry.model_validate(i) for i in SponsorService(db).list_inquiries()]
    return SponsorInquiryList(inquiries=inquiries, count=len(inquiries))

@router.post("", response_model=SponsorInquiryResponse, status_code=status.HTTP_201_CREATED)
def create_inquiry(request: SponsorInquiryCreate, db: Session = Depends(get_db)):
    """Submit a sponsorship inquiry"""
    inquiry = SponsorService(db).create_inquiry(request)
    return SponsorInquiryResponse(
        message="Sponsorship inquiry submitted successfully",
        data=SponsorInquiry.model_validate(inquiry)
    )

@router.get("/status/{inquiry_status}", response_model=SponsorInquiryList)
def get_inquiries_by_status(inquiry_status: str, db: Session = Depends(get_db)):
    """Get inquiries with the given status"""
    inquiries = [SponsorInquiry.model_validate(i) for i in SponsorService(db).list_by_status(inquiry_status)]
    return SponsorInquiryList(inquiries=inquiries, count=len(inquiries))

@router.get("/{inquiry_id}", response_model=SponsorInquiryResponse)
def get_inquiry(inquiry_id: int, db: Session = Depends(get_db)):
    """Get inquiry by ID"""
    inquiry = SponsorService(db).get_inquiry(inquiry_id)
    return SponsorInquiryResponse(data=SponsorInquiry.model_validate(inquiry))

@router.put("/{inquiry_id}/status", response_model=SponsorInquiryResponse)
def update_inquiry_status(
    inquiry_id: int,
    update: InquiryStatusUpdate,
    db: Session = Depends(get_db)
):
    """Move an inquiry through pending, reviewing, approved or rejected"""
    inquiry = SponsorService(db).update_status(inquiry_id, update.status)
    return SponsorInquiryResponse(
        message="Inquiry status updated successfully",
        data=SponsorInquiry.model_validate(inquiry)
    )
