from pydantic import EmailStr
from typing import List, Optional
from datetime import datetime
from enum import Enum

from wknd.schemas import CamelModel

class InquiryStatus(str, Enum):
    """Sponsor inquiry status enumeration"""
    PENDING = "pending"
    REVIEWING = "reviewing"
    APPROVED = "approved"
    REJECTED = "rejected"

class SponsorInquiryCreate(CamelModel):
    company_name: Optional[str] = None
    contact_person: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    budget: Optional[str] = None
    message: Optional[str] = None

class InquiryStatusUpdate(CamelModel):
    status: Optional[str] = None

class SponsorInquiry(CamelModel):
    id: int
    company_name: str
    contact_person: str
    email: str
    phone: Optional[str] = None
    budget: Optional[str] = None
    message: str
    status: InquiryStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class SponsorInquiryList(CamelModel):
    success: bool = True
    inquiries: List[SponsorInquiry]
    count: int

class SponsorInquiryResponse(CamelModel):
    success: bool = True
    message: Optional[str] = None
    data: SponsorInquiry
