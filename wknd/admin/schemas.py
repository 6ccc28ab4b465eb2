from pydantic import EmailStr
from typing import List, Optional
from datetime import datetime

from wknd.messages.schemas import ContactMessage
from wknd.schemas import CamelModel

class AdminUserSummary(CamelModel):
    """A distinct booking contact"""
    email: str
    full_name: str
    phone: Optional[str] = None
    created_at: Optional[datetime] = None

class AdminTicket(CamelModel):
    ticket_id: str
    full_name: str
    email: str
    event_id: str
    event_title: str
    payment_reference: str
    created_at: Optional[datetime] = None
    status: str = "active"

class AdminPayment(CamelModel):
    reference: str
    email: Optional[str] = None
    amount: float
    status: str
    created_at: Optional[datetime] = None

class DashboardStats(CamelModel):
    total_users: int
    total_tickets: int
    total_revenue: float
    pending_messages: int

class UserListResponse(CamelModel):
    success: bool = True
    users: List[AdminUserSummary]

class TicketListResponse(CamelModel):
    success: bool = True
    tickets: List[AdminTicket]

class MessageListResponse(CamelModel):
    success: bool = True
    messages: List[ContactMessage]

class PaymentListResponse(CamelModel):
    success: bool = True
    payments: List[AdminPayment]

class StatsResponse(CamelModel):
    success: bool = True
    stats: DashboardStats

class ReplyRequest(CamelModel):
    message_id: Optional[int] = None
    reply_text: Optional[str] = None
    recipient_email: Optional[EmailStr] = None
