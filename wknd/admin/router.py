from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from .schemas import (
    MessageListResponse, PaymentListResponse, ReplyRequest, StatsResponse,
    TicketListResponse, UserListResponse
)
from .admin_service import AdminManagementService
from ..auth.dependencies import require_admin
from ..database import get_db
from ..notifications.mailer import Mailer
from ..payments.dependencies import get_mailer
from ..schemas import ActionResponse

router = APIRouter(dependencies=[Depends(require_admin)])

@router.get("/users", response_model=UserListResponse)
def get_users(db: Session = Depends(get_db)):
    """Distinct customers taken from bookings"""
    return UserListResponse(users=AdminManagementService(db).list_users())

@router.get("/tickets", response_model=TicketListResponse)
def get_tickets(db: Session = Depends(get_db)):
    """All issued tickets, newest first"""
    return TicketListResponse(tickets=AdminManagementService(db).list_tickets())

@router.get("/messages", response_model=MessageListResponse)
def get_messages(db: Session = Depends(get_db)):
    """Contact form inbox, newest first"""
    return MessageListResponse(messages=AdminManagementService(db).list_messages())

@router.get("/payments", response_model=PaymentListResponse)
def get_payments(db: Session = Depends(get_db)):
    """Verified payments with amounts in major units"""
    return PaymentListResponse(payments=AdminManagementService(db).list_payments())

@router.get("/stats", response_model=StatsResponse)
def get_stats(db: Session = Depends(get_db)):
    """Dashboard counters"""
    return StatsResponse(stats=AdminManagementService(db).get_stats())

@router.post("/reply", response_model=ActionResponse)
async def reply_to_message(
    request: ReplyRequest,
    db: Session = Depends(get_db),
    mailer: Mailer = Depends(get_mailer)
):
    """Reply to a contact message by email"""
    await AdminManagementService(db, mailer).reply_to_message(request)
    return ActionResponse(message="Reply sent successfully")

@router.get("/export/{data_type}")
def export_data(data_type: str, db: Session = Depends(get_db)):
    """Download users, tickets or payments as CSV"""
    filename, content = AdminManagementService(db).export_csv(data_type)
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )
