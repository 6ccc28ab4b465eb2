from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from wknd.database import get_db
from wknd.messages.schemas import (
    ChatMessage, ChatMessageCreate, ChatMessageList, ChatMessageResponse, ContactSubmission
)
from wknd.messages.service import MessageService
from wknd.schemas import ActionResponse

router = APIRouter()
contact_router = APIRouter()

@router.get("", response_model=ChatMessageList)
def get_all_messages(db: Session = Depends(get_db)):
    """Get all chat messages"""
    messages = [ChatMessage.from_model(m) for m in MessageService(db).list_messages()]
    return ChatMessageList(messages=messages, count=len(messages))

@router.post("", response_model=ChatMessageResponse, status_code=status.HTTP_201_CREATED)
def create_message(request: ChatMessageCreate, db: Session = Depends(get_db)):
    """Create a chat message"""
    message = MessageService(db).create_message(request)
    return ChatMessageResponse(
        message="Message created successfully",
        data=ChatMessage.from_model(message)
    )

@router.get("/room/{room_id}", response_model=ChatMessageList)
def get_messages_by_room(room_id: str, db: Session = Depends(get_db)):
    """Get chat messages of one room"""
    messages = [ChatMessage.from_model(m) for m in MessageService(db).list_room_messages(room_id)]
    return ChatMessageList(messages=messages, count=len(messages))

@router.put("/{message_id}/read", response_model=ChatMessageResponse)
def mark_as_read(message_id: int, db: Session = Depends(get_db)):
    """Mark a chat message as read"""
    message = MessageService(db).mark_as_read(message_id)
    return ChatMessageResponse(
        message="Message marked as read",
        data=ChatMessage.from_model(message)
    )

@contact_router.post("/submit", response_model=ActionResponse)
def submit_contact_form(submission: ContactSubmission, db: Session = Depends(get_db)):
    """Store a contact form submission in the admin inbox"""
    MessageService(db).submit_contact_form(submission)
    return ActionResponse(message="Message sent successfully")
