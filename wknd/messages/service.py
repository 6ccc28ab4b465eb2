from typing import List
from sqlalchemy.orm import Session

from wknd.database import persistence_guard
from wknd.exceptions import NotFoundError, ValidationError
from wknd.messages.schemas import ChatMessageCreate, ContactSubmission
from wknd.models import ChatMessage, ContactMessage

DEFAULT_ROOM = "general"
CONTACT_FORM_SOURCE = "contact_form"

class MessageService:
    """Chat messages and contact-form submissions"""

    def __init__(self, db: Session):
        self.db = db

    def list_messages(self) -> List[ChatMessage]:
        with persistence_guard(self.db, "fetch messages"):
            return self.db.query(ChatMessage).order_by(ChatMessage.id).all()

    def list_room_messages(self, room_id: str) -> List[ChatMessage]:
        with persistence_guard(self.db, "fetch room messages"):
            return (
                self.db.query(ChatMessage)
                .filter(ChatMessage.room_id == room_id)
                .order_by(ChatMessage.id)
                .all()
            )

    def create_message(self, request: ChatMessageCreate) -> ChatMessage:
        if not request.text or not request.sender:
            raise ValidationError("Text and sender are required")

        message = ChatMessage(
            text=request.text,
            sender=request.sender,
            room_id=request.room_id or DEFAULT_ROOM,
            read=False,
        )
        with persistence_guard(self.db, "create message"):
            self.db.add(message)
            self.db.commit()
            self.db.refresh(message)
        return message

    def mark_as_read(self, message_id: int) -> ChatMessage:
        with persistence_guard(self.db, "update message"):
            message = self.db.query(ChatMessage).filter(ChatMessage.id == message_id).first()
            if message is None:
                raise NotFoundError("Message not found")
            message.read = True
            self.db.commit()
            self.db.refresh(message)
        return message

    def submit_contact_form(self, submission: ContactSubmission) -> ContactMessage:
        if not all([submission.name, submission.email, submission.message]):
            raise ValidationError("All fields are required")

        message = ContactMessage(
            text=submission.message,
            sender=submission.name,
            email=submission.email,
            source=CONTACT_FORM_SOURCE,
            replied=False,
        )
        with persistence_guard(self.db, "send message"):
            self.db.add(message)
            self.db.commit()
            self.db.refresh(message)
        return message
