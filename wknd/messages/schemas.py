from pydantic import EmailStr
from typing import List, Optional
from datetime import datetime

from wknd.schemas import CamelModel

# Chat
class ChatMessageCreate(CamelModel):
    text: Optional[str] = None
    sender: Optional[str] = None
    room_id: Optional[str] = None

class ChatMessage(CamelModel):
    id: int
    text: str
    sender: str
    room_id: str
    read: bool
    timestamp: Optional[datetime] = None

    @classmethod
    def from_model(cls, message) -> "ChatMessage":
        return cls(
            id=message.id,
            text=message.text,
            sender=message.sender,
            room_id=message.room_id,
            read=message.read,
            timestamp=message.created_at,
        )

class ChatMessageList(CamelModel):
    success: bool = True
    messages: List[ChatMessage]
    count: int

class ChatMessageResponse(CamelModel):
    success: bool = True
    message: str
    data: ChatMessage

# Contact form
class ContactSubmission(CamelModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    message: Optional[str] = None

class ContactMessage(CamelModel):
    id: int
    text: str
    sender: str
    email: str
    source: str
    replied: bool
    reply_text: Optional[str] = None
    replied_at: Optional[datetime] = None
    timestamp: Optional[datetime] = None

    @classmethod
    def from_model(cls, message) -> "ContactMessage":
        return cls(
            id=message.id,
            text=message.text,
            sender=message.sender,
            email=message.email,
            source=message.source,
            replied=message.replied,
            reply_text=message.reply_text,
            replied_at=message.replied_at,
            timestamp=message.created_at,
        )
