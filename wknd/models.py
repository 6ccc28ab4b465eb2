from sqlalchemy import Column, BigInteger, Integer, String, Boolean, DateTime, Text, JSON
from sqlalchemy.sql import func
from wknd.database import Base

# BigInteger keys map to plain INTEGER on SQLite so autoincrement still works
PrimaryKey = BigInteger().with_variant(Integer, "sqlite")

# ================================
# Users
# ================================
class User(Base):
    __tablename__ = "users"

    id = Column(PrimaryKey, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    is_admin = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

# ================================
# Bookings, Payments & Tickets
# ================================
class Booking(Base):
    __tablename__ = "bookings"

    id = Column(PrimaryKey, primary_key=True, index=True)
    reference = Column(String(255), unique=True, nullable=False, index=True)
    event_id = Column(String(100), nullable=False, index=True)
    email = Column(String(255), nullable=False, index=True)
    full_name = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=False)
    amount_minor = Column(BigInteger, nullable=False)
    currency = Column(String(3), nullable=False)
    status = Column(String(20), nullable=False, default="pending")
    payment_status = Column(String(20), nullable=False, default="pending")
    payment_data = Column(JSON)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

class Payment(Base):
    __tablename__ = "payments"

    id = Column(PrimaryKey, primary_key=True, index=True)
    reference = Column(String(255), nullable=False, index=True)
    amount_minor = Column(BigInteger, nullable=False, default=0)
    currency = Column(String(3))
    status = Column(String(20), nullable=False, index=True)
    email = Column(String(255))
    channel = Column(String(50))
    paid_at = Column(String(50))
    transaction = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

class Ticket(Base):
    __tablename__ = "tickets"

    id = Column(PrimaryKey, primary_key=True, index=True)
    ticket_id = Column(String(255), unique=True, nullable=False, index=True)
    event_id = Column(String(100), nullable=False)
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    payment_reference = Column(String(255), nullable=False, index=True)
    event_title = Column(String(255))
    event_date = Column(String(100))
    event_location = Column(String(255))
    issued_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

# ================================
# Chat, Contact & Sponsorship
# ================================
class ChatMessage(Base):
    __tablename__ = "chat_messages"

    id = Column(PrimaryKey, primary_key=True, index=True)
    text = Column(Text, nullable=False)
    sender = Column(String(255), nullable=False)
    room_id = Column(String(100), nullable=False, default="general", index=True)
    read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

class ContactMessage(Base):
    __tablename__ = "contact_messages"

    id = Column(PrimaryKey, primary_key=True, index=True)
    text = Column(Text, nullable=False)
    sender = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    source = Column(String(50), nullable=False, default="contact_form")
    replied = Column(Boolean, nullable=False, default=False, index=True)
    reply_text = Column(Text)
    replied_at = Column(DateTime(timezone=True))
    created_at = Column(DateTime(timezone=True), server_default=func.now())

class SponsorInquiry(Base):
    __tablename__ = "sponsor_inquiries"

    id = Column(PrimaryKey, primary_key=True, index=True)
    company_name = Column(String(255), nullable=False)
    contact_person = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50))
    budget = Column(String(100))
    message = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default="pending", index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
