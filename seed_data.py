#!/usr/bin/env python3
"""
Seed Data Script

Creates the admin account used by the dashboard and a couple of sample
contact messages so the inbox is not empty on a fresh database.

Usage:
    ADMIN_EMAIL=admin@234wknd.com ADMIN_PASSWORD=changeme python seed_data.py
"""

import os

from wknd.auth.schemas import UserCreate
from wknd.auth.service import UserService
from wknd.database import SessionLocal, init_db
from wknd.models import ContactMessage

SAMPLE_MESSAGES = [
    {
        "text": "Hi, I'm interested in VIP packages for the upcoming event. Can you provide more details?",
        "sender": "John Doe",
        "email": "john@example.com",
    },
    {
        "text": "What's the refund policy for tickets?",
        "sender": "Jane Smith",
        "email": "jane@example.com",
    },
]

def create_admin_user(db):
    """Create the dashboard admin unless it already exists"""
    email = os.environ.get("ADMIN_EMAIL", "admin@234wknd.com")
    password = os.environ.get("ADMIN_PASSWORD", "Admin123!")

    existing = UserService.get_user_by_email(db, email)
    if existing:
        if not existing.is_admin:
            existing.is_admin = True
            db.commit()
            print(f"Promoted {email} to admin")
        else:
            print(f"Admin {email} already exists, skipping...")
        return existing

    admin = UserService.create_user(
        db,
        UserCreate(email=email, password=password, first_name="WKND", last_name="Admin"),
        is_admin=True
    )
    print(f"Created admin user {admin.email}")
    return admin

def create_sample_messages(db):
    """Insert demo inbox messages into an empty inbox"""
    if db.query(ContactMessage).count() > 0:
        print("Inbox already has messages, skipping...")
        return

    for sample in SAMPLE_MESSAGES:
        db.add(ContactMessage(source="contact_form", replied=False, **sample))
    db.commit()
    print(f"Created {len(SAMPLE_MESSAGES)} sample messages")

def create_seed_data():
    init_db()
    db = SessionLocal()

    try:
        print("Seeding 234 WKND database...")
        create_admin_user(db)
        create_sample_messages(db)
        print("Seed data created successfully!")
    except Exception as e:
        db.rollback()
        print(f"Error creating seed data: {e}")
        raise
    finally:
        db.close()

if __name__ == "__main__":
    create_seed_data()
