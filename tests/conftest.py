"""Pytest configuration and fixtures for the 234 WKND backend tests.

This module provides reusable fixtures for testing:
- An in-memory SQLite database shared by the app and the test
- A fake Paystack API served through httpx.MockTransport
- Recording and failing mailers in place of SMTP
- A TestClient with those collaborators wired in
"""

import json
import os
from typing import Any, Dict, Generator, List

# === Environment Setup ===

# Settings are read at import time, so set them before importing wknd
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("CLIENT_URL", "http://localhost:3000")
os.environ.setdefault("PAYSTACK_SECRET_KEY", "sk_test_123")
os.environ.setdefault("ACK_DELAY_SECONDS", "0.05")

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from wknd.auth.utils import create_access_token, get_password_hash
from wknd.database import Base, get_db, init_db
from wknd.exceptions import NotificationError
from wknd.models import User
from wknd.payments.gateway import PaystackClient


# === Fakes ===


class FakePaystack:
    """In-memory stand-in for the Paystack transaction API."""

    def __init__(self):
        self.initialized: Dict[str, Dict[str, Any]] = {}
        self.requests: List[httpx.Request] = []
        self.verify_status = "success"

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == "/transaction/initialize":
            payload = json.loads(request.content)
            self.initialized[payload["reference"]] = payload
            return httpx.Response(200, json={
                "status": True,
                "message": "Authorization URL created",
                "data": {
                    "authorization_url": f"https://checkout.paystack.com/{payload['reference']}",
                    "access_code": "ac_test",
                    "reference": payload["reference"],
                },
            })

        if path.startswith("/transaction/verify/"):
            reference = path.rsplit("/", 1)[-1]
            initialized = self.initialized.get(reference)
            if initialized is None:
                return httpx.Response(400, json={"status": False, "message": "Transaction reference not found"})
            return httpx.Response(200, json={
                "status": True,
                "message": "Verification successful",
                "data": {
                    "reference": reference,
                    "status": self.verify_status,
                    "amount": initialized["amount"],
                    "currency": initialized["currency"],
                    "channel": "card",
                    "paid_at": "2026-04-01T10:00:00.000Z",
                    "customer": {"email": initialized["email"]},
                },
            })

        return httpx.Response(404, json={"status": False, "message": "Not found"})

    def client(self) -> PaystackClient:
        return PaystackClient(
            secret_key="sk_test_123",
            callback_url="http://localhost:3000/payment/success",
            http=httpx.AsyncClient(transport=httpx.MockTransport(self.handler)),
        )


class FakeMailer:
    """Records outgoing emails instead of sending them."""

    def __init__(self):
        self.sent: List[Dict[str, Any]] = []

    async def send(self, recipient, subject, html_body, inline_image=None):
        self.sent.append({
            "recipient": recipient,
            "subject": subject,
            "html": html_body,
            "inline_image": inline_image,
        })


class FailingMailer(FakeMailer):
    """Mailer whose SMTP login always fails."""

    async def send(self, recipient, subject, html_body, inline_image=None):
        raise NotificationError()


# === Database Fixtures ===


@pytest.fixture
def engine():
    """Fresh in-memory database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory) -> Generator[Session, None, None]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


# === Collaborator Fixtures ===


@pytest.fixture
def paystack() -> FakePaystack:
    return FakePaystack()


@pytest.fixture
def mailer() -> FakeMailer:
    return FakeMailer()


@pytest.fixture
def failing_mailer() -> FailingMailer:
    return FailingMailer()


# === Application Fixtures ===


@pytest.fixture
def app(session_factory, paystack, mailer):
    """FastAPI app with the database, Paystack and SMTP replaced."""
    from wknd.main import app
    from wknd.payments.dependencies import get_gateway, get_mailer

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    gateway = paystack.client()
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_gateway] = lambda: gateway
    app.dependency_overrides[get_mailer] = lambda: mailer
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as client:
        yield client


@pytest.fixture
def use_mailer(app):
    """Swap the mailer used by the app, e.g. use_mailer(FailingMailer())."""
    from wknd.payments.dependencies import get_mailer

    def _use(replacement):
        app.dependency_overrides[get_mailer] = lambda: replacement
        return replacement

    return _use


# === Auth Fixtures ===


def _create_user(db: Session, email: str, is_admin: bool) -> User:
    user = User(
        email=email,
        password=get_password_hash("password123"),
        first_name="Test",
        last_name="Admin" if is_admin else "User",
        is_admin=is_admin,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def _auth_headers(user: User) -> Dict[str, str]:
    token = create_access_token(data={"sub": str(user.id), "email": user.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(db_session) -> Dict[str, str]:
    return _auth_headers(_create_user(db_session, "admin@234wknd.com", is_admin=True))


@pytest.fixture
def user_headers(db_session) -> Dict[str, str]:
    return _auth_headers(_create_user(db_session, "guest@example.com", is_admin=False))
