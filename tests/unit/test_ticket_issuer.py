"""Tests for TicketIssuer: identifiers, QR encoding, persistence and delivery."""

import asyncio
import re
import time
from io import BytesIO
from unittest.mock import MagicMock

import pytest
from PIL import Image
from sqlalchemy.orm import sessionmaker

from wknd.config import settings
from wknd.database import init_db, make_engine
from wknd.exceptions import NotificationError, PersistenceError, ValidationError
from wknd.payments.schemas import GenerateTicketRequest
from wknd.payments.store import BookingStore
from wknd.payments.ticket_service import TicketIssuer


class RecordingMailer:
    def __init__(self, error=None):
        self.sent = []
        self.error = error

    async def send(self, recipient, subject, html_body, inline_image=None):
        if self.error:
            raise self.error
        self.sent.append((recipient, subject, html_body, inline_image))


def make_store():
    store = MagicMock()
    store.get_tickets_by_reference.return_value = []
    return store


def make_request(**overrides) -> GenerateTicketRequest:
    fields = {
        "paymentReference": "234wknd_7_1712300000000123456",
        "email": "ada@example.com",
        "eventId": "7",
        "fullName": "Ada Obi",
    }
    fields.update(overrides)
    return GenerateTicketRequest(**fields)


class TestIssue:
    def test_issues_saves_and_emails_ticket(self):
        store, mailer = make_store(), RecordingMailer()

        result = asyncio.run(TicketIssuer(store, mailer, settings).issue(make_request()))

        assert re.fullmatch(r"234WKND-7-\d{19}", result.ticket_id)
        assert result.persisted is True
        assert result.notified is True

        ticket_data = store.save_ticket.call_args.args[0]
        assert ticket_data["ticketId"] == result.ticket_id
        assert ticket_data["paymentReference"] == "234wknd_7_1712300000000123456"
        assert ticket_data["eventTitle"] == settings.EVENT_TITLE

        recipient, subject, html_body, inline_image = mailer.sent[0]
        assert recipient == "ada@example.com"
        assert settings.EVENT_TITLE in subject
        assert "cid:qrcode" in html_body
        assert result.ticket_id in html_body
        assert inline_image.content.startswith(b"\x89PNG")

    def test_every_call_issues_a_new_ticket(self):
        store = make_store()
        issuer = TicketIssuer(store, RecordingMailer(), settings)

        first = asyncio.run(issuer.issue(make_request()))
        store.get_tickets_by_reference.return_value = [MagicMock()]
        second = asyncio.run(issuer.issue(make_request()))

        assert first.ticket_id != second.ticket_id
        assert store.save_ticket.call_count == 2

    def test_missing_field_is_rejected(self):
        store, mailer = make_store(), RecordingMailer()

        with pytest.raises(ValidationError):
            asyncio.run(TicketIssuer(store, mailer, settings).issue(make_request(fullName=None)))

        store.save_ticket.assert_not_called()
        assert mailer.sent == []

    def test_email_failure_fails_issuance_after_saving(self):
        store = make_store()
        mailer = RecordingMailer(error=NotificationError())

        with pytest.raises(NotificationError):
            asyncio.run(TicketIssuer(store, mailer, settings).issue(make_request()))

        store.save_ticket.assert_called_once()

    def test_store_failure_still_emails(self):
        store = make_store()
        store.save_ticket.side_effect = PersistenceError()
        mailer = RecordingMailer()

        result = asyncio.run(TicketIssuer(store, mailer, settings).issue(make_request()))

        assert result.persisted is False
        assert len(mailer.sent) == 1


class TestQrCode:
    def test_png_is_square_and_two_colored(self):
        issuer = TicketIssuer(make_store(), RecordingMailer(), settings)

        png = issuer.generate_qr_code_image('{"ticketId": "234WKND-7-1"}')

        image = Image.open(BytesIO(png))
        assert image.size == (300, 300)
        colors = {color for _, color in image.convert("RGB").getcolors()}
        assert colors == {(0, 0, 0), (255, 255, 255)}


class TestConcurrency:
    def test_concurrent_issues_for_one_payment_store_two_tickets(self, tmp_path):
        engine = make_engine(f"sqlite:///{tmp_path / 'tickets.db'}")
        init_db(bind=engine)
        session_factory = sessionmaker(bind=engine)
        sessions = [session_factory(), session_factory()]
        mailer = RecordingMailer()
        issuers = [TicketIssuer(BookingStore(session), mailer, settings) for session in sessions]

        async def issue_together():
            return await asyncio.gather(*(issuer.issue(make_request()) for issuer in issuers))

        try:
            results = asyncio.run(issue_together())

            assert len({result.ticket_id for result in results}) == 2
            assert all(result.persisted for result in results)
            assert len(mailer.sent) == 2
            with session_factory() as check:
                stored = BookingStore(check).get_tickets_by_reference("234wknd_7_1712300000000123456")
                assert {t.ticket_id for t in stored} == {result.ticket_id for result in results}
        finally:
            for session in sessions:
                session.close()
            engine.dispose()

    def test_slow_ticket_save_runs_off_the_loop(self):
        store = make_store()
        store.save_ticket.side_effect = lambda ticket_data, issued_at: time.sleep(0.3)
        issuer = TicketIssuer(store, RecordingMailer(), settings)
        ticks = []

        async def scenario():
            done = asyncio.Event()

            async def ticker():
                last = time.monotonic()
                while not done.is_set():
                    await asyncio.sleep(0.02)
                    now = time.monotonic()
                    ticks.append(now - last)
                    last = now

            task = asyncio.create_task(ticker())
            await issuer.issue(make_request())
            done.set()
            await task

        asyncio.run(scenario())

        assert max(ticks) < 0.2
