"""Integration tests for the create -> verify -> generate-ticket flow.

Paystack is served by the FakePaystack transport and email by FakeMailer,
so these tests exercise the real routers, services and SQLite store.
"""

import re

from fastapi.testclient import TestClient


PAYMENT_REQUEST = {
    "email": "ada@example.com",
    "fullName": "Ada Obi",
    "phone": "08030000000",
    "eventId": 7,
    "amount": 10000,
}


def create_payment(client: TestClient) -> str:
    response = client.post("/api/payments/create-payment", json=PAYMENT_REQUEST)
    assert response.status_code == 200
    return response.json()["reference"]


def generate_ticket(client: TestClient, reference: str):
    return client.post("/api/payments/generate-ticket", json={
        "paymentReference": reference,
        "email": "ada@example.com",
        "eventId": "7",
        "fullName": "Ada Obi",
    })


class TestCreatePayment:
    def test_returns_checkout_and_records_pending_booking(self, client, paystack):
        response = client.post("/api/payments/create-payment", json=PAYMENT_REQUEST)

        assert response.status_code == 200
        data = response.json()
        reference = data["reference"]
        assert re.fullmatch(r"234wknd_7_\d{19}", reference)
        assert data["authorizationUrl"].endswith(reference)
        assert data["accessCode"] == "ac_test"

        # Service fee of 500 is added before converting to kobo
        assert paystack.initialized[reference]["amount"] == 1050000

        booking = client.get(f"/api/payments/bookings/{reference}").json()
        assert booking["status"] == "pending"
        assert booking["paymentStatus"] == "pending"
        assert booking["amount"] == 10500
        assert booking["eventId"] == "7"

    def test_missing_fields(self, client, paystack):
        response = client.post("/api/payments/create-payment", json={"email": "ada@example.com"})

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Missing required fields"}
        assert paystack.requests == []

    def test_malformed_email(self, client):
        response = client.post("/api/payments/create-payment", json={**PAYMENT_REQUEST, "email": "not-an-email"})

        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_unknown_booking(self, client):
        response = client.get("/api/payments/bookings/234wknd_1_missing")

        assert response.status_code == 404
        assert response.json()["error"] == "Booking not found"


class TestVerifyPayment:
    def test_failed_transaction_leaves_booking_pending(self, client, paystack):
        reference = create_payment(client)
        paystack.verify_status = "failed"

        response = client.get(f"/api/payments/verify-payment/{reference}")

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Payment was not successful"}
        booking = client.get(f"/api/payments/bookings/{reference}").json()
        assert booking["status"] == "pending"

    def test_successful_transaction_completes_booking(self, client, admin_headers):
        reference = create_payment(client)

        response = client.get(f"/api/payments/verify-payment/{reference}")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["status"] == "success"
        assert body["data"]["reference"] == reference

        booking = client.get(f"/api/payments/bookings/{reference}").json()
        assert booking["status"] == "completed"
        assert booking["paymentStatus"] == "completed"

        payments = client.get("/api/admin/payments", headers=admin_headers).json()["payments"]
        assert len(payments) == 1
        assert payments[0]["reference"] == reference
        assert payments[0]["amount"] == 10500
        assert payments[0]["email"] == "ada@example.com"

    def test_unknown_reference_is_rejected_by_gateway(self, client):
        response = client.get("/api/payments/verify-payment/234wknd_7_unknown")

        assert response.status_code == 400
        assert response.json()["error"] == "Transaction reference not found"


class TestGenerateTicket:
    def test_ticket_is_saved_and_emailed(self, client, mailer, admin_headers):
        reference = create_payment(client)
        client.get(f"/api/payments/verify-payment/{reference}")

        response = generate_ticket(client, reference)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Ticket generated and sent successfully"
        assert re.fullmatch(r"234WKND-7-\d{19}", body["ticketId"])

        assert len(mailer.sent) == 1
        email = mailer.sent[0]
        assert email["recipient"] == "ada@example.com"
        assert body["ticketId"] in email["html"]
        assert email["inline_image"].content.startswith(b"\x89PNG")

        tickets = client.get("/api/admin/tickets", headers=admin_headers).json()["tickets"]
        assert [t["ticketId"] for t in tickets] == [body["ticketId"]]
        assert tickets[0]["paymentReference"] == reference

    def test_repeated_calls_issue_distinct_tickets(self, client, mailer, admin_headers):
        reference = create_payment(client)

        first = generate_ticket(client, reference).json()["ticketId"]
        second = generate_ticket(client, reference).json()["ticketId"]

        assert first != second
        assert len(mailer.sent) == 2
        tickets = client.get("/api/admin/tickets", headers=admin_headers).json()["tickets"]
        assert {t["ticketId"] for t in tickets} == {first, second}

    def test_missing_fields(self, client, mailer):
        response = client.post("/api/payments/generate-ticket", json={"email": "ada@example.com"})

        assert response.status_code == 400
        assert response.json()["error"] == "Missing required fields"
        assert mailer.sent == []

    def test_email_failure_is_server_error_but_ticket_is_kept(self, client, use_mailer, failing_mailer, admin_headers):
        use_mailer(failing_mailer)
        reference = create_payment(client)

        response = generate_ticket(client, reference)

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Failed to send email"}
        tickets = client.get("/api/admin/tickets", headers=admin_headers).json()["tickets"]
        assert len(tickets) == 1
