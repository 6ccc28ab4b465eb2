"""Integration tests for the /ws chat channel."""

import pytest
from starlette.websockets import WebSocketDisconnect


def wait_until_connected(ws):
    ws.send_json({"type": "ping"})
    assert ws.receive_json()["type"] == "pong"


class TestChatWebSocket:
    def test_message_is_broadcast_then_acknowledged(self, client):
        with client.websocket_connect("/ws") as first, client.websocket_connect("/ws") as second:
            wait_until_connected(first)
            wait_until_connected(second)

            first.send_json({"type": "message", "data": {"text": "Hi there", "sender": "Ada"}})

            for ws in (first, second):
                chat = ws.receive_json()
                assert chat["type"] == "message"
                assert chat["data"]["text"] == "Hi there"
                assert chat["data"]["id"]

            for ws in (first, second):
                ack = ws.receive_json()
                assert ack["type"] == "message"
                assert ack["data"]["sender"] == "admin"

    def test_sponsor_inquiry_receipt(self, client):
        with client.websocket_connect("/ws") as ws:
            ws.send_json({"type": "sponsor-inquiry", "data": {"companyName": "Acme"}})

            reply = ws.receive_json()

            assert reply["type"] == "inquiry-received"
            assert reply["data"]["inquiryId"]

    def test_non_json_frames_are_ignored(self, client):
        with client.websocket_connect("/ws") as ws:
            ws.send_text("not json")

            wait_until_connected(ws)

    def test_binary_frames_are_ignored_and_node_is_removed_on_close(self, client, app):
        hub = app.state.hub
        with client.websocket_connect("/ws") as ws:
            wait_until_connected(ws)
            ws.send_bytes(b"\x00\x01")

            wait_until_connected(ws)
            assert len(hub.active_connections) == 1

        assert hub.active_connections == []

    def test_allowed_origin(self, client):
        with client.websocket_connect("/ws", headers={"origin": "http://localhost:3000"}) as ws:
            wait_until_connected(ws)

    def test_foreign_origin_is_rejected(self, client):
        with pytest.raises(WebSocketDisconnect) as exc_info:
            with client.websocket_connect("/ws", headers={"origin": "http://evil.example"}):
                pass

        assert exc_info.value.code == 1008


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "OK", "message": "234 WKND Server is running"}
