from fastapi import WebSocket
from typing import Any, Awaitable, Callable, Dict, List, Set
import asyncio
import json
import logging
import uuid

from wknd.helpers import now_utc

logger = logging.getLogger(__name__)

ADMIN_ACKNOWLEDGEMENT = (
    "Thank you for your message! Our sponsorship team will review your inquiry "
    "and get back to you shortly."
)
INQUIRY_RECEIVED = "Your sponsorship inquiry has been received!"

class BroadcastHub:
    """Fan-out hub for the chat websocket.

    Every connected socket is a node. Chat messages go to all nodes in
    arrival order; each one also schedules a canned admin acknowledgement
    that is broadcast ``ack_delay`` seconds later, whether or not the sender
    is still connected. Scheduled acknowledgements are cancelled by
    ``shutdown``.
    """

    def __init__(
        self,
        ack_delay: float = 2.0,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.active_connections: List[WebSocket] = []
        self.ack_delay = ack_delay
        self._sleep = sleep
        self._pending: Set[asyncio.Task] = set()

    @property
    def pending(self) -> Set[asyncio.Task]:
        """Acknowledgement tasks that have not fired yet"""
        return set(self._pending)

    async def connect(self, websocket: WebSocket):
        """Accept new WebSocket connection"""
        await websocket.accept()
        self.active_connections.append(websocket)
        logger.info("Client connected (%d active)", len(self.active_connections))

    def disconnect(self, websocket: WebSocket):
        """Remove WebSocket connection"""
        if websocket in self.active_connections:
            self.active_connections.remove(websocket)
            logger.info("Client disconnected (%d active)", len(self.active_connections))

    async def send_personal_message(self, websocket: WebSocket, message: dict):
        """Send message to specific WebSocket"""
        try:
            await websocket.send_text(json.dumps(message))
        except Exception as exc:
            logger.debug("Dropping connection after failed send: %s", exc)
            self.disconnect(websocket)

    async def broadcast_to_all(self, message: dict):
        """Broadcast message to all connected clients"""
        if not self.active_connections:
            return

        message_text = json.dumps(message)
        disconnected = []

        for connection in list(self.active_connections):
            try:
                await connection.send_text(message_text)
            except Exception as exc:
                logger.debug("Dropping connection after failed broadcast: %s", exc)
                disconnected.append(connection)

        # Clean up disconnected clients
        for connection in disconnected:
            self.disconnect(connection)

    async def handle_message(self, websocket: WebSocket, data: Dict[str, Any]):
        """Broadcast a chat message and schedule the admin acknowledgement"""
        message = dict(data)
        message["id"] = uuid.uuid4().hex
        message["timestamp"] = now_utc().isoformat()
        await self.broadcast_to_all({"type": "message", "data": message})
        self._schedule_acknowledgement()

    async def handle_sponsor_inquiry(self, websocket: WebSocket, data: Dict[str, Any]):
        """Acknowledge a sponsor inquiry to its sender only"""
        await self.send_personal_message(websocket, {
            "type": "inquiry-received",
            "data": {
                "message": INQUIRY_RECEIVED,
                "inquiryId": uuid.uuid4().hex,
            },
        })

    async def handle_ping(self, websocket: WebSocket, data: Dict[str, Any]):
        await self.send_personal_message(websocket, {
            "type": "pong",
            "timestamp": now_utc().isoformat(),
        })

    async def dispatch(self, websocket: WebSocket, frame: Dict[str, Any]):
        handlers = {
            "message": self.handle_message,
            "sponsor-inquiry": self.handle_sponsor_inquiry,
            "ping": self.handle_ping,
        }
        handler = handlers.get(frame.get("type"))
        if handler is None:
            logger.debug("Ignoring frame of unknown type %r", frame.get("type"))
            return
        data = frame.get("data")
        await handler(websocket, data if isinstance(data, dict) else {})

    def _schedule_acknowledgement(self):
        task = asyncio.create_task(self._acknowledge_later())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _acknowledge_later(self):
        await self._sleep(self.ack_delay)
        await self.broadcast_to_all({
            "type": "message",
            "data": {
                "id": uuid.uuid4().hex,
                "text": ADMIN_ACKNOWLEDGEMENT,
                "sender": "admin",
                "timestamp": now_utc().isoformat(),
            },
        })

    async def shutdown(self):
        """Cancel scheduled acknowledgements and forget all connections"""
        for task in list(self._pending):
            task.cancel()
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)
        self._pending.clear()
        self.active_connections.clear()
