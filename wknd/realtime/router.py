from fastapi import APIRouter, WebSocket, status
import json
import logging

from wknd.config import settings
from wknd.realtime.hub import BroadcastHub

logger = logging.getLogger(__name__)

router = APIRouter()

def get_hub(websocket: WebSocket) -> BroadcastHub:
    return websocket.app.state.hub

def origin_allowed(websocket: WebSocket) -> bool:
    """Browsers always send Origin; non-browser clients may omit it"""
    origin = websocket.headers.get("origin")
    return origin is None or origin in settings.allowed_origins

@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    """Chat websocket: frames are JSON objects {"type": ..., "data": {...}}"""
    if not origin_allowed(websocket):
        logger.warning("Rejected websocket from origin %s", websocket.headers.get("origin"))
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    hub = get_hub(websocket)
    await hub.connect(websocket)

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break

            raw = message.get("text")
            if raw is None:
                logger.debug("Ignoring binary frame")
                continue

            try:
                frame = json.loads(raw)
            except json.JSONDecodeError:
                logger.debug("Ignoring non-JSON frame")
                continue

            if isinstance(frame, dict):
                await hub.dispatch(websocket, frame)
    finally:
        hub.disconnect(websocket)
