import asyncio
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from overtime_counter.api.deps import get_service
from overtime_counter.core.logging import get_logger
from overtime_counter.domains.schemas import SessionOut
from overtime_counter.notifications import SESSION_DATA, Subscriber
from overtime_counter.service import OvertimeService

router = APIRouter(tags=["realtime"])
logger = get_logger(__name__)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


async def _forward(websocket: WebSocket, subscriber: Subscriber) -> None:
    while True:
        message = await subscriber.receive()
        await websocket.send_json(message)


def _handle_message(message: object, subscriber: Subscriber, service: OvertimeService) -> None:
    if not isinstance(message, dict):
        subscriber.push("error", {"message": "Expected a JSON object"})
        return

    event = message.get("event")
    if event == "join-session":
        session_id = str(message.get("sessionId", ""))
        service.notifications.join(subscriber, session_id)
        session = service.find_session(session_id)
        if session is not None:
            subscriber.push(SESSION_DATA, SessionOut.from_session(session).model_dump(mode="json"))
        logger.info("session_joined", subscriber=subscriber.id, session_id=session_id, found=session is not None)
    elif event == "leave-session":
        service.notifications.leave(subscriber, str(message.get("sessionId", "")))
    elif event == "ping":
        subscriber.push("pong", {"timestamp": _timestamp()})
    else:
        subscriber.push("error", {"message": f"Unknown event: {event}"})


@router.websocket("/ws")
async def realtime(websocket: WebSocket, service: OvertimeService = Depends(get_service)) -> None:
    await websocket.accept()
    subscriber = service.notifications.connect()
    logger.info("client_connected", subscriber=subscriber.id)
    subscriber.push("connected", {"message": "Connected to server", "timestamp": _timestamp()})
    sender = asyncio.create_task(_forward(websocket, subscriber))

    try:
        while True:
            try:
                message = await websocket.receive_json()
            except ValueError:
                subscriber.push("error", {"message": "Malformed JSON"})
                continue
            _handle_message(message, subscriber, service)
    except WebSocketDisconnect as exc:
        logger.info("client_disconnected", subscriber=subscriber.id, code=exc.code)
    finally:
        sender.cancel()
        service.notifications.disconnect(subscriber)
