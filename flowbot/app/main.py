import logging
from contextlib import asynccontextmanager
from typing import List

from fastapi import Depends, FastAPI, HTTPException, status
from fastapi.responses import Response

from ..config import settings
from ..services.chat import ChatService
from ..transport.adapters.memory import OutboxSender
from ..transport.interface import InboundMessage
from .dependencies import get_chat_service, get_outbox
from .schemas import FlowRead, MessageReplies, OutboxRead, SessionRead


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    service = get_chat_service()
    await service.start()
    try:
        yield
    finally:
        await service.stop()


app = FastAPI(title="Flowbot Conversational Engine", lifespan=lifespan)

# --- Endpoints ---

@app.post("/messages", response_model=MessageReplies)
async def post_message(
    message: InboundMessage,
    service: ChatService = Depends(get_chat_service)
):
    """
    Webhook entry point: one inbound chat message.
    Replies are also queued in the channel's outbox.
    """
    replies = await service.on_message(message)
    return MessageReplies(replies=replies)


@app.get("/channels/{channel_id}/outbox", response_model=OutboxRead)
async def drain_outbox(
    channel_id: str,
    outbox: OutboxSender = Depends(get_outbox)
):
    """Returns and clears everything sent to a channel so far."""
    return OutboxRead(channel_id=channel_id, messages=outbox.drain(channel_id))


@app.get("/sessions/{user_id}", response_model=SessionRead)
def get_session(
    user_id: str,
    service: ChatService = Depends(get_chat_service)
):
    session = service.get_session(user_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")

    return SessionRead(
        user_id=session.user_id,
        flow_name=session.flow_name,
        current_state=session.current_state_id,
        visited_states=list(session.visited_states),
        user_data=dict(session.user_data),
        last_activity=session.last_activity,
    )


@app.delete("/sessions/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(
    user_id: str,
    service: ChatService = Depends(get_chat_service)
):
    """
    Deletes a session. Returns 204 No Content on success.
    """
    success = await service.delete_session(user_id)
    if not success:
        raise HTTPException(status_code=404, detail="Session not found")

    # For 204, we must explicitly return a Response object with no content
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@app.get("/flows", response_model=List[FlowRead])
def list_flows(service: ChatService = Depends(get_chat_service)):
    return [
        FlowRead(
            name=flow.name,
            description=flow.description,
            trigger_keywords=sorted(flow.trigger_keywords),
            initial_state=flow.initial_state,
            states=list(flow.states),
        )
        for flow in service.list_flows()
    ]
