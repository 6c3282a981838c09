"""
Chat Service - Application Orchestration Layer

This service is the single entry point the transport talks to. It owns the
message pipeline:

    inbound message -> Tool Dispatcher (only for users without a live flow)
                    -> Conversation Engine
                    -> Fallback Responder

and the lifecycle hooks that register flows and run the Session Reaper.
Messages from one user are processed strictly one at a time.
"""

import logging
from typing import Iterable, List, Optional

from ..domain.models import FlowDefinition
from ..execution.engine import ConversationEngine
from ..repositories.flow import FlowRepository
from ..repositories.session import SessionRepository
from ..state.locks import KeyedLocks
from ..state.models import SessionState
from ..tools.dispatcher import ToolDispatcher
from ..transport.interface import InboundMessage, MessageSender
from .fallback import FallbackResponder
from .reaper import SessionReaper

logger = logging.getLogger(__name__)

ERROR_REPLY = "❌ Sorry, I encountered an error processing your message."


class ChatService:
    def __init__(
        self,
        flows: Iterable[FlowDefinition],
        flow_repository: FlowRepository,
        session_repository: SessionRepository,
        engine: ConversationEngine,
        fallback: FallbackResponder,
        sender: MessageSender,
        reaper: SessionReaper,
        locks: KeyedLocks,
        tools: Optional[ToolDispatcher] = None,
    ):
        self.flows = list(flows)
        self.flow_repo = flow_repository
        self.session_repo = session_repository
        self.engine = engine
        self.fallback = fallback
        self.sender = sender
        self.reaper = reaper
        self.locks = locks
        self.tools = tools
        self._flows_registered = False

    # ==========================================================================
    # Lifecycle
    # ==========================================================================

    def register_flows(self):
        """
        Registers the configured flows once. DuplicateFlowError aborts startup.
        """
        if self._flows_registered:
            return
        self.flow_repo.register_all(self.flows)
        self._flows_registered = True

    async def start(self):
        """Registers flows and starts the reaper. Needs a running event loop."""
        self.register_flows()
        self.reaper.start()
        logger.info(f"Chat service started with {len(self.flows)} flow(s)")

    async def stop(self):
        """Stops the reaper and discards all in-memory sessions."""
        await self.reaper.stop()
        self.session_repo.clear()
        logger.info("Chat service stopped")

    # ==========================================================================
    # Message Pipeline
    # ==========================================================================

    async def on_message(self, message: InboundMessage) -> List[str]:
        """
        Handles one inbound message end-to-end and sends the replies.
        Returns the replies that were produced (empty for dropped messages).
        """
        if message.is_from_self:
            return []

        user_id = message.author_id
        async with self.locks.hold(user_id):
            try:
                replies = self._process(user_id, message.text)
            except Exception:
                logger.exception(f"Failed to process message from user {user_id}")
                replies = [ERROR_REPLY]

            for reply in replies:
                await self._deliver(message.channel_id, reply)

        return replies

    def _process(self, user_id: str, text: str) -> List[str]:
        # A flow in progress always takes precedence over tool detection.
        has_session = self.engine.active_session(user_id) is not None

        if not has_session and self.tools is not None:
            invocation = self.tools.detect(text)
            if invocation is not None:
                return [self.tools.execute(invocation)]

        result = self.engine.handle_message(user_id, text)
        if result is not None:
            return result.replies

        return [self.fallback.respond(text)]

    async def _deliver(self, channel_id: str, text: str):
        try:
            delivered = await self.sender.send(channel_id, text)
        except Exception:
            logger.exception(f"Failed to send message to channel {channel_id}")
            return
        if not delivered:
            logger.warning(f"Message to channel {channel_id} was not delivered")

    # ==========================================================================
    # Session Access
    # ==========================================================================

    def get_session(self, user_id: str) -> Optional[SessionState]:
        """Retrieves a live (non-expired) session."""
        session = self.session_repo.get(user_id)
        if session is None or self.engine.is_expired(session):
            return None
        return session

    async def delete_session(self, user_id: str) -> bool:
        async with self.locks.hold(user_id):
            return self.session_repo.delete(user_id)

    def list_flows(self) -> List[FlowDefinition]:
        return self.flow_repo.list_flows()
