"""
Dependency Injection Wiring (Composition Root).

This module acts as the central "container" for the application's services.
It is responsible for:
1. Instantiating the core services (Registry, Session Store, Engine, Reaper).
2. Wiring them together (e.g., injecting the stores and detector into the Engine).
3. Managing the lifecycle of these objects using @lru_cache to ensure
   they are created only once per application process.

`build_chat_service` does the actual wiring and is usable without FastAPI
(tests, other transports).
"""

from datetime import timedelta
from functools import lru_cache
from typing import Iterable, Optional

from ..config import Settings, settings
from ..data import DEFAULT_FLOWS
from ..domain.models import FlowDefinition
from ..execution.engine import ConversationEngine
from ..repositories.flow import InMemoryFlowRegistry
from ..repositories.session import Clock, InMemorySessionRepository
from ..services.chat import ChatService
from ..services.fallback import CannedFallbackResponder
from ..services.flow_detector import KeywordFlowDetector
from ..services.reaper import SessionReaper
from ..state.locks import KeyedLocks
from ..state.models import utcnow
from ..tools.dispatcher import ToolDispatcher
from ..tools.handlers import default_tools
from ..transport.adapters.memory import LoggingSender, OutboxSender
from ..transport.interface import MessageSender


def build_chat_service(
    config: Settings,
    sender: Optional[MessageSender] = None,
    flows: Optional[Iterable[FlowDefinition]] = None,
    clock: Clock = utcnow,
    tools: Optional[ToolDispatcher] = None,
) -> ChatService:
    """
    Wires a ChatService from configuration. Flows default to the stock set;
    replies go to the log unless a sender is given.
    """
    timeout = timedelta(seconds=config.SESSION_TIMEOUT_SECONDS)

    flow_repo = InMemoryFlowRegistry()
    session_repo = InMemorySessionRepository(clock=clock)
    locks = KeyedLocks()

    engine = ConversationEngine(
        flow_repository=flow_repo,
        session_repository=session_repo,
        detector=KeywordFlowDetector(flow_repo),
        session_timeout=timeout,
    )
    reaper = SessionReaper(
        session_repository=session_repo,
        locks=locks,
        session_timeout=timeout,
        interval=config.REAPER_INTERVAL_SECONDS,
    )

    if not config.TOOLS_ENABLED:
        tools = None
    elif tools is None:
        tools = ToolDispatcher(default_tools())

    return ChatService(
        flows=DEFAULT_FLOWS if flows is None else flows,
        flow_repository=flow_repo,
        session_repository=session_repo,
        engine=engine,
        fallback=CannedFallbackResponder(),
        sender=sender if sender is not None else LoggingSender(),
        reaper=reaper,
        locks=locks,
        tools=tools,
    )


# Outbox (Singleton)
# Note: must be a singleton so queued replies survive across requests!
@lru_cache()
def get_outbox() -> OutboxSender:
    return OutboxSender(max_messages=settings.OUTBOX_MAX_MESSAGES)


# The Chat Service (Singleton Service)
@lru_cache()
def get_chat_service() -> ChatService:
    return build_chat_service(settings, sender=get_outbox())
