"""
Flowbot

An event-driven conversational-flow engine: per-user sessions advance through
declaratively defined flow graphs via pattern-matched transitions, with
pattern-detected tools and a free-form fallback for everything else.
"""

from flowbot.domain import (
    FlowDefinition,
    FunctionAction,
    StateAction,
    StateDefinition,
    StoreInput,
    Transition,
)
from flowbot.state import (
    AtState,
    KeyedLocks,
    NotStarted,
    SessionState,
)
from flowbot.schemas import StateMachineTransition, ToolInvocation, TurnResult
from flowbot.execution import ConversationEngine, match_transition, render_prompt
from flowbot.services.chat import ChatService
from flowbot.transport import InboundMessage, MessageSender

__all__ = [
    # Domain Layer
    "FlowDefinition",
    "FunctionAction",
    "StateAction",
    "StateDefinition",
    "StoreInput",
    "Transition",
    # State Layer
    "AtState",
    "KeyedLocks",
    "NotStarted",
    "SessionState",
    # Schemas
    "StateMachineTransition",
    "ToolInvocation",
    "TurnResult",
    # Execution Layer
    "ConversationEngine",
    "match_transition",
    "render_prompt",
    # Service Layer
    "ChatService",
    # Transport
    "InboundMessage",
    "MessageSender",
]
