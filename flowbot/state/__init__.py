"""
State Layer - Runtime Data Models

Defines the per-user runtime state tracked while a flow is in progress,
and the per-user locks that serialize access to it.
"""

from flowbot.state.locks import KeyedLocks
from flowbot.state.models import (
    AtState,
    FlowPosition,
    NotStarted,
    SessionState,
)

__all__ = [
    "AtState",
    "FlowPosition",
    "KeyedLocks",
    "NotStarted",
    "SessionState",
]
