"""
Repositories - Flow Registry and Session Store

In-memory implementations behind abstract interfaces, so the engine never
depends on how flows and sessions are held.
"""

from flowbot.repositories.flow import FlowRepository, InMemoryFlowRegistry
from flowbot.repositories.session import InMemorySessionRepository, SessionRepository

__all__ = [
    "FlowRepository",
    "InMemoryFlowRegistry",
    "InMemorySessionRepository",
    "SessionRepository",
]
