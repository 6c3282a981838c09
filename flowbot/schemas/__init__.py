"""
Schemas - Pipeline Result Models

Defines Pydantic models passed between the engine, the tool dispatcher
and the chat service.
"""

from flowbot.schemas.turns import StateMachineTransition, ToolInvocation, TurnResult

__all__ = [
    "StateMachineTransition",
    "ToolInvocation",
    "TurnResult",
]
