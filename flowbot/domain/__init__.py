"""
Domain Layer - Static Flow Models

Defines the immutable structure of conversation flows: Flows, States,
Transitions and the Actions attached to states.
"""

from flowbot.domain.models import (
    CATCH_ALL_PATTERNS,
    FlowDefinition,
    FunctionAction,
    StateAction,
    StateDefinition,
    StoreInput,
    Transition,
)

__all__ = [
    "CATCH_ALL_PATTERNS",
    "FlowDefinition",
    "FunctionAction",
    "StateAction",
    "StateDefinition",
    "StoreInput",
    "Transition",
]
