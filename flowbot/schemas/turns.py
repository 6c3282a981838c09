"""
Schemas - Turn and Tool Invocation Models

This module defines the Pydantic models exchanged between the pipeline
layers: the outcome of one engine turn, and a detected tool call.
"""
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class StateMachineTransition(str, Enum):
    """
    Strict State Machine terminology describing what happened to the graph pointer
    while processing one message.
    """

    STARTED = "STARTED"  # Session created and parked on the initial state.
    ADVANCED = "ADVANCED"  # Pointer moved to the next state.
    HELD = "HELD"  # No transition matched; pointer unchanged.
    COMPLETED = "COMPLETED"  # A terminal state was reached; session deleted.
    RESET = "RESET"  # The graph was unresolvable; session deleted.


class TurnResult(BaseModel):
    """
    The result of the Conversation Engine processing one inbound message.
    """
    replies: List[str] = Field(
        default_factory=list,
        description="Outbound texts, in send order."
    )
    transition: StateMachineTransition = Field(
        ...,
        description="What happened to the user's position in the flow."
    )
    flow_name: str = Field(
        ...,
        description="Flow the turn ran against."
    )
    state_id: Optional[str] = Field(
        None,
        description="State the user is parked on after the turn (None once the session is gone)."
    )


class ToolInvocation(BaseModel):
    """
    A tool call detected in a message.
    """
    name: str
    params: Dict[str, Any] = Field(default_factory=dict)
