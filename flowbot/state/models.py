"""
State Layer - Runtime Data Models

This module defines the runtime state that tracks a single user's progress
through a flow. The position inside the graph is an explicit tagged variant
(NotStarted / AtState) so "no history yet" is never inferred from an empty
list.
"""

from datetime import datetime, timezone
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class NotStarted(BaseModel):
    """The session exists but its flow has not entered the initial state yet."""
    kind: Literal["not_started"] = "not_started"


class AtState(BaseModel):
    """The session is parked on `state_id`, waiting for user input."""
    kind: Literal["at_state"] = "at_state"
    state_id: str


FlowPosition = Annotated[Union[NotStarted, AtState], Field(discriminator="kind")]


class SessionState(BaseModel):
    """
    The live state of one user's conversation.
    """
    user_id: str
    flow_name: str
    position: FlowPosition = Field(default_factory=NotStarted)

    # Append-only history of entered states
    visited_states: List[str] = Field(default_factory=list)

    # Free-form bag filled by state actions, read by prompt interpolation
    user_data: Dict[str, Any] = Field(default_factory=dict)

    created_at: datetime = Field(default_factory=utcnow)
    last_activity: datetime = Field(default_factory=utcnow)

    @property
    def current_state_id(self) -> Optional[str]:
        if isinstance(self.position, AtState):
            return self.position.state_id
        return None

    @property
    def started(self) -> bool:
        return isinstance(self.position, AtState)

    def enter(self, state_id: str):
        """Moves the pointer to `state_id` and records it in the history."""
        self.visited_states.append(state_id)
        self.position = AtState(state_id=state_id)
