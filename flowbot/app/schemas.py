"""
API Layer - Request/Response Schemas

Pydantic models for API request and response validation.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class MessageReplies(BaseModel):
    replies: List[str]


class OutboxRead(BaseModel):
    channel_id: str
    messages: List[str]


class SessionRead(BaseModel):
    user_id: str
    flow_name: str
    current_state: Optional[str] = None
    visited_states: List[str]
    user_data: Dict[str, Any]
    last_activity: datetime


class FlowRead(BaseModel):
    name: str
    description: str
    trigger_keywords: List[str]
    initial_state: str
    states: List[str]
