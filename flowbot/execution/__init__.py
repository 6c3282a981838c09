"""
Execution Layer - Flow Orchestration

Defines the ConversationEngine (deterministic state machine) together with
the transition matcher and the prompt interpolator it drives.
"""

from flowbot.execution.engine import ConversationEngine
from flowbot.execution.interpolation import render_prompt
from flowbot.execution.transitions import match_transition, normalize_input


__all__ = [
    "ConversationEngine",
    "match_transition",
    "normalize_input",
    "render_prompt",
]
