"""
Free-form fallback replies.

Used when a message from an idle user neither invokes a tool nor triggers a
flow.
"""
from abc import ABC, abstractmethod
from typing import Sequence


class FallbackResponder(ABC):
    @abstractmethod
    def respond(self, message_text: str) -> str:
        pass


class CannedFallbackResponder(FallbackResponder):
    """
    Picks a canned conversational reply by message length.
    Deterministic for a given text.
    """

    DEFAULT_RESPONSES = (
        "That's an interesting point! Could you tell me more?",
        "I understand what you're saying. Let me help you with that.",
        "Based on what you've shared, here's what I think...",
        "That's a great question! Here's my perspective...",
    )

    def __init__(self, responses: Sequence[str] = DEFAULT_RESPONSES):
        if not responses:
            raise ValueError("At least one fallback response is required.")
        self.responses = tuple(responses)

    def respond(self, message_text: str) -> str:
        return self.responses[len(message_text) % len(self.responses)]
