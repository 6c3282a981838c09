"""
Stock flow definitions.
"""

from flowbot.data.onboarding import DEFAULT_FLOWS, onboarding_flow

__all__ = [
    "DEFAULT_FLOWS",
    "onboarding_flow",
]
