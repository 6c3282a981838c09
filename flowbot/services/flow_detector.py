"""
Flow Detector.

Decides which registered flow, if any, a message from a user with no active
session should start.
"""
from abc import ABC, abstractmethod
from typing import Optional

from ..domain.models import FlowDefinition
from ..repositories.flow import FlowRepository


class FlowDetector(ABC):
    @abstractmethod
    def detect(self, message_text: str) -> Optional[FlowDefinition]:
        """
        Returns the flow the message should start, or None if no flow applies.
        """
        pass


class KeywordFlowDetector(FlowDetector):
    """
    Substring match of each flow's trigger keywords against the normalized text.
    Flows are tried in registration order; the first hit wins.
    """

    def __init__(self, repository: FlowRepository):
        self.repository = repository

    def detect(self, message_text: str) -> Optional[FlowDefinition]:
        normalized = message_text.lower().strip()
        if not normalized:
            return None

        for flow in self.repository.list_flows():
            if any(keyword in normalized for keyword in flow.trigger_keywords):
                return flow
        return None
