from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class Tool(ABC):
    """
    Abstract Base Class for a pattern-detected tool.

    A tool recognizes its own intent in a message (`detect`) and produces a
    plain-text result from the extracted parameters (`run`). Tools are pure
    with respect to conversation state and never see a session.
    """

    name: str = ""
    title: str = ""
    icon: str = ""

    @abstractmethod
    def detect(self, message_text: str) -> Optional[Dict[str, Any]]:
        """
        Returns the extracted parameters if the message invokes this tool, else None.
        """
        pass

    @abstractmethod
    def run(self, params: Dict[str, Any]) -> str:
        """
        Executes the tool. Raises ToolExecutionError on failure.
        """
        pass
