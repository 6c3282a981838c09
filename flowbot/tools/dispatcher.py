"""
Tool Dispatcher.

Detects tool intents in a message, invokes the matching handler and formats
the outcome. Tool failures never escape `execute`; they become a formatted
failure reply instead.
"""

import logging
from typing import Any, Dict, Iterable, Optional

from ..exceptions import ToolExecutionError, ToolNotFoundError
from ..schemas.turns import ToolInvocation
from .base import Tool
from .loader import render
from .templates import Template

logger = logging.getLogger(__name__)


class ToolDispatcher:
    def __init__(self, tools: Iterable[Tool] = ()):
        self._tools: Dict[str, Tool] = {}
        for tool in tools:
            self.register(tool)

    def register(self, tool: Tool):
        if tool.name in self._tools:
            raise ValueError(f"Tool '{tool.name}' is already registered.")
        self._tools[tool.name] = tool

    def detect(self, message_text: str) -> Optional[ToolInvocation]:
        """First tool (in registration order) that recognizes the message."""
        for tool in self._tools.values():
            params = tool.detect(message_text)
            if params is not None:
                return ToolInvocation(name=tool.name, params=params)
        return None

    def invoke(self, name: str, params: Dict[str, Any]) -> str:
        tool = self._tools.get(name)
        if tool is None:
            raise ToolNotFoundError(name)

        try:
            return tool.run(params)
        except ToolExecutionError:
            raise
        except Exception as e:
            raise ToolExecutionError(f"{name} crashed: {e}") from e

    def format_result(self, name: str, result: Any) -> str:
        tool = self._tools.get(name)
        if tool is None:
            return str(result)
        return render(Template.TOOL_RESULT, icon=tool.icon, title=tool.title, body=result)

    def execute(self, invocation: ToolInvocation) -> str:
        """
        Invoke + format. Returns the reply text for the user in every case.
        """
        logger.info(f"Invoking tool '{invocation.name}' with {invocation.params}")
        try:
            result = self.invoke(invocation.name, invocation.params)
        except (ToolNotFoundError, ToolExecutionError) as e:
            logger.warning(f"Tool '{invocation.name}' failed: {e}")
            tool = self._tools.get(invocation.name)
            title = tool.title if tool else invocation.name
            return render(Template.TOOL_FAILURE, title=title, reason=str(e))
        return self.format_result(invocation.name, result)
