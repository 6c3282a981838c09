"""
Tools - Pattern-Detected Tool Invocations

Defines the Tool interface, the stock handlers and the ToolDispatcher that
runs ahead of the conversation engine for users without an active flow.
"""

from flowbot.tools.base import Tool
from flowbot.tools.dispatcher import ToolDispatcher
from flowbot.tools.handlers import (
    CalculatorTool,
    CodeAnalysisTool,
    WeatherTool,
    default_tools,
)

__all__ = [
    "CalculatorTool",
    "CodeAnalysisTool",
    "Tool",
    "ToolDispatcher",
    "WeatherTool",
    "default_tools",
]
