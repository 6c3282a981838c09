"""
Tool Handlers

Concrete tools recognized in free text: a mock weather report, a restricted
calculator and a lightweight code block analyzer.
"""

import random
import re
from typing import Any, Dict, Optional

from ..exceptions import ToolExecutionError
from .arithmetic import evaluate, format_number
from .base import Tool
from .loader import render
from .templates import Template


class WeatherTool(Tool):
    name = "weather"
    title = "Weather Report"
    icon = "🌤️"

    KEYWORDS = ("weather", "temperature")
    LOCATION = re.compile(r"\b(?:in|for|at)\s+([^.?!]+)", re.IGNORECASE)
    CONDITIONS = ("Sunny", "Cloudy", "Rainy", "Partly Cloudy")

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def detect(self, message_text: str) -> Optional[Dict[str, Any]]:
        lowered = message_text.lower()
        if not any(keyword in lowered for keyword in self.KEYWORDS):
            return None
        match = self.LOCATION.search(message_text)
        if not match:
            return None
        return {"location": match.group(1).strip()}

    def run(self, params: Dict[str, Any]) -> str:
        location = str(params.get("location") or "").strip()
        if not location:
            raise ToolExecutionError("A location is required")

        # Simulated reading; no external weather service is called.
        temperature = self.rng.randint(10, 39)
        condition = self.rng.choice(self.CONDITIONS)
        return f"{location}: {temperature}°C, {condition}"


class CalculatorTool(Tool):
    name = "calculator"
    title = "Calculation Result"
    icon = "🔢"

    BINARY_EXPRESSION = re.compile(r"\d+\s*[+\-*/]\s*\d+")
    EXPRESSION_CHARS = re.compile(r"[\d\s+\-*/().]+")

    def detect(self, message_text: str) -> Optional[Dict[str, Any]]:
        if not self.BINARY_EXPRESSION.search(message_text):
            return None
        for match in self.EXPRESSION_CHARS.finditer(message_text):
            candidate = match.group(0).strip()
            if self.BINARY_EXPRESSION.search(candidate):
                return {"expression": candidate}
        return None

    def run(self, params: Dict[str, Any]) -> str:
        expression = str(params.get("expression") or "").strip()
        result = evaluate(expression)
        return f"{expression} = {format_number(result)}"


class CodeAnalysisTool(Tool):
    name = "code_analysis"
    title = "Code Analysis"
    icon = "💻"

    CODE_BLOCK = re.compile(r"```(\w+)?\n([\s\S]+?)```")
    COMMENT_MARKERS = ("//", "/*", "#")

    def detect(self, message_text: str) -> Optional[Dict[str, Any]]:
        if "```" not in message_text and "analyze code" not in message_text.lower():
            return None
        match = self.CODE_BLOCK.search(message_text)
        if not match:
            return None
        return {
            "code": match.group(2),
            "language": match.group(1) or "unknown",
        }

    def run(self, params: Dict[str, Any]) -> str:
        code = str(params.get("code") or "")
        if not code.strip():
            raise ToolExecutionError("No code to analyze")
        language = str(params.get("language") or "unknown")

        lines = len(code.rstrip("\n").split("\n"))
        return render(
            Template.CODE_ANALYSIS,
            language=language,
            lines=lines,
            has_comments=any(marker in code for marker in self.COMMENT_MARKERS),
            complexity=self._complexity(lines),
        )

    @staticmethod
    def _complexity(lines: int) -> str:
        if lines < 50:
            return "Low"
        if lines < 200:
            return "Medium"
        return "High"


def default_tools(rng: Optional[random.Random] = None):
    """The stock tool set, in detection order."""
    return [WeatherTool(rng=rng), CalculatorTool(), CodeAnalysisTool()]
