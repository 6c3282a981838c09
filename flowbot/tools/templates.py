"""
Names of the tool reply templates (file stems under `templates/`).
"""

from enum import Enum


class Template(str, Enum):
    TOOL_RESULT = "tool_result"
    TOOL_FAILURE = "tool_failure"
    CODE_ANALYSIS = "code_analysis"
