"""
Prompt interpolation.

Replaces `{key}` placeholders with values from the session's user data.
"""

import re
from typing import Any, Mapping

# One placeholder token; braces cannot nest.
PLACEHOLDER = re.compile(r"\{([^{}]+)\}")


def render_prompt(template: str, data: Mapping[str, Any]) -> str:
    """
    Fill every `{key}` whose key is present in `data`.

    Placeholders are matched as whole tokens, so `{name}` never touches
    `{nameTag}`. Unknown placeholders are left verbatim and substituted
    values are not scanned again.
    """
    if not data:
        return template

    def _substitute(match: "re.Match[str]") -> str:
        key = match.group(1)
        if key in data:
            return str(data[key])
        return match.group(0)

    return PLACEHOLDER.sub(_substitute, template)
