"""
Reply templates for tool output.

Templates live in the package's `templates/` directory as `<name>.jinja2`.
Every name in `Template` is compiled once at import, so a missing or broken
template stops the process before the first message is handled.
"""

from functools import lru_cache

from jinja2 import Environment, PackageLoader, StrictUndefined
from jinja2 import Template as CompiledTemplate

from .templates import Template


@lru_cache(maxsize=1)
def _environment() -> Environment:
    # Replies are chat text, not HTML.
    return Environment(
        loader=PackageLoader("flowbot.tools", "templates"),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=StrictUndefined,
    )


def _compile(template: Template) -> CompiledTemplate:
    return _environment().get_template(f"{template.value}.jinja2")


_COMPILED = {template: _compile(template) for template in Template}


def render(template: Template, **context) -> str:
    """Renders a reply template with surrounding whitespace removed."""
    return _COMPILED[template].render(**context).strip()
