"""
Domain Layer - Static Flow Models

This module defines the static structure of conversation flows. A Flow is a
named graph of States; each State carries a prompt template, an ordered list
of Transitions and an optional Action. Definitions are built once at startup
and never mutated afterwards.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, FrozenSet, Mapping, MutableMapping, Optional, Tuple

"""
Patterns that match any non-empty input. A transition using one of these is
the "catch-all" of its state: it is only taken when no explicit pattern
matched, regardless of where it was declared.
"""
CATCH_ALL_PATTERNS: FrozenSet[str] = frozenset({".*", ".+", "^.*$", "^.+$"})

DEFAULT_TERMINAL_STATES: FrozenSet[str] = frozenset({"complete"})


class StateAction(ABC):
    """
    Side effect attached to a State.

    Runs against the session's user data and the raw (un-normalized) user
    input before transitions are evaluated, so anything it stores is
    available to the next prompt.
    """

    @abstractmethod
    def apply(self, user_data: MutableMapping[str, Any], raw_input: str) -> None:
        pass


class StoreInput(StateAction):
    """Stores the trimmed user input under `key`."""

    def __init__(self, key: str):
        self.key = key

    def apply(self, user_data: MutableMapping[str, Any], raw_input: str) -> None:
        user_data[self.key] = raw_input.strip()

    def __repr__(self) -> str:
        return f"StoreInput({self.key!r})"


class FunctionAction(StateAction):
    """Adapts a plain `fn(user_data, raw_input)` callable to StateAction."""

    def __init__(self, fn: Callable[[MutableMapping[str, Any], str], None]):
        self.fn = fn

    def apply(self, user_data: MutableMapping[str, Any], raw_input: str) -> None:
        self.fn(user_data, raw_input)


@dataclass(frozen=True)
class Transition:
    """
    Edge of the flow graph.

    Attributes:
        pattern: Regular expression searched (case-insensitively) in the
            normalized user input.
        target: State ID to move to when the pattern matches.
    """
    pattern: str
    target: str
    regex: "re.Pattern[str]" = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        # Compile eagerly so a broken pattern fails at registration time.
        object.__setattr__(self, "regex", re.compile(self.pattern, re.IGNORECASE))

    @property
    def is_catch_all(self) -> bool:
        return self.pattern in CATCH_ALL_PATTERNS


@dataclass(frozen=True)
class StateDefinition:
    """
    A node of the flow graph.

    Attributes:
        prompt: Template sent when the state is entered. `{key}` placeholders
            are filled from the session's user data.
        transitions: Ordered edges. First explicit match wins.
        action: Optional side effect run on the input received in this state.
    """
    prompt: str
    transitions: Tuple[Transition, ...] = ()
    action: Optional[StateAction] = None


@dataclass(frozen=True)
class FlowDefinition:
    """
    A complete conversation flow.

    Attributes:
        name: Unique identifier within the registry.
        trigger_keywords: Keywords that start this flow for an idle user.
        initial_state: Entry point state ID.
        states: Mapping of state IDs to definitions.
        terminal_states: State IDs whose arrival ends the session.
        description: Human-readable summary.
    """
    name: str
    trigger_keywords: FrozenSet[str]
    initial_state: str
    states: Mapping[str, StateDefinition] = field(default_factory=dict)
    terminal_states: FrozenSet[str] = DEFAULT_TERMINAL_STATES
    description: str = ""

    def __post_init__(self):
        # Triggers are compared against lower-cased input.
        object.__setattr__(
            self,
            "trigger_keywords",
            frozenset(
                keyword.lower().strip()
                for keyword in self.trigger_keywords
                if keyword.strip()
            ),
        )
        object.__setattr__(self, "terminal_states", frozenset(self.terminal_states))
        # Read-only view over a private copy; the graph cannot change after construction.
        object.__setattr__(self, "states", MappingProxyType(dict(self.states)))

    def get_state(self, state_id: str) -> Optional[StateDefinition]:
        return self.states.get(state_id)

    def is_terminal(self, state_id: str) -> bool:
        return state_id in self.terminal_states
