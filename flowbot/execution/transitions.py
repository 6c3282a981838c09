"""
Transition Matching.

Selects the next state for a piece of user input. Explicit patterns are
tried in declaration order and the first match wins; a catch-all transition
is only taken when nothing explicit matched.
"""

from typing import Optional, Sequence

from ..domain.models import Transition


def normalize_input(text: str) -> str:
    return text.lower().strip()


def match_transition(user_input: str, transitions: Sequence[Transition]) -> Optional[str]:
    """
    Return the target state ID for `user_input`, or None.

    Args:
        user_input: Raw user text. Normalized (lower-cased, trimmed) here.
        transitions: Ordered transitions of the current state.

    Returns:
        Target of the first explicit match, else the target of the first
        catch-all transition when the input is non-empty, else None.
    """
    normalized = normalize_input(user_input)

    catch_all: Optional[Transition] = None
    for transition in transitions:
        if transition.is_catch_all:
            if catch_all is None:
                catch_all = transition
            continue
        if transition.regex.search(normalized):
            return transition.target

    if catch_all is not None and normalized:
        return catch_all.target
    return None
