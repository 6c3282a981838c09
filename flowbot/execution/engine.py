"""
Engine - Conversation Orchestration Layer

The ConversationEngine is the deterministic state machine that owns the
per-user flow lifecycle:
-----------------------------------------------

1. NoSession + message: the Flow Detector picks a flow. A session is created
   and parked on the flow's initial state, whose prompt is returned. The
   triggering message is consumed by this and is NOT evaluated against the
   initial state's transitions.
2. InFlow(s) + message: the state's action runs on the raw input, then the
   Transition Matcher picks the next state. Entering a state renders its
   prompt from the session's user data. Reaching a terminal state deletes
   the session.
3. An unresolvable state (or flow) is treated as corruption: the user gets a
   recovery notice and the session is deleted. This never propagates.

Expired sessions are discarded on access and the message is handled as if
the user had no session at all.
"""

import logging
from datetime import timedelta
from typing import Optional

from ..domain.models import FlowDefinition, StateDefinition
from ..exceptions import CorruptedStateError, FlowNotFoundError
from ..repositories.flow import FlowRepository
from ..repositories.session import SessionRepository
from ..schemas.turns import StateMachineTransition, TurnResult
from ..services.flow_detector import FlowDetector
from ..state.models import SessionState
from .interpolation import render_prompt
from .transitions import match_transition

logger = logging.getLogger(__name__)

RECOVERY_NOTICE = "I'm a bit confused. Let's start over!"
UNKNOWN_INPUT_REPLY = "I didn't understand that. Could you rephrase?"


class ConversationEngine:
    def __init__(
        self,
        flow_repository: FlowRepository,
        session_repository: SessionRepository,
        detector: FlowDetector,
        session_timeout: timedelta = timedelta(minutes=5),
    ):
        self.flow_repo = flow_repository
        self.session_repo = session_repository
        self.detector = detector
        self.session_timeout = session_timeout

    def handle_message(self, user_id: str, user_input: str) -> Optional[TurnResult]:
        """
        Processes one message for `user_id`.

        Returns None when the user has no live session and the message does
        not trigger any flow; the caller decides what to reply in that case.
        """
        session = self.active_session(user_id)
        if session is None:
            return self._start_flow(user_id, user_input)
        return self._continue_flow(session, user_input)

    def active_session(self, user_id: str) -> Optional[SessionState]:
        """
        Returns the user's session if it exists and has not timed out.
        An expired session is deleted on the way.
        """
        session = self.session_repo.get(user_id)
        if session is None:
            return None
        if self.is_expired(session):
            logger.info(f"Session for user {user_id} expired in flow '{session.flow_name}'")
            self.session_repo.delete(user_id)
            return None
        return session

    def is_expired(self, session: SessionState) -> bool:
        return self.session_repo.is_expired(
            session, self.session_repo.clock(), self.session_timeout
        )

    # ==========================================================================
    # Lifecycle
    # ==========================================================================

    def _start_flow(self, user_id: str, user_input: str) -> Optional[TurnResult]:
        flow = self.detector.detect(user_input)
        if flow is None:
            return None

        session = self.session_repo.create(user_id, flow)
        logger.info(f"Started flow '{flow.name}' for user {user_id}")
        try:
            return self._enter_initial_state(session, flow)
        except CorruptedStateError as e:
            return self._reset(session, e)

    def _continue_flow(self, session: SessionState, user_input: str) -> TurnResult:
        try:
            flow = self.flow_repo.get_flow(session.flow_name)
        except FlowNotFoundError as e:
            return self._reset(session, e)

        try:
            if not session.started:
                return self._enter_initial_state(session, flow)
            return self._process_input(session, flow, user_input)
        except CorruptedStateError as e:
            return self._reset(session, e)

    def _enter_initial_state(self, session: SessionState, flow: FlowDefinition) -> TurnResult:
        return self._enter_state(session, flow, flow.initial_state, StateMachineTransition.STARTED)

    def _process_input(
        self, session: SessionState, flow: FlowDefinition, user_input: str
    ) -> TurnResult:
        current_state = self._resolve_state(flow, session.current_state_id)

        if current_state.action is not None:
            current_state.action.apply(session.user_data, user_input)

        next_state_id = match_transition(user_input, current_state.transitions)
        if next_state_id is None:
            self.session_repo.save(session)
            logger.debug(
                f"No transition matched in '{flow.name}:{session.current_state_id}' "
                f"for user {session.user_id}"
            )
            return TurnResult(
                replies=[UNKNOWN_INPUT_REPLY],
                transition=StateMachineTransition.HELD,
                flow_name=flow.name,
                state_id=session.current_state_id,
            )

        return self._enter_state(session, flow, next_state_id, StateMachineTransition.ADVANCED)

    # ==========================================================================
    # State Mutation
    # ==========================================================================

    def _enter_state(
        self,
        session: SessionState,
        flow: FlowDefinition,
        state_id: str,
        transition: StateMachineTransition,
    ) -> TurnResult:
        """
        Moves the session onto `state_id` and renders its prompt.
        A terminal state ends the session after its prompt is produced.
        """
        state_def = self._resolve_state(flow, state_id)

        session.enter(state_id)
        prompt = render_prompt(state_def.prompt, session.user_data)

        if flow.is_terminal(state_id):
            self.session_repo.delete(session.user_id)
            logger.info(f"Flow '{flow.name}' completed for user {session.user_id}")
            return TurnResult(
                replies=[prompt],
                transition=StateMachineTransition.COMPLETED,
                flow_name=flow.name,
                state_id=None,
            )

        self.session_repo.save(session)
        logger.debug(f"User {session.user_id} entered '{flow.name}:{state_id}'")
        return TurnResult(
            replies=[prompt],
            transition=transition,
            flow_name=flow.name,
            state_id=state_id,
        )

    def _reset(self, session: SessionState, error: Exception) -> TurnResult:
        logger.warning(f"Discarding session for user {session.user_id}: {error}")
        self.session_repo.delete(session.user_id)
        return TurnResult(
            replies=[RECOVERY_NOTICE],
            transition=StateMachineTransition.RESET,
            flow_name=session.flow_name,
            state_id=None,
        )

    # ==========================================================================
    # Standard Helpers
    # ==========================================================================

    @staticmethod
    def _resolve_state(flow: FlowDefinition, state_id: Optional[str]) -> StateDefinition:
        state_def = flow.get_state(state_id) if state_id is not None else None
        if state_def is None:
            raise CorruptedStateError(flow.name, str(state_id))
        return state_def
