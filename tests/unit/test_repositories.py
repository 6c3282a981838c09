from datetime import timedelta

import pytest

from flowbot.data import onboarding_flow
from flowbot.domain.models import FlowDefinition, StateDefinition
from flowbot.exceptions import DuplicateFlowError, DuplicateSessionError, FlowNotFoundError
from flowbot.repositories.flow import InMemoryFlowRegistry
from flowbot.repositories.session import SessionRepository

TIMEOUT = timedelta(minutes=5)


# --- Flow Registry ---

def test_register_and_get_flow(survey_flow):
    registry = InMemoryFlowRegistry()
    registry.register(onboarding_flow)
    registry.register(survey_flow)

    assert registry.get_flow("onboarding") is onboarding_flow
    assert registry.contains("survey")
    assert [flow.name for flow in registry.list_flows()] == ["onboarding", "survey"]


def test_duplicate_flow_is_rejected(survey_flow):
    registry = InMemoryFlowRegistry()
    registry.register(survey_flow)

    with pytest.raises(DuplicateFlowError):
        registry.register(survey_flow)


def test_unknown_flow_lookup():
    registry = InMemoryFlowRegistry()

    with pytest.raises(FlowNotFoundError):
        registry.get_flow("missing")
    assert not registry.contains("missing")


def test_flow_graph_is_read_only(survey_flow):
    with pytest.raises(TypeError):
        survey_flow.states["extra"] = StateDefinition(prompt="Injected")


def test_flow_graph_is_detached_from_source_dict():
    states = {"start": StateDefinition(prompt="Hi"), "complete": StateDefinition(prompt="Bye")}
    flow = FlowDefinition(name="tiny", trigger_keywords=frozenset({"tiny"}), initial_state="start", states=states)

    del states["complete"]

    assert set(flow.states) == {"start", "complete"}


# --- Session Store ---

def test_create_and_get_session(session_repo, clock):
    session = session_repo.create("u1", onboarding_flow)

    assert session_repo.get("u1") is session
    assert session.flow_name == "onboarding"
    assert session.visited_states == []
    assert not session.started
    assert session.last_activity == clock.now


def test_duplicate_session_is_rejected(session_repo):
    session_repo.create("u1", onboarding_flow)

    with pytest.raises(DuplicateSessionError):
        session_repo.create("u1", onboarding_flow)


def test_save_refreshes_last_activity(session_repo, clock):
    session = session_repo.create("u1", onboarding_flow)
    clock.advance(minutes=3)

    session_repo.save(session)

    assert session.last_activity == clock.now


def test_delete_session(session_repo):
    session_repo.create("u1", onboarding_flow)

    assert session_repo.delete("u1") is True
    assert session_repo.get("u1") is None
    assert session_repo.delete("u1") is False


def test_expiry(session_repo, clock):
    stale = session_repo.create("stale", onboarding_flow)
    clock.advance(minutes=4)
    fresh = session_repo.create("fresh", onboarding_flow)
    clock.advance(minutes=2)

    assert SessionRepository.is_expired(stale, clock.now, TIMEOUT) is True
    assert SessionRepository.is_expired(fresh, clock.now, TIMEOUT) is False


def test_expiry_boundary_is_exclusive(session_repo, clock):
    session = session_repo.create("u1", onboarding_flow)
    clock.advance(minutes=5)

    assert session_repo.is_expired(session, clock.now, TIMEOUT) is False


def test_clear_discards_everything(session_repo):
    session_repo.create("u1", onboarding_flow)
    session_repo.create("u2", onboarding_flow)

    session_repo.clear()

    assert session_repo.list_sessions() == []
