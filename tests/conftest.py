from datetime import datetime, timedelta, timezone

import pytest

from flowbot.app.dependencies import build_chat_service
from flowbot.config import Settings
from flowbot.data import onboarding_flow
from flowbot.domain.models import FlowDefinition, StateDefinition, StoreInput, Transition
from flowbot.execution.engine import ConversationEngine
from flowbot.repositories.flow import InMemoryFlowRegistry
from flowbot.repositories.session import InMemorySessionRepository
from flowbot.services.flow_detector import KeywordFlowDetector
from flowbot.transport.interface import MessageSender

TIMEOUT = timedelta(minutes=5)


class FakeClock:
    """Manually advanced clock injected wherever `utcnow` is used."""

    def __init__(self):
        self.now = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


class RecordingSender(MessageSender):
    def __init__(self):
        self.sent = []

    async def send(self, channel_id: str, text: str) -> bool:
        self.sent.append((channel_id, text))
        return True


def make_survey_flow() -> FlowDefinition:
    """A small flow without catch-all transitions, so unmatched input holds."""
    return FlowDefinition(
        name="survey",
        trigger_keywords=frozenset({"survey"}),
        initial_state="ask",
        states={
            "ask": StateDefinition(
                prompt="Did you enjoy it? (yes/no)",
                transitions=(
                    Transition(r"^(yes|y)$", "why"),
                    Transition(r"^(no|n)$", "complete"),
                ),
            ),
            "why": StateDefinition(
                prompt="What did you like most?",
                transitions=(Transition(r".+", "complete"),),
                action=StoreInput("liked"),
            ),
            "complete": StateDefinition(prompt="Thanks for the feedback! Glad you liked {liked}."),
        },
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def survey_flow():
    return make_survey_flow()


@pytest.fixture
def flow_repo(survey_flow):
    repo = InMemoryFlowRegistry()
    repo.register(onboarding_flow)
    repo.register(survey_flow)
    return repo


@pytest.fixture
def session_repo(clock):
    return InMemorySessionRepository(clock=clock)


@pytest.fixture
def engine(flow_repo, session_repo):
    return ConversationEngine(
        flow_repository=flow_repo,
        session_repository=session_repo,
        detector=KeywordFlowDetector(flow_repo),
        session_timeout=TIMEOUT,
    )


@pytest.fixture
def sender():
    return RecordingSender()


@pytest.fixture
def test_settings():
    return Settings(SESSION_TIMEOUT_SECONDS=300, REAPER_INTERVAL_SECONDS=60, TOOLS_ENABLED=True)


@pytest.fixture
def chat_service(test_settings, sender, clock, survey_flow):
    service = build_chat_service(
        test_settings,
        sender=sender,
        flows=[onboarding_flow, survey_flow],
        clock=clock,
    )
    service.register_flows()
    return service
