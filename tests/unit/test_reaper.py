import asyncio
from datetime import timedelta

import pytest

from flowbot.data import onboarding_flow
from flowbot.services.reaper import SessionReaper
from flowbot.state.locks import KeyedLocks

TIMEOUT = timedelta(minutes=5)


@pytest.fixture
def locks():
    return KeyedLocks()


@pytest.fixture
def reaper(session_repo, locks):
    return SessionReaper(session_repo, locks, TIMEOUT, interval=0.01)


@pytest.mark.asyncio
async def test_sweep_evicts_only_expired_sessions(reaper, session_repo, clock):
    session_repo.create("stale", onboarding_flow)
    clock.advance(minutes=4)
    session_repo.create("fresh", onboarding_flow)
    clock.advance(minutes=2)

    evicted = await reaper.sweep()

    assert evicted == 1
    assert session_repo.get("stale") is None
    assert session_repo.get("fresh") is not None


@pytest.mark.asyncio
async def test_sweep_waits_for_user_lock_and_rechecks(reaper, session_repo, locks, clock):
    session = session_repo.create("u1", onboarding_flow)
    clock.advance(minutes=6)

    async with locks.hold("u1"):
        sweep = asyncio.create_task(reaper.sweep())
        await asyncio.sleep(0)
        assert not sweep.done()
        # Activity while the reaper is blocked keeps the session alive.
        session_repo.save(session)

    assert await sweep == 0
    assert session_repo.get("u1") is not None


@pytest.mark.asyncio
async def test_background_loop_evicts_and_stops(reaper, session_repo, clock):
    session_repo.create("u1", onboarding_flow)
    clock.advance(minutes=6)

    reaper.start()
    assert reaper.running
    await asyncio.sleep(0.1)
    await reaper.stop()

    assert session_repo.get("u1") is None
    assert not reaper.running


@pytest.mark.asyncio
async def test_failed_sweep_does_not_stop_the_loop(reaper, session_repo, clock, mocker):
    session_repo.create("u1", onboarding_flow)
    clock.advance(minutes=6)
    real_listing = session_repo.list_sessions
    calls = []

    def flaky_listing():
        calls.append(1)
        if len(calls) == 1:
            raise RuntimeError("boom")
        return real_listing()

    mocker.patch.object(session_repo, "list_sessions", side_effect=flaky_listing)

    reaper.start()
    await asyncio.sleep(0.1)
    await reaper.stop()

    assert session_repo.get("u1") is None


@pytest.mark.asyncio
async def test_stop_without_start_is_harmless(reaper):
    await reaper.stop()
    assert not reaper.running
