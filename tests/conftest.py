import asyncio

import pytest

from pawpal.deck.config import DeckSettings
from pawpal.models import Candidate, SwipeAck


class FakeClock:
    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


class GatedApi:
    """Swipe collaborator that resolves only when the test opens the gate."""

    def __init__(self, ack=None, error=None, gated=True):
        self.ack = ack if ack is not None else SwipeAck(is_match=False)
        self.error = error
        self.gated = gated
        self.calls = []
        self._gate = None

    @property
    def gate(self) -> asyncio.Event:
        if self._gate is None:
            self._gate = asyncio.Event()
        return self._gate

    def release(self) -> None:
        self.gate.set()

    async def __call__(self, candidate_id, is_like, source):
        self.calls.append((candidate_id, is_like, source))
        if self.gated:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.ack


@pytest.fixture
def candidates():
    return [
        Candidate(candidate_id="luna", name="Luna", breed="Corgi", age=2),
        Candidate(candidate_id="zeus", name="Zeus", breed="Siberian Husky", age=5),
        Candidate(candidate_id="bella", name="Bella", breed="Beagle", age=1),
    ]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def settings():
    return DeckSettings(exit_animation_ms=0, swipe_timeout_seconds=1.0)


@pytest.fixture
def make_api():
    return GatedApi
