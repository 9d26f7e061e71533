"""In-memory swipe recording with mutual-like matching.

Used as the swipe collaborator for local runs and tests. It follows the
server rule: a like creates a match when the other dog already liked back.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable

from .errors import SwipeApiError
from .models import SwipeAck

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class SwipeRecord:
    swiper_dog_id: str
    swiped_dog_id: str
    is_like: bool
    source: str
    swipe_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at_utc: str = field(default_factory=_now)


@dataclass(frozen=True)
class Match:
    dog1_id: str
    dog2_id: str
    match_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at_utc: str = field(default_factory=_now)


class InMemorySwipeStore:
    def __init__(self, fail_on: Iterable[str] = ()):
        self.swipes: list[SwipeRecord] = []
        self.matches: list[Match] = []
        self.fail_on = set(fail_on)

    def get_swipe(self, swiper_dog_id: str, swiped_dog_id: str) -> SwipeRecord | None:
        """Return the latest swipe from one dog on another, if any."""
        for swipe in reversed(self.swipes):
            if swipe.swiper_dog_id == swiper_dog_id and swipe.swiped_dog_id == swiped_dog_id:
                return swipe
        return None

    def matches_for(self, dog_id: str) -> list[Match]:
        return [m for m in self.matches if dog_id in (m.dog1_id, m.dog2_id)]

    def create_swipe(
        self, swiper_dog_id: str, swiped_dog_id: str, is_like: bool, source: str
    ) -> SwipeAck:
        if swiped_dog_id in self.fail_on:
            raise SwipeApiError(f"Failed to create swipe on {swiped_dog_id}", status_code=500)
        self.swipes.append(
            SwipeRecord(
                swiper_dog_id=swiper_dog_id,
                swiped_dog_id=swiped_dog_id,
                is_like=is_like,
                source=source,
            )
        )
        if not is_like:
            return SwipeAck(is_match=False)

        reverse = self.get_swipe(swiped_dog_id, swiper_dog_id)
        if reverse is None or not reverse.is_like:
            return SwipeAck(is_match=False)

        match = Match(dog1_id=swiper_dog_id, dog2_id=swiped_dog_id)
        self.matches.append(match)
        logger.info(f"New match {match.match_id}: {swiper_dog_id} <-> {swiped_dog_id}.")
        return SwipeAck(
            is_match=True,
            matched_candidate_id=swiped_dog_id,
            match_id=match.match_id,
        )

    def for_swiper(self, swiper_dog_id: str):
        """Return a ``submit_swipe`` coroutine function bound to one swiper."""

        async def submit_swipe(candidate_id: str, is_like: bool, source: str) -> SwipeAck:
            return self.create_swipe(swiper_dog_id, candidate_id, is_like, source)

        return submit_swipe
