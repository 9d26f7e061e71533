"""Cursor over the ordered candidate sequence of a deck."""

from __future__ import annotations

import logging
from typing import Iterable

from pawpal.deck.state import DeckState, GesturePhase
from pawpal.models import Candidate

logger = logging.getLogger(__name__)


class DeckCursor:
    """Current/next views over an ordered candidate sequence."""

    def __init__(self, candidates: Iterable[Candidate], state: DeckState):
        self._candidates: tuple[Candidate, ...] = tuple(candidates)
        self._state = state
        # Bumped whenever the sequence is reset so stale rollbacks can be ignored.
        self.generation = 0

    def __len__(self) -> int:
        return len(self._candidates)

    @property
    def candidates(self) -> tuple[Candidate, ...]:
        return self._candidates

    @property
    def position(self) -> int:
        return self._state.cursor

    def current(self) -> Candidate | None:
        """Return the candidate under the cursor, or None when exhausted."""
        return self._at(self._state.cursor)

    def peek_next(self) -> Candidate | None:
        """Return the candidate after the current one without moving."""
        return self._at(self._state.cursor + 1)

    def is_exhausted(self) -> bool:
        return self._state.cursor >= len(self._candidates)

    def advance(self) -> None:
        self._state.cursor = min(self._state.cursor + 1, len(self._candidates))

    def retreat(self) -> None:
        self._state.cursor = max(0, self._state.cursor - 1)

    def skip(self) -> bool:
        """Move past the current candidate without judging it.

        Returns:
            True if the cursor moved.
        """
        if self._state.phase is not GesturePhase.IDLE or self.is_exhausted():
            return False
        skipped = self.current()
        self.advance()
        logger.debug(f"Skipped candidate {skipped.candidate_id}.")
        return True

    def reset(self) -> None:
        self._state.cursor = 0
        self._state.enter(GesturePhase.IDLE)
        self.generation += 1

    def replace(self, candidates: Iterable[Candidate]) -> None:
        """Swap in a new candidate sequence and start from its beginning."""
        self._candidates = tuple(candidates)
        self.reset()
        logger.info(f"Loaded {len(self._candidates)} candidates into the deck.")

    def _at(self, index: int) -> Candidate | None:
        if 0 <= index < len(self._candidates):
            return self._candidates[index]
        return None
