"""Swipe deck controller.

Binds gesture tracking, the commit rule, optimistic submission and the deck
cursor into one object a host UI can drive from pointer events and buttons.
All methods are expected to run on a single asyncio event loop.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, Iterable

from pawpal.coachmark import CoachmarkTracker
from pawpal.deck.config import DeckSettings, get_deck_settings
from pawpal.deck.coordinator import (
    ErrorCallback,
    MatchCallback,
    MutationCoordinator,
    MutationRecord,
    MutationStatus,
    SubmitSwipe,
)
from pawpal.deck.cursor import DeckCursor
from pawpal.deck.gestures import GestureSample, GestureTracker
from pawpal.deck.state import (
    DeckSnapshot,
    DeckState,
    GesturePhase,
    decide_commit,
    progress_percent,
)
from pawpal.errors import SwipeBusyError
from pawpal.models import Candidate, Direction, SwipeDecision, SwipeSource

logger = logging.getLogger(__name__)


def _monotonic_ms() -> float:
    return time.monotonic() * 1000


class SwipeDeckController:
    def __init__(
        self,
        candidates: Iterable[Candidate],
        submit_swipe: SubmitSwipe,
        *,
        on_match: MatchCallback | None = None,
        on_error: ErrorCallback | None = None,
        settings: DeckSettings | None = None,
        clock: Callable[[], float] | None = None,
        coachmark: CoachmarkTracker | None = None,
    ):
        self.settings = settings or get_deck_settings()
        self._state = DeckState()
        self._clock = clock or _monotonic_ms
        self._gesture = GestureTracker()
        self._coachmark = coachmark
        self.cursor = DeckCursor(candidates, self._state)
        self.coordinator = MutationCoordinator(
            self._state,
            self.cursor,
            submit_swipe,
            timeout_seconds=self.settings.swipe_timeout_seconds,
            on_match=on_match,
            on_error=on_error,
        )

    # ----- read side -----

    def get_current_candidate(self) -> Candidate | None:
        return self.cursor.current()

    def get_next_candidate(self) -> Candidate | None:
        return self.cursor.peek_next()

    def is_exhausted(self) -> bool:
        return self.cursor.is_exhausted()

    def is_busy(self) -> bool:
        return self.coordinator.busy

    def can_swipe(self) -> bool:
        return (
            self._state.phase is GesturePhase.IDLE
            and not self.is_busy()
            and self.get_current_candidate() is not None
        )

    def progress_percent(self) -> float:
        return progress_percent(self._state.cursor, len(self.cursor))

    def snapshot(self) -> DeckSnapshot:
        """Return a read-only copy of the deck for rendering."""
        return DeckSnapshot(
            cursor=self._state.cursor,
            total=len(self.cursor),
            phase=self._state.phase,
            drag_offset=self._state.drag_offset,
            drag_velocity=self._state.drag_velocity,
            pending_decision_id=self._state.pending_decision_id,
            current=self.get_current_candidate(),
            next=self.get_next_candidate(),
        )

    # ----- callback registration -----

    def on_match(self, callback: MatchCallback) -> MatchCallback:
        self.coordinator.on_match = callback
        return callback

    def on_error(self, callback: ErrorCallback) -> ErrorCallback:
        self.coordinator.on_error = callback
        return callback

    # ----- gestures -----

    def begin_gesture(self, x: float, y: float) -> bool:
        """Start dragging the current card. Ignored unless the deck is idle."""
        if self._state.phase is not GesturePhase.IDLE:
            return False
        if self.get_current_candidate() is None:
            return False
        self._gesture.begin(x, y, self._clock())
        self._state.enter(GesturePhase.DRAGGING)
        return True

    def update_gesture(self, x: float, y: float) -> GestureSample | None:
        if self._state.phase is not GesturePhase.DRAGGING:
            return None
        sample = self._gesture.update(x, y, self._clock())
        if sample is not None:
            self._apply(sample)
        return sample

    def end_gesture(self, x: float, y: float) -> asyncio.Task | None:
        """Release the drag and either snap back or commit.

        Returns:
            The task settling the submitted swipe when the drag committed,
            otherwise None.

        Raises:
            RuntimeError: If the drag commits while no event loop is running.
                The card snaps back first, so the deck stays usable.
        """
        if self._state.phase is not GesturePhase.DRAGGING:
            return None
        sample = self._gesture.end(x, y, self._clock())
        if sample is not None:
            self._apply(sample)

        direction = decide_commit(
            self._state.drag_offset,
            self._state.drag_velocity,
            self.settings.thresholds,
        )
        if direction is None:
            self._snap_back()
            return None

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # Settling a commit needs the loop; drop the drag instead.
            self._snap_back()
            raise
        record = self._begin_commit(direction, SwipeSource.DRAG)
        if record is None:
            self._snap_back()
            return None
        return loop.create_task(self._settle(record))

    # ----- actions -----

    async def swipe(
        self,
        direction: Direction | str,
        source: SwipeSource | str = SwipeSource.BUTTON,
    ) -> MutationRecord | None:
        """Commit a like/dislike on the current card, e.g. from a button tap.

        Returns:
            The settled mutation record, or None if the input was ignored.
        """
        record = self._begin_commit(Direction(direction), SwipeSource(source))
        if record is None:
            return None
        return await self._settle(record)

    def skip(self) -> bool:
        return self.cursor.skip()

    def reset(self) -> None:
        self._gesture.clear()
        self.cursor.reset()

    def load(self, candidates: Iterable[Candidate]) -> None:
        self._gesture.clear()
        self.cursor.replace(candidates)

    # ----- internals -----

    def _apply(self, sample: GestureSample) -> None:
        self._state.drag_offset = sample.offset
        self._state.drag_velocity = sample.velocity

    def _snap_back(self) -> None:
        self._state.enter(GesturePhase.SNAPPING_BACK)
        self._state.enter(GesturePhase.IDLE)

    def _begin_commit(
        self, direction: Direction, source: SwipeSource
    ) -> MutationRecord | None:
        if self._state.phase not in (GesturePhase.IDLE, GesturePhase.DRAGGING):
            logger.debug(f"Ignoring {direction.value} swipe during {self._state.phase.value}.")
            return None
        candidate = self.get_current_candidate()
        if candidate is None:
            return None
        decision = SwipeDecision(
            candidate_id=candidate.candidate_id,
            direction=direction,
            source=source,
        )
        try:
            record = self.coordinator.begin(decision)
        except SwipeBusyError as exc:
            logger.debug(f"Ignoring {direction.value} swipe: {exc}")
            return None
        self._state.enter(GesturePhase.COMMITTING)
        if self._coachmark is not None:
            self._coachmark.record_swipe_action()
        return record

    async def _settle(self, record: MutationRecord) -> MutationRecord:
        await self.coordinator.resolve(record)
        if record.status is not MutationStatus.COMMITTED:
            return record
        # A reset while the request was in flight already returned the deck to idle.
        if self._state.phase is not GesturePhase.COMMITTING:
            return record
        self._state.enter(GesturePhase.SETTLED)
        try:
            if self.settings.exit_animation_ms > 0:
                await asyncio.sleep(self.settings.exit_animation_ms / 1000)
        finally:
            if self._state.phase is GesturePhase.SETTLED:
                self._state.enter(GesturePhase.IDLE)
        return record
