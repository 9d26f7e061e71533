"""Deck state and the drag/commit decision rule."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from pawpal.deck.config import CommitThresholds
from pawpal.deck.gestures import Vector
from pawpal.models import Candidate, Direction


class GesturePhase(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    COMMITTING = "committing"
    SNAPPING_BACK = "snapping_back"
    SETTLED = "settled"


@dataclass
class DeckState:
    """Mutable deck state. Only the controller and its helpers write to it."""

    cursor: int = 0
    phase: GesturePhase = GesturePhase.IDLE
    drag_offset: Vector = field(default_factory=Vector.zero)
    drag_velocity: Vector = field(default_factory=Vector.zero)
    pending_decision_id: Optional[str] = None

    def clear_drag(self) -> None:
        self.drag_offset = Vector.zero()
        self.drag_velocity = Vector.zero()

    def enter(self, phase: GesturePhase) -> None:
        """Move to ``phase``; resting phases always carry a zero drag."""
        self.phase = phase
        if phase in (GesturePhase.IDLE, GesturePhase.SETTLED):
            self.clear_drag()


@dataclass(frozen=True)
class DeckSnapshot:
    cursor: int
    total: int
    phase: GesturePhase
    drag_offset: Vector
    drag_velocity: Vector
    pending_decision_id: Optional[str]
    current: Optional[Candidate]
    next: Optional[Candidate]

    @property
    def exhausted(self) -> bool:
        return self.cursor >= self.total

    @property
    def busy(self) -> bool:
        return self.pending_decision_id is not None

    @property
    def progress_percent(self) -> float:
        return progress_percent(self.cursor, self.total)


def progress_percent(cursor: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return cursor / total * 100


def decide_commit(
    offset: Vector,
    velocity: Vector,
    thresholds: CommitThresholds | None = None,
) -> Direction | None:
    """Decide whether a released drag commits, and in which direction.

    A drag commits once it travels past the distance threshold, or past half
    of it while still moving faster than the velocity threshold. Like wins if
    both directions qualify.

    Args:
        offset: Cumulative drag offset.
        velocity: Last velocity sample in pixels per ms.
        thresholds: Commit thresholds; defaults to 100px / 0.5 px/ms.

    Returns:
        The committed direction, or None to snap back.
    """
    t = thresholds or CommitThresholds()
    should_like = offset.x > t.distance or (
        offset.x > t.half and velocity.x > t.velocity
    )
    should_dislike = offset.x < -t.distance or (
        offset.x < -t.half and velocity.x < -t.velocity
    )
    if should_like:
        return Direction.LIKE
    if should_dislike:
        return Direction.DISLIKE
    return None
