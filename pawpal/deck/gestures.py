"""Pointer/touch gesture primitives for the swipe deck.

These helpers are stateless with respect to the deck: they only turn raw
pointer positions and timestamps into displacement and velocity samples.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pawpal.deck.config import FLICK_MIN_DISTANCE_PX


@dataclass(frozen=True)
class Vector:
    x: float = 0.0
    y: float = 0.0

    @classmethod
    def zero(cls) -> "Vector":
        return cls(0.0, 0.0)

    def __add__(self, other: "Vector") -> "Vector":
        return Vector(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector") -> "Vector":
        return Vector(self.x - other.x, self.y - other.y)

    def __truediv__(self, scalar: float) -> "Vector":
        return Vector(self.x / scalar, self.y / scalar)


@dataclass(frozen=True)
class GestureSample:
    offset: Vector
    velocity: Vector


class FlickDirection(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


class GestureTracker:
    """Track one drag gesture from its first to its last pointer position."""

    def __init__(self) -> None:
        self.active = False
        self.offset = Vector.zero()
        self.velocity = Vector.zero()
        self._last_point = Vector.zero()
        self._last_time_ms = 0.0

    def begin(self, x: float, y: float, now_ms: float) -> None:
        """Start a gesture at ``(x, y)``; any previous gesture is discarded."""
        self.active = True
        self.offset = Vector.zero()
        self.velocity = Vector.zero()
        self._last_point = Vector(x, y)
        self._last_time_ms = now_ms

    def update(self, x: float, y: float, now_ms: float) -> GestureSample | None:
        """Fold a new pointer position into the gesture.

        The offset accumulates every delta. The velocity is the latest
        instantaneous sample; when no time has elapsed since the previous
        point the velocity is left unchanged.

        Args:
            x: Pointer x coordinate.
            y: Pointer y coordinate.
            now_ms: Current time in milliseconds.

        Returns:
            The updated sample, or None when no gesture is active.
        """
        if not self.active:
            return None
        point = Vector(x, y)
        delta = point - self._last_point
        elapsed = now_ms - self._last_time_ms
        self.offset = self.offset + delta
        if elapsed > 0:
            self.velocity = delta / elapsed
        self._last_point = point
        self._last_time_ms = now_ms
        return GestureSample(offset=self.offset, velocity=self.velocity)

    def end(self, x: float, y: float, now_ms: float) -> GestureSample | None:
        """Apply the release point and stop tracking."""
        sample = self.update(x, y, now_ms)
        self.active = False
        return sample

    def clear(self) -> None:
        self.active = False
        self.offset = Vector.zero()
        self.velocity = Vector.zero()


def classify_flick(
    dx: float,
    dy: float,
    elapsed_ms: float | None = None,
    min_distance: float = FLICK_MIN_DISTANCE_PX,
    max_duration_ms: float | None = None,
) -> FlickDirection | None:
    """Classify a completed touch gesture as a four-way flick.

    The dominant axis decides the direction and its displacement must exceed
    ``min_distance``. When ``max_duration_ms`` is given, gestures slower than
    that are not flicks.

    Args:
        dx: Horizontal displacement from the start point.
        dy: Vertical displacement from the start point (positive is down).
        elapsed_ms: Gesture duration in milliseconds.
        min_distance: Minimum displacement along the dominant axis.
        max_duration_ms: Optional maximum duration for a flick.

    Returns:
        Flick direction, or None when the gesture does not qualify.
    """
    if max_duration_ms is not None and elapsed_ms is not None:
        if elapsed_ms > max_duration_ms:
            return None
    abs_dx = abs(dx)
    abs_dy = abs(dy)
    if abs_dx > abs_dy and abs_dx > min_distance:
        return FlickDirection.RIGHT if dx > 0 else FlickDirection.LEFT
    if abs_dy > abs_dx and abs_dy > min_distance:
        return FlickDirection.DOWN if dy > 0 else FlickDirection.UP
    return None
