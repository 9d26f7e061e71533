"""Configuration and tunables for the swipe deck."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "http://localhost:5000"
DEFAULT_DISTANCE_THRESHOLD_PX = 100.0
DEFAULT_VELOCITY_THRESHOLD = 0.5  # pixels per ms
DEFAULT_EXIT_ANIMATION_MS = 350
DEFAULT_SWIPE_TIMEOUT_SECONDS = 10.0
DEFAULT_COACHMARK_DIR = "./data/cache/coachmark"
DEFAULT_MAX_DISTANCE_KM = 25
FLICK_MIN_DISTANCE_PX = 50.0
SWIPE_ERROR_MESSAGE = "Failed to record swipe. Please try again."


@dataclass(frozen=True)
class CommitThresholds:
    distance: float = DEFAULT_DISTANCE_THRESHOLD_PX
    velocity: float = DEFAULT_VELOCITY_THRESHOLD

    @property
    def half(self) -> float:
        return self.distance / 2


@dataclass(frozen=True)
class DeckSettings:
    thresholds: CommitThresholds = field(default_factory=CommitThresholds)
    exit_animation_ms: int = DEFAULT_EXIT_ANIMATION_MS
    swipe_timeout_seconds: float = DEFAULT_SWIPE_TIMEOUT_SECONDS


def _env_float(name: str, default: float) -> float:
    raw = (os.environ.get(name) or "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={raw!r}; using {default}.")
        return default
    if value < 0:
        logger.warning(f"Ignoring negative {name}={raw!r}; using {default}.")
        return default
    return value


def get_api_base_url() -> str:
    """Return the API base URL from env, without a trailing slash."""
    raw = (os.environ.get("PAWPAL_API_BASE_URL") or "").strip()
    return (raw or DEFAULT_API_BASE_URL).rstrip("/")


def get_coachmark_dir() -> str:
    return (os.environ.get("PAWPAL_COACHMARK_DIR") or "").strip() or DEFAULT_COACHMARK_DIR


def get_deck_settings() -> DeckSettings:
    """Return deck settings from env, with sensible defaults."""
    thresholds = CommitThresholds(
        distance=_env_float("PAWPAL_DISTANCE_THRESHOLD_PX", DEFAULT_DISTANCE_THRESHOLD_PX),
        velocity=_env_float("PAWPAL_VELOCITY_THRESHOLD", DEFAULT_VELOCITY_THRESHOLD),
    )
    return DeckSettings(
        thresholds=thresholds,
        exit_animation_ms=int(
            _env_float("PAWPAL_EXIT_ANIMATION_MS", DEFAULT_EXIT_ANIMATION_MS)
        ),
        swipe_timeout_seconds=_env_float(
            "PAWPAL_SWIPE_TIMEOUT_SECONDS", DEFAULT_SWIPE_TIMEOUT_SECONDS
        ),
    )
