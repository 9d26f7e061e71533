"""Persisted first-swipe coachmark state."""

from __future__ import annotations

import logging
from typing import Callable

from diskcache import Cache

from pawpal.deck.config import get_coachmark_dir

logger = logging.getLogger(__name__)

STORAGE_KEY = "discovery.coachmarkSeen"


class CoachmarkTracker:
    """Show the swipe hint until the user swipes once or dismisses it.

    Storage failures are logged and otherwise ignored; the hint then simply
    behaves as if it had never been seen.
    """

    def __init__(
        self,
        cache: Cache | None = None,
        on_converted: Callable[[], object] | None = None,
    ):
        self.cache = cache if cache is not None else Cache(get_coachmark_dir())
        self.on_converted = on_converted
        self.has_converted = False
        self.visible = not self._seen()

    def _seen(self) -> bool:
        try:
            return bool(self.cache.get(STORAGE_KEY, default=False))
        except Exception:
            logger.warning("Unable to read coachmark state.", exc_info=True)
            return False

    def dismiss(self) -> None:
        """Hide the hint and remember that it was seen."""
        try:
            self.cache.set(STORAGE_KEY, True)
        except Exception:
            logger.warning("Unable to save coachmark state.", exc_info=True)
        self.visible = False

    def record_swipe_action(self) -> bool:
        """Dismiss the hint on the first swipe while it is showing.

        Returns:
            True if this swipe converted the coachmark.
        """
        if not self.visible or self.has_converted:
            return False
        self.has_converted = True
        self.dismiss()
        if self.on_converted is not None:
            try:
                self.on_converted()
            except Exception:
                logger.exception("Coachmark conversion callback raised.")
        return True

    def reset(self) -> None:
        try:
            self.cache.delete(STORAGE_KEY)
        except Exception:
            logger.warning("Unable to reset coachmark state.", exc_info=True)
            return
        self.visible = True
        self.has_converted = False
