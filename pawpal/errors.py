"""Errors raised by the swipe deck and its API collaborators."""

from __future__ import annotations


class PawPalError(Exception):
    """Base class for errors raised by the swipe deck."""


class SwipeBusyError(PawPalError):
    """Raised when a swipe is submitted while another one is still pending."""

    def __init__(self, pending_decision_id: str):
        super().__init__(f"Swipe {pending_decision_id} is still pending.")
        self.pending_decision_id = pending_decision_id


class SwipeApiError(PawPalError):
    """Raised when the swipe API cannot be reached or returns an error."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class SwipeTimeoutError(SwipeApiError):
    """Raised when a swipe submission does not resolve in time."""
