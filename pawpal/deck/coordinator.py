"""Optimistic swipe submission with rollback on failure."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional

from pawpal.deck.config import DEFAULT_SWIPE_TIMEOUT_SECONDS, SWIPE_ERROR_MESSAGE
from pawpal.deck.cursor import DeckCursor
from pawpal.deck.state import DeckState, GesturePhase
from pawpal.errors import SwipeBusyError, SwipeTimeoutError
from pawpal.models import Candidate, SwipeAck, SwipeDecision

logger = logging.getLogger(__name__)

SubmitSwipe = Callable[[str, bool, str], Awaitable[object]]
MatchCallback = Callable[[Candidate], object]
ErrorCallback = Callable[[str], object]


class MutationStatus(str, Enum):
    PENDING = "pending"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


@dataclass
class MutationRecord:
    decision: SwipeDecision
    candidate: Candidate
    cursor_before: int
    generation: int
    status: MutationStatus = MutationStatus.PENDING
    ack: Optional[SwipeAck] = None
    error: Optional[BaseException] = None


def _coerce_ack(result: object) -> SwipeAck:
    if isinstance(result, SwipeAck):
        return result
    if isinstance(result, dict):
        return SwipeAck(
            is_match=bool(result.get("isMatch", result.get("is_match", False))),
            matched_candidate_id=result.get(
                "matchedCandidateId", result.get("matched_candidate_id")
            ),
            match_id=result.get("matchId", result.get("match_id")),
        )
    raise TypeError(f"Unsupported swipe acknowledgement: {result!r}")


class MutationCoordinator:
    """Single-flight optimistic submitter for swipe decisions.

    ``begin`` applies the optimistic cursor advance synchronously and ``resolve``
    awaits the remote call, committing or rolling back the advance. Because
    ``begin`` runs before any suspension point, two commits can never both be
    pending on the same event loop.
    """

    def __init__(
        self,
        state: DeckState,
        cursor: DeckCursor,
        submit_swipe: SubmitSwipe,
        *,
        timeout_seconds: float | None = DEFAULT_SWIPE_TIMEOUT_SECONDS,
        on_match: MatchCallback | None = None,
        on_error: ErrorCallback | None = None,
    ):
        self._state = state
        self._cursor = cursor
        self._submit_swipe = submit_swipe
        self.timeout_seconds = timeout_seconds
        self.on_match = on_match
        self.on_error = on_error
        self.history: list[MutationRecord] = []

    @property
    def busy(self) -> bool:
        return self._state.pending_decision_id is not None

    def begin(self, decision: SwipeDecision) -> MutationRecord:
        """Mark ``decision`` pending and optimistically advance the cursor.

        Raises:
            SwipeBusyError: If another decision is still pending.
            ValueError: If the decision is not for the current candidate.
        """
        if self._state.pending_decision_id is not None:
            raise SwipeBusyError(self._state.pending_decision_id)
        candidate = self._cursor.current()
        if candidate is None or candidate.candidate_id != decision.candidate_id:
            raise ValueError(
                f"Decision for {decision.candidate_id} does not match the current candidate."
            )
        record = MutationRecord(
            decision=decision,
            candidate=candidate,
            cursor_before=self._state.cursor,
            generation=self._cursor.generation,
        )
        self._state.pending_decision_id = decision.decision_id
        self._cursor.advance()
        self.history.append(record)
        return record

    async def resolve(self, record: MutationRecord) -> MutationRecord:
        """Await the remote swipe call and reconcile the optimistic advance."""
        decision = record.decision
        try:
            result = await asyncio.wait_for(
                self._submit_swipe(
                    decision.candidate_id, decision.is_like, decision.source.value
                ),
                timeout=self.timeout_seconds,
            )
            ack = _coerce_ack(result)
        except asyncio.TimeoutError:
            error = SwipeTimeoutError(
                f"Swipe on {decision.candidate_id} timed out after {self.timeout_seconds}s."
            )
            logger.warning(str(error))
            self._roll_back(record, error)
            return record
        except asyncio.CancelledError as exc:
            self._roll_back(record, exc, notify=False)
            raise
        except Exception as exc:
            logger.exception(f"Swipe on {decision.candidate_id} failed; rolling back.")
            self._roll_back(record, exc)
            return record

        self._commit(record, ack)
        return record

    async def submit(self, decision: SwipeDecision) -> MutationRecord:
        return await self.resolve(self.begin(decision))

    def _commit(self, record: MutationRecord, ack: SwipeAck) -> None:
        record.ack = ack
        record.status = MutationStatus.COMMITTED
        self._state.pending_decision_id = None
        logger.info(
            f"Recorded {record.decision.direction.value} swipe on "
            f"{record.decision.candidate_id} (match={ack.is_match})."
        )
        if ack.is_match and record.decision.is_like:
            self._notify(self.on_match, record.candidate)

    def _roll_back(
        self, record: MutationRecord, error: BaseException, notify: bool = True
    ) -> None:
        record.error = error
        record.status = MutationStatus.ROLLED_BACK
        self._state.pending_decision_id = None
        # A reset since begin() started a new session; its cursor and drag stay put.
        if record.generation == self._cursor.generation:
            self._cursor.retreat()
            self._state.enter(GesturePhase.IDLE)
        if notify:
            self._notify(self.on_error, SWIPE_ERROR_MESSAGE)

    @staticmethod
    def _notify(callback: Callable | None, arg: object) -> None:
        if callback is None:
            return
        try:
            callback(arg)
        except Exception:
            logger.exception(f"Deck callback {callback!r} raised.")
