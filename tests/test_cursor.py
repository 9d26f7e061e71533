from pawpal.deck.cursor import DeckCursor
from pawpal.deck.gestures import Vector
from pawpal.deck.state import DeckState, GesturePhase
from pawpal.models import Candidate


def test_current_and_peek_next(candidates):
    cursor = DeckCursor(candidates, DeckState())
    assert cursor.current().candidate_id == "luna"
    assert cursor.peek_next().candidate_id == "zeus"
    assert cursor.position == 0


def test_peek_next_is_none_on_last_card(candidates):
    cursor = DeckCursor(candidates, DeckState(cursor=2))
    assert cursor.current().candidate_id == "bella"
    assert cursor.peek_next() is None


def test_exhausted_deck_has_no_current(candidates):
    cursor = DeckCursor(candidates, DeckState(cursor=3))
    assert cursor.is_exhausted()
    assert cursor.current() is None
    assert cursor.peek_next() is None


def test_advance_and_retreat_are_clamped(candidates):
    state = DeckState(cursor=3)
    cursor = DeckCursor(candidates, state)
    cursor.advance()
    assert state.cursor == 3
    state.cursor = 0
    cursor.retreat()
    assert state.cursor == 0


def test_skip_moves_without_pending(candidates):
    state = DeckState()
    cursor = DeckCursor(candidates, state)
    assert cursor.skip()
    assert state.cursor == 1
    assert state.pending_decision_id is None


def test_skip_is_ignored_when_exhausted_or_not_idle(candidates):
    state = DeckState(cursor=3)
    cursor = DeckCursor(candidates, state)
    assert not cursor.skip()
    state.cursor = 0
    state.phase = GesturePhase.DRAGGING
    assert not cursor.skip()
    assert state.cursor == 0


def test_reset_returns_to_start(candidates):
    state = DeckState(
        cursor=2, phase=GesturePhase.DRAGGING, drag_offset=Vector(30, 0)
    )
    cursor = DeckCursor(candidates, state)
    cursor.reset()
    assert state.cursor == 0
    assert state.phase is GesturePhase.IDLE
    assert state.drag_offset == Vector.zero()
    assert cursor.generation == 1


def test_replace_swaps_candidates(candidates):
    state = DeckState(cursor=2)
    cursor = DeckCursor(candidates, state)
    cursor.replace([Candidate(candidate_id="ruby")])
    assert len(cursor) == 1
    assert state.cursor == 0
    assert cursor.current().candidate_id == "ruby"
