import asyncio
import builtins

import pawpal.cli as cli
from pawpal.deck.config import DeckSettings
from pawpal.deck.controller import SwipeDeckController


def _feed(monkeypatch, commands):
    remaining = iter(commands)

    def fake_input(prompt=""):
        try:
            return next(remaining)
        except StopIteration:
            raise EOFError("no more scripted input") from None

    monkeypatch.setattr(builtins, "input", fake_input)


def _demo_controller():
    candidates, store = cli._demo_deck()
    deck = SwipeDeckController(
        candidates,
        store.for_swiper(cli.DEMO_SWIPER_ID),
        on_match=lambda dog: print(f"match:{dog.candidate_id}"),
        settings=DeckSettings(exit_animation_ms=0),
    )
    return deck, store


def test_demo_session_matches_admirers(monkeypatch, capsys):
    deck, store = _demo_controller()
    _feed(monkeypatch, ["?", "r", "l", "s", "s", "r"])

    asyncio.run(cli.run(deck))

    out = capsys.readouterr().out
    assert "match:luna" in out
    assert "match:ruby" in out
    assert "Unknown command" in out
    assert "No more dogs nearby" in out
    assert deck.is_exhausted()
    assert deck.snapshot().cursor == len(cli.SAMPLE_CANDIDATES)
    assert [s.swiped_dog_id for s in store.swipes if s.swiper_dog_id == "buddy"] == [
        "luna",
        "zeus",
        "ruby",
    ]


def test_quit_leaves_remaining_dogs(monkeypatch, capsys):
    deck, store = _demo_controller()
    _feed(monkeypatch, ["l", "q"])

    asyncio.run(cli.run(deck))

    assert deck.snapshot().cursor == 1
    assert not deck.is_exhausted()
    assert "Zeus" in capsys.readouterr().out
