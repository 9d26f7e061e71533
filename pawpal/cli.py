"""
Terminal host for the PawPal swipe deck:
- Loads candidates from the API, or a bundled sample pack with --demo
- Reads l / r / s / q commands from stdin
- Prints matches and swipe errors as they happen
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os

from dotenv import load_dotenv

from .api_client import SwipeApiClient
from .coachmark import CoachmarkTracker
from .deck.config import DEFAULT_MAX_DISTANCE_KM
from .deck.controller import SwipeDeckController
from .errors import SwipeApiError
from .models import Candidate, Direction
from .swipe_store import InMemorySwipeStore

logger = logging.getLogger(__name__)

DEMO_SWIPER_ID = "buddy"
SAMPLE_CANDIDATES = [
    {"id": "luna", "name": "Luna", "breed": "Corgi", "age": 2, "compatibilityScore": 92},
    {"id": "zeus", "name": "Zeus", "breed": "Siberian Husky", "age": 5, "compatibilityScore": 81},
    {"id": "bella", "name": "Bella", "breed": "Beagle", "age": 1, "compatibilityScore": 88},
    {"id": "charlie", "name": "Charlie", "breed": "Poodle", "age": 6, "compatibilityScore": 74},
    {"id": "ruby", "name": "Ruby", "breed": "Labrador Retriever", "age": 4, "compatibilityScore": 79},
]
# Sample dogs that already liked the demo swiper, so liking them back matches.
SAMPLE_ADMIRERS = ("luna", "ruby")

COMMANDS = {
    "l": "dislike",
    "r": "like",
    "s": "skip",
    "q": "quit",
}


def _demo_deck() -> tuple[list[Candidate], InMemorySwipeStore]:
    store = InMemorySwipeStore()
    for dog_id in SAMPLE_ADMIRERS:
        store.create_swipe(dog_id, DEMO_SWIPER_ID, True, "seed")
    return [Candidate.from_api(item) for item in SAMPLE_CANDIDATES], store


def _print_card(deck: SwipeDeckController) -> None:
    current = deck.get_current_candidate()
    if current is None:
        print("No more dogs nearby. Check back later!")
        return
    upcoming = deck.get_next_candidate()
    print(f"[{deck.progress_percent():.0f}%] {current}")
    if upcoming is not None:
        print(f"    next up: {upcoming.name or upcoming.candidate_id}")


async def run(deck: SwipeDeckController, coachmark: CoachmarkTracker | None = None) -> None:
    """Drive ``deck`` from stdin until it is exhausted or the user quits."""
    if coachmark is not None and coachmark.visible:
        print("Tip: 'r' to like, 'l' to pass, 's' to skip.")
    while not deck.is_exhausted():
        _print_card(deck)
        raw = await asyncio.to_thread(input, "> ")
        command = raw.strip().lower()[:1]
        if command == "q":
            break
        if command == "s":
            deck.skip()
        elif command in ("l", "r"):
            direction = Direction.LIKE if command == "r" else Direction.DISLIKE
            await deck.swipe(direction)
        else:
            print(f"Unknown command {raw!r}. Options: {COMMANDS}")
    _print_card(deck)


def main() -> None:
    """CLI entrypoint for an interactive swipe session."""
    load_dotenv()
    log_level = (os.environ.get("LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(
        level=log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    parser = argparse.ArgumentParser()
    parser.add_argument("--base-url", help="API root (defaults to PAWPAL_API_BASE_URL)")
    parser.add_argument("--dog-id", help="ID of the dog doing the swiping")
    parser.add_argument("--latitude", type=float)
    parser.add_argument("--longitude", type=float)
    parser.add_argument(
        "--max-distance",
        type=float,
        default=DEFAULT_MAX_DISTANCE_KM,
        help="Search radius for candidates",
    )
    parser.add_argument(
        "--demo",
        action="store_true",
        help="Use a bundled sample pack and in-memory swipes instead of the API",
    )
    parser.add_argument(
        "--reset-coachmark",
        action="store_true",
        help="Show the swipe tip again",
    )
    args = parser.parse_args()

    coachmark = CoachmarkTracker()
    if args.reset_coachmark:
        coachmark.reset()
        print("Coachmark reset.")

    if args.demo:
        candidates, store = _demo_deck()
        submit_swipe = store.for_swiper(DEMO_SWIPER_ID)
    else:
        if not args.dog_id or args.latitude is None or args.longitude is None:
            parser.error("--dog-id, --latitude and --longitude are required without --demo")
        client = SwipeApiClient(args.dog_id, base_url=args.base_url)
        try:
            candidates = client.fetch_candidates(
                args.latitude, args.longitude, args.max_distance
            )
        except SwipeApiError as exc:
            logger.error(f"Could not load candidates: {exc}")
            raise SystemExit(1) from exc
        submit_swipe = client.submit_swipe

    deck = SwipeDeckController(
        candidates,
        submit_swipe,
        on_match=lambda dog: print(f"It's a match with {dog.name or dog.candidate_id}!"),
        on_error=lambda message: print(f"Error: {message}"),
        coachmark=coachmark,
    )
    asyncio.run(run(deck, coachmark))


if __name__ == "__main__":
    main()
