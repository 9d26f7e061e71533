"""HTTP client for the PawPal discover and swipe endpoints."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import requests

from .deck.config import DEFAULT_MAX_DISTANCE_KM, get_api_base_url
from .errors import SwipeApiError
from .models import Candidate, SwipeAck

logger = logging.getLogger(__name__)

HEADERS = {
    "User-Agent": "pawpal-deck/1.0",
    "Accept": "application/json",
}
REQUEST_TIMEOUT = 30
BOOLEAN_FILTERS = ("vaccinated", "spayedNeutered", "noAllergies")


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"HTTP {response.status_code}"


class SwipeApiClient:
    """Thin wrapper over the discover and swipe endpoints.

    Args:
        swiper_dog_id: The dog whose owner is swiping.
        base_url: API root; defaults to ``PAWPAL_API_BASE_URL``.
        session: Optional requests session, mainly for tests.
    """

    def __init__(
        self,
        swiper_dog_id: str,
        base_url: str | None = None,
        session: requests.Session | None = None,
    ):
        self.swiper_dog_id = swiper_dog_id
        self.base_url = (base_url or get_api_base_url()).rstrip("/")
        self.session = session or requests.Session()

    def _request(self, method: str, path: str, **kwargs) -> object:
        url = f"{self.base_url}{path}"
        try:
            r = self.session.request(
                method, url, headers=HEADERS, timeout=REQUEST_TIMEOUT, **kwargs
            )
        except requests.RequestException as exc:
            raise SwipeApiError(f"{method} {path} failed: {exc}") from exc
        if not r.ok:
            raise SwipeApiError(
                f"{method} {path} failed: {_error_message(r)}",
                status_code=r.status_code,
            )
        try:
            return r.json()
        except ValueError as exc:
            raise SwipeApiError(
                f"{method} {path} returned invalid JSON.", status_code=r.status_code
            ) from exc

    def fetch_candidates(
        self,
        latitude: float,
        longitude: float,
        max_distance: float = DEFAULT_MAX_DISTANCE_KM,
        *,
        age_range: Optional[str] = None,
        size: Optional[str] = None,
        **flags: bool,
    ) -> list[Candidate]:
        """Load the ordered candidate list for the swiping dog.

        Args:
            latitude: Swiper latitude.
            longitude: Swiper longitude.
            max_distance: Search radius.
            age_range: Optional age range filter, e.g. ``"1-3"``.
            size: Optional size filter.
            **flags: Boolean filters (``vaccinated``, ``spayedNeutered``,
                ``noAllergies``).

        Returns:
            Candidates in server order.
        """
        unknown = sorted(set(flags) - set(BOOLEAN_FILTERS))
        if unknown:
            raise ValueError(f"Unknown filters {unknown}. Options: {list(BOOLEAN_FILTERS)}")

        params: dict[str, str] = {
            "dogId": self.swiper_dog_id,
            "latitude": str(latitude),
            "longitude": str(longitude),
            "maxDistance": str(max_distance),
        }
        if age_range:
            params["ageRange"] = age_range
        if size:
            params["size"] = size
        for name in BOOLEAN_FILTERS:
            if flags.get(name):
                params[name] = "true"

        payload = self._request("GET", "/api/dogs/discover", params=params)
        if not isinstance(payload, list):
            raise SwipeApiError("Discover response was not a list.")
        candidates = [Candidate.from_api(item) for item in payload]
        logger.info(f"Fetched {len(candidates)} candidates for {self.swiper_dog_id}.")
        return candidates

    def post_swipe(self, candidate_id: str, is_like: bool, source: str) -> SwipeAck:
        payload = self._request(
            "POST",
            "/api/swipes",
            json={
                "swiperDogId": self.swiper_dog_id,
                "swipedDogId": candidate_id,
                "isLike": is_like,
                "source": source,
            },
        )
        return SwipeAck.from_api(payload if isinstance(payload, dict) else None)

    async def submit_swipe(self, candidate_id: str, is_like: bool, source: str) -> SwipeAck:
        """Post a swipe from the event loop without blocking it."""
        return await asyncio.to_thread(self.post_swipe, candidate_id, is_like, source)
