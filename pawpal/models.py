"""Candidate, decision and acknowledgement models for the swipe deck."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


class Direction(str, Enum):
    LIKE = "right"
    DISLIKE = "left"


class SwipeSource(str, Enum):
    BUTTON = "button"
    DRAG = "drag"


@dataclass(frozen=True)
class Candidate:
    candidate_id: str
    name: Optional[str] = None
    age: Optional[int] = None
    breed: Optional[str] = None
    photos: tuple[str, ...] = ()
    compatibility_score: Optional[float] = None

    gender: Optional[str] = None
    size: Optional[str] = None
    bio: Optional[str] = None

    def __post_init__(self) -> None:
        """Normalize the identifier and freeze photos into a tuple."""
        object.__setattr__(self, "candidate_id", str(self.candidate_id).strip())
        object.__setattr__(self, "photos", tuple(self.photos))

    @classmethod
    def from_api(cls, payload: dict) -> "Candidate":
        """Build a candidate from a discover API record.

        Args:
            payload: Dog record as returned by ``/api/dogs/discover``.

        Returns:
            Parsed Candidate.
        """
        if "id" not in payload and "candidate_id" not in payload:
            raise ValueError("Candidate payload is missing 'id'.")
        score = payload.get("compatibilityScore", payload.get("compatibility_score"))
        age = payload.get("age")
        return cls(
            candidate_id=payload.get("id", payload.get("candidate_id")),
            name=payload.get("name"),
            age=int(age) if age is not None else None,
            breed=payload.get("breed"),
            photos=tuple(str(p) for p in (payload.get("photos") or [])),
            compatibility_score=float(score) if score is not None else None,
            gender=payload.get("gender"),
            size=payload.get("size"),
            bio=payload.get("bio"),
        )

    @property
    def primary_photo(self) -> str | None:
        return self.photos[0] if self.photos else None

    def __str__(self) -> str:
        """Return a one-line card summary."""

        def fmt(v):
            return v if v is not None else "--"

        score = (
            f"{self.compatibility_score:.0f}% match"
            if self.compatibility_score is not None
            else "--"
        )
        return (
            f"{fmt(self.name)} ({fmt(self.breed)}, {fmt(self.age)} yrs) "
            f"| {score} | {len(self.photos)} photos"
        )


@dataclass(frozen=True)
class SwipeDecision:
    candidate_id: str
    direction: Direction
    source: SwipeSource = SwipeSource.BUTTON
    decision_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    @property
    def is_like(self) -> bool:
        return self.direction is Direction.LIKE


@dataclass(frozen=True)
class SwipeAck:
    is_match: bool = False
    matched_candidate_id: Optional[str] = None
    match_id: Optional[str] = None

    @classmethod
    def from_api(cls, payload: dict | None) -> "SwipeAck":
        """Build an acknowledgement from a ``POST /api/swipes`` response body.

        The server only includes a ``match`` object when the like was mutual.
        """
        match = (payload or {}).get("match")
        if not match:
            return cls(is_match=False)
        return cls(
            is_match=True,
            matched_candidate_id=match.get("dog2Id"),
            match_id=match.get("id"),
        )
