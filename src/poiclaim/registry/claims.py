"""
Claim registry: at most one owner per POI.

Every operation runs under a single process-wide lock. Operations are
plain dictionary lookups and mutations with no I/O, so the lock is never
held across an await and is safe to use from both sync and async callers.
"""

import logging
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Optional

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class ClaimStatus(str, Enum):
    """Outcome of a claim or release attempt."""

    ACCEPTED = "accepted"
    ALREADY_CLAIMED = "already_claimed"
    RELEASED = "released"
    NOT_CLAIMED = "not_claimed"
    NOT_OWNER = "not_owner"


@dataclass(frozen=True)
class Claim:
    """Current ownership of a POI."""

    owner: str
    acquired_at: float  # clock seconds

    def age(self, now: float) -> float:
        """Seconds since the claim was acquired."""
        return max(0.0, now - self.acquired_at)

    def is_owned_by(self, name: str) -> bool:
        """Case-insensitive owner comparison."""
        return self.owner.casefold() == name.casefold()


@dataclass(frozen=True)
class ClaimResult:
    """
    Result of `try_claim` / `try_release`.

    For rejections `owner` and `age` describe the existing claim. For
    ACCEPTED and RELEASED `owner` is the player who made the request.
    """

    status: ClaimStatus
    poi_id: str
    owner: Optional[str] = None
    age: Optional[float] = None

    @property
    def ok(self) -> bool:
        return self.status in (ClaimStatus.ACCEPTED, ClaimStatus.RELEASED)


class ClaimRegistry:
    """
    Thread-safe mapping of POI id to its current claim.

    Args:
        clock: Monotonic time source in seconds (injectable for tests)
    """

    def __init__(self, clock: Clock = time.monotonic):
        self._clock = clock
        self._claims: dict[str, Claim] = {}
        self._lock = threading.Lock()

    def now(self) -> float:
        return self._clock()

    def try_claim(self, poi_id: str, owner: str, now: Optional[float] = None) -> ClaimResult:
        """Create a claim iff the POI is currently unclaimed."""
        with self._lock:
            now = self._clock() if now is None else now
            existing = self._claims.get(poi_id)
            if existing is not None:
                return ClaimResult(
                    status=ClaimStatus.ALREADY_CLAIMED,
                    poi_id=poi_id,
                    owner=existing.owner,
                    age=existing.age(now),
                )
            self._claims[poi_id] = Claim(owner=owner, acquired_at=now)

        logger.info(f"{owner} claimed {poi_id}")
        return ClaimResult(status=ClaimStatus.ACCEPTED, poi_id=poi_id, owner=owner, age=0.0)

    def try_release(self, poi_id: str, requester: str, now: Optional[float] = None) -> ClaimResult:
        """Destroy the claim iff it exists and belongs to `requester`."""
        with self._lock:
            now = self._clock() if now is None else now
            existing = self._claims.get(poi_id)
            if existing is None:
                return ClaimResult(status=ClaimStatus.NOT_CLAIMED, poi_id=poi_id)
            if not existing.is_owned_by(requester):
                return ClaimResult(
                    status=ClaimStatus.NOT_OWNER,
                    poi_id=poi_id,
                    owner=existing.owner,
                    age=existing.age(now),
                )
            del self._claims[poi_id]

        logger.info(f"{requester} released {poi_id}")
        return ClaimResult(
            status=ClaimStatus.RELEASED,
            poi_id=poi_id,
            owner=requester,
            age=existing.age(now),
        )

    def status(self, poi_id: str) -> Optional[Claim]:
        """Current claim on a POI, if any."""
        with self._lock:
            return self._claims.get(poi_id)

    def list_available(self, all_ids: Iterable[str], excluded_ids: Iterable[str] = ()) -> list[str]:
        """Unclaimed, non-excluded ids in the order given by `all_ids`."""
        excluded = set(excluded_ids)
        with self._lock:
            return [
                poi_id
                for poi_id in all_ids
                if poi_id not in excluded and poi_id not in self._claims
            ]

    def sweep_expired(self, ttl: float, now: Optional[float] = None) -> list[tuple[str, Claim]]:
        """
        Remove and return every claim at least `ttl` seconds old.

        Args:
            ttl: Time-to-live in seconds
            now: Observation time (defaults to the registry clock)
        """
        if ttl < 0:
            raise ValueError(f"TTL must be non-negative, got {ttl}")

        with self._lock:
            now = self._clock() if now is None else now
            expired = [
                (poi_id, claim)
                for poi_id, claim in self._claims.items()
                if now - claim.acquired_at >= ttl
            ]
            for poi_id, _ in expired:
                del self._claims[poi_id]

        return expired

    def snapshot(self) -> dict[str, Claim]:
        """Consistent copy of all current claims."""
        with self._lock:
            return dict(self._claims)

    def __len__(self) -> int:
        with self._lock:
            return len(self._claims)
