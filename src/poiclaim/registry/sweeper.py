"""
Background expiry of stale claims.

The sweeper wakes up every `interval_seconds`, evicts claims older than
the TTL and announces each eviction in chat. Eviction happens first; a
failed announcement is logged and the claim stays evicted.
"""

import asyncio
import logging
from contextlib import suppress
from typing import Optional

from poiclaim.commands import messages
from poiclaim.gameserver.base import MessageChannel, deliver
from poiclaim.registry.claims import Claim, ClaimRegistry

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 60 * 60
DEFAULT_SWEEP_INTERVAL_SECONDS = 60


class ExpirySweeper:
    """Periodic task that evicts expired claims from a registry."""

    def __init__(
        self,
        registry: ClaimRegistry,
        channel: MessageChannel,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        interval_seconds: float = DEFAULT_SWEEP_INTERVAL_SECONDS,
    ):
        if ttl_seconds < 0:
            raise ValueError(f"TTL must be non-negative, got {ttl_seconds}")
        if interval_seconds <= 0:
            raise ValueError(f"Sweep interval must be positive, got {interval_seconds}")

        self.registry = registry
        self.channel = channel
        self.ttl_seconds = ttl_seconds
        self.interval_seconds = interval_seconds
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def sweep_once(self) -> list[tuple[str, Claim]]:
        """
        Run a single sweep.

        Returns:
            The evicted (poi_id, claim) pairs
        """
        evicted = self.registry.sweep_expired(self.ttl_seconds)

        for index, (poi_id, claim) in enumerate(evicted):
            logger.info(f"Claim on {poi_id} by {claim.owner} expired")
            try:
                await deliver(self.channel, messages.claim_expired(poi_id, claim.owner))
            except asyncio.CancelledError:
                dropped = ", ".join(p for p, _ in evicted[index:])
                logger.warning(f"Sweep cancelled; expiry notices not sent for: {dropped}")
                raise

        return evicted

    async def run(self) -> None:
        """Sweep forever at the configured interval."""
        logger.info(
            f"Starting claim expiry sweeper "
            f"(ttl: {self.ttl_seconds}s, interval: {self.interval_seconds}s)"
        )

        while True:
            await asyncio.sleep(self.interval_seconds)
            try:
                evicted = await self.sweep_once()
                if evicted:
                    logger.info(f"Sweep evicted {len(evicted)} claim(s)")
            except Exception as e:
                logger.exception(f"Claim sweep failed: {e}")

    def start(self) -> None:
        """Schedule the sweep loop on the running event loop."""
        if self.running:
            return
        self._task = asyncio.create_task(self.run(), name="claim-expiry-sweeper")

    async def stop(self) -> None:
        """Cancel the sweep loop and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        with suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("Claim expiry sweeper stopped")
