"""
Proximity checks: is a player close enough to a POI to claim it?

Distance is measured on the ground plane (x, z); the y axis (altitude) is
ignored.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional, Protocol

from poiclaim.catalog import POICatalog, Position
from poiclaim.gameserver.client import CFToolsClient, CFToolsError

logger = logging.getLogger(__name__)

DEFAULT_RADIUS_M = 500.0


@dataclass(frozen=True)
class ProximityResult:
    """Outcome of a proximity check."""

    allowed: bool
    message: str = ""
    distance: Optional[float] = None


class ProximityOracle(Protocol):
    async def check(self, player_name: str, poi_id: str) -> ProximityResult:
        ...


def ground_distance(pos1: Position, pos2: Position) -> float:
    """2D distance between two [x, y, z] positions, ignoring y."""
    x1, _, z1 = pos1
    x2, _, z2 = pos2
    return math.hypot(x1 - x2, z1 - z2)


class ProximityChecker:
    """Checks player distance to a POI using CFTools live positions."""

    def __init__(
        self,
        client: CFToolsClient,
        catalog: POICatalog,
        radius_m: float = DEFAULT_RADIUS_M,
    ):
        if radius_m <= 0:
            raise ValueError(f"Proximity radius must be positive, got {radius_m}")
        self.client = client
        self.catalog = catalog
        self.radius_m = radius_m

    async def check(self, player_name: str, poi_id: str) -> ProximityResult:
        poi = self.catalog.get(poi_id)
        if poi is None:
            return ProximityResult(allowed=False, message=f"Unknown POI: {poi_id}.")

        # Roaming events and quests have no fixed location
        if poi.position is None:
            return ProximityResult(allowed=True)

        try:
            player_pos = await self.client.get_player_position(player_name)
        except CFToolsError as e:
            logger.error(f"Failed to fetch position for {player_name}: {e}")
            player_pos = None

        if player_pos is None:
            return ProximityResult(
                allowed=False,
                message=f"Unable to retrieve position for {player_name}.",
            )

        distance = ground_distance(player_pos, poi.position)
        logger.info(f"{player_name} distance to {poi_id}: {distance:.2f}m")

        if distance <= self.radius_m:
            return ProximityResult(allowed=True, distance=distance)

        return ProximityResult(
            allowed=False,
            message=f"{player_name} is too far from {poi_id} ({distance:.2f}m). Move closer to claim.",
            distance=distance,
        )
