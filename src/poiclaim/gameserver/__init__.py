"""
Game server integration (CFTools Data API).

- Base: outbound message channel contract
- Client: authenticated CFTools API client
- Proximity: player-to-POI distance checks
"""

from poiclaim.gameserver.base import (
    DeliveryError,
    LoggingMessageChannel,
    MessageChannel,
    deliver,
)
from poiclaim.gameserver.client import (
    CFToolsAuthError,
    CFToolsClient,
    CFToolsError,
    CFToolsMessageChannel,
)
from poiclaim.gameserver.proximity import (
    DEFAULT_RADIUS_M,
    ProximityChecker,
    ProximityOracle,
    ProximityResult,
    ground_distance,
)
from poiclaim.gameserver.rate_limiter import RateLimitConfig, RateLimitedClient, RateLimiter

__all__ = [
    # Base
    "DeliveryError",
    "LoggingMessageChannel",
    "MessageChannel",
    "deliver",
    # CFTools
    "CFToolsAuthError",
    "CFToolsClient",
    "CFToolsError",
    "CFToolsMessageChannel",
    # Proximity
    "DEFAULT_RADIUS_M",
    "ProximityChecker",
    "ProximityOracle",
    "ProximityResult",
    "ground_distance",
    # Rate limiting
    "RateLimitConfig",
    "RateLimitedClient",
    "RateLimiter",
]
