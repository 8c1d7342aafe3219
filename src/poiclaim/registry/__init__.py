"""
Claim state: the registry and its expiry sweeper.
"""

from poiclaim.registry.claims import (
    Claim,
    ClaimRegistry,
    ClaimResult,
    ClaimStatus,
    Clock,
)
from poiclaim.registry.sweeper import (
    DEFAULT_SWEEP_INTERVAL_SECONDS,
    DEFAULT_TTL_SECONDS,
    ExpirySweeper,
)

__all__ = [
    "Claim",
    "ClaimRegistry",
    "ClaimResult",
    "ClaimStatus",
    "Clock",
    "DEFAULT_SWEEP_INTERVAL_SECONDS",
    "DEFAULT_TTL_SECONDS",
    "ExpirySweeper",
]
