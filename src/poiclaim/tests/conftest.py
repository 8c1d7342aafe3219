"""
Pytest configuration and shared fixtures for POI claim tests.
"""

import pytest

from poiclaim.catalog import POI, POICatalog, default_catalog
from poiclaim.commands import CommandInterpreter
from poiclaim.gameserver import LoggingMessageChannel
from poiclaim.registry import ClaimRegistry, ExpirySweeper
from poiclaim.resolution import NameResolver


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def catalog() -> POICatalog:
    """The built-in Chernarus catalog."""
    return default_catalog()


@pytest.fixture
def small_catalog() -> POICatalog:
    """Three POIs, one excluded from listings."""
    return POICatalog([
        POI("Tisy Power Plant T4", ("Tisy",), position=(577.2073, 501.8031, 13668.6054)),
        POI("Balota Warehouse T1", ("Balota",), position=(4941.2353, 9.5147, 2430.8066)),
        POI("Airdrop (Active Now)", ("Airdrop",), excluded=True),
    ])


@pytest.fixture
def resolver(catalog: POICatalog) -> NameResolver:
    return NameResolver(catalog)


@pytest.fixture
def registry(clock: FakeClock) -> ClaimRegistry:
    return ClaimRegistry(clock=clock)


@pytest.fixture
def channel() -> LoggingMessageChannel:
    return LoggingMessageChannel()


@pytest.fixture
def interpreter(catalog: POICatalog, resolver: NameResolver, registry: ClaimRegistry) -> CommandInterpreter:
    return CommandInterpreter(catalog, resolver, registry)


@pytest.fixture
def sweeper(registry: ClaimRegistry, channel: LoggingMessageChannel) -> ExpirySweeper:
    return ExpirySweeper(registry, channel, ttl_seconds=3600, interval_seconds=60)
