"""
Service wiring.

Builds the catalog, resolver, registry, outbound channel, proximity oracle,
interpreter and sweeper from settings. The web app builds one set at
startup and stores it on `app.state.services`.
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional

from poiclaim.catalog import POICatalog, load_catalog
from poiclaim.commands import CommandInterpreter
from poiclaim.config import Settings
from poiclaim.gameserver import (
    CFToolsClient,
    CFToolsMessageChannel,
    LoggingMessageChannel,
    MessageChannel,
    ProximityChecker,
)
from poiclaim.registry import ClaimRegistry, Clock, ExpirySweeper
from poiclaim.resolution import NameResolver, SimilarityMetric

logger = logging.getLogger(__name__)


@dataclass
class AppServices:
    """Everything a request handler or background task needs."""

    catalog: POICatalog
    resolver: NameResolver
    registry: ClaimRegistry
    channel: MessageChannel
    interpreter: CommandInterpreter
    sweeper: ExpirySweeper
    cftools: Optional[CFToolsClient] = None

    async def close(self) -> None:
        await self.sweeper.stop()
        await self.channel.close()
        if self.cftools is not None:
            await self.cftools.close()


def build_services(
    settings: Settings,
    clock: Clock = time.monotonic,
    channel: Optional[MessageChannel] = None,
    catalog: Optional[POICatalog] = None,
) -> AppServices:
    """
    Build the service graph.

    Args:
        settings: Application settings
        clock: Registry time source
        channel: Outbound channel override (CFTools or logging by default)
        catalog: Catalog override (loaded from settings by default)
    """
    catalog = catalog or load_catalog(settings.catalog_path)
    resolver = NameResolver(
        catalog,
        threshold=settings.match_threshold,
        metric=SimilarityMetric(settings.similarity_metric),
    )
    registry = ClaimRegistry(clock=clock)

    cftools: Optional[CFToolsClient] = None
    if settings.cftools_configured:
        cftools = CFToolsClient(
            application_id=settings.cftools_application_id,
            application_secret=settings.cftools_application_secret,
            server_api_id=settings.cftools_server_api_id,
            base_url=settings.cftools_base_url,
        )

    if channel is None:
        if cftools is not None:
            channel = CFToolsMessageChannel(cftools)
        else:
            logger.warning("CFTools not configured; chat responses will only be logged")
            channel = LoggingMessageChannel()

    proximity: Optional[ProximityChecker] = None
    if settings.proximity_enabled:
        if cftools is None:
            logger.warning("PROXIMITY_ENABLED is set but CFTools is not configured; proximity checks disabled")
        else:
            proximity = ProximityChecker(cftools, catalog, radius_m=settings.proximity_radius_m)

    interpreter = CommandInterpreter(catalog, resolver, registry, proximity=proximity)
    sweeper = ExpirySweeper(
        registry,
        channel,
        ttl_seconds=settings.claim_ttl_seconds,
        interval_seconds=settings.sweep_interval_seconds,
    )

    return AppServices(
        catalog=catalog,
        resolver=resolver,
        registry=registry,
        channel=channel,
        interpreter=interpreter,
        sweeper=sweeper,
        cftools=cftools,
    )
