"""
Chat command interpreter.

Turns one chat line into at most one registry operation and a response
line. Intents are mutually exclusive and matched in priority order:

1. "check claims"    - list available POIs
2. "check <poi>"     - show who holds a POI
3. "claim <poi>"     - claim a POI
4. "unclaim <poi>"   - release a POI you hold
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from poiclaim.catalog import POICatalog
from poiclaim.commands import messages
from poiclaim.gameserver.proximity import ProximityOracle
from poiclaim.registry.claims import ClaimRegistry, ClaimStatus
from poiclaim.resolution import NameResolver, normalize_text

logger = logging.getLogger(__name__)

_PHRASE = r"([a-z0-9_ -]+)\b"

CHECK_CLAIMS_REGEX = re.compile(r"\bcheck claims\b")
CHECK_POI_REGEX = re.compile(r"\bcheck\s+" + _PHRASE)
CLAIM_REGEX = re.compile(r"\bclaim\s+" + _PHRASE)
UNCLAIM_REGEX = re.compile(r"\bunclaim\s+" + _PHRASE)


class Intent(str, Enum):
    """What a chat line asks for."""

    LIST_AVAILABLE = "list_available"
    QUERY = "query"
    CLAIM = "claim"
    UNCLAIM = "unclaim"
    NONE = "none"


@dataclass(frozen=True)
class Command:
    """A parsed chat command."""

    intent: Intent
    phrase: Optional[str] = None


def parse_command(message: str) -> Command:
    """Extract the intent and raw POI phrase from a chat line."""
    text = normalize_text(message or "")

    if CHECK_CLAIMS_REGEX.search(text):
        return Command(Intent.LIST_AVAILABLE)

    for intent, pattern in (
        (Intent.QUERY, CHECK_POI_REGEX),
        (Intent.CLAIM, CLAIM_REGEX),
        (Intent.UNCLAIM, UNCLAIM_REGEX),
    ):
        match = pattern.search(text)
        if match:
            phrase = match.group(1).strip(" -")
            if phrase:
                return Command(intent, phrase)

    return Command(Intent.NONE)


class CommandInterpreter:
    """
    Executes chat commands against the claim registry.

    Stateless across calls; all shared state lives in the registry.
    """

    def __init__(
        self,
        catalog: POICatalog,
        resolver: NameResolver,
        registry: ClaimRegistry,
        proximity: Optional[ProximityOracle] = None,
    ):
        self.catalog = catalog
        self.resolver = resolver
        self.registry = registry
        self.proximity = proximity

    async def handle(self, player_name: str, message: str) -> Optional[str]:
        """
        Handle one chat line.

        Returns:
            The response to broadcast, or None if the line is not a command
        """
        command = parse_command(message)
        if command.intent is Intent.NONE:
            return None

        logger.debug(f"{player_name}: {command.intent.value} {command.phrase or ''}".rstrip())

        if command.intent is Intent.LIST_AVAILABLE:
            return self.list_available()

        poi_id = self.resolver.resolve(command.phrase)
        if poi_id is None:
            logger.info(f"{player_name} referenced unknown POI '{command.phrase}'")
            return messages.invalid_poi(command.phrase)

        if command.intent is Intent.QUERY:
            return self.query(poi_id)
        if command.intent is Intent.CLAIM:
            return await self.claim(player_name, poi_id)
        return self.unclaim(player_name, poi_id)

    def list_available(self) -> str:
        available = self.registry.list_available(self.catalog.ids, self.catalog.excluded_ids)
        return messages.available_pois(self.catalog.display_name(poi_id) for poi_id in available)

    def query(self, poi_id: str) -> str:
        claim = self.registry.status(poi_id)
        if claim is None:
            return messages.poi_available(poi_id)
        return messages.claim_status(poi_id, claim.owner, claim.age(self.registry.now()))

    async def claim(self, player_name: str, poi_id: str) -> str:
        if self.proximity is not None:
            check = await self.proximity.check(player_name, poi_id)
            if not check.allowed:
                logger.info(f"{player_name} failed proximity check for {poi_id}")
                return check.message

        result = self.registry.try_claim(poi_id, player_name)
        if result.status is ClaimStatus.ALREADY_CLAIMED:
            return messages.already_claimed(poi_id, result.owner, result.age)
        return messages.claimed(player_name, poi_id)

    def unclaim(self, player_name: str, poi_id: str) -> str:
        result = self.registry.try_release(poi_id, player_name)
        if result.status is ClaimStatus.NOT_CLAIMED:
            return messages.not_claimed(poi_id)
        if result.status is ClaimStatus.NOT_OWNER:
            return messages.not_owner(poi_id, result.owner)
        return messages.unclaimed(player_name, poi_id)
