"""
Tests for chat command parsing and execution.
"""

from unittest.mock import AsyncMock

import pytest

from poiclaim.commands import CommandInterpreter, Intent, parse_command
from poiclaim.commands.messages import format_age
from poiclaim.gameserver import ProximityResult
from poiclaim.resolution import NameResolver


def available(response: str) -> list[str]:
    prefix = "Available POIs: "
    assert response.startswith(prefix)
    return response[len(prefix):].split(", ")


class TestParseCommand:
    """Tests for intent extraction."""

    @pytest.mark.parametrize(
        "message,intent,phrase",
        [
            ("check claims", Intent.LIST_AVAILABLE, None),
            ("Check Claims please", Intent.LIST_AVAILABLE, None),
            ("check tisy", Intent.QUERY, "tisy"),
            ("claim tisy", Intent.CLAIM, "tisy"),
            ("CLAIM Oil Rig", Intent.CLAIM, "oil rig"),
            ("I claim the oil rig!", Intent.CLAIM, "the oil rig"),
            ("unclaim tisy", Intent.UNCLAIM, "tisy"),
            ("hello there", Intent.NONE, None),
            ("reclaim tisy", Intent.NONE, None),
            ("claim", Intent.NONE, None),
            ("check  claims", Intent.LIST_AVAILABLE, None),
            ("check\tclaims", Intent.LIST_AVAILABLE, None),
            ("  CHECK \n CLAIMS  ", Intent.LIST_AVAILABLE, None),
            ("claim   oil    rig", Intent.CLAIM, "oil rig"),
            ("unclaim\ttisy", Intent.UNCLAIM, "tisy"),
            ("", Intent.NONE, None),
        ],
    )
    def test_parse(self, message, intent, phrase):
        command = parse_command(message)
        assert command.intent == intent
        assert command.phrase == phrase

    def test_check_claims_wins_over_claim(self):
        assert parse_command("check claims and claim tisy").intent == Intent.LIST_AVAILABLE

    def test_query_wins_over_claim(self):
        command = parse_command("check tisy then claim balota")
        assert command.intent == Intent.QUERY

    def test_claim_wins_over_unclaim(self):
        command = parse_command("unclaim tisy, claim balota")
        assert command.intent == Intent.CLAIM
        assert command.phrase == "balota"


class TestFormatAge:
    """Tests for age rendering."""

    @pytest.mark.parametrize(
        "seconds,expected",
        [(0, "less than a minute"), (59, "less than a minute"), (60, "1 minute"), (150, "2 minutes")],
    )
    def test_format_age(self, seconds, expected):
        assert format_age(seconds) == expected


class TestCommandInterpreter:
    """Tests for command execution against the registry."""

    @pytest.mark.asyncio
    async def test_not_a_command(self, interpreter, registry):
        assert await interpreter.handle("Alice", "anyone at tisy?") is None
        assert len(registry) == 0

    @pytest.mark.asyncio
    async def test_claim(self, interpreter, registry):
        response = await interpreter.handle("Alice", "claim tisy")

        assert response == "Alice claimed Tisy Power Plant T4."
        assert registry.status("Tisy Power Plant T4").owner == "Alice"

    @pytest.mark.asyncio
    async def test_claim_already_claimed(self, interpreter, clock):
        await interpreter.handle("Alice", "claim tisy")
        clock.advance(125)

        response = await interpreter.handle("Bob", "claim tisy power")

        assert response == "Tisy Power Plant T4 was already claimed by Alice 2 minutes ago."

    @pytest.mark.asyncio
    async def test_invalid_poi(self, interpreter, registry):
        response = await interpreter.handle("Alice", "claim qwerty")
        assert response == "Invalid POI: qwerty. Try 'check claims' to see available POIs."
        assert len(registry) == 0

    @pytest.mark.asyncio
    async def test_unclaim_by_owner(self, interpreter, registry):
        await interpreter.handle("Alice", "claim tisy")

        response = await interpreter.handle("alice", "unclaim tisy")

        assert response == "alice unclaimed Tisy Power Plant T4."
        assert registry.status("Tisy Power Plant T4") is None

    @pytest.mark.asyncio
    async def test_unclaim_by_other_player(self, interpreter, registry):
        await interpreter.handle("Alice", "claim tisy")

        response = await interpreter.handle("Bob", "unclaim tisy")

        assert response == "You cannot unclaim Tisy Power Plant T4. It was claimed by Alice."
        assert registry.status("Tisy Power Plant T4").owner == "Alice"

    @pytest.mark.asyncio
    async def test_unclaim_unclaimed(self, interpreter):
        response = await interpreter.handle("Alice", "unclaim tisy")
        assert response == "Tisy Power Plant T4 is not currently claimed."

    @pytest.mark.asyncio
    async def test_query(self, interpreter, clock):
        assert await interpreter.handle("Bob", "check balota") == "Balota Warehouse T1 is available."

        await interpreter.handle("Alice", "claim balota")
        clock.advance(60)

        assert (
            await interpreter.handle("Bob", "check balota")
            == "Balota Warehouse T1 is claimed by Alice (1 minute ago)."
        )

    @pytest.mark.asyncio
    async def test_list_available(self, interpreter, catalog):
        response = await interpreter.handle("Alice", "check claims")

        names = available(response)
        assert names[0] == "Sinystok Bunker"
        assert "Tisy" in names
        assert len(names) == len(catalog)

    @pytest.mark.asyncio
    async def test_list_with_irregular_whitespace(self, interpreter, catalog):
        response = await interpreter.handle("Alice", "check\t  claims")
        assert len(available(response)) == len(catalog)

    @pytest.mark.asyncio
    async def test_list_omits_claimed(self, interpreter):
        await interpreter.handle("Alice", "claim tisy")

        names = available(await interpreter.handle("Bob", "check claims"))

        assert "Tisy" not in names
        assert "Balota" in names

    @pytest.mark.asyncio
    async def test_list_omits_excluded(self, small_catalog, registry):
        interpreter = CommandInterpreter(small_catalog, NameResolver(small_catalog), registry)

        names = available(await interpreter.handle("Alice", "check claims"))

        assert names == ["Tisy", "Balota"]

    @pytest.mark.asyncio
    async def test_excluded_poi_is_claimable(self, small_catalog, registry):
        interpreter = CommandInterpreter(small_catalog, NameResolver(small_catalog), registry)
        response = await interpreter.handle("Alice", "claim airdrop")
        assert response == "Alice claimed Airdrop (Active Now)."

    @pytest.mark.asyncio
    async def test_all_claimed(self, small_catalog, registry):
        interpreter = CommandInterpreter(small_catalog, NameResolver(small_catalog), registry)
        await interpreter.handle("Alice", "claim tisy")
        await interpreter.handle("Bob", "claim balota")

        response = await interpreter.handle("Carol", "check claims")

        assert response == "All POIs are currently claimed."

    @pytest.mark.asyncio
    async def test_claim_expires_and_reappears(self, interpreter, sweeper, clock):
        assert await interpreter.handle("Alice", "claim tisy") == "Alice claimed Tisy Power Plant T4."
        assert "Tisy" not in available(await interpreter.handle("Bob", "check claims"))

        clock.advance(60 * 60)
        await sweeper.sweep_once()

        assert "Tisy" in available(await interpreter.handle("Bob", "check claims"))
        assert await interpreter.handle("Bob", "claim tisy") == "Bob claimed Tisy Power Plant T4."


class TestProximityGate:
    """Tests for the optional proximity check on claims."""

    @pytest.mark.asyncio
    async def test_denied_claim_does_not_mutate(self, catalog, resolver, registry):
        proximity = AsyncMock()
        proximity.check.return_value = ProximityResult(
            allowed=False, message="Alice is too far from Tisy Power Plant T4 (812.00m). Move closer to claim."
        )
        interpreter = CommandInterpreter(catalog, resolver, registry, proximity=proximity)

        response = await interpreter.handle("Alice", "claim tisy")

        assert response.startswith("Alice is too far from Tisy Power Plant T4")
        assert registry.status("Tisy Power Plant T4") is None
        proximity.check.assert_awaited_once_with("Alice", "Tisy Power Plant T4")

    @pytest.mark.asyncio
    async def test_allowed_claim(self, catalog, resolver, registry):
        proximity = AsyncMock()
        proximity.check.return_value = ProximityResult(allowed=True, distance=120.0)
        interpreter = CommandInterpreter(catalog, resolver, registry, proximity=proximity)

        response = await interpreter.handle("Alice", "claim tisy")

        assert response == "Alice claimed Tisy Power Plant T4."

    @pytest.mark.asyncio
    async def test_unclaim_skips_proximity(self, catalog, resolver, registry):
        proximity = AsyncMock()
        interpreter = CommandInterpreter(catalog, resolver, registry, proximity=proximity)
        registry.try_claim("Tisy Power Plant T4", "Alice")

        await interpreter.handle("Alice", "unclaim tisy")

        proximity.check.assert_not_awaited()
