"""
User-facing chat responses.
"""

from typing import Iterable


def format_age(seconds: float) -> str:
    """Render an age in whole minutes."""
    minutes = int(seconds // 60)
    if minutes < 1:
        return "less than a minute"
    if minutes == 1:
        return "1 minute"
    return f"{minutes} minutes"


def invalid_poi(phrase: str) -> str:
    return f"Invalid POI: {phrase}. Try 'check claims' to see available POIs."


def available_pois(display_names: Iterable[str]) -> str:
    names = list(display_names)
    if not names:
        return "All POIs are currently claimed."
    return f"Available POIs: {', '.join(names)}"


def claimed(player: str, poi_id: str) -> str:
    return f"{player} claimed {poi_id}."


def already_claimed(poi_id: str, owner: str, age: float) -> str:
    return f"{poi_id} was already claimed by {owner} {format_age(age)} ago."


def unclaimed(player: str, poi_id: str) -> str:
    return f"{player} unclaimed {poi_id}."


def not_claimed(poi_id: str) -> str:
    return f"{poi_id} is not currently claimed."


def not_owner(poi_id: str, owner: str) -> str:
    return f"You cannot unclaim {poi_id}. It was claimed by {owner}."


def claim_status(poi_id: str, owner: str, age: float) -> str:
    return f"{poi_id} is claimed by {owner} ({format_age(age)} ago)."


def poi_available(poi_id: str) -> str:
    return f"{poi_id} is available."


def claim_expired(poi_id: str, owner: str) -> str:
    return f"{owner}'s claim on {poi_id} has expired. {poi_id} is available again."
