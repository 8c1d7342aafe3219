"""
POI Claim - claim arbitration for DayZ points of interest.

A webhook service that:
- Resolves free-text POI references from in-game chat to catalog entries
- Grants exclusive, time-bounded claims on POIs to players
- Expires stale claims in the background and announces them in chat
- Optionally gates claims on the player's distance to the POI
"""

__version__ = "0.1.0"
