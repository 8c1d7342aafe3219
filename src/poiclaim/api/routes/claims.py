"""
Read-only claim state API.

Provides endpoints for:
- Listing every POI with its current claim
- Looking up a single POI by any phrase the chat resolver accepts
"""

from typing import Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from poiclaim.api.deps import Catalog, Registry, Resolver
from poiclaim.catalog import POI
from poiclaim.registry import Claim

router = APIRouter(prefix="/claims", tags=["claims"])


# ========== Response Models ==========


class ClaimState(BaseModel):
    """Claim state of one POI."""

    poi_id: str
    display_name: str
    excluded: bool
    claimed: bool
    owner: Optional[str] = None
    age_seconds: Optional[float] = Field(default=None, ge=0.0)


class ClaimListResponse(BaseModel):
    """Response for the claim listing endpoint."""

    items: list[ClaimState]
    total: int
    claimed: int


def _state(poi: POI, claim: Optional[Claim], now: float) -> ClaimState:
    return ClaimState(
        poi_id=poi.id,
        display_name=poi.display_name,
        excluded=poi.excluded,
        claimed=claim is not None,
        owner=claim.owner if claim else None,
        age_seconds=round(claim.age(now), 1) if claim else None,
    )


# ========== Endpoints ==========


@router.get("", response_model=ClaimListResponse)
async def list_claims(catalog: Catalog, registry: Registry):
    """Every POI in catalog order with its current claim."""
    claims = registry.snapshot()
    now = registry.now()
    items = [_state(poi, claims.get(poi.id), now) for poi in catalog]
    return ClaimListResponse(items=items, total=len(items), claimed=len(claims))


@router.get("/{phrase}", response_model=ClaimState)
async def get_claim(phrase: str, catalog: Catalog, registry: Registry, resolver: Resolver):
    """Resolve a POI phrase and return its claim state."""
    poi_id = resolver.resolve(phrase)
    if poi_id is None:
        raise HTTPException(status_code=404, detail=f"Unknown POI: {phrase}")
    return _state(catalog[poi_id], registry.status(poi_id), registry.now())
