"""
API route modules.
"""

from poiclaim.api.routes.claims import router as claims_router
from poiclaim.api.routes.webhook import router as webhook_router

__all__ = [
    "claims_router",
    "webhook_router",
]
