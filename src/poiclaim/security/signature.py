"""
CFTools Hephaistos webhook signature verification.

Each delivery carries:
- X-Hephaistos-Delivery: unique delivery id
- X-Hephaistos-Signature: sha256 hex digest of (delivery id + shared secret)
"""

import hashlib
import hmac
import logging
from typing import Optional

from fastapi import HTTPException, Request, status

from poiclaim.config import settings

logger = logging.getLogger(__name__)

DELIVERY_HEADER = "X-Hephaistos-Delivery"
SIGNATURE_HEADER = "X-Hephaistos-Signature"
EVENT_HEADER = "X-Hephaistos-Event"


def compute_signature(delivery_id: str, secret: str) -> str:
    """Expected signature for a delivery."""
    return hashlib.sha256(f"{delivery_id}{secret}".encode()).hexdigest()


def verify_signature(delivery_id: Optional[str], signature: Optional[str], secret: str) -> bool:
    """Constant-time check of a delivery signature."""
    if not delivery_id or not signature or not secret:
        return False
    expected = compute_signature(delivery_id, secret)
    return hmac.compare_digest(signature.strip().lower(), expected)


class WebhookVerifier:
    """
    FastAPI dependency that rejects unsigned or forged webhook calls.

    With no secret configured, verification is skipped (development only;
    production settings refuse to start without a secret).
    """

    def __init__(self, secret: Optional[str] = None):
        self._secret = secret

    @property
    def secret(self) -> str:
        """Explicit secret, or the configured one (read per call)."""
        return settings.cf_webhook_secret if self._secret is None else self._secret

    async def __call__(self, request: Request) -> None:
        if not self.secret:
            logger.debug("Webhook secret not configured, skipping signature check")
            return

        delivery_id = request.headers.get(DELIVERY_HEADER)
        signature = request.headers.get(SIGNATURE_HEADER)
        if not verify_signature(delivery_id, signature, self.secret):
            logger.warning(
                f"Rejected webhook with invalid signature "
                f"from {request.client.host if request.client else 'unknown'}"
            )
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid signature")
