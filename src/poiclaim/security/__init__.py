"""
Inbound request security.
"""

from poiclaim.security.signature import (
    DELIVERY_HEADER,
    EVENT_HEADER,
    SIGNATURE_HEADER,
    WebhookVerifier,
    compute_signature,
    verify_signature,
)

__all__ = [
    "DELIVERY_HEADER",
    "EVENT_HEADER",
    "SIGNATURE_HEADER",
    "WebhookVerifier",
    "compute_signature",
    "verify_signature",
]
