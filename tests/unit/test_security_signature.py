"""
Unit tests for webhook signature verification.

Tests:
- Signature computation
- Constant-time verification
- FastAPI verifier dependency
"""

import hashlib
from unittest.mock import MagicMock

import pytest
from fastapi import HTTPException

from poiclaim.security import (
    DELIVERY_HEADER,
    SIGNATURE_HEADER,
    WebhookVerifier,
    compute_signature,
    verify_signature,
)


def make_request(headers: dict) -> MagicMock:
    request = MagicMock()
    request.headers = headers
    request.client.host = "203.0.113.7"
    return request


class TestSignature:
    """Tests for signature helpers."""

    def test_compute_signature(self):
        expected = hashlib.sha256(b"delivery-1s3cret").hexdigest()
        assert compute_signature("delivery-1", "s3cret") == expected

    def test_verify_valid(self):
        signature = compute_signature("delivery-1", "s3cret")
        assert verify_signature("delivery-1", signature, "s3cret")

    def test_verify_ignores_case_and_whitespace(self):
        signature = compute_signature("delivery-1", "s3cret").upper()
        assert verify_signature("delivery-1", f" {signature} ", "s3cret")

    def test_verify_wrong_secret(self):
        signature = compute_signature("delivery-1", "other")
        assert not verify_signature("delivery-1", signature, "s3cret")

    def test_verify_replayed_signature_for_other_delivery(self):
        signature = compute_signature("delivery-1", "s3cret")
        assert not verify_signature("delivery-2", signature, "s3cret")

    @pytest.mark.parametrize(
        "delivery_id,signature,secret",
        [(None, "abc", "s3cret"), ("delivery-1", None, "s3cret"), ("delivery-1", "abc", "")],
    )
    def test_verify_missing_input(self, delivery_id, signature, secret):
        assert not verify_signature(delivery_id, signature, secret)


class TestWebhookVerifier:
    """Tests for the FastAPI verifier dependency."""

    @pytest.mark.asyncio
    async def test_accepts_valid_request(self):
        verifier = WebhookVerifier(secret="s3cret")
        request = make_request({
            DELIVERY_HEADER: "delivery-1",
            SIGNATURE_HEADER: compute_signature("delivery-1", "s3cret"),
        })

        assert await verifier(request) is None

    @pytest.mark.asyncio
    async def test_rejects_missing_signature(self):
        verifier = WebhookVerifier(secret="s3cret")

        with pytest.raises(HTTPException) as exc_info:
            await verifier(make_request({DELIVERY_HEADER: "delivery-1"}))

        assert exc_info.value.status_code == 403

    @pytest.mark.asyncio
    async def test_skips_without_secret(self):
        verifier = WebhookVerifier(secret="")
        assert await verifier(make_request({})) is None

    def test_reads_configured_secret(self, monkeypatch):
        from poiclaim.config import settings

        monkeypatch.setattr(settings, "cf_webhook_secret", "from-env")
        assert WebhookVerifier().secret == "from-env"
