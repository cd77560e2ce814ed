"""LedgerGateway protocol - the single synchronous call to the ledger service."""

from __future__ import annotations

from typing import Any, Protocol

from fula_pinning_gateway.models.pinning import ManifestBatchUploadRequest
from fula_pinning_gateway.models.records import LedgerReply


class LedgerGateway(Protocol):
    """Submits manifest batches to the ledger HTTP API."""

    async def call(self, method: str, action: str, payload: Any) -> LedgerReply:
        """Send ``payload`` as JSON to ``action``. Raises UpstreamError on failure."""
        ...

    async def submit_batch(self, request: ManifestBatchUploadRequest) -> LedgerReply:
        """POST a manifest batch to the batch upload action."""
        ...
