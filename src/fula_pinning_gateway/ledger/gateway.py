"""HTTP ledger gateway - one bounded JSON call per pin request."""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from fula_pinning_gateway.errors import UpstreamError
from fula_pinning_gateway.models.pinning import ManifestBatchUploadRequest
from fula_pinning_gateway.models.records import LedgerReply

log = logging.getLogger(__name__)

BATCH_UPLOAD_ACTION = "fula-manifest-batch_upload"


class HttpLedgerGateway:
    """Talks to the ledger's HTTP API.

    Every call is a single attempt bounded by ``timeout``. Any failure,
    including a non-2xx reply, raises UpstreamError; a returned LedgerReply
    is always a success whose body may be parsed.
    """

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:4000",
        timeout: float = 10.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    def _url(self, action: str) -> str:
        return f"{self._base_url}/{action.lstrip('/')}"

    async def call(self, method: str, action: str, payload: Any) -> LedgerReply:
        try:
            body = json.dumps(payload).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise UpstreamError(f"failed to encode ledger payload: {exc}") from exc

        url = self._url(action)
        log.debug("Ledger %s %s (%d bytes)", method, url, len(body))
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.request(
                    method,
                    url,
                    content=body,
                    headers={"Content-Type": "application/json"},
                )
        except httpx.TimeoutException as exc:
            log.error("Ledger call %s timed out after %ss", action, self._timeout)
            raise UpstreamError(f"ledger timeout: {exc}") from exc
        except httpx.HTTPError as exc:
            log.error("Ledger call %s failed: %s", action, exc)
            raise UpstreamError(f"ledger unreachable: {exc}") from exc

        reply = LedgerReply(body=resp.content, status_code=resp.status_code)
        if not reply.ok:
            log.error(
                "Ledger call %s returned HTTP %d: %s",
                action, resp.status_code, resp.text[:200],
            )
            raise UpstreamError(
                f"ledger returned HTTP {resp.status_code}",
                status_code=resp.status_code,
            )
        return reply

    async def submit_batch(self, request: ManifestBatchUploadRequest) -> LedgerReply:
        log.info(
            "Submitting manifest batch: pool=%d cids=%d", request.pool_id, len(request.cid),
        )
        return await self.call("POST", BATCH_UPLOAD_ACTION, request.to_json())
