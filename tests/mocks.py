"""Mock collaborators and fake upstream HTTP services."""

from __future__ import annotations

import json

from aiohttp import web

from fula_pinning_gateway.errors import PinError, UpstreamError
from fula_pinning_gateway.models.pinning import ManifestBatchUploadRequest
from fula_pinning_gateway.models.records import LedgerReply


class MockLedger:
    """Implements LedgerGateway protocol. Accepts every batch by default."""

    def __init__(
        self,
        pool_id: int = 7,
        storer: str = "node-A",
        accepted: list[str] | None = None,
        status_code: int = 200,
        body: bytes | None = None,
    ) -> None:
        self.pool_id = pool_id
        self.storer = storer
        self.accepted = accepted
        self.status_code = status_code
        self.body = body
        self.calls: list[tuple[str, str, object]] = []

    async def call(self, method: str, action: str, payload) -> LedgerReply:
        self.calls.append((method, action, payload))
        if not 200 <= self.status_code < 300:
            raise UpstreamError(
                f"ledger returned HTTP {self.status_code}", status_code=self.status_code,
            )
        if self.body is not None:
            return LedgerReply(body=self.body, status_code=self.status_code)
        cids = self.accepted if self.accepted is not None else payload["cid"]
        reply = {"pool_id": self.pool_id, "storer": self.storer, "cid": cids}
        return LedgerReply(body=json.dumps(reply).encode(), status_code=self.status_code)

    async def submit_batch(self, request: ManifestBatchUploadRequest) -> LedgerReply:
        return await self.call("POST", "fula-manifest-batch_upload", request.to_json())


class MockCluster:
    """Implements ClusterClient protocol."""

    def __init__(self, fail: set[str] | None = None) -> None:
        self.fail = set(fail or ())
        self.pin_calls: list[tuple[str, str]] = []
        self.closed = False

    async def pin(
        self,
        cid: str,
        mode: str = "recursive",
        name: str | None = None,
        replication_factor: int | None = None,
    ) -> dict:
        self.pin_calls.append((cid, mode))
        if cid in self.fail:
            raise PinError(cid, "mock cluster failure")
        return {"cid": cid, "type": "pin"}

    async def close(self) -> None:
        self.closed = True

    @property
    def pinned(self) -> list[str]:
        return [cid for cid, _ in self.pin_calls]


class FakeLedgerService:
    """aiohttp app standing in for the ledger's HTTP API."""

    def __init__(self, pool_id: int = 7, storer: str = "node-A") -> None:
        self.pool_id = pool_id
        self.storer = storer
        self.status = 200
        self.raw_body: str | None = None
        self.requests: list[dict] = []

    async def handle_batch_upload(self, request: web.Request) -> web.Response:
        self.requests.append(await request.json())
        if self.status != 200:
            return web.Response(status=self.status, text="ledger unavailable")
        if self.raw_body is not None:
            return web.Response(text=self.raw_body, content_type="application/json")
        return web.json_response({
            "pool_id": self.pool_id,
            "storer": self.storer,
            "cid": self.requests[-1]["cid"],
        })

    def build_app(self) -> web.Application:
        app = web.Application()
        app.router.add_post("/fula-manifest-batch_upload", self.handle_batch_upload)
        return app


class FakeClusterService:
    """aiohttp app standing in for an IPFS Cluster REST API."""

    def __init__(self) -> None:
        self.fail: set[str] = set()
        self.pins: list[tuple[str, dict]] = []
        self.auth_headers: list[str | None] = []

    async def handle_pin(self, request: web.Request) -> web.Response:
        cid = request.match_info["cid"]
        self.pins.append((cid, dict(request.query)))
        self.auth_headers.append(request.headers.get("Authorization"))
        if cid in self.fail:
            return web.Response(status=500, text="pin error")
        return web.json_response({"cid": cid, "type": "pin", "mode": request.query.get("mode")})

    async def handle_id(self, request: web.Request) -> web.Response:
        return web.json_response({"id": "12D3KooWFakeClusterPeer", "version": "1.1.0"})

    def build_app(self) -> web.Application:
        app = web.Application()
        app.router.add_post("/pins/{cid}", self.handle_pin)
        app.router.add_get("/id", self.handle_id)
        return app
