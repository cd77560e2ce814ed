"""HTTP surface - wires the pin pipeline into an aiohttp application."""

from __future__ import annotations

import asyncio
import logging
import signal

from aiohttp import web

from fula_pinning_gateway.auth.gate import make_auth_middleware
from fula_pinning_gateway.auth.tokens import StaticTokenAuthorizer
from fula_pinning_gateway.cluster.client import IpfsClusterClient, decode_cid
from fula_pinning_gateway.cluster.orchestrator import ClusterPinOrchestrator
from fula_pinning_gateway.config import parse_listen_addr
from fula_pinning_gateway.errors import AuthError, DecodeError, GatewayError, UpstreamError
from fula_pinning_gateway.interfaces.auth import TokenAuthorizer
from fula_pinning_gateway.interfaces.cluster import CidDecoder, ClusterClient
from fula_pinning_gateway.interfaces.ledger import LedgerGateway
from fula_pinning_gateway.ledger.gateway import HttpLedgerGateway
from fula_pinning_gateway.models.config import GatewayConfig
from fula_pinning_gateway.models.pinning import (
    ManifestBatchUploadRequest,
    ManifestBatchUploadResponse,
    Pin,
    PinStatus,
)
from fula_pinning_gateway.status.reconciler import build_pin_status
from fula_pinning_gateway.translate.manifest import parse_pool_id, translate_pin

log = logging.getLogger(__name__)


def error_response(err: GatewayError) -> web.Response:
    """Render a GatewayError the way the Pinning Service API expects."""
    if isinstance(err, AuthError):
        return web.Response(status=401, text="Unauthorized")
    return web.json_response(err.to_json(), status=err.status)


async def _read_json(request: web.Request):
    try:
        return await request.json()
    except ValueError as exc:
        raise DecodeError(f"invalid JSON body: {exc}") from exc


class PinningGateway:
    """Pinning Service front end for the fula ledger and an IPFS Cluster.

    Owns the collaborators (token authorizer, ledger gateway, cluster
    client) and runs the per-request pipeline:
    auth -> translate -> ledger -> cluster pin loop -> status.
    """

    def __init__(
        self,
        cfg: GatewayConfig,
        *,
        authorizer: TokenAuthorizer | None = None,
        ledger: LedgerGateway | None = None,
        cluster: ClusterClient | None = None,
        decoder: CidDecoder = decode_cid,
    ) -> None:
        self._cfg = cfg
        self.authorizer = authorizer or StaticTokenAuthorizer(cfg.auth_tokens)
        self.ledger = ledger or HttpLedgerGateway(cfg.ledger_url, cfg.ledger_timeout)
        self.cluster = cluster or IpfsClusterClient(
            cfg.cluster_api_url, cfg.cluster_basic_auth, cfg.bootstrap_peers,
        )
        self.orchestrator = ClusterPinOrchestrator(
            self.cluster, decoder, lenient_decode=cfg.lenient_decode,
        )

    # ── Application ────────────────────────────────────────

    def build_app(self) -> web.Application:
        prefix = self._cfg.api_prefix.rstrip("/")
        health_path = f"{prefix}/healthz"

        app = web.Application(
            middlewares=[make_auth_middleware(self.authorizer, public_paths=[health_path])],
        )
        app[GATEWAY_KEY] = self
        app.router.add_post(f"{prefix}/pins", self.handle_create_pin)
        app.router.add_post(f"{prefix}/manifest/batch_upload", self.handle_batch_upload)
        app.router.add_get(health_path, self.handle_health)
        app.on_cleanup.append(self._on_cleanup)
        return app

    async def _on_cleanup(self, app: web.Application) -> None:
        close = getattr(self.cluster, "close", None)
        if close is not None:
            await close()

    # ── Handlers ───────────────────────────────────────────

    async def handle_create_pin(self, request: web.Request) -> web.Response:
        """POST /pins - submit one pin through the ledger, then the cluster."""
        try:
            pin = Pin.from_json(await _read_json(request))
            status = await self.create_pin(pin)
        except GatewayError as exc:
            log.warning("Pin request failed (%d): %s", exc.status, exc.details)
            return error_response(exc)
        return web.json_response(status.to_json())

    async def handle_batch_upload(self, request: web.Request) -> web.Response:
        """POST /manifest/batch_upload - forward a raw manifest batch."""
        try:
            batch = ManifestBatchUploadRequest.from_json(await _read_json(request))
            response = await self.upload_batch(batch)
        except UpstreamError as exc:
            log.warning("Manifest batch upload failed: %s", exc.details)
            if exc.status_code and exc.status_code >= 400:
                exc.status = exc.status_code
            return error_response(exc)
        except GatewayError as exc:
            log.warning("Manifest batch upload failed (%d): %s", exc.status, exc.details)
            return error_response(exc)
        return web.json_response(response.to_json())

    async def handle_health(self, request: web.Request) -> web.Response:
        return web.json_response({"status": "ok"})

    # ── Pipeline ───────────────────────────────────────────

    async def create_pin(self, pin: Pin) -> PinStatus:
        pool_id = parse_pool_id(self._cfg.pool_name)
        batch = translate_pin(pin, pool_id)
        response = await self._submit(batch)

        status = build_pin_status(
            response,
            pin,
            pool_requestid=self._cfg.pool_requestid_compat,
            peer_id=self._cfg.service_peer_id,
            delegate_template=self._cfg.delegate_template,
        )
        log.info(
            "Pin %s queued: request=%s pool=%d storer=%s",
            pin.cid, status.requestid, response.pool_id, response.storer,
        )
        return status

    async def upload_batch(self, batch: ManifestBatchUploadRequest) -> ManifestBatchUploadResponse:
        return await self._submit(batch)

    async def _submit(self, batch: ManifestBatchUploadRequest) -> ManifestBatchUploadResponse:
        """Ledger first; only identifiers the ledger accepted go to the cluster."""
        reply = await self.ledger.submit_batch(batch)
        response = ManifestBatchUploadResponse.from_json(reply.json())
        if set(response.cid) - set(batch.cid):
            log.warning(
                "Ledger accepted identifiers that were not submitted: %s",
                sorted(set(response.cid) - set(batch.cid)),
            )
        await self.orchestrator.pin_all(response.cid)
        return response


GATEWAY_KEY = web.AppKey("gateway", PinningGateway)


async def run_gateway(cfg: GatewayConfig) -> None:
    """Entry point for serving the gateway until SIGINT/SIGTERM."""
    host, port = parse_listen_addr(cfg.listen_addr)
    gateway = PinningGateway(cfg)
    runner = web.AppRunner(gateway.build_app())
    await runner.setup()
    site = web.TCPSite(runner, host, port)
    await site.start()
    log.info("Gateway listening on %s:%d", host, port)
    log.info("  Ledger: %s", cfg.ledger_url)
    log.info("  Cluster: %s", cfg.cluster_api_url)
    log.info("  Pool: %s", cfg.pool_name or "(not set)")

    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop.set)
        except NotImplementedError:
            # Windows doesn't support add_signal_handler
            pass

    try:
        await stop.wait()
    finally:
        log.info("Stop requested")
        await runner.cleanup()
        log.info("Gateway shut down cleanly")
