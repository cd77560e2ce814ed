"""IPFS Cluster REST client - submits pins via the cluster's HTTP API."""

from __future__ import annotations

import logging
from urllib.parse import quote

import httpx
from multiformats import CID

from fula_pinning_gateway.errors import PinError

log = logging.getLogger(__name__)


def decode_cid(value: str) -> CID:
    """Decode a CID string (v0 or multibase v1). Raises ValueError when malformed."""
    try:
        return CID.decode(value)
    except Exception as exc:
        raise ValueError(f"invalid CID {value!r}: {exc}") from exc


class IpfsClusterClient:
    """Pins content through an IPFS Cluster peer's REST API.

    Uses the REST endpoints on the cluster API port (9094 by default):
    - POST /pins/{cid}: pin cluster-wide with the given options
    - GET /id: peer identity, used as a liveness check

    One client is created at startup and shared by all requests. No
    request timeout is applied to pin submissions.
    """

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:9094",
        basic_auth: tuple[str, str] | None = None,
        bootstrap_peers: list[str] | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._bootstrap_peers = list(bootstrap_peers or [])
        if self._bootstrap_peers:
            log.debug("Cluster bootstrap peers: %s", ", ".join(self._bootstrap_peers))
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            auth=basic_auth,
            timeout=httpx.Timeout(None, connect=10),
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def close(self) -> None:
        await self._client.aclose()

    async def pin(
        self,
        cid: str,
        mode: str = "recursive",
        name: str | None = None,
        replication_factor: int | None = None,
    ) -> dict:
        params: dict[str, str] = {"mode": mode}
        if name:
            params["name"] = name
        if replication_factor is not None:
            params["replication-min"] = str(replication_factor)
            params["replication-max"] = str(replication_factor)

        try:
            resp = await self._client.post(f"/pins/{quote(cid, safe='')}", params=params)
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise PinError(
                cid, f"cluster HTTP {exc.response.status_code}: {exc.response.text[:200]}",
            ) from exc
        except httpx.HTTPError as exc:
            raise PinError(cid, f"cluster unreachable: {exc}") from exc
        except httpx.InvalidURL as exc:
            raise PinError(cid, f"invalid pin target: {exc}") from exc

        try:
            return resp.json()
        except ValueError:
            return {}

    async def id(self) -> dict:
        """Return the cluster peer's identity document."""
        resp = await self._client.get("/id")
        resp.raise_for_status()
        return resp.json()
