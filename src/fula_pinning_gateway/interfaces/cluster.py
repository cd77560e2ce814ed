"""ClusterClient / CidDecoder protocols - the storage cluster seen from the core."""

from __future__ import annotations

from typing import Any, Protocol


class CidDecoder(Protocol):
    """Decodes a content identifier string. Raises ValueError when malformed."""

    def __call__(self, cid: str) -> Any:
        ...


class ClusterClient(Protocol):
    """Submits pin operations to an IPFS Cluster."""

    async def pin(
        self,
        cid: str,
        mode: str = "recursive",
        name: str | None = None,
        replication_factor: int | None = None,
    ) -> dict:
        """Pin ``cid`` cluster-wide. Raises PinError on failure."""
        ...
