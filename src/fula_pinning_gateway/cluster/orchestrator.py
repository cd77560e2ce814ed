"""Cluster pin orchestrator - best-effort pinning of ledger-accepted CIDs."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable

from fula_pinning_gateway.cluster.client import decode_cid
from fula_pinning_gateway.errors import PinError
from fula_pinning_gateway.interfaces.cluster import CidDecoder, ClusterClient
from fula_pinning_gateway.models.records import ClusterPinOutcome

log = logging.getLogger(__name__)

PIN_MODE_RECURSIVE = "recursive"


class ClusterPinOrchestrator:
    """Submits one recursive cluster pin per identifier the ledger accepted.

    Partial-failure contract:
    1. Identifiers are pinned one at a time, in the ledger's order
    2. A failure for one identifier is logged and the loop moves on
    3. Nothing is raised to the caller; outcomes are for logging only and
       never change what the client is told (ledger acceptance is the unit
       of client-visible success)

    An identifier that fails CID decoding is skipped and recorded as a
    failed outcome. With ``lenient_decode`` the raw string is submitted
    anyway and the cluster gets to reject it.
    """

    def __init__(
        self,
        client: ClusterClient,
        decoder: CidDecoder = decode_cid,
        lenient_decode: bool = False,
    ) -> None:
        self._client = client
        self._decoder = decoder
        self._lenient_decode = lenient_decode

    async def pin_all(self, cids: Iterable[str]) -> list[ClusterPinOutcome]:
        outcomes = [await self.pin_one(cid) for cid in cids]
        failed = [o for o in outcomes if not o.accepted]
        if failed:
            log.warning(
                "Cluster pinning: %d/%d identifiers failed",
                len(failed), len(outcomes),
            )
        elif outcomes:
            log.info("Cluster pinning: %d identifiers submitted", len(outcomes))
        return outcomes

    async def pin_one(self, cid: str) -> ClusterPinOutcome:
        start = time.monotonic()
        target = cid
        try:
            target = str(self._decoder(cid))
        except ValueError as exc:
            if not self._lenient_decode:
                log.error("Skipping pin for undecodable CID %s: %s", cid, exc)
                return ClusterPinOutcome(
                    cid=cid, accepted=False, error=f"decode: {exc}",
                    duration_ms=_elapsed_ms(start),
                )
            log.warning("CID %s failed to decode (%s); pinning as given", cid, exc)

        try:
            await self._client.pin(target, mode=PIN_MODE_RECURSIVE)
        except PinError as exc:
            log.error("Failed to pin CID %s: %s", cid, exc.details)
            return ClusterPinOutcome(
                cid=cid, accepted=False, error=exc.details,
                duration_ms=_elapsed_ms(start),
            )

        duration = _elapsed_ms(start)
        log.debug("Pin submitted for %s in %dms", cid, duration)
        return ClusterPinOutcome(cid=cid, accepted=True, duration_ms=duration)


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)
