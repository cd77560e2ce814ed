"""Status reconciler - builds the PinStatus reply from the ledger response."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from fula_pinning_gateway.models.config import DEFAULT_DELEGATE_TEMPLATE
from fula_pinning_gateway.models.pinning import (
    ManifestBatchUploadResponse,
    Pin,
    PinStatus,
)

# The gateway never polls cluster completion, so every accepted request is queued.
STATUS_QUEUED = "queued"


def _rfc3339(ts: datetime) -> str:
    return ts.astimezone(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")


def build_delegates(
    pool_id: int,
    peer_id: str = "QmServicePeerId",
    template: str = DEFAULT_DELEGATE_TEMPLATE,
) -> list[str]:
    return [template.format(pool_id=pool_id, peer_id=peer_id)]


def build_pin_status(
    response: ManifestBatchUploadResponse,
    pin: Pin,
    *,
    now: datetime | None = None,
    request_id: str | None = None,
    pool_requestid: bool = False,
    peer_id: str = "QmServicePeerId",
    delegate_template: str = DEFAULT_DELEGATE_TEMPLATE,
) -> PinStatus:
    """Reconcile the ledger reply and the original pin into a PinStatus.

    Cluster outcomes are deliberately not an input: the reply reports
    ledger acceptance only.

    ``request_id`` defaults to a fresh uuid4 hex. With ``pool_requestid``
    the ledger pool id is used instead, which is not unique per request.
    """
    if request_id is None:
        request_id = str(response.pool_id) if pool_requestid else uuid.uuid4().hex
    return PinStatus(
        requestid=request_id,
        status=STATUS_QUEUED,
        created=_rfc3339(now or datetime.now(timezone.utc)),
        pin=pin,
        delegates=build_delegates(response.pool_id, peer_id, delegate_template),
        info={"storer": response.storer},
    )
