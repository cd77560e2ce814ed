"""Request translator - turns one Pin into a single-entry manifest batch."""

from __future__ import annotations

from fula_pinning_gateway.errors import ConfigError
from fula_pinning_gateway.models.pinning import (
    ManifestBatchUploadRequest,
    ManifestJob,
    ManifestMetadata,
    Pin,
)

DEFAULT_REPLICATION_FACTOR = 1
DEFAULT_WORK = "storage"
DEFAULT_ENGINE = "IPFS"


def parse_pool_id(raw: str | int) -> int:
    """Parse the configured pool name as an integer pool id."""
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    try:
        return int(str(raw).strip())
    except ValueError:
        raise ConfigError("Invalid pool ID configuration") from None


def translate_pin(pin: Pin, pool_id: int) -> ManifestBatchUploadRequest:
    """Build the ledger batch for ``pin``.

    The replication factor is fixed; nothing in the client request feeds it.
    """
    return ManifestBatchUploadRequest(
        cid=[pin.cid],
        pool_id=pool_id,
        replication_factor=[DEFAULT_REPLICATION_FACTOR],
        manifest_metadata=[
            ManifestMetadata(
                job=ManifestJob(work=DEFAULT_WORK, engine=DEFAULT_ENGINE, uri=pin.cid),
            ),
        ],
    )
