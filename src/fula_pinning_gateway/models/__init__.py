"""Data models for the pinning gateway."""

from fula_pinning_gateway.models.config import GatewayConfig
from fula_pinning_gateway.models.pinning import (
    ManifestBatchUploadRequest,
    ManifestBatchUploadResponse,
    ManifestJob,
    ManifestMetadata,
    Pin,
    PinStatus,
)
from fula_pinning_gateway.models.records import ClusterPinOutcome, LedgerReply

__all__ = [
    "GatewayConfig",
    "ManifestBatchUploadRequest", "ManifestBatchUploadResponse",
    "ManifestJob", "ManifestMetadata", "Pin", "PinStatus",
    "ClusterPinOutcome", "LedgerReply",
]
