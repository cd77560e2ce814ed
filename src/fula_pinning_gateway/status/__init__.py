"""Ledger response -> Pinning Service status reconciliation."""

from fula_pinning_gateway.status.reconciler import (
    STATUS_QUEUED,
    build_delegates,
    build_pin_status,
)

__all__ = ["STATUS_QUEUED", "build_delegates", "build_pin_status"]
