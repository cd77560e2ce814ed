"""Internal result records passed between gateway components."""

from __future__ import annotations

import json
from dataclasses import dataclass

from fula_pinning_gateway.errors import DecodeError


@dataclass
class LedgerReply:
    """Raw reply from the ledger service."""

    body: bytes
    status_code: int

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self):
        """Parse the body. Only meaningful when ``ok`` is true."""
        try:
            return json.loads(self.body)
        except ValueError as exc:
            raise DecodeError(f"failed to decode ledger response: {exc}", status=500) from exc


@dataclass
class ClusterPinOutcome:
    """Result of submitting one identifier to the cluster.

    Logged only; never part of the HTTP response.
    """

    cid: str
    accepted: bool
    error: str | None = None
    duration_ms: int = 0
