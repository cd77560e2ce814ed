"""Error taxonomy for the pinning gateway.

Every failure the request path can raise derives from GatewayError, which
carries the HTTP status and the pinning-service ``reason`` string used in
the JSON error body.
"""

from __future__ import annotations


class GatewayError(Exception):
    """Base exception for all gateway failures."""

    status: int = 500
    reason: str = "INTERNAL_SERVER_ERROR"

    def __init__(self, details: str, *, status: int | None = None) -> None:
        super().__init__(details)
        self.details = details
        if status is not None:
            self.status = status

    def to_json(self) -> dict:
        return {"error": {"reason": self.reason, "details": self.details}}


class AuthError(GatewayError):
    """Missing, malformed or unknown bearer credential."""

    status = 401
    reason = "UNAUTHORIZED"


class DecodeError(GatewayError):
    """Malformed request body (400) or malformed ledger response (500)."""

    status = 400
    reason = "BAD_REQUEST"

    def __init__(self, details: str, *, status: int | None = None) -> None:
        super().__init__(details, status=status)
        if self.status >= 500:
            self.reason = "INTERNAL_SERVER_ERROR"


class ConfigError(GatewayError):
    """Configuration problem.

    Fatal when raised while loading configuration at startup; reported as
    400 when raised on the request path (e.g. a non-integer pool id).
    """

    status = 400
    reason = "BAD_REQUEST"


class UpstreamError(GatewayError):
    """Ledger call failed or answered with a non-success status."""

    status = 500
    reason = "INTERNAL_SERVER_ERROR"

    def __init__(self, details: str, *, status_code: int | None = None) -> None:
        super().__init__(details)
        self.status_code = status_code


class PinError(GatewayError):
    """Cluster pin failure for a single identifier. Logged, never returned."""

    def __init__(self, cid: str, details: str) -> None:
        super().__init__(f"{cid}: {details}")
        self.cid = cid
