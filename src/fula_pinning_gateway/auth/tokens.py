"""Static in-memory token authorizer."""

from __future__ import annotations

import hmac
from collections.abc import Iterable


class StaticTokenAuthorizer:
    """Accepts the fixed set of tokens it was constructed with.

    The set is frozen at construction and shared read-only between request
    tasks. A dynamic token store (issuance, expiry) would need its own
    synchronization and should be a separate TokenAuthorizer implementation.
    """

    def __init__(self, tokens: Iterable[str]) -> None:
        self._tokens = frozenset(t for t in tokens if t)

    def __len__(self) -> int:
        return len(self._tokens)

    def is_authorized(self, token: str) -> bool:
        if not token:
            return False
        candidate = token.encode("utf-8", "surrogateescape")
        return any(
            hmac.compare_digest(candidate, t.encode("utf-8", "surrogateescape"))
            for t in self._tokens
        )
