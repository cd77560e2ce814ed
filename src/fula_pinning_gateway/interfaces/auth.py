"""TokenAuthorizer protocol - decides whether a bearer credential is accepted."""

from __future__ import annotations

from typing import Protocol


class TokenAuthorizer(Protocol):
    """Answers membership questions about the accepted credential set."""

    def is_authorized(self, token: str) -> bool:
        """Return True if ``token`` may use the gateway."""
        ...
