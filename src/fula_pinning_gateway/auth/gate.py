"""aiohttp middleware that guards every route behind a bearer credential."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from aiohttp import web

from fula_pinning_gateway.errors import AuthError
from fula_pinning_gateway.interfaces.auth import TokenAuthorizer

log = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def extract_bearer(header: str | None) -> str:
    """Return the credential from an ``Authorization: Bearer <token>`` header."""
    if not header or not header.startswith(BEARER_PREFIX):
        raise AuthError("missing bearer credential")
    token = header[len(BEARER_PREFIX):]
    if not token:
        raise AuthError("empty bearer credential")
    return token


def make_auth_middleware(
    authorizer: TokenAuthorizer,
    public_paths: Iterable[str] = (),
):
    """Build a middleware rejecting unauthenticated requests with a plain 401."""
    open_paths = frozenset(public_paths)

    @web.middleware
    async def auth_middleware(request: web.Request, handler):
        if request.path in open_paths:
            return await handler(request)
        try:
            token = extract_bearer(request.headers.get("Authorization"))
        except AuthError as exc:
            log.debug("Rejected %s %s: %s", request.method, request.path, exc)
            return web.Response(status=401, text="Unauthorized")
        if not authorizer.is_authorized(token):
            log.warning("Rejected %s %s: unknown token", request.method, request.path)
            return web.Response(status=401, text="Unauthorized")
        return await handler(request)

    return auth_middleware
