"""Bearer-token authentication for the gateway."""

from fula_pinning_gateway.auth.gate import extract_bearer, make_auth_middleware
from fula_pinning_gateway.auth.tokens import StaticTokenAuthorizer

__all__ = ["extract_bearer", "make_auth_middleware", "StaticTokenAuthorizer"]
