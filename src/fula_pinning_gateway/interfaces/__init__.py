"""Protocol interfaces for the gateway's collaborators."""

from fula_pinning_gateway.interfaces.auth import TokenAuthorizer
from fula_pinning_gateway.interfaces.cluster import CidDecoder, ClusterClient
from fula_pinning_gateway.interfaces.ledger import LedgerGateway

__all__ = [
    "TokenAuthorizer",
    "CidDecoder", "ClusterClient",
    "LedgerGateway",
]
