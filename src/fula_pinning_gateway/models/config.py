"""Configuration models for the gateway."""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_DELEGATE_TEMPLATE = (
    "/dns4/pools{pool_id}.functionyard.fula.network/tcp/4001/p2p/{peer_id}"
)


@dataclass
class GatewayConfig:
    """Complete gateway configuration."""

    # Gateway
    listen_addr: str = "0.0.0.0:8008"
    api_prefix: str = ""
    log_level: str = "info"
    pool_requestid_compat: bool = False  # requestid = pool id instead of a uuid

    # Ledger
    ledger_url: str = "http://127.0.0.1:4000"
    ledger_timeout: float = 10.0  # seconds

    # Pool
    pool_name: str = ""  # parsed as an integer pool id per request
    service_peer_id: str = "QmServicePeerId"
    delegate_template: str = DEFAULT_DELEGATE_TEMPLATE

    # IPFS Cluster
    cluster_api_url: str = "http://127.0.0.1:9094"
    cluster_username: str = ""
    cluster_password: str = ""
    lenient_decode: bool = False  # pin identifiers that fail CID decoding anyway
    bootstrap_peers: list[str] = field(default_factory=list)

    # Auth
    auth_tokens: list[str] = field(default_factory=list)

    @property
    def cluster_basic_auth(self) -> tuple[str, str] | None:
        if self.cluster_username:
            return (self.cluster_username, self.cluster_password)
        return None
