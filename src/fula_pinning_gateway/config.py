"""Configuration loading: TOML file + environment variables."""

from __future__ import annotations

import os
from pathlib import Path

try:
    import tomllib  # Python 3.11+
except ModuleNotFoundError:
    import tomli as tomllib  # type: ignore[no-redef]

from fula_pinning_gateway.errors import ConfigError
from fula_pinning_gateway.models.config import GatewayConfig


def load_config(
    config_path: str | Path | None = None,
    env_prefix: str = "FULA_GATEWAY_",
) -> GatewayConfig:
    """Load gateway configuration from a TOML file and env vars.

    Priority (highest wins):
        1. Environment variables (FULA_GATEWAY_LEDGER_URL, etc.)
        2. TOML config file
        3. Defaults from GatewayConfig

    An explicitly given file that is missing or unparseable is a fatal
    ConfigError.
    """
    raw: dict = {}
    if config_path is not None:
        p = Path(config_path).expanduser()
        if not p.exists():
            raise ConfigError(f"config file not found: {p}")
        try:
            with open(p, "rb") as f:
                raw = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            raise ConfigError(f"cannot read config file {p}: {exc}") from exc

    cfg = GatewayConfig()

    # ── Gateway section ────────────────────────────────────
    gateway = raw.get("gateway", {})
    if v := gateway.get("listen_addr"):
        cfg.listen_addr = str(v)
    if v := gateway.get("api_prefix"):
        cfg.api_prefix = str(v)
    if v := gateway.get("log_level"):
        cfg.log_level = str(v)
    cfg.pool_requestid_compat = bool(gateway.get("pool_requestid_compat", False))

    # ── Ledger section ─────────────────────────────────────
    ledger = raw.get("ledger", {})
    if v := ledger.get("base_url"):
        cfg.ledger_url = str(v)
    if v := ledger.get("timeout"):
        cfg.ledger_timeout = float(v)

    # ── Pool section ───────────────────────────────────────
    pool = raw.get("pool", {})
    if (v := pool.get("pool_name")) is not None:
        # Kept as a string; parsed per request so a bad value fails requests, not startup.
        cfg.pool_name = str(v)
    if v := pool.get("service_peer_id"):
        cfg.service_peer_id = str(v)
    if v := pool.get("delegate_template"):
        cfg.delegate_template = str(v)

    # ── Cluster section ────────────────────────────────────
    cluster = raw.get("cluster", {})
    if v := cluster.get("api_url"):
        cfg.cluster_api_url = str(v)
    if v := cluster.get("username"):
        cfg.cluster_username = str(v)
    if v := cluster.get("password"):
        cfg.cluster_password = str(v)
    cfg.lenient_decode = bool(cluster.get("lenient_decode", False))
    cfg.bootstrap_peers = [str(p) for p in cluster.get("bootstrap_peers", [])]

    # ── Auth section ───────────────────────────────────────
    auth = raw.get("auth", {})
    cfg.auth_tokens = [str(t) for t in auth.get("tokens", [])]

    # ── Environment variable overrides (highest priority) ──
    if url := os.environ.get(f"{env_prefix}LEDGER_URL"):
        cfg.ledger_url = url
    if pool_env := os.environ.get(f"{env_prefix}POOL"):
        cfg.pool_name = pool_env
    if tokens := os.environ.get(f"{env_prefix}TOKENS"):
        cfg.auth_tokens = [t.strip() for t in tokens.split(",") if t.strip()]
    if listen := os.environ.get(f"{env_prefix}LISTEN"):
        cfg.listen_addr = listen
    if cluster_url := os.environ.get(f"{env_prefix}CLUSTER_URL"):
        cfg.cluster_api_url = cluster_url

    if not cfg.ledger_url:
        raise ConfigError("ledger base_url is not configured")
    parse_listen_addr(cfg.listen_addr)

    return cfg


def parse_listen_addr(addr: str) -> tuple[str, int]:
    """Split ``host:port`` (``:8008`` means all interfaces)."""
    host, sep, port = addr.rpartition(":")
    if not sep:
        raise ConfigError(f"invalid listen address {addr!r}: expected host:port")
    try:
        port_num = int(port)
    except ValueError:
        raise ConfigError(f"invalid listen port in {addr!r}") from None
    if not 0 < port_num < 65536:
        raise ConfigError(f"listen port out of range in {addr!r}")
    return host.strip("[]") or "0.0.0.0", port_num
