"""CLI entry point for the fula pinning gateway."""

from __future__ import annotations

import asyncio
import json
import logging
import sys

import click
import httpx

from fula_pinning_gateway.config import load_config
from fula_pinning_gateway.errors import ConfigError
from fula_pinning_gateway.server import run_gateway


def _load(ctx: click.Context):
    """Load config or exit with the error."""
    try:
        return load_config(ctx.obj["config_path"])
    except ConfigError as exc:
        click.echo(f"Error: {exc.details}", err=True)
        sys.exit(1)


@click.group()
@click.option("-c", "--config", "config_path", default=None, help="Path to config TOML file")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """fula-gateway - IPFS Pinning Service front end for the fula ledger."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["verbose"] = verbose

    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


# ── Server ─────────────────────────────────────────────


@cli.command()
@click.pass_context
def run(ctx: click.Context) -> None:
    """Start the gateway HTTP server."""
    cfg = _load(ctx)
    if not ctx.obj["verbose"]:
        try:
            logging.getLogger().setLevel(cfg.log_level.upper())
        except ValueError:
            click.echo(f"Error: invalid log_level {cfg.log_level!r} in config.", err=True)
            sys.exit(1)
    if not cfg.auth_tokens:
        click.echo("Warning: no auth tokens configured; every request will be rejected.", err=True)

    click.echo(f"Starting fula-gateway on {cfg.listen_addr}")
    asyncio.run(run_gateway(cfg))


@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show the effective gateway configuration."""
    cfg = _load(ctx)
    click.echo(f"Listen:     {cfg.listen_addr}")
    click.echo(f"API prefix: {cfg.api_prefix or '/'}")
    click.echo(f"Ledger:     {cfg.ledger_url} (timeout {cfg.ledger_timeout:g}s)")
    click.echo(f"Pool:       {cfg.pool_name or '(not set)'}")
    click.echo(f"Peer ID:    {cfg.service_peer_id}")
    click.echo(f"Cluster:    {cfg.cluster_api_url}")
    click.echo(f"Auth:       {len(cfg.auth_tokens)} token(s) configured")
    click.echo(f"Lenient:    {cfg.lenient_decode}")


# ── Client ─────────────────────────────────────────────


@cli.command()
@click.argument("cid")
@click.option("--name", default=None, help="Human readable name for the pin")
@click.option("--origin", "origins", multiple=True, help="Multiaddr hint (repeatable)")
@click.option("--meta", "meta", multiple=True, help="key=value annotation (repeatable)")
@click.option("--token", envvar="FULA_GATEWAY_TOKEN", required=True, help="Bearer token")
@click.option("--url", default=None, help="Gateway base URL (default: from listen_addr)")
@click.pass_context
def pin(
    ctx: click.Context,
    cid: str,
    name: str | None,
    origins: tuple[str, ...],
    meta: tuple[str, ...],
    token: str,
    url: str | None,
) -> None:
    """Submit a pin request to a running gateway."""
    cfg = _load(ctx)
    if url is None:
        port = cfg.listen_addr.rpartition(":")[2]
        url = f"http://127.0.0.1:{port}{cfg.api_prefix.rstrip('/')}"

    body: dict = {"cid": cid}
    if name:
        body["name"] = name
    if origins:
        body["origins"] = list(origins)
    if meta:
        pairs = {}
        for item in meta:
            key, sep, value = item.partition("=")
            if not sep:
                raise click.BadParameter(f"expected key=value, got {item!r}", param_hint="--meta")
            pairs[key] = value
        body["meta"] = pairs

    try:
        resp = httpx.post(
            f"{url.rstrip('/')}/pins",
            json=body,
            headers={"Authorization": f"Bearer {token}"},
            timeout=30,
        )
    except httpx.HTTPError as exc:
        click.echo(f"Error: gateway unreachable: {exc}", err=True)
        sys.exit(1)

    if resp.status_code != 200:
        click.echo(f"Error: HTTP {resp.status_code}: {resp.text}", err=True)
        sys.exit(1)
    click.echo(json.dumps(resp.json(), indent=2))


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
