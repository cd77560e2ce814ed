"""Pinning Service -> ledger manifest translation."""

from fula_pinning_gateway.translate.manifest import parse_pool_id, translate_pin

__all__ = ["parse_pool_id", "translate_pin"]
