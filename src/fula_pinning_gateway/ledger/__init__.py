"""Ledger (fula blockchain API) client."""

from fula_pinning_gateway.ledger.gateway import BATCH_UPLOAD_ACTION, HttpLedgerGateway

__all__ = ["BATCH_UPLOAD_ACTION", "HttpLedgerGateway"]
