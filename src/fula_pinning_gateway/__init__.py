"""fula_pinning_gateway - IPFS Pinning Service front end for the fula ledger."""

__version__ = "0.1.0"
