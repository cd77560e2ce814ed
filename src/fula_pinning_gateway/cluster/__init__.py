"""IPFS Cluster client and the per-identifier pin orchestrator."""

from fula_pinning_gateway.cluster.client import IpfsClusterClient, decode_cid
from fula_pinning_gateway.cluster.orchestrator import ClusterPinOrchestrator

__all__ = ["IpfsClusterClient", "decode_cid", "ClusterPinOrchestrator"]
