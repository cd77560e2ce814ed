"""Tier 2 fixtures: real IPFS Cluster peer on localhost."""

from __future__ import annotations

import httpx
import pytest

from fula_pinning_gateway.cluster.client import IpfsClusterClient

CLUSTER_API = "http://127.0.0.1:9094"


@pytest.fixture(scope="session")
def cluster_available():
    """Check if a local IPFS Cluster peer is running. Skip tier2 tests if not."""
    try:
        r = httpx.get(f"{CLUSTER_API}/id", timeout=3)
        if r.status_code == 200:
            return True
        pytest.skip(f"IPFS Cluster not available at {CLUSTER_API}")
    except (httpx.ConnectError, httpx.TimeoutException):
        pytest.skip(f"IPFS Cluster not available at {CLUSTER_API}")


@pytest.fixture
async def real_cluster(cluster_available):
    """Real IpfsClusterClient for Tier 2 tests."""
    client = IpfsClusterClient(CLUSTER_API)
    yield client
    await client.close()
