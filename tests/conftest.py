"""Shared fixtures for fula_pinning_gateway tests."""

from __future__ import annotations

import asyncio

import pytest
from aiohttp import web
from aiohttp.test_utils import TestClient, TestServer
from pytest_metadata.plugin import metadata_key

from fula_pinning_gateway.models.config import GatewayConfig
from fula_pinning_gateway.server import PinningGateway

from tests.mocks import FakeClusterService, FakeLedgerService, MockCluster, MockLedger

TEST_TOKEN = "test-secret-token"
AUTH = {"Authorization": f"Bearer {TEST_TOKEN}"}

SERVICE_PEER_ID = "QmServicePeerId"


def pytest_configure(config):
    """Add gateway defaults to the report Environment table."""
    meta = config.stash.setdefault(metadata_key, {})
    meta["Ledger action"] = "fula-manifest-batch_upload"
    meta["Service peer"] = SERVICE_PEER_ID


def make_test_config(**overrides) -> GatewayConfig:
    """Build a GatewayConfig suitable for testing."""
    defaults = dict(
        listen_addr="127.0.0.1:8008",
        ledger_url="http://127.0.0.1:4000",
        ledger_timeout=2.0,
        pool_name="7",
        service_peer_id=SERVICE_PEER_ID,
        cluster_api_url="http://127.0.0.1:9094",
        auth_tokens=[TEST_TOKEN],
    )
    defaults.update(overrides)
    return GatewayConfig(**defaults)


@pytest.fixture
def test_config():
    """Default GatewayConfig for tests."""
    return make_test_config()


@pytest.fixture
def mock_ledger():
    return MockLedger(pool_id=7, storer="node-A")


@pytest.fixture
def mock_cluster():
    return MockCluster()


@pytest.fixture
def gateway(test_config, mock_ledger, mock_cluster):
    """PinningGateway with mocked ledger and cluster."""
    return PinningGateway(test_config, ledger=mock_ledger, cluster=mock_cluster)


@pytest.fixture
async def client(gateway):
    """aiohttp test client bound to the gateway app."""
    async with TestClient(TestServer(gateway.build_app())) as c:
        yield c


@pytest.fixture
async def fake_ledger():
    """Fake ledger HTTP service. Yields (service, base_url)."""
    service = FakeLedgerService()
    server = TestServer(service.build_app())
    await server.start_server()
    yield service, f"http://{server.host}:{server.port}"
    await server.close()


@pytest.fixture
async def fake_cluster():
    """Fake IPFS Cluster REST API. Yields (service, base_url)."""
    service = FakeClusterService()
    server = TestServer(service.build_app())
    await server.start_server()
    yield service, f"http://{server.host}:{server.port}"
    await server.close()


@pytest.fixture
async def slow_ledger():
    """Ledger that never answers within a short client timeout."""

    async def handle_slow(request):
        await asyncio.sleep(2)
        return web.json_response({})

    app = web.Application()
    app.router.add_post("/fula-manifest-batch_upload", handle_slow)
    server = TestServer(app)
    await server.start_server()
    yield f"http://{server.host}:{server.port}"
    await server.close()
