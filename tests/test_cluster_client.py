"""IPFS Cluster REST client against a fake cluster API."""

from __future__ import annotations

import base64

import httpx
import pytest

from fula_pinning_gateway.cluster.client import IpfsClusterClient, decode_cid
from fula_pinning_gateway.cluster.orchestrator import ClusterPinOrchestrator
from fula_pinning_gateway.errors import PinError
from tests.factories import CID_V0, CID_V1


async def test_pin_posts_recursive(fake_cluster):
    service, base_url = fake_cluster
    client = IpfsClusterClient(base_url)
    try:
        result = await client.pin(CID_V1)
    finally:
        await client.close()

    assert result["cid"] == CID_V1
    assert service.pins == [(CID_V1, {"mode": "recursive"})]


async def test_pin_options(fake_cluster):
    service, base_url = fake_cluster
    client = IpfsClusterClient(base_url)
    try:
        await client.pin(CID_V0, name="photo", replication_factor=2)
    finally:
        await client.close()

    _, query = service.pins[0]
    assert query == {
        "mode": "recursive",
        "name": "photo",
        "replication-min": "2",
        "replication-max": "2",
    }


async def test_basic_auth(fake_cluster):
    service, base_url = fake_cluster
    client = IpfsClusterClient(base_url, basic_auth=("admin", "s3cret"))
    try:
        await client.pin(CID_V1)
    finally:
        await client.close()

    expected = "Basic " + base64.b64encode(b"admin:s3cret").decode()
    assert service.auth_headers == [expected]


async def test_cluster_error_raises_pin_error(fake_cluster):
    service, base_url = fake_cluster
    service.fail = {CID_V1}
    client = IpfsClusterClient(base_url)
    try:
        with pytest.raises(PinError) as info:
            await client.pin(CID_V1)
    finally:
        await client.close()
    assert info.value.cid == CID_V1
    assert "500" in info.value.details


async def test_unreachable_cluster_raises_pin_error():
    client = IpfsClusterClient("http://127.0.0.1:1")
    try:
        with pytest.raises(PinError):
            await client.pin(CID_V1)
    finally:
        await client.close()


async def test_id(fake_cluster):
    _, base_url = fake_cluster
    client = IpfsClusterClient(base_url)
    try:
        peer = await client.id()
    finally:
        await client.close()
    assert peer["id"].startswith("12D3KooW")


async def test_pin_target_is_escaped_into_the_path(fake_cluster):
    service, base_url = fake_cluster
    client = IpfsClusterClient(base_url)
    try:
        await client.pin("bafy?mode=direct")
    finally:
        await client.close()

    assert service.pins == [("bafy?mode=direct", {"mode": "recursive"})]


async def test_lenient_batch_survives_unprintable_identifier(fake_cluster):
    service, base_url = fake_cluster
    client = IpfsClusterClient(base_url)
    orch = ClusterPinOrchestrator(client, decode_cid, lenient_decode=True)
    try:
        outcomes = await orch.pin_all(["bad\x01cid", CID_V0])
    finally:
        await client.close()

    assert len(outcomes) == 2
    assert outcomes[1].accepted
    assert CID_V0 in [cid for cid, _ in service.pins]


async def test_invalid_url_raises_pin_error(monkeypatch):
    client = IpfsClusterClient("http://127.0.0.1:9094")

    async def bad_post(*args, **kwargs):
        raise httpx.InvalidURL("Invalid non-printable ASCII character in URL")

    monkeypatch.setattr(client._client, "post", bad_post)
    try:
        with pytest.raises(PinError):
            await client.pin(CID_V1)
    finally:
        await client.close()
