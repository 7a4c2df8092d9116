import json

import httpx
import pytest
import pytest_asyncio

from hcpfrontend.common.errors import (
    EmptyResponseBodyError,
    InternalIDKindError,
    NotFoundError,
)
from hcpfrontend.common.http_client import HttpConnection, request_id_ctx
from hcpfrontend.ocm.client import ClusterServiceClient
from hcpfrontend.ocm.internal_id import InternalID
from hcpfrontend.ocm.models import Cluster, NodePool
from hcpfrontend.ocm.properties import PROVISION_SHARD_ID

BASE_URL = "http://clusters-service.test"
CLUSTERS_PATH = "/api/clusters_mgmt/v1/clusters"
CLUSTER_PATH = CLUSTERS_PATH + "/abc123"
NODE_POOL_PATH = CLUSTER_PATH + "/node_pools/np1"


class FakeClustersService:
    """Answers requests from a table of (method, path) -> (status, body)."""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def route(self, method, path, status=200, body=None):
        self.routes[(method, path)] = (status, body)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, body = self.routes.get(
            (request.method, request.url.path), (404, {"kind": "Error"})
        )
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)


@pytest.fixture
def service():
    return FakeClustersService()


@pytest_asyncio.fixture
async def client(service):
    conn = HttpConnection(base_url=BASE_URL, transport=httpx.MockTransport(service))
    client = ClusterServiceClient(conn, provision_shard_id="shard-1")
    yield client
    await client.close()


@pytest.mark.asyncio
async def test_get_cluster(client, service):
    service.route("GET", CLUSTER_PATH, body={"kind": "Cluster", "id": "abc123", "href": CLUSTER_PATH, "name": "dev"})

    cluster = await client.get_cluster(InternalID(CLUSTER_PATH))

    assert cluster.name == "dev"
    assert cluster.internal_id == InternalID(CLUSTER_PATH)
    assert len(service.requests) == 1


@pytest.mark.asyncio
async def test_timeout_is_passed_to_the_request(client, service):
    service.route("GET", CLUSTER_PATH, body={"kind": "Cluster", "href": CLUSTER_PATH})

    await client.get_cluster(InternalID(CLUSTER_PATH), timeout=1.5)
    await client.get_cluster(InternalID(CLUSTER_PATH))

    assert service.requests[0].extensions["timeout"]["read"] == 1.5
    assert service.requests[1].extensions["timeout"]["read"] == 30.0


@pytest.mark.asyncio
async def test_get_cluster_not_found(client, service):
    with pytest.raises(NotFoundError):
        await client.get_cluster(InternalID(CLUSTER_PATH))

    assert len(service.requests) == 1


@pytest.mark.asyncio
async def test_get_cluster_empty_body(client, service):
    service.route("GET", CLUSTER_PATH, status=200)

    with pytest.raises(EmptyResponseBodyError):
        await client.get_cluster(InternalID(CLUSTER_PATH))


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"content": b"<html>oops</html>", "headers": {"Content-Type": "text/html"}},
        {"json": [{"kind": "Cluster"}]},
    ],
    ids=["not-json", "json-list"],
)
async def test_get_cluster_unusable_body(body):
    transport = httpx.MockTransport(lambda request: httpx.Response(200, **body))
    conn = HttpConnection(base_url=BASE_URL, transport=transport)
    client = ClusterServiceClient(conn)

    with pytest.raises(EmptyResponseBodyError):
        await client.get_cluster(InternalID(CLUSTER_PATH))

    await client.close()


@pytest.mark.asyncio
async def test_server_errors_pass_through(client, service):
    service.route("GET", CLUSTER_PATH, status=503, body={"kind": "Error"})

    with pytest.raises(httpx.HTTPStatusError):
        await client.get_cluster(InternalID(CLUSTER_PATH))

    assert len(service.requests) == 1


@pytest.mark.asyncio
async def test_transport_errors_pass_through_without_retry():
    calls = []

    def handler(request):
        calls.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    conn = HttpConnection(base_url=BASE_URL, transport=httpx.MockTransport(handler))
    client = ClusterServiceClient(conn)

    with pytest.raises(httpx.ConnectError):
        await client.delete_cluster(InternalID(CLUSTER_PATH))

    assert len(calls) == 1
    await client.close()


@pytest.mark.asyncio
async def test_get_cluster_status(client, service):
    service.route("GET", CLUSTER_PATH + "/status", body={"kind": "ClusterStatus", "state": "ready"})

    status = await client.get_cluster_status(InternalID(CLUSTER_PATH))

    assert status.state == "ready"


@pytest.mark.asyncio
async def test_create_cluster_injects_properties(client, service):
    service.route(
        "POST",
        CLUSTERS_PATH,
        status=201,
        body={"kind": "Cluster", "id": "2b4x", "href": CLUSTERS_PATH + "/2b4x", "name": "dev"},
    )
    payload = Cluster(name="dev")

    created = await client.create_cluster(payload)

    assert created.internal_id == InternalID(CLUSTERS_PATH + "/2b4x")
    assert payload.properties == {}
    sent = json.loads(service.requests[0].content)
    assert sent["name"] == "dev"
    assert sent["properties"][PROVISION_SHARD_ID] == "shard-1"
    assert sent["properties"]["provisioner_hostedcluster_step_enabled"] == "true"


@pytest.mark.asyncio
async def test_create_cluster_empty_body(client, service):
    service.route("POST", CLUSTERS_PATH, status=201)

    with pytest.raises(EmptyResponseBodyError):
        await client.create_cluster(Cluster(name="dev"))


@pytest.mark.asyncio
async def test_update_cluster_sends_patch(client, service):
    service.route("PATCH", CLUSTER_PATH, body={"kind": "Cluster", "href": CLUSTER_PATH, "name": "renamed"})

    updated = await client.update_cluster(InternalID(CLUSTER_PATH), Cluster(name="renamed"))

    assert updated.name == "renamed"
    assert service.requests[0].method == "PATCH"


@pytest.mark.asyncio
async def test_update_missing_cluster_is_not_found(client, service):
    with pytest.raises(NotFoundError):
        await client.update_cluster(InternalID(CLUSTER_PATH), Cluster(name="dev"))


@pytest.mark.asyncio
async def test_delete_cluster(client, service):
    service.route("DELETE", CLUSTER_PATH, status=204)

    await client.delete_cluster(InternalID(CLUSTER_PATH))

    assert [r.method for r in service.requests] == ["DELETE"]


@pytest.mark.asyncio
async def test_delete_missing_cluster_is_not_found(client, service):
    with pytest.raises(NotFoundError):
        await client.delete_cluster(InternalID(CLUSTER_PATH))


@pytest.mark.asyncio
async def test_node_pool_lifecycle(client, service):
    body = {"kind": "NodePool", "id": "np1", "href": NODE_POOL_PATH}
    service.route("POST", CLUSTER_PATH + "/node_pools", status=201, body=body)
    service.route("GET", NODE_POOL_PATH, body=body)
    service.route("PATCH", NODE_POOL_PATH, body={**body, "replicas": 3})
    service.route("DELETE", NODE_POOL_PATH, status=204)

    created = await client.create_node_pool(InternalID(CLUSTER_PATH), NodePool(id="np1"))
    assert created.internal_id == InternalID(NODE_POOL_PATH)

    fetched = await client.get_node_pool(created.internal_id)
    assert fetched == created

    updated = await client.update_node_pool(created.internal_id, NodePool(id="np1", replicas=3))
    assert updated.model_extra["replicas"] == 3

    await client.delete_node_pool(created.internal_id)

    assert [(r.method, r.url.path) for r in service.requests] == [
        ("POST", CLUSTER_PATH + "/node_pools"),
        ("GET", NODE_POOL_PATH),
        ("PATCH", NODE_POOL_PATH),
        ("DELETE", NODE_POOL_PATH),
    ]


@pytest.mark.asyncio
async def test_wrong_kind_sends_nothing(client, service):
    with pytest.raises(InternalIDKindError):
        await client.get_cluster(InternalID(NODE_POOL_PATH))
    with pytest.raises(InternalIDKindError):
        await client.delete_node_pool(InternalID(CLUSTER_PATH))
    with pytest.raises(InternalIDKindError):
        await client.create_node_pool(InternalID(NODE_POOL_PATH), NodePool(id="np2"))

    assert service.requests == []


@pytest.mark.asyncio
async def test_request_id_is_forwarded(client, service):
    service.route("GET", CLUSTER_PATH, body={"kind": "Cluster", "href": CLUSTER_PATH})

    token = request_id_ctx.set("req-42")
    try:
        await client.get_cluster(InternalID(CLUSTER_PATH))
    finally:
        request_id_ctx.reset(token)

    assert service.requests[0].headers["X-Request-ID"] == "req-42"


def test_get_conn_returns_connection(service):
    conn = HttpConnection(base_url=BASE_URL, insecure=True)
    client = ClusterServiceClient(conn)

    assert client.get_conn() is conn
    assert client.get_conn().insecure
