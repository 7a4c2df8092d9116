import pytest
import pytest_asyncio

from hcpfrontend.common.errors import (
    InternalIDFormatError,
    InternalIDKindError,
    NotFoundError,
)
from hcpfrontend.ocm.internal_id import InternalID
from hcpfrontend.ocm.mock import MockClusterServiceClient
from hcpfrontend.ocm.models import Cluster, ClusterStatus, NodePool
from hcpfrontend.ocm.properties import BASELINE_PROPERTY_KEYS

CLUSTER_PATH = "/api/clusters_mgmt/v1/clusters/abc123"
NODE_POOL_PATH = CLUSTER_PATH + "/node_pools/np1"


@pytest.fixture
def client():
    return MockClusterServiceClient()


@pytest_asyncio.fixture
async def cluster(client):
    return await client.create_cluster(Cluster(name="abc123"))


@pytest.mark.asyncio
async def test_create_cluster_round_trips_enriched_result(client):
    payload = Cluster(name="abc123", properties={"owner": "team-a"})

    created = await client.create_cluster(payload)

    assert created.href == CLUSTER_PATH
    assert created.internal_id == InternalID(CLUSTER_PATH)
    assert await client.get_cluster(created.internal_id) == created
    assert created != payload
    for key in BASELINE_PROPERTY_KEYS:
        assert created.properties[key] == "true"


@pytest.mark.asyncio
async def test_create_cluster_does_not_mutate_input(client):
    payload = Cluster(name="abc123")

    await client.create_cluster(payload)

    assert payload.href is None
    assert payload.properties == {}


@pytest.mark.asyncio
async def test_create_cluster_without_name_is_rejected(client):
    with pytest.raises(InternalIDFormatError):
        await client.create_cluster(Cluster())

    assert client.clusters == {}


@pytest.mark.asyncio
async def test_get_missing_cluster_is_not_found(client):
    with pytest.raises(NotFoundError):
        await client.get_cluster(InternalID(CLUSTER_PATH))


@pytest.mark.asyncio
async def test_update_cluster_replaces_state(client, cluster):
    replacement = cluster.model_copy(update={"properties": {"owner": "team-b"}})

    updated = await client.update_cluster(cluster.internal_id, replacement)

    assert updated.properties == {"owner": "team-b"}
    assert updated.href == CLUSTER_PATH
    assert await client.get_cluster(cluster.internal_id) == updated


@pytest.mark.asyncio
async def test_update_missing_cluster_is_not_found(client):
    with pytest.raises(NotFoundError):
        await client.update_cluster(InternalID(CLUSTER_PATH), Cluster(name="abc123"))

    assert client.clusters == {}


@pytest.mark.asyncio
async def test_delete_is_not_idempotent(client, cluster):
    other = await client.create_cluster(Cluster(name="other"))
    missing = InternalID("/api/clusters_mgmt/v1/clusters/missing")

    with pytest.raises(NotFoundError):
        await client.delete_cluster(missing)

    await client.delete_cluster(other.internal_id)

    with pytest.raises(NotFoundError):
        await client.delete_cluster(missing)
    with pytest.raises(NotFoundError):
        await client.delete_cluster(other.internal_id)

    assert await client.get_cluster(cluster.internal_id) == cluster


@pytest.mark.asyncio
async def test_get_cluster_status(client):
    created = await client.create_cluster(
        Cluster(name="abc123", status=ClusterStatus(state="installing"))
    )

    status = await client.get_cluster_status(created.internal_id)

    assert status.state == "installing"


@pytest.mark.asyncio
async def test_create_node_pool_under_cluster(client, cluster):
    created = await client.create_node_pool(cluster.internal_id, NodePool(id="np1"))

    assert created.href == NODE_POOL_PATH
    assert await client.get_node_pool(InternalID(NODE_POOL_PATH)) == created


@pytest.mark.asyncio
async def test_create_node_pool_without_stored_cluster(client):
    created = await client.create_node_pool(InternalID(CLUSTER_PATH), NodePool(id="np1"))

    assert created.href == NODE_POOL_PATH
    assert await client.get_node_pool(InternalID(NODE_POOL_PATH)) == created
    assert client.clusters == {}


@pytest.mark.asyncio
async def test_store_is_isolated_from_callers():
    client = MockClusterServiceClient(provision_shard_id="shard-1")
    payload = Cluster(name="abc123", status=ClusterStatus(state="installing"))

    created = await client.create_cluster(payload)
    payload.status.state = "ready"
    created.properties["provision_shard_id"] = "changed"
    fetched = await client.get_cluster(created.internal_id)
    fetched.properties["provision_shard_id"] = "changed"
    fetched.status.state = "ready"

    stored = await client.get_cluster(created.internal_id)
    assert stored.properties["provision_shard_id"] == "shard-1"
    assert stored.status.state == "installing"
    assert (await client.get_cluster_status(created.internal_id)).state == "installing"


@pytest.mark.asyncio
async def test_node_pool_store_is_isolated_from_callers(client):
    payload = NodePool(id="np1", properties={"size": "small"})

    created = await client.create_node_pool(InternalID(CLUSTER_PATH), payload)
    payload.properties["size"] = "large"
    created.properties["size"] = "large"
    fetched = await client.get_node_pool(created.internal_id)
    fetched.properties["size"] = "large"

    assert (await client.get_node_pool(created.internal_id)).properties == {"size": "small"}


@pytest.mark.asyncio
async def test_node_pool_update_and_delete(client, cluster):
    node_pool = await client.create_node_pool(cluster.internal_id, NodePool(id="np1"))
    internal_id = node_pool.internal_id

    updated = await client.update_node_pool(
        internal_id, NodePool(id="np1", properties={"size": "large"})
    )
    assert updated.href == NODE_POOL_PATH
    assert (await client.get_node_pool(internal_id)).properties == {"size": "large"}

    await client.delete_node_pool(internal_id)
    with pytest.raises(NotFoundError):
        await client.get_node_pool(internal_id)
    with pytest.raises(NotFoundError):
        await client.delete_node_pool(internal_id)
    with pytest.raises(NotFoundError):
        await client.update_node_pool(internal_id, NodePool(id="np1"))


@pytest.mark.asyncio
async def test_deleting_cluster_removes_its_node_pools(client, cluster):
    await client.create_node_pool(cluster.internal_id, NodePool(id="np1"))
    other = await client.create_cluster(Cluster(name="other"))
    kept = await client.create_node_pool(other.internal_id, NodePool(id="np1"))

    await client.delete_cluster(cluster.internal_id)

    with pytest.raises(NotFoundError):
        await client.get_node_pool(InternalID(NODE_POOL_PATH))
    assert await client.get_node_pool(kept.internal_id) == kept


@pytest.mark.asyncio
async def test_wrong_kind_is_rejected(client, cluster):
    node_pool = await client.create_node_pool(cluster.internal_id, NodePool(id="np1"))

    with pytest.raises(InternalIDKindError, match="not a cluster"):
        await client.get_cluster(node_pool.internal_id)
    with pytest.raises(InternalIDKindError, match="not a node pool"):
        await client.get_node_pool(cluster.internal_id)
    with pytest.raises(InternalIDKindError):
        await client.create_node_pool(node_pool.internal_id, NodePool(id="np2"))


def test_stores_are_per_instance():
    first = MockClusterServiceClient()
    second = MockClusterServiceClient()

    assert first.clusters is not second.clusters
    assert first.node_pools is not second.node_pools


def test_get_conn_is_unsupported(client):
    with pytest.raises(NotImplementedError):
        client.get_conn()
