"""
In-memory Cluster Service client for tests and local development.
"""

from typing import Dict

from hcpfrontend.common.errors import NotFoundError
from hcpfrontend.ocm.base import ClusterServiceClientSpec, require_kind
from hcpfrontend.ocm.internal_id import (
    InternalID,
    ResourceKind,
    generate_cluster_href,
    generate_node_pool_href,
)
from hcpfrontend.ocm.models import Cluster, ClusterStatus, NodePool


class MockClusterServiceClient(ClusterServiceClientSpec):
    """
    Keeps clusters and node pools in dicts keyed by InternalID.

    The store lives and dies with the instance and is not shared. Models go in
    and come out as deep copies, so only this instance's operations change it.
    It is not safe for concurrent use from several threads; callers needing
    that must add their own lock. ``timeout`` arguments are ignored since nothing blocks.
    """

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.clusters: Dict[InternalID, Cluster] = {}
        self.node_pools: Dict[InternalID, NodePool] = {}

    def get_conn(self):
        raise NotImplementedError("get_conn not implemented")

    # -------------------------------------------------
    # CLUSTERS
    # -------------------------------------------------
    def _stored_cluster(self, internal_id: InternalID) -> Cluster:
        require_kind(internal_id, ResourceKind.CLUSTER)
        cluster = self.clusters.get(internal_id)
        if cluster is None:
            raise NotFoundError(str(internal_id))
        return cluster

    async def get_cluster(self, internal_id, *, timeout=None) -> Cluster:
        return self._stored_cluster(internal_id).model_copy(deep=True)

    async def get_cluster_status(self, internal_id, *, timeout=None) -> ClusterStatus:
        cluster = self._stored_cluster(internal_id)
        if cluster.status is None:
            return ClusterStatus(id=cluster.id)
        return cluster.status.model_copy(deep=True)

    async def create_cluster(self, cluster, *, timeout=None) -> Cluster:
        # The Cluster Service assigns the href on creation; mirror that here.
        href = generate_cluster_href(cluster.name or "")
        internal_id = InternalID(href)
        enriched = self.add_properties(cluster).model_copy(
            update={"href": href, "id": cluster.id or internal_id.id}
        )
        self.clusters[internal_id] = enriched
        return enriched.model_copy(deep=True)

    async def update_cluster(self, internal_id, cluster, *, timeout=None) -> Cluster:
        self._stored_cluster(internal_id)
        updated = cluster.model_copy(update={"href": str(internal_id)}, deep=True)
        self.clusters[internal_id] = updated
        return updated.model_copy(deep=True)

    async def delete_cluster(self, internal_id, *, timeout=None) -> None:
        self._stored_cluster(internal_id)
        del self.clusters[internal_id]
        # Node pools do not outlive their cluster.
        for node_pool_id in [
            np_id for np_id in self.node_pools if np_id.cluster_internal_id == internal_id
        ]:
            del self.node_pools[node_pool_id]

    # -------------------------------------------------
    # NODE POOLS
    # -------------------------------------------------
    def _stored_node_pool(self, internal_id: InternalID) -> NodePool:
        require_kind(internal_id, ResourceKind.NODE_POOL)
        node_pool = self.node_pools.get(internal_id)
        if node_pool is None:
            raise NotFoundError(str(internal_id))
        return node_pool

    async def get_node_pool(self, internal_id, *, timeout=None) -> NodePool:
        return self._stored_node_pool(internal_id).model_copy(deep=True)

    async def create_node_pool(
        self, cluster_internal_id, node_pool, *, timeout=None
    ) -> NodePool:
        # The parent cluster is not looked up, only the identifier kind.
        require_kind(cluster_internal_id, ResourceKind.CLUSTER)
        href = generate_node_pool_href(cluster_internal_id.path, node_pool.id or "")
        internal_id = InternalID(href)
        enriched = node_pool.model_copy(update={"href": href}, deep=True)
        self.node_pools[internal_id] = enriched
        return enriched.model_copy(deep=True)

    async def update_node_pool(self, internal_id, node_pool, *, timeout=None) -> NodePool:
        self._stored_node_pool(internal_id)
        updated = node_pool.model_copy(update={"href": str(internal_id)}, deep=True)
        self.node_pools[internal_id] = updated
        return updated.model_copy(deep=True)

    async def delete_node_pool(self, internal_id, *, timeout=None) -> None:
        self._stored_node_pool(internal_id)
        del self.node_pools[internal_id]
