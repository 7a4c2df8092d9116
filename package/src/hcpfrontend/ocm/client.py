import logging
from typing import Optional

from httpx import USE_CLIENT_DEFAULT

from hcpfrontend.common.errors import EmptyResponseBodyError, InternalIDKindError
from hcpfrontend.common.http_client import HttpConnection
from hcpfrontend.ocm.base import ClusterServiceClientSpec
from hcpfrontend.ocm.internal_id import CLUSTERS_PATH, InternalID
from hcpfrontend.ocm.models import Cluster, ClusterStatus, NodePool
from hcpfrontend.ocm.resources import ClusterClient, ClustersClient, NodePoolClient

logger = logging.getLogger(__name__)


def _timeout(timeout: Optional[float]):
    return USE_CLIENT_DEFAULT if timeout is None else timeout


class ClusterServiceClient(ClusterServiceClientSpec):
    """
    Client for a remote Cluster Service.

    Every operation sends exactly one request through ``conn``. Nothing is
    retried or cached, so a single instance is safe to share between tasks.
    """

    def __init__(self, conn: HttpConnection, **kwargs):
        super().__init__(**kwargs)
        self.conn = conn

    def get_conn(self) -> HttpConnection:
        return self.conn

    async def close(self):
        await self.conn.close()

    def _cluster_client(self, internal_id: InternalID) -> ClusterClient:
        client, ok = internal_id.get_cluster_client(self.conn)
        if not ok:
            raise InternalIDKindError(str(internal_id), "cluster")
        return client

    def _node_pool_client(self, internal_id: InternalID) -> NodePoolClient:
        client, ok = internal_id.get_node_pool_client(self.conn)
        if not ok:
            raise InternalIDKindError(str(internal_id), "node pool")
        return client

    # -------------------------------------------------
    # CLUSTERS
    # -------------------------------------------------
    async def get_cluster(self, internal_id, *, timeout=None) -> Cluster:
        cluster = await self._cluster_client(internal_id).get(timeout=_timeout(timeout))
        if cluster is None:
            raise EmptyResponseBodyError(str(internal_id))
        return cluster

    async def get_cluster_status(self, internal_id, *, timeout=None) -> ClusterStatus:
        status = await self._cluster_client(internal_id).get_status(timeout=_timeout(timeout))
        if status is None:
            raise EmptyResponseBodyError(str(internal_id))
        return status

    async def create_cluster(self, cluster, *, timeout=None) -> Cluster:
        body = self.add_properties(cluster)
        created = await ClustersClient(self.conn, CLUSTERS_PATH).add(
            body, timeout=_timeout(timeout)
        )
        if created is None:
            raise EmptyResponseBodyError(CLUSTERS_PATH)
        logger.info(f"Created cluster {created.name} at {created.href}")
        return created

    async def update_cluster(self, internal_id, cluster, *, timeout=None) -> Cluster:
        updated = await self._cluster_client(internal_id).update(
            cluster, timeout=_timeout(timeout)
        )
        if updated is None:
            raise EmptyResponseBodyError(str(internal_id))
        return updated

    async def delete_cluster(self, internal_id, *, timeout=None) -> None:
        await self._cluster_client(internal_id).delete(timeout=_timeout(timeout))
        logger.info(f"Deleted cluster {internal_id}")

    # -------------------------------------------------
    # NODE POOLS
    # -------------------------------------------------
    async def get_node_pool(self, internal_id, *, timeout=None) -> NodePool:
        node_pool = await self._node_pool_client(internal_id).get(timeout=_timeout(timeout))
        if node_pool is None:
            raise EmptyResponseBodyError(str(internal_id))
        return node_pool

    async def create_node_pool(
        self, cluster_internal_id, node_pool, *, timeout=None
    ) -> NodePool:
        node_pools = self._cluster_client(cluster_internal_id).node_pools()
        created = await node_pools.add(node_pool, timeout=_timeout(timeout))
        if created is None:
            raise EmptyResponseBodyError(node_pools.path)
        logger.info(f"Created node pool {created.id} at {created.href}")
        return created

    async def update_node_pool(self, internal_id, node_pool, *, timeout=None) -> NodePool:
        updated = await self._node_pool_client(internal_id).update(
            node_pool, timeout=_timeout(timeout)
        )
        if updated is None:
            raise EmptyResponseBodyError(str(internal_id))
        return updated

    async def delete_node_pool(self, internal_id, *, timeout=None) -> None:
        await self._node_pool_client(internal_id).delete(timeout=_timeout(timeout))
        logger.info(f"Deleted node pool {internal_id}")
