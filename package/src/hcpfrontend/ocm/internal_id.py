import posixpath
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from hcpfrontend.common.errors import InternalIDFormatError
from hcpfrontend.common.http_client import HttpConnection
from hcpfrontend.ocm.resources import ClusterClient, NodePoolClient

API_ROOT = "/api/clusters_mgmt/v1"
CLUSTERS_PATH = API_ROOT + "/clusters"

_INTERNAL_ID_PATTERN = re.compile(
    r"^/api/clusters_mgmt/v1/clusters/(?P<cluster>[^/]+)(?:/node_pools/(?P<node_pool>[^/]+))?$"
)


class ResourceKind(str, Enum):
    """Kinds of Cluster Service resources an InternalID can address."""

    CLUSTER = "Cluster"
    NODE_POOL = "NodePool"


def generate_cluster_href(cluster_name: str) -> str:
    return posixpath.join(CLUSTERS_PATH, cluster_name)


def generate_node_pool_href(cluster_path: str, node_pool_id: str) -> str:
    return posixpath.join(cluster_path, "node_pools", node_pool_id)


@dataclass(frozen=True)
class InternalID:
    """
    Validated Cluster Service resource path.

    Paths look like ``/api/clusters_mgmt/v1/clusters/{id}`` for clusters and
    ``/api/clusters_mgmt/v1/clusters/{id}/node_pools/{id}`` for node pools.
    Equality and hashing use the exact path, so an InternalID can key a dict.
    """

    path: str
    kind: ResourceKind = field(init=False, compare=False)

    def __post_init__(self):
        match = _INTERNAL_ID_PATTERN.match(self.path) if isinstance(self.path, str) else None
        if match is None:
            raise InternalIDFormatError(str(self.path))

        kind = ResourceKind.NODE_POOL if match.group("node_pool") else ResourceKind.CLUSTER
        object.__setattr__(self, "kind", kind)

    def __str__(self) -> str:
        return self.path

    @property
    def id(self) -> str:
        """The last path segment: the cluster or node pool ID."""
        return posixpath.basename(self.path)

    @property
    def cluster_internal_id(self) -> "InternalID":
        """The owning cluster for a node pool, or the cluster itself."""
        if self.kind == ResourceKind.CLUSTER:
            return self
        return InternalID(self.path.split("/node_pools/", 1)[0])

    def get_cluster_client(
        self, conn: HttpConnection
    ) -> Tuple[Optional[ClusterClient], bool]:
        if self.kind == ResourceKind.CLUSTER:
            return ClusterClient(conn, self.path), True
        return None, False

    def get_node_pool_client(
        self, conn: HttpConnection
    ) -> Tuple[Optional[NodePoolClient], bool]:
        if self.kind == ResourceKind.NODE_POOL:
            return NodePoolClient(conn, self.path), True
        return None, False
