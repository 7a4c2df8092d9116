from abc import ABC, abstractmethod
from typing import Dict, Optional

from hcpfrontend.common.errors import InternalIDKindError
from hcpfrontend.common.http_client import HttpConnection
from hcpfrontend.ocm.internal_id import InternalID, ResourceKind
from hcpfrontend.ocm.models import Cluster, ClusterStatus, NodePool
from hcpfrontend.ocm.properties import build_additional_properties


def require_kind(internal_id: InternalID, kind: ResourceKind) -> None:
    """Raise InternalIDKindError unless ``internal_id`` addresses ``kind``."""
    if internal_id.kind != kind:
        expected = "cluster" if kind == ResourceKind.CLUSTER else "node pool"
        raise InternalIDKindError(str(internal_id), expected)


class ClusterServiceClientSpec(ABC):
    """
    Cluster Service client contract.
    The frontend depends ONLY on this interface, so the live client and the
    in-memory mock are interchangeable.

    All implementations must:
    1. Raise NotFoundError when the addressed resource does not exist
    2. Raise InternalIDKindError when given an InternalID of the wrong kind
    3. Return new model instances, never mutating the caller's payload

    Every operation takes an optional ``timeout`` in seconds for the outbound
    call. Implementations that do no I/O ignore it.
    """

    def __init__(
        self,
        *,
        provision_shard_id: Optional[str] = None,
        provisioner_noop_provision: bool = False,
        provisioner_noop_deprovision: bool = False,
    ):
        # Pins every cluster request to one provision shard during testing.
        self.provision_shard_id = provision_shard_id
        # Short-circuit the full provision / deprovision flow during testing.
        self.provisioner_noop_provision = provisioner_noop_provision
        self.provisioner_noop_deprovision = provisioner_noop_deprovision

    @abstractmethod
    def get_conn(self) -> HttpConnection:
        raise NotImplementedError

    # -------------------------------------------------
    # PROPERTIES
    # -------------------------------------------------
    def additional_properties(self) -> Dict[str, str]:
        """Property bag for this client's create requests; a new dict on every call."""
        return build_additional_properties(
            provision_shard_id=self.provision_shard_id,
            noop_provision=self.provisioner_noop_provision,
            noop_deprovision=self.provisioner_noop_deprovision,
        )

    def add_properties(self, cluster: Cluster) -> Cluster:
        """Return a copy of ``cluster`` carrying the additional properties."""
        properties = {**cluster.properties, **self.additional_properties()}
        return cluster.model_copy(update={"properties": properties}, deep=True)

    # -------------------------------------------------
    # CLUSTERS
    # -------------------------------------------------
    @abstractmethod
    async def get_cluster(
        self, internal_id: InternalID, *, timeout: Optional[float] = None
    ) -> Cluster:
        raise NotImplementedError

    @abstractmethod
    async def get_cluster_status(
        self, internal_id: InternalID, *, timeout: Optional[float] = None
    ) -> ClusterStatus:
        raise NotImplementedError

    @abstractmethod
    async def create_cluster(
        self, cluster: Cluster, *, timeout: Optional[float] = None
    ) -> Cluster:
        """
        Create a cluster with the additional properties injected.

        Returns the created cluster; its ``href`` (and so its ``internal_id``)
        is the address the Cluster Service assigned.
        """
        raise NotImplementedError

    @abstractmethod
    async def update_cluster(
        self,
        internal_id: InternalID,
        cluster: Cluster,
        *,
        timeout: Optional[float] = None,
    ) -> Cluster:
        raise NotImplementedError

    @abstractmethod
    async def delete_cluster(
        self, internal_id: InternalID, *, timeout: Optional[float] = None
    ) -> None:
        raise NotImplementedError

    # -------------------------------------------------
    # NODE POOLS
    # -------------------------------------------------
    @abstractmethod
    async def get_node_pool(
        self, internal_id: InternalID, *, timeout: Optional[float] = None
    ) -> NodePool:
        raise NotImplementedError

    @abstractmethod
    async def create_node_pool(
        self,
        cluster_internal_id: InternalID,
        node_pool: NodePool,
        *,
        timeout: Optional[float] = None,
    ) -> NodePool:
        """
        Create a node pool under the cluster addressed by ``cluster_internal_id``.

        The new node pool's address is ``<cluster path>/node_pools/<node pool id>``.
        """
        raise NotImplementedError

    @abstractmethod
    async def update_node_pool(
        self,
        internal_id: InternalID,
        node_pool: NodePool,
        *,
        timeout: Optional[float] = None,
    ) -> NodePool:
        raise NotImplementedError

    @abstractmethod
    async def delete_node_pool(
        self, internal_id: InternalID, *, timeout: Optional[float] = None
    ) -> None:
        raise NotImplementedError
