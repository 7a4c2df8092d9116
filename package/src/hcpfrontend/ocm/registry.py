from hcpfrontend.common.http_client import HttpConnection
from hcpfrontend.frontend.config import Settings
from hcpfrontend.ocm.base import ClusterServiceClientSpec
from hcpfrontend.ocm.client import ClusterServiceClient
from hcpfrontend.ocm.mock import MockClusterServiceClient


def new_cluster_service_client(settings: Settings) -> ClusterServiceClientSpec:
    """
    Build the Cluster Service client selected by ``settings``.

    Args:
        settings: Frontend settings

    Returns:
        MockClusterServiceClient when ``use_mock_clusters_service`` is set,
        otherwise a ClusterServiceClient connected to ``clusters_service_url``.
    """
    provisioning = {
        "provision_shard_id": settings.provision_shard_id,
        "provisioner_noop_provision": settings.provisioner_noop_provision,
        "provisioner_noop_deprovision": settings.provisioner_noop_deprovision,
    }
    if settings.use_mock_clusters_service:
        return MockClusterServiceClient(**provisioning)

    conn = HttpConnection(
        base_url=settings.clusters_service_url,
        insecure=settings.clusters_service_insecure,
        timeout_seconds=settings.clusters_service_timeout_seconds,
    )
    return ClusterServiceClient(conn, **provisioning)
