import logging
from typing import Optional

from hcpfrontend.common.logger import setup_logging
from hcpfrontend.frontend.config import Settings
from hcpfrontend.frontend.constants import PROGRAM_NAME, get_version
from hcpfrontend.frontend.database import DatabaseClient
from hcpfrontend.frontend.runtime import ServiceRuntime
from hcpfrontend.ocm.registry import new_cluster_service_client

logger = logging.getLogger(__name__)


def run_frontend(settings: Optional[Settings] = None):
    """Run the frontend until SIGINT or SIGTERM, then drain and return."""
    settings = settings or Settings()
    setup_logging(
        level=settings.log_level,
        service_name=PROGRAM_NAME,
        use_json=not settings.is_development,
    )

    version = get_version()
    logger.info(f"{PROGRAM_NAME} ({version}) started")

    # Always probed; a missing DB_URL is reported by the probe itself
    db_client = DatabaseClient(settings.database_url, settings.database_name)

    cs_client = new_cluster_service_client(settings)
    if settings.use_mock_clusters_service:
        logger.warning("Using the in-memory Clusters Service mock")
    elif settings.clusters_service_insecure:
        logger.warning(
            f"TLS verification disabled for Clusters Service at {settings.clusters_service_url}"
        )

    runtime = ServiceRuntime(settings=settings, cs_client=cs_client, db_client=db_client)
    runtime.listen()
    logger.info(f"Application running in region: {settings.region}")

    runtime.start()
    sig = runtime.wait_for_signal()
    if sig is not None:
        logger.info(f"caught {sig.name} signal")
    runtime.shutdown()
    runtime.join()
    if sig is None:
        raise RuntimeError("frontend processor exited unexpectedly")

    logger.info(f"{PROGRAM_NAME} ({version}) stopped")
