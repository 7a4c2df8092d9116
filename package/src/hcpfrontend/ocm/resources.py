"""
Handles for individual Cluster Service resources.

Each method sends exactly one request. A 404 becomes ``NotFoundError``; any
other non-2xx status raises ``httpx.HTTPStatusError`` unchanged. Methods that
read a body return None when the response carried none, or one that is not a
JSON object of the expected shape, leaving the caller to decide what an
unusable body means.
"""

import logging
from typing import Any, Optional, Type, TypeVar

import httpx
from httpx import USE_CLIENT_DEFAULT
from pydantic import ValidationError

from hcpfrontend.common.errors import NotFoundError
from hcpfrontend.common.http_client import HttpConnection
from hcpfrontend.ocm.models import Cluster, ClusterStatus, NodePool

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", Cluster, ClusterStatus, NodePool)
# seconds, None to disable, or USE_CLIENT_DEFAULT
Timeout = Any


def _check_status(response: httpx.Response, path: str) -> None:
    if response.status_code == httpx.codes.NOT_FOUND:
        raise NotFoundError(path)
    response.raise_for_status()


def _read_body(response: httpx.Response, model: Type[ModelT]) -> Optional[ModelT]:
    if not response.content:
        return None
    try:
        data = response.json()
        if not data:
            return None
        return model.model_validate(data)
    except (ValueError, ValidationError) as e:
        # Not JSON, or not an object of the expected shape
        logger.warning(
            f"Unusable {model.__name__} body from {response.request.url}: {e}"
        )
        return None


class _ResourceClient:
    def __init__(self, conn: HttpConnection, path: str):
        self.conn = conn
        self.path = path

    async def _get(self, model: Type[ModelT], path: str, timeout: Timeout):
        response = await self.conn.get(path, timeout=timeout)
        _check_status(response, path)
        return _read_body(response, model)

    async def _update(self, model: Type[ModelT], body: ModelT, timeout: Timeout):
        response = await self.conn.patch(self.path, json=body.to_payload(), timeout=timeout)
        _check_status(response, self.path)
        return _read_body(response, model)

    async def delete(self, *, timeout: Timeout = USE_CLIENT_DEFAULT) -> None:
        response = await self.conn.delete(self.path, timeout=timeout)
        _check_status(response, self.path)


class NodePoolsClient:
    """Collection of node pools belonging to one cluster."""

    def __init__(self, conn: HttpConnection, path: str):
        self.conn = conn
        self.path = path

    async def add(
        self, node_pool: NodePool, *, timeout: Timeout = USE_CLIENT_DEFAULT
    ) -> Optional[NodePool]:
        response = await self.conn.post(self.path, json=node_pool.to_payload(), timeout=timeout)
        _check_status(response, self.path)
        return _read_body(response, NodePool)


class ClustersClient:
    """The top-level clusters collection."""

    def __init__(self, conn: HttpConnection, path: str):
        self.conn = conn
        self.path = path

    async def add(
        self, cluster: Cluster, *, timeout: Timeout = USE_CLIENT_DEFAULT
    ) -> Optional[Cluster]:
        response = await self.conn.post(self.path, json=cluster.to_payload(), timeout=timeout)
        _check_status(response, self.path)
        return _read_body(response, Cluster)


class ClusterClient(_ResourceClient):
    async def get(self, *, timeout: Timeout = USE_CLIENT_DEFAULT) -> Optional[Cluster]:
        return await self._get(Cluster, self.path, timeout)

    async def get_status(
        self, *, timeout: Timeout = USE_CLIENT_DEFAULT
    ) -> Optional[ClusterStatus]:
        return await self._get(ClusterStatus, self.path + "/status", timeout)

    async def update(
        self, cluster: Cluster, *, timeout: Timeout = USE_CLIENT_DEFAULT
    ) -> Optional[Cluster]:
        return await self._update(Cluster, cluster, timeout)

    def node_pools(self) -> NodePoolsClient:
        return NodePoolsClient(self.conn, self.path + "/node_pools")


class NodePoolClient(_ResourceClient):
    async def get(self, *, timeout: Timeout = USE_CLIENT_DEFAULT) -> Optional[NodePool]:
        return await self._get(NodePool, self.path, timeout)

    async def update(
        self, node_pool: NodePool, *, timeout: Timeout = USE_CLIENT_DEFAULT
    ) -> Optional[NodePool]:
        return await self._update(NodePool, node_pool, timeout)
