from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class ClusterState(str, Enum):
    """Cluster states reported by the Cluster Service."""

    ERROR = "error"
    HIBERNATING = "hibernating"
    INSTALLING = "installing"
    PENDING = "pending"
    POWERING_DOWN = "powering_down"
    READY = "ready"
    RESUMING = "resuming"
    UNINSTALLING = "uninstalling"
    UNKNOWN = "unknown"
    VALIDATING = "validating"
    WAITING = "waiting"


class ClusterStatus(BaseModel):
    model_config = ConfigDict(extra="allow")

    kind: str = "ClusterStatus"
    id: Optional[str] = None
    href: Optional[str] = None
    state: Optional[str] = None
    description: Optional[str] = None


class _Resource(BaseModel):
    """
    Common shape of Cluster Service resources.

    Fields the frontend does not model are kept as extras so that a body read
    from the Cluster Service can be sent back unchanged.
    """

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    href: Optional[str] = None
    properties: Dict[str, str] = Field(default_factory=dict)

    @property
    def internal_id(self):
        """InternalID derived from ``href``; None until the resource is created."""
        from hcpfrontend.ocm.internal_id import InternalID

        if not self.href:
            return None
        return InternalID(self.href)

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class Cluster(_Resource):
    kind: str = "Cluster"
    name: Optional[str] = None
    status: Optional[ClusterStatus] = None


class NodePool(_Resource):
    kind: str = "NodePool"
