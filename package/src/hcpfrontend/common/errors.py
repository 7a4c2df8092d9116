"""
Error types shared by the Cluster Service clients and the frontend.
"""

from typing import Optional


class ClusterServiceError(Exception):
    """Base class for errors raised by Cluster Service clients."""

    code: str = "CLUSTER_SERVICE_ERROR"

    def __init__(self, message: str, *, path: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.path = path


class InternalIDFormatError(ClusterServiceError, ValueError):
    """Raised when a string is not a valid Cluster Service resource path."""

    code = "INVALID_INTERNAL_ID"

    def __init__(self, path: str):
        super().__init__(f"invalid InternalID: {path}", path=path)


class InternalIDKindError(ClusterServiceError, ValueError):
    """An operation received an InternalID of the wrong resource kind."""

    code = "INTERNAL_ID_KIND_MISMATCH"

    def __init__(self, path: str, expected: str):
        super().__init__(f"OCM path is not a {expected}: {path}", path=path)
        self.expected = expected


class NotFoundError(ClusterServiceError):
    code = "NOT_FOUND"

    def __init__(self, path: str):
        super().__init__(f"Not Found: {path}", path=path)


class EmptyResponseBodyError(ClusterServiceError):
    """The Cluster Service answered successfully but sent no body."""

    code = "EMPTY_RESPONSE_BODY"

    def __init__(self, path: Optional[str] = None):
        super().__init__("empty response body", path=path)
