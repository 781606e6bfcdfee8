"""Cluster module - Dataset resource store client and conflict retry."""

from datasetsync.cluster.api import (
    APIError,
    AuthenticationError,
    ClusterClient,
    ConflictError,
    FetchError,
    HTTPClusterClient,
    NotFoundError,
)
from datasetsync.cluster.retry import (
    DEFAULT_BACKOFF,
    DEFAULT_RETRY,
    Backoff,
    ConflictExhaustedError,
    retry_on_conflict,
)

__all__ = [
    # api
    "APIError",
    "AuthenticationError",
    "ClusterClient",
    "ConflictError",
    "FetchError",
    "HTTPClusterClient",
    "NotFoundError",
    # retry
    "Backoff",
    "ConflictExhaustedError",
    "DEFAULT_BACKOFF",
    "DEFAULT_RETRY",
    "retry_on_conflict",
]
