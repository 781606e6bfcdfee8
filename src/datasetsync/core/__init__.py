"""Core module - Shared types, configuration and size formatting."""

from datasetsync.core.config import ClusterConfig, EngineConfig
from datasetsync.core.types import (
    DataRestoreLocation,
    Dataset,
    DatasetSpec,
    DatasetStatus,
    MetadataSyncResult,
    Mount,
    NamespacedName,
)
from datasetsync.core.units import bytes_size

__all__ = [
    # Config
    "ClusterConfig",
    "EngineConfig",
    # Types
    "DataRestoreLocation",
    "Dataset",
    "DatasetSpec",
    "DatasetStatus",
    "MetadataSyncResult",
    "Mount",
    "NamespacedName",
    # Units
    "bytes_size",
]
