"""Cache filesystem module - Scan and query operations of the caching layer."""

from datasetsync.cachefs.errors import CommandError, MetadataQueryError, ScanError
from datasetsync.cachefs.executor import PodExecutor
from datasetsync.cachefs.fileutils import (
    CacheFileUtils,
    GooseFSFileUtils,
    MetadataInfoKey,
    parse_count,
    parse_metadata_info,
)

__all__ = [
    # errors
    "CommandError",
    "MetadataQueryError",
    "ScanError",
    # executor
    "PodExecutor",
    # fileutils
    "CacheFileUtils",
    "GooseFSFileUtils",
    "MetadataInfoKey",
    "parse_count",
    "parse_metadata_info",
]
