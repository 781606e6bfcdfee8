"""Metadata module - Restore and sync of dataset metadata.

This package keeps a dataset's status (UfsTotal, FileNum) in line with the
caching filesystem:
- predicates: whether a restore or a sync is needed
- restore: restore from a backed up metadata-info file
- sync: adopt a background scan result or scan directly
- commit: conflict-safe status update
- engine: MetadataEngine dispatching between the above
"""

from datasetsync.metadata.channel import ChannelFullError, ResultChannel
from datasetsync.metadata.commit import commit_status
from datasetsync.metadata.context import EngineContext
from datasetsync.metadata.engine import MetadataEngine
from datasetsync.metadata.predicates import should_restore_metadata, should_sync_metadata
from datasetsync.metadata.restore import restore_metadata_internal
from datasetsync.metadata.scanner import scan_metadata, start_background_scan
from datasetsync.metadata.sync import sync_metadata_internal

__all__ = [
    # channel
    "ChannelFullError",
    "ResultChannel",
    # commit
    "commit_status",
    # context
    "EngineContext",
    # engine
    "MetadataEngine",
    # predicates
    "should_restore_metadata",
    "should_sync_metadata",
    # restore
    "restore_metadata_internal",
    # scanner
    "scan_metadata",
    "start_background_scan",
    # sync
    "sync_metadata_internal",
]
