"""Metadata engine entry point.

This module provides:
- MetadataEngine: Decides between restore, sync or nothing and runs it

Dispatch order:
    | should_restore_metadata | should_sync_metadata | Action                     |
    |-------------------------|----------------------|----------------------------|
    | True                    | (not evaluated)      | restore_metadata_internal  |
    | False                   | True                 | sync_metadata_internal     |
    | False                   | False                | nothing                    |
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from datasetsync.metadata.predicates import should_restore_metadata, should_sync_metadata
from datasetsync.metadata.restore import restore_metadata_internal
from datasetsync.metadata.sync import sync_metadata_internal

if TYPE_CHECKING:
    from datasetsync.metadata.context import EngineContext


class MetadataEngine:
    """Keeps a dataset's status in line with the caching filesystem metadata.

    Two engine calls for the same dataset may both scan; the conflict-safe
    commit keeps the status consistent but the scan itself is not deduplicated
    across calls.
    """

    def __init__(self, ctx: EngineContext) -> None:
        self._ctx = ctx

    @property
    def context(self) -> EngineContext:
        """Get the engine context."""
        return self._ctx

    def should_restore_metadata(self) -> bool:
        return should_restore_metadata(self._ctx)

    def should_sync_metadata(self) -> bool:
        return should_sync_metadata(self._ctx)

    def restore_metadata_internal(self) -> None:
        restore_metadata_internal(self._ctx)

    def sync_metadata_internal(self) -> None:
        sync_metadata_internal(self._ctx)

    def sync_metadata(self) -> None:
        """Restore or sync the dataset's metadata if needed.

        Errors from the predicates abort before either path runs. The
        caller is expected to call again on its next reconciliation.
        """
        if self.should_restore_metadata():
            self._ctx.logger.info(f"Restoring metadata of dataset {self._ctx.key}")
            self.restore_metadata_internal()
            return

        if self.should_sync_metadata():
            self._ctx.logger.info(f"Syncing metadata of dataset {self._ctx.key}")
            self.sync_metadata_internal()
            return

        self._ctx.logger.debug(f"Metadata of dataset {self._ctx.key} is up to date")
