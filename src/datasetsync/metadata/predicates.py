"""Decisions on whether a dataset needs a metadata restore or sync.

Both predicates only read the current dataset record. Fetch errors
(NotFoundError, FetchError) propagate to the caller.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datasetsync.metadata.context import EngineContext


def should_restore_metadata(ctx: EngineContext) -> bool:
    """Check if metadata must be restored from a backup.

    True when a restore location is configured and the status has not been
    populated yet.
    """
    dataset = ctx.get_dataset()
    if dataset.spec.data_restore_location is None:
        return False
    should = dataset.status.ufs_total == ""
    ctx.logger.debug(
        f"Dataset {ctx.key} restores from {dataset.spec.data_restore_location.path}, "
        f"should restore metadata: {should}"
    )
    return should


def should_sync_metadata(ctx: EngineContext) -> bool:
    """Check if metadata must be synced by scanning.

    True when the status has not been populated yet and no restore is
    pending. A pending restore takes precedence since it populates the
    status itself.
    """
    dataset = ctx.get_dataset()
    if dataset.status.ufs_total != "":
        ctx.logger.debug(
            f"Dataset {ctx.key} already has UfsTotal {dataset.status.ufs_total}, skip sync"
        )
        return False
    return not should_restore_metadata(ctx)
