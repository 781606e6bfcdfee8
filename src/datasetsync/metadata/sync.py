"""Syncing dataset metadata from a background scan or a direct scan."""

from __future__ import annotations

from typing import TYPE_CHECKING

from datasetsync.metadata.commit import commit_status
from datasetsync.metadata.scanner import scan_metadata

if TYPE_CHECKING:
    from datasetsync.metadata.context import EngineContext


def sync_metadata_internal(ctx: EngineContext) -> None:
    """Sync UfsTotal and FileNum onto the dataset status.

    With an in-flight background scan, its result is adopted as is if it
    arrives within the wait budget. Otherwise (no background scan, timeout,
    or a failed background scan) the filesystem is scanned directly. The
    background scan is never cancelled.

    Raises:
        ScanError: If the direct scan fails. Nothing is committed then.
        ConflictExhaustedError: If the commit kept conflicting.
    """
    channel = ctx.result_channel
    if channel is not None:
        timeout = ctx.config.metadata_sync_wait_timeout
        result = channel.wait(timeout)
        if result is None:
            ctx.logger.warning(
                f"Background metadata scan of dataset {ctx.key} not done after "
                f"{timeout}s, scanning directly"
            )
        elif not result.done:
            ctx.logger.warning(
                f"Background metadata scan of dataset {ctx.key} started at "
                f"{result.start_time.isoformat()} failed: {result.error}, scanning directly"
            )
        else:
            ctx.logger.debug(
                f"Adopting background metadata scan of dataset {ctx.key} "
                f"started at {result.start_time.isoformat()}"
            )
            commit_status(ctx, ufs_total=result.ufs_total, file_num=result.file_num)
            return

    ufs_total, file_num = scan_metadata(ctx)
    commit_status(ctx, ufs_total=ufs_total, file_num=file_num)
