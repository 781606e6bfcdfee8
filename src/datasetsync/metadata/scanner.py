"""Scanning the caching filesystem for dataset metadata.

This module provides:
- scan_metadata: Load metadata and read the totals, formatted for the status
- start_background_scan: Run scan_metadata in a thread feeding a ResultChannel
"""

from __future__ import annotations

import threading
from datetime import datetime
from typing import TYPE_CHECKING

from datasetsync.core.types import MetadataSyncResult
from datasetsync.core.units import bytes_size
from datasetsync.metadata.channel import ResultChannel

if TYPE_CHECKING:
    from datasetsync.metadata.context import EngineContext


def scan_metadata(ctx: EngineContext) -> tuple[str, str]:
    """Scan the caching filesystem.

    Loads the metadata under the configured root, then reads the total
    bytes and file count.

    Returns:
        (ufs_total, file_num) with ufs_total human-readable.

    Raises:
        ScanError: If loading or counting fails.
    """
    root = ctx.config.metadata_root
    ctx.logger.info(f"Scanning metadata of dataset {ctx.key} under {root}")
    ctx.file_utils.load_metadata_without_timeout(root)
    total_bytes = ctx.file_utils.total_storage_bytes()
    file_nums = ctx.file_utils.total_file_nums()
    return bytes_size(total_bytes), str(file_nums)


def start_background_scan(ctx: EngineContext) -> ResultChannel:
    """Start scanning in a daemon thread.

    The thread puts exactly one result into the returned channel:
    ``done=True`` with the totals, or ``done=False`` with the error. It
    does not depend on anyone waiting for the result.

    Returns:
        Channel the result will be delivered to.
    """
    channel = ResultChannel()

    def _run() -> None:
        result = MetadataSyncResult(start_time=datetime.now())
        try:
            result.ufs_total, result.file_num = scan_metadata(ctx)
            result.done = True
        except Exception as e:
            ctx.logger.error(f"Background metadata scan of dataset {ctx.key} failed: {e}")
            result.error = e
        channel.put(result)

    thread = threading.Thread(
        target=_run,
        name=f"metadata-scan-{ctx.key.namespace}-{ctx.key.name}",
        daemon=True,
    )
    thread.start()
    return channel
