"""Restoring dataset metadata from a backed up metadata-info file."""

from __future__ import annotations

from typing import TYPE_CHECKING

from datasetsync.cachefs.errors import MetadataQueryError
from datasetsync.cachefs.fileutils import MetadataInfoKey
from datasetsync.core.units import bytes_size
from datasetsync.metadata.commit import commit_status

if TYPE_CHECKING:
    from datasetsync.metadata.context import EngineContext


def restore_metadata_internal(ctx: EngineContext) -> None:
    """Restore UfsTotal and FileNum from the dataset's metadata-info file.

    The file-count value read from the file is also used as the byte count
    the UfsTotal is formatted from, so "1024" restores as
    UfsTotal="1.00KiB", FileNum="1024".

    Raises:
        MetadataQueryError: If the file cannot be queried or holds a
            non-numeric value. Nothing is committed in that case.
        ConflictExhaustedError: If the commit kept conflicting.
    """
    filename = ctx.config.metadata_info_file(ctx.key.name, ctx.key.namespace)
    raw = ctx.file_utils.query_metadata_info_into_file(MetadataInfoKey.FILE_NUM, filename)

    try:
        count = int(raw.strip())
    except ValueError as e:
        raise MetadataQueryError(f"Invalid value {raw!r} in {filename}") from e

    ctx.logger.info(f"Restoring metadata of dataset {ctx.key} from {filename}")
    commit_status(ctx, ufs_total=bytes_size(count), file_num=raw.strip())
