"""Cache filesystem utilities used by the metadata engine.

This module provides:
- MetadataInfoKey: Keys of a backed up metadata-info file
- CacheFileUtils: Protocol of the scan and query operations
- GooseFSFileUtils: Implementation running goosefs commands in the master pod

A metadata-info file is written when a dataset is backed up and holds one
``key: value`` pair per line:

    dataset: hbase
    namespace: fluid
    ufstotal: 1024
    filenum: 1024
"""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import TYPE_CHECKING, Protocol

from datasetsync.cachefs.errors import CommandError, MetadataQueryError, ScanError

if TYPE_CHECKING:
    from datasetsync.cachefs.executor import PodExecutor

logger = logging.getLogger(__name__)


class MetadataInfoKey(str, Enum):
    """Keys stored in a metadata-info file."""

    DATASET_NAME = "dataset"
    NAMESPACE = "namespace"
    UFS_TOTAL = "ufstotal"
    FILE_NUM = "filenum"


class CacheFileUtils(Protocol):
    """Scan and query operations of the caching filesystem."""

    def query_metadata_info_into_file(self, key: MetadataInfoKey, filename: str) -> str:
        """Read the raw value stored under key in a metadata-info file.

        Raises:
            MetadataQueryError: If the file or key cannot be read.
        """
        ...

    def load_metadata_without_timeout(self, path: str) -> None:
        """Load the metadata of everything under path from the underlying storage.

        Raises:
            ScanError: If loading fails.
        """
        ...

    def total_storage_bytes(self) -> int:
        """Total bytes of the underlying storage under management."""
        ...

    def total_file_nums(self) -> int:
        """Total number of files under management."""
        ...


def parse_metadata_info(content: str) -> dict[str, str]:
    """Parse ``key: value`` lines of a metadata-info file."""
    values: dict[str, str] = {}
    for line in content.splitlines():
        key, sep, value = line.partition(":")
        if sep:
            values[key.strip()] = value.strip()
    return values


def parse_count(output: str) -> tuple[int, int, int]:
    """Parse the output of ``goosefs fs count``.

    The output has a header line followed by a line of three numbers:

        File Count               Folder Count             Folder Size
        6                        1                        571808905

    Returns:
        (file_count, folder_count, total_size) tuple.

    Raises:
        ScanError: If the output is not in the expected format.
    """
    lines = [line for line in output.strip().splitlines() if line.strip()]
    if len(lines) < 2:
        raise ScanError(f"Unexpected count output: {output!r}")

    fields = lines[-1].split()
    if len(fields) != 3:
        raise ScanError(f"Unexpected count output: {output!r}")

    try:
        file_count, folder_count, total_size = (int(f) for f in fields)
    except ValueError as e:
        raise ScanError(f"Unexpected count output: {output!r}") from e
    return file_count, folder_count, total_size


class GooseFSFileUtils:
    """GooseFS operations executed in the master pod of a runtime."""

    def __init__(self, executor: PodExecutor, root: str = "/") -> None:
        """Initialize the file utilities.

        Args:
            executor: Executor bound to the master container.
            root: Cache namespace path counted by the totals.
        """
        self._executor = executor
        self._root = root
        # Count of root, shared by both totals until the next metadata load
        self._root_count: tuple[int, int, int] | None = None
        self._lock = threading.Lock()

    def query_metadata_info_into_file(self, key: MetadataInfoKey, filename: str) -> str:
        try:
            content = self._executor.exec(["cat", filename])
        except CommandError as e:
            raise MetadataQueryError(f"Failed to read metadata info file {filename}: {e}") from e

        values = parse_metadata_info(content)
        if key.value not in values:
            raise MetadataQueryError(f"Key {key.value!r} not found in {filename}")
        return values[key.value]

    def load_metadata_without_timeout(self, path: str) -> None:
        logger.info(f"Loading metadata of {path} from underlying storage")
        self._executor.exec(["goosefs", "fs", "loadMetadata", "-R", path], timeout=None)
        with self._lock:
            self._root_count = None

    def count(self, path: str) -> tuple[int, int, int]:
        """Count files, folders and bytes under path."""
        return parse_count(self._executor.exec(["goosefs", "fs", "count", path]))

    def _count_root(self) -> tuple[int, int, int]:
        with self._lock:
            if self._root_count is None:
                self._root_count = self.count(self._root)
            return self._root_count

    def total_storage_bytes(self) -> int:
        _, _, total_size = self._count_root()
        return total_size

    def total_file_nums(self) -> int:
        file_count, _, _ = self._count_root()
        return file_count
