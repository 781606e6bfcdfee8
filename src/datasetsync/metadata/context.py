"""Per-call context of the metadata engine."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from datasetsync.core.config import EngineConfig

if TYPE_CHECKING:
    from datasetsync.cachefs.fileutils import CacheFileUtils
    from datasetsync.cluster.api import ClusterClient
    from datasetsync.cluster.retry import Backoff
    from datasetsync.core.types import Dataset, NamespacedName
    from datasetsync.metadata.channel import ResultChannel


def _default_logger() -> logging.Logger:
    return logging.getLogger("datasetsync.metadata")


@dataclass(frozen=True)
class EngineContext:
    """Everything one metadata engine call works with.

    Attributes:
        key: Namespace and name of the dataset.
        client: Resource store holding the dataset.
        file_utils: Scan and query operations of the caching filesystem.
        result_channel: Channel of an in-flight background scan, or None
            when no background scan is running.
        config: Engine tunables.
        backoff: Retry policy of status commits (None = default policy).
        logger: Logger used for this dataset.
    """

    key: NamespacedName
    client: ClusterClient
    file_utils: CacheFileUtils
    result_channel: ResultChannel | None = None
    config: EngineConfig = field(default_factory=EngineConfig)
    backoff: Backoff | None = None
    logger: logging.Logger = field(default_factory=_default_logger)

    def get_dataset(self) -> Dataset:
        """Fetch the current dataset record."""
        return self.client.get(self.key)
