"""Shared fixtures: in-memory cluster store and cache filesystem fakes."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import pytest

from datasetsync.cachefs import MetadataInfoKey, MetadataQueryError, ScanError
from datasetsync.cluster import Backoff, ConflictError, NotFoundError
from datasetsync.core import (
    DataRestoreLocation,
    Dataset,
    DatasetSpec,
    DatasetStatus,
    EngineConfig,
    Mount,
    NamespacedName,
)
from datasetsync.metadata import EngineContext, ResultChannel


class FakeClusterClient:
    """In-memory resource store with optimistic concurrency.

    Attributes:
        concurrent_updates: Number of upcoming updates that are preceded by
            a simulated write from another actor (causing a conflict).
        get_calls, update_calls: Call counters.
    """

    def __init__(self) -> None:
        self._datasets: dict[NamespacedName, Dataset] = {}
        self._version = 0
        self.concurrent_updates = 0
        self.get_error: Exception | None = None
        self.update_error: Exception | None = None
        self.get_calls = 0
        self.update_calls = 0

    def __enter__(self) -> FakeClusterClient:
        return self

    def __exit__(self, *args: object) -> None:
        pass

    def _next_version(self) -> str:
        self._version += 1
        return str(self._version)

    def add(self, dataset: Dataset) -> None:
        stored = dataset.deep_copy()
        stored.resource_version = self._next_version()
        self._datasets[stored.key] = stored

    def stored(self, key: NamespacedName) -> Dataset:
        return self._datasets[key].deep_copy()

    def get(self, key: NamespacedName) -> Dataset:
        self.get_calls += 1
        if self.get_error is not None:
            raise self.get_error
        if key not in self._datasets:
            raise NotFoundError(f"Dataset {key} not found", 404)
        return self._datasets[key].deep_copy()

    def update_status(self, dataset: Dataset) -> Dataset:
        self.update_calls += 1
        if self.update_error is not None:
            raise self.update_error
        if dataset.key not in self._datasets:
            raise NotFoundError(f"Dataset {dataset.key} not found", 404)

        stored = self._datasets[dataset.key]
        if self.concurrent_updates > 0:
            self.concurrent_updates -= 1
            stored.resource_version = self._next_version()

        if stored.resource_version != dataset.resource_version:
            raise ConflictError(f"Dataset {dataset.key} was modified", 409)

        stored.status = DatasetStatus(
            ufs_total=dataset.status.ufs_total,
            file_num=dataset.status.file_num,
        )
        stored.resource_version = self._next_version()
        return stored.deep_copy()


class FakeFileUtils:
    """Cache filesystem utilities returning configured values."""

    def __init__(
        self,
        total_bytes: int = 16,
        file_nums: int = 16,
        metadata_info: dict[str, str] | None = None,
    ) -> None:
        self.total_bytes = total_bytes
        self.file_nums = file_nums
        self.metadata_info = metadata_info if metadata_info is not None else {}
        self.query_error: Exception | None = None
        self.load_error: Exception | None = None
        self.load_calls: list[str] = []
        self.query_calls: list[tuple[MetadataInfoKey, str]] = []

    def query_metadata_info_into_file(self, key: MetadataInfoKey, filename: str) -> str:
        self.query_calls.append((key, filename))
        if self.query_error is not None:
            raise self.query_error
        if key.value not in self.metadata_info:
            raise MetadataQueryError(f"Key {key.value!r} not found in {filename}")
        return self.metadata_info[key.value]

    def load_metadata_without_timeout(self, path: str) -> None:
        self.load_calls.append(path)
        if self.load_error is not None:
            raise self.load_error

    def total_storage_bytes(self) -> int:
        return self.total_bytes

    def total_file_nums(self) -> int:
        return self.file_nums


FAST_BACKOFF = Backoff(steps=4, duration=0.001, factor=2.0)


def make_dataset(
    name: str,
    namespace: str = "fluid",
    ufs_total: str = "",
    file_num: str = "",
    restore_path: str | None = None,
    mounts: list[str] | None = None,
) -> Dataset:
    """Create a dataset for testing."""
    return Dataset(
        name=name,
        namespace=namespace,
        spec=DatasetSpec(
            mounts=[Mount(mount_point=m) for m in mounts or []],
            data_restore_location=(
                DataRestoreLocation(path=restore_path, node_name="test-node")
                if restore_path
                else None
            ),
        ),
        status=DatasetStatus(ufs_total=ufs_total, file_num=file_num),
    )


@pytest.fixture
def dataset_factory() -> Callable[..., Dataset]:
    """Factory creating Dataset records."""
    return make_dataset


@pytest.fixture
def cluster() -> FakeClusterClient:
    """Empty in-memory cluster store."""
    return FakeClusterClient()


@pytest.fixture
def file_utils() -> FakeFileUtils:
    """Cache filesystem fake reporting 16 bytes / 16 files."""
    return FakeFileUtils()


@pytest.fixture
def make_ctx(
    cluster: FakeClusterClient, file_utils: FakeFileUtils
) -> Callable[..., EngineContext]:
    """Factory creating an EngineContext bound to the fakes."""

    def _make(
        name: str,
        namespace: str = "fluid",
        result_channel: ResultChannel | None = None,
        wait_timeout: float = 1.0,
        **kwargs: Any,
    ) -> EngineContext:
        return EngineContext(
            key=NamespacedName(namespace=namespace, name=name),
            client=cluster,
            file_utils=file_utils,
            result_channel=result_channel,
            config=EngineConfig(metadata_sync_wait_timeout=wait_timeout),
            backoff=FAST_BACKOFF,
            logger=logging.getLogger("datasetsync.tests"),
            **kwargs,
        )

    return _make


@pytest.fixture
def scan_error() -> ScanError:
    """A scan failure."""
    return ScanError("fail to load metadata")
