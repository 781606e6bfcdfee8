"""Shared types for datasetsync.

This module provides:
- NamespacedName: Identity of a cluster resource
- Mount, DataRestoreLocation: Dataset spec entries
- DatasetSpec, DatasetStatus, Dataset: The Dataset resource record
- MetadataSyncResult: Result handed over by a background metadata scan
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class NamespacedName:
    """Identity of a namespaced cluster resource."""

    namespace: str
    name: str

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}"


@dataclass
class Mount:
    """A mount descriptor of a dataset.

    Attributes:
        mount_point: Underlying storage URI (e.g., "cosn://bucket/").
        name: Mount name inside the cache namespace.
        path: Optional explicit path inside the cache namespace.
    """

    mount_point: str
    name: str = ""
    path: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Mount:
        """Create from API resource dictionary."""
        return cls(
            mount_point=data.get("mountPoint", ""),
            name=data.get("name", ""),
            path=data.get("path", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to API resource dictionary."""
        data: dict[str, Any] = {"mountPoint": self.mount_point}
        if self.name:
            data["name"] = self.name
        if self.path:
            data["path"] = self.path
        return data


@dataclass
class DataRestoreLocation:
    """Backup location a dataset's cache metadata is restored from."""

    path: str
    node_name: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DataRestoreLocation:
        """Create from API resource dictionary."""
        return cls(path=data.get("path", ""), node_name=data.get("nodeName", ""))

    def to_dict(self) -> dict[str, Any]:
        """Convert to API resource dictionary."""
        data = {"path": self.path}
        if self.node_name:
            data["nodeName"] = self.node_name
        return data


@dataclass
class DatasetSpec:
    """Desired state of a dataset (fields used by the metadata engine)."""

    mounts: list[Mount] = field(default_factory=list)
    data_restore_location: DataRestoreLocation | None = None


@dataclass
class DatasetStatus:
    """Observed state of a dataset.

    Attributes:
        ufs_total: Human-readable total size of the underlying storage.
            Empty means metadata was never synced.
        file_num: Decimal count of files. Empty means unknown.
    """

    ufs_total: str = ""
    file_num: str = ""


@dataclass
class Dataset:
    """The Dataset resource record.

    Fields the engine does not know about are kept in ``raw`` so that an
    update sends back the resource unchanged apart from the status fields.
    """

    name: str
    namespace: str
    spec: DatasetSpec = field(default_factory=DatasetSpec)
    status: DatasetStatus = field(default_factory=DatasetStatus)
    resource_version: str = ""
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def key(self) -> NamespacedName:
        """Get the resource identity."""
        return NamespacedName(namespace=self.namespace, name=self.name)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Dataset:
        """Create from API resource dictionary."""
        metadata = data.get("metadata", {})
        spec = data.get("spec") or {}
        status = data.get("status") or {}
        restore = spec.get("dataRestoreLocation")
        return cls(
            name=metadata["name"],
            namespace=metadata.get("namespace", ""),
            spec=DatasetSpec(
                mounts=[Mount.from_dict(m) for m in spec.get("mounts") or []],
                data_restore_location=(
                    DataRestoreLocation.from_dict(restore) if restore else None
                ),
            ),
            status=DatasetStatus(
                ufs_total=status.get("ufsTotal", ""),
                file_num=status.get("fileNum", ""),
            ),
            resource_version=metadata.get("resourceVersion", ""),
            raw=copy.deepcopy(data),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to API resource dictionary, preserving unknown fields."""
        data = copy.deepcopy(self.raw)
        data.setdefault("apiVersion", "data.fluid.io/v1alpha1")
        data.setdefault("kind", "Dataset")

        metadata = data.setdefault("metadata", {})
        metadata["name"] = self.name
        metadata["namespace"] = self.namespace
        if self.resource_version:
            metadata["resourceVersion"] = self.resource_version

        # Raw entries carry fields outside the model (options, readOnly, ...),
        # so they are only rewritten when the modelled fields changed
        spec = data.get("spec") or {}
        data["spec"] = spec
        raw_mounts = spec.get("mounts") or []
        if [Mount.from_dict(m) for m in raw_mounts] != self.spec.mounts:
            spec["mounts"] = [m.to_dict() for m in self.spec.mounts]

        restore = self.spec.data_restore_location
        raw_restore = spec.get("dataRestoreLocation")
        if restore is None:
            spec.pop("dataRestoreLocation", None)
        elif raw_restore is None or DataRestoreLocation.from_dict(raw_restore) != restore:
            spec["dataRestoreLocation"] = restore.to_dict()

        status = data.setdefault("status", {}) or {}
        data["status"] = status
        status["ufsTotal"] = self.status.ufs_total
        status["fileNum"] = self.status.file_num
        return data

    def deep_copy(self) -> Dataset:
        """Return an independent copy of this dataset."""
        return copy.deepcopy(self)


@dataclass
class MetadataSyncResult:
    """Result of a metadata scan, handed over through a ResultChannel.

    Attributes:
        start_time: When the producing scan began.
        ufs_total: Producer-formatted total size (e.g., "2GB").
        file_num: Decimal count of files.
        done: Whether the scan completed.
        error: Failure of the scan when done is False.
    """

    start_time: datetime
    ufs_total: str = ""
    file_num: str = ""
    done: bool = False
    error: Exception | None = None
