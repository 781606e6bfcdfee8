"""Shared configuration classes for datasetsync.

This module defines configuration classes used by the cluster client,
the cache filesystem utilities and the metadata engine.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ClusterConfig:
    """Configuration for connecting to the cluster API server.

    Attributes:
        api_url: Base URL of the API server (e.g., "https://10.0.0.1:6443").
        token: Bearer token used to authenticate.
        timeout: Request timeout in seconds.
        verify_ssl: Whether to verify SSL certificates (default True).
    """

    api_url: str
    token: str
    timeout: float = 30.0
    verify_ssl: bool = True

    def __post_init__(self) -> None:
        """Normalize API URL."""
        self.api_url = self.api_url.rstrip("/")

    @property
    def is_secure(self) -> bool:
        """Check if using HTTPS.

        Returns:
            True if the API server uses HTTPS.
        """
        return self.api_url.startswith("https://")


@dataclass(frozen=True)
class EngineConfig:
    """Tunables of the metadata engine.

    Attributes:
        metadata_sync_wait_timeout: Seconds to wait for an in-flight
            background scan before falling back to a direct scan.
        metadata_root: Cache filesystem path loaded and counted by a scan.
        metadata_info_dir: Directory holding backed up metadata-info files.
        master_container: Container name of the cache master.
    """

    metadata_sync_wait_timeout: float = 5.0
    metadata_root: str = "/"
    metadata_info_dir: str = "/journal"
    master_container: str = "goosefs-master"

    def master_pod_name(self, dataset_name: str) -> str:
        """Get the master pod name for a dataset's runtime."""
        return f"{dataset_name}-master-0"

    def metadata_info_file(self, name: str, namespace: str) -> str:
        """Get the backed up metadata-info file for a dataset."""
        return f"{self.metadata_info_dir.rstrip('/')}/metadata-info-{name}-{namespace}.yaml"
