"""Tests for core configuration classes."""

from __future__ import annotations

from datasetsync.core.config import ClusterConfig, EngineConfig


class TestClusterConfig:
    """Tests for ClusterConfig class."""

    def test_init_basic(self) -> None:
        """Should initialize with required fields."""
        config = ClusterConfig(api_url="https://example.com", token="test-token")
        assert config.api_url == "https://example.com"
        assert config.token == "test-token"
        assert config.timeout == 30.0
        assert config.verify_ssl is True

    def test_url_trailing_slash_removed(self) -> None:
        """Should strip trailing slash from API URL."""
        config = ClusterConfig(api_url="https://example.com/", token="test-token")
        assert config.api_url == "https://example.com"

    def test_is_secure(self) -> None:
        """Should report HTTPS URLs as secure."""
        assert ClusterConfig(api_url="https://example.com", token="t").is_secure is True
        assert ClusterConfig(api_url="http://localhost:8001", token="t").is_secure is False


class TestEngineConfig:
    """Tests for EngineConfig class."""

    def test_defaults(self) -> None:
        """Should default to a 5s wait and the cache root."""
        config = EngineConfig()
        assert config.metadata_sync_wait_timeout == 5.0
        assert config.metadata_root == "/"
        assert config.metadata_info_dir == "/journal"

    def test_master_pod_name(self) -> None:
        """Master pod is the first replica of the runtime master."""
        assert EngineConfig().master_pod_name("hbase") == "hbase-master-0"

    def test_metadata_info_file(self) -> None:
        """Metadata-info file is named after the dataset."""
        config = EngineConfig(metadata_info_dir="/backup/")
        assert (
            config.metadata_info_file("hbase", "fluid")
            == "/backup/metadata-info-hbase-fluid.yaml"
        )
