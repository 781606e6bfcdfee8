"""Tests for restoring metadata from a metadata-info file."""

from __future__ import annotations

import pytest

from datasetsync.cachefs import MetadataInfoKey, MetadataQueryError
from datasetsync.core import NamespacedName
from datasetsync.metadata import restore_metadata_internal


class TestRestoreMetadataInternal:
    """Tests for restore_metadata_internal."""

    @pytest.mark.parametrize("restore_path", ["local:///host1/erf", "pvc://pvc1/erf"])
    def test_restores_status(self, cluster, file_utils, dataset_factory, make_ctx, restore_path) -> None:  # type: ignore[no-untyped-def]
        """The file count doubles as byte count of UfsTotal."""
        cluster.add(dataset_factory("hbase", restore_path=restore_path))
        file_utils.metadata_info = {"filenum": "1024"}

        restore_metadata_internal(make_ctx("hbase"))

        status = cluster.stored(NamespacedName("fluid", "hbase")).status
        assert status.ufs_total == "1.00KiB"
        assert status.file_num == "1024"

    def test_queries_dataset_metadata_info_file(self, cluster, file_utils, dataset_factory, make_ctx) -> None:  # type: ignore[no-untyped-def]
        """The file count is read from the dataset's metadata-info file."""
        cluster.add(dataset_factory("hbase", restore_path="local:///host1/erf"))
        file_utils.metadata_info = {"filenum": "1024"}

        restore_metadata_internal(make_ctx("hbase"))

        assert file_utils.query_calls == [
            (MetadataInfoKey.FILE_NUM, "/journal/metadata-info-hbase-fluid.yaml")
        ]

    def test_query_failure_commits_nothing(self, cluster, file_utils, dataset_factory, make_ctx) -> None:  # type: ignore[no-untyped-def]
        """A failed query is returned and the status stays untouched."""
        cluster.add(dataset_factory("hbase", restore_path="local:///host1/erf"))
        file_utils.query_error = MetadataQueryError("fail to query MetaDataInfo")

        with pytest.raises(MetadataQueryError):
            restore_metadata_internal(make_ctx("hbase"))

        assert cluster.update_calls == 0
        assert cluster.stored(NamespacedName("fluid", "hbase")).status.ufs_total == ""

    def test_non_numeric_value_rejected(self, cluster, file_utils, dataset_factory, make_ctx) -> None:  # type: ignore[no-untyped-def]
        """A value that is not a count fails before any commit."""
        cluster.add(dataset_factory("hbase", restore_path="local:///host1/erf"))
        file_utils.metadata_info = {"filenum": "lots"}

        with pytest.raises(MetadataQueryError):
            restore_metadata_internal(make_ctx("hbase"))

        assert cluster.update_calls == 0
