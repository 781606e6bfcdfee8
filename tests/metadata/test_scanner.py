"""Tests for direct and background metadata scans."""

from __future__ import annotations

import pytest

from datasetsync.cachefs import ScanError
from datasetsync.metadata import scan_metadata, start_background_scan


class TestScanMetadata:
    """Tests for scan_metadata."""

    def test_formats_totals(self, file_utils, make_ctx) -> None:  # type: ignore[no-untyped-def]
        """Bytes are made human-readable, the file count decimal."""
        file_utils.total_bytes = 3 * 1024**3
        file_utils.file_nums = 42

        assert scan_metadata(make_ctx("hbase")) == ("3.00GiB", "42")
        assert file_utils.load_calls == ["/"]

    def test_load_failure_raises(self, file_utils, make_ctx, scan_error) -> None:  # type: ignore[no-untyped-def]
        """Load failures propagate."""
        file_utils.load_error = scan_error

        with pytest.raises(ScanError):
            scan_metadata(make_ctx("hbase"))


class TestStartBackgroundScan:
    """Tests for start_background_scan."""

    def test_delivers_completed_result(self, file_utils, make_ctx) -> None:  # type: ignore[no-untyped-def]
        """The thread delivers the totals through the channel."""
        channel = start_background_scan(make_ctx("hbase"))

        result = channel.wait(timeout=5.0)

        assert result is not None
        assert result.done is True
        assert (result.ufs_total, result.file_num) == ("16.00B", "16")
        assert result.error is None

    def test_delivers_failure(self, file_utils, make_ctx, scan_error) -> None:  # type: ignore[no-untyped-def]
        """A failed scan is delivered as an unfinished result."""
        file_utils.load_error = scan_error
        channel = start_background_scan(make_ctx("hbase"))

        result = channel.wait(timeout=5.0)

        assert result is not None
        assert result.done is False
        assert result.error is scan_error
