"""Tests for reading price report files."""

import os
from pathlib import Path

import pytest

from mtgprices.services.report_loader import (
    PriceReport,
    format_timestamp,
    read_report,
    report_timestamp,
)

# 2013-05-01 12:00:00 UTC
EPOCH = 1367409600


class TestFormatTimestamp:
    def test_whole_seconds(self) -> None:
        assert format_timestamp(EPOCH) == "2013-05-01 12:00:00 +0000 UTC"

    def test_fraction_drops_trailing_zeros(self) -> None:
        assert format_timestamp(EPOCH, 250_000_000) == "2013-05-01 12:00:00.25 +0000 UTC"

    def test_nanoseconds(self) -> None:
        assert format_timestamp(EPOCH, 123_456_789) == "2013-05-01 12:00:00.123456789 +0000 UTC"

    def test_sorts_chronologically(self) -> None:
        earlier = format_timestamp(EPOCH)
        later = format_timestamp(EPOCH + 86400)

        assert earlier < later


class TestReadReport:
    def test_reads_latin1(self, tmp_path: Path) -> None:
        path = tmp_path / "prices_0.txt"
        path.write_bytes(b"\xc6ther Vial [DST]  1.00\n")

        report = read_report(path)

        assert report.text == "Æther Vial [DST]  1.00\n"
        assert report.path == path

    def test_other_encoding(self, tmp_path: Path) -> None:
        path = tmp_path / "prices_0.txt"
        path.write_bytes("Æther".encode())

        assert read_report(path, encoding="utf-8").text == "Æther"

    def test_invalid_bytes(self, tmp_path: Path) -> None:
        path = tmp_path / "prices_0.txt"
        path.write_bytes(b"\xff\xfe\xfd")

        with pytest.raises(UnicodeDecodeError):
            read_report(path, encoding="utf-8")

    def test_normalises_line_endings(self, tmp_path: Path) -> None:
        path = tmp_path / "prices_0.txt"
        path.write_bytes(b"a\r\nb\r\n")

        assert read_report(path).text == "a\nb\n"

    def test_timestamp_from_mtime(self, tmp_path: Path) -> None:
        path = tmp_path / "prices_0.txt"
        path.write_text("x")
        mtime_ns = EPOCH * 1_000_000_000
        os.utime(path, ns=(mtime_ns, mtime_ns))

        report = read_report(path)

        assert report.timestamp == "2013-05-01 12:00:00 +0000 UTC"
        assert report_timestamp(path) == report.timestamp

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="not found"):
            read_report(tmp_path / "missing.txt")

    def test_returns_price_report(self, sample_report_path: Path) -> None:
        assert isinstance(read_report(sample_report_path), PriceReport)
