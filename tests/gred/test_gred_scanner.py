"""Tests for the scan pass."""

import io

import pytest

from gred import gred_fingerprint
from gred.gred_exceptions import ScanError
from gred.gred_formatter import FIRST_MARKER_BYTES, NEXT_MARKER_BYTES
from gred.gred_matcher import compile_patterns
from gred.gred_scanner import GredScanner


class TestScanBuffer:
    """Test scanning in-memory buffers."""

    def test_concrete_scenario(self, helpers):
        """Test the alpha/beta/gamma example produces one line for beta."""
        output = helpers.scan_buffer(b"alpha\nbeta\ngamma\n", "b.*")
        expected = FIRST_MARKER_BYTES + gred_fingerprint.encode(b"beta").encode() + b"\tf.txt:2\tbeta\n"
        assert output == expected

    def test_markers(self, helpers):
        """Test that only the first line of a file uses the first marker."""
        lines = helpers.output_lines(helpers.scan_buffer(b"a1\nb\na2\na3\n", "a"))
        assert len(lines) == 3
        assert lines[0].startswith(FIRST_MARKER_BYTES)
        assert lines[1].startswith(NEXT_MARKER_BYTES)
        assert lines[2].startswith(NEXT_MARKER_BYTES)
        assert [helpers.line_number_of(line) for line in lines] == [1, 3, 4]

    def test_no_output_without_matches(self, helpers):
        """Test that a file without matches writes nothing."""
        assert helpers.scan_buffer(b"alpha\n", "zeta") == b""

    def test_returns_count(self):
        """Test that the number of lines written is returned."""
        scanner = GredScanner(compile_patterns(["a"]), io.BytesIO())
        assert scanner.scan_buffer('f.txt', b"a\nb\na\n") == 2


class TestScanFiles:
    """Test scanning files on disk."""

    def test_scan_file(self, make_file, helpers):
        """Test that file output names the file's path."""
        path = make_file("f.txt", b"alpha\nbeta\ngamma\n")
        lines = helpers.output_lines(helpers.scan(path, "gamma"))
        assert len(lines) == 1
        assert lines[0].split(b'\t')[1] == f"{path}:3".encode()

    def test_missing_file(self, tmp_path):
        """Test that an unreadable file aborts the scan."""
        scanner = GredScanner(compile_patterns(["a"]), io.BytesIO())
        with pytest.raises(ScanError) as exc_info:
            scanner.scan_file(str(tmp_path / "missing.txt"))

        assert exc_info.value.error_details['path'].endswith("missing.txt")

    def test_scan_paths(self, make_file):
        """Test a multi-file scan, each file starting with the first marker."""
        first = make_file("one.txt", b"alpha\nbeta\n")
        second = make_file("two.txt", b"nothing\n")
        third = make_file("three.txt", b"alphabet\nalpha\n")

        output = io.BytesIO()
        summary = GredScanner(compile_patterns(["alpha"]), output).scan_paths([first, second, third])

        assert summary.files_scanned == 3
        assert summary.files_matched == 2
        assert summary.lines_emitted == 3

        lines = output.getvalue().splitlines()
        assert [line.startswith(FIRST_MARKER_BYTES) for line in lines] == [True, True, False]
        assert lines[0].split(b'\t')[1] == f"{first}:1".encode()
        assert lines[1].split(b'\t')[1] == f"{third}:1".encode()
