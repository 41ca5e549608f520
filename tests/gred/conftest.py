"""Shared fixtures and utilities for gred tests."""

import io
from pathlib import Path
from typing import List

import pytest

from gred.gred_matcher import compile_patterns
from gred.gred_patch_applier import PatchApplier
from gred.gred_patch_parser import PatchParser
from gred.gred_scanner import GredScanner


class GredTestHelpers:
    """Helper utilities for gred testing."""

    @staticmethod
    def scan(path: str, *expressions: str) -> bytes:
        """Scan one file and return its match output."""
        output = io.BytesIO()
        GredScanner(compile_patterns(list(expressions)), output).scan_file(path)
        return output.getvalue()

    @staticmethod
    def scan_buffer(buffer: bytes, *expressions: str, path: str = 'f.txt') -> bytes:
        """Scan an in-memory buffer and return its match output."""
        output = io.BytesIO()
        GredScanner(compile_patterns(list(expressions)), output).scan_buffer(path, buffer)
        return output.getvalue()

    @staticmethod
    def output_lines(output: bytes) -> List[bytes]:
        """Split match output into lines without newlines."""
        return output.splitlines()

    @staticmethod
    def line_number_of(line: bytes) -> int:
        """Get the line number field of one output line."""
        return int(line.split(b'\t', 2)[1].rsplit(b':', 1)[1])


@pytest.fixture
def helpers():
    """Provide test helper utilities."""
    return GredTestHelpers


@pytest.fixture
def make_file(tmp_path: Path):
    """Factory for files with given bytes content."""
    def _make_file(name: str, content: bytes) -> str:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return str(path)

    return _make_file


@pytest.fixture
def parser():
    """Create a patch parser."""
    return PatchParser()


@pytest.fixture
def applier():
    """Create a patch applier."""
    return PatchApplier()
