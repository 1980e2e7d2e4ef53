"""Shared test fixtures and helpers."""

import pytest

import pycmapproc
from pycmapproc.parser.cmap import TokenizeString


@pytest.fixture
def lex():
    """Return a helper that tokenizes a CMap program."""

    def _lex(source):
        return TokenizeString(source)

    return _lex


@pytest.fixture
def parse_source():
    """Return a helper that parses a CMap program into a CMap."""

    def _parse(source, strict=False):
        return pycmapproc.parse(source, strict=strict)

    return _parse


@pytest.fixture
def cmap_file(tmp_path):
    """Return a helper that writes a CMap program to a file and returns its path."""

    def _write(source, name="test.cmap"):
        path = tmp_path / name
        if isinstance(source, str):
            source = source.encode("latin-1")
        path.write_bytes(source)
        return path

    return _write


def assert_types(tokens, expected):
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_values(tokens, expected):
    """Assert that the token values match the expected list."""
    actual = [t.value for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"
