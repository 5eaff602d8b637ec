"""Shared fixtures: writing synthetic journals to a temp directory."""

from __future__ import annotations

import itertools

import pytest

from tests.builder import JournalBuilder, simple_journal


@pytest.fixture
def write_journal(tmp_path):
    """Write a JournalBuilder (or raw bytes) to a fresh file and return its path."""
    counter = itertools.count()

    def _write(source, name=None, **build_kwargs):
        path = tmp_path / (name or f"j{next(counter)}.journal")
        data = source if isinstance(source, (bytes, bytearray)) else source.build(**build_kwargs)
        path.write_bytes(data)
        return path

    return _write


@pytest.fixture(params=[False, True], ids=["regular", "compact"])
def compact(request):
    return request.param


@pytest.fixture
def simple_path(write_journal, compact):
    builder, arr = simple_journal(compact=compact)
    return write_journal(builder, entry_array_offset=arr)


@pytest.fixture
def builder(compact):
    return JournalBuilder(compact=compact)
