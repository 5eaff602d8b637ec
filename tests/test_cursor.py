"""
Unit tests for the entry-array cursor.

Tests cover:
- In-order offsets within one node
- Following the chain across nodes, including empty ones
- Idempotent end of list
- Corrupt chains
"""

import pytest

from sdjournal.cursor import EntryArrayCursor
from sdjournal.errors import EntryArrayLoopError, UnexpectedObjectTypeError
from sdjournal.journalfile import JournalFile


def _entries(builder, n, start=1):
    return [builder.add_record({"N": str(i)}, seqnum=i) for i in range(start, start + n)]


class TestEntryArrayCursor:

    def test_single_node_in_order(self, write_journal, builder):
        entries = _entries(builder, 5)
        arr = builder.add_entry_array(entries)
        with JournalFile(write_journal(builder)) as journal:
            cursor = EntryArrayCursor(journal, arr)
            assert [cursor.next_offset() for _ in entries] == entries
            assert cursor.next_offset() is None

    def test_end_of_list_is_idempotent(self, write_journal, builder):
        arr = builder.add_entry_array(_entries(builder, 1))
        with JournalFile(write_journal(builder)) as journal:
            cursor = EntryArrayCursor(journal, arr)
            cursor.next_offset()
            assert [cursor.next_offset() for _ in range(3)] == [None, None, None]

    def test_follows_chain(self, write_journal, builder):
        first, second, third = _entries(builder, 2), _entries(builder, 3, 10), _entries(builder, 1, 20)
        a = builder.add_entry_array(first)
        b = builder.add_entry_array(second)
        c = builder.add_entry_array(third)
        builder.link(a, b)
        builder.link(b, c)
        with JournalFile(write_journal(builder)) as journal:
            cursor = EntryArrayCursor(journal, a)
            assert list(cursor) == first + second + third
            assert cursor.current.offset == c

    def test_skips_empty_node(self, write_journal, builder):
        entries = _entries(builder, 2)
        a = builder.add_entry_array(entries[:1])
        empty = builder.add_entry_array([])
        c = builder.add_entry_array(entries[1:])
        builder.link(a, empty)
        builder.link(empty, c)
        with JournalFile(write_journal(builder)) as journal:
            assert list(EntryArrayCursor(journal, a)) == entries

    def test_long_chain_does_not_recurse(self, write_journal, builder):
        entry = _entries(builder, 1)[0]
        nodes = [builder.add_entry_array([entry]) for _ in range(3000)]
        for prev, nxt in zip(nodes, nodes[1:]):
            builder.link(prev, nxt)
        with JournalFile(write_journal(builder)) as journal:
            assert sum(1 for _ in EntryArrayCursor(journal, nodes[0])) == 3000

    def test_preallocated_slots_read_as_zero(self, write_journal, builder):
        entries = _entries(builder, 2)
        arr = builder.add_entry_array(entries, capacity=4)
        with JournalFile(write_journal(builder)) as journal:
            assert list(EntryArrayCursor(journal, arr)) == entries + [0, 0]

    def test_no_seed_is_empty(self, write_journal, builder):
        with JournalFile(write_journal(builder)) as journal:
            cursor = EntryArrayCursor(journal, 0)
            assert cursor.next_offset() is None
            assert list(cursor) == []

    def test_seek_rejects_other_objects(self, write_journal, builder):
        entry = _entries(builder, 1)[0]
        with JournalFile(write_journal(builder)) as journal:
            with pytest.raises(UnexpectedObjectTypeError):
                EntryArrayCursor(journal, entry)

    def test_seek_resets_position(self, write_journal, builder):
        entries = _entries(builder, 3)
        arr = builder.add_entry_array(entries)
        with JournalFile(write_journal(builder)) as journal:
            cursor = EntryArrayCursor(journal, arr)
            cursor.next_offset()
            cursor.next_offset()
            cursor.seek(arr)
            assert cursor.position == 0
            assert cursor.next_offset() == entries[0]

    @pytest.mark.parametrize("backwards", [False, True])
    def test_loop_in_chain(self, write_journal, builder, backwards):
        entries = _entries(builder, 2)
        a = builder.add_entry_array(entries[:1])
        b = builder.add_entry_array(entries[1:])
        builder.link(a, b)
        builder.link(b, a if backwards else b)
        with JournalFile(write_journal(builder)) as journal:
            cursor = EntryArrayCursor(journal, a)
            assert cursor.next_offset() == entries[0]
            assert cursor.next_offset() == entries[1]
            with pytest.raises(EntryArrayLoopError):
                cursor.next_offset()
