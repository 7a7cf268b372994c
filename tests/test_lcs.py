import pytest

from models.diff import DiffKind
from services.lcs import DiffTooLargeError, build_lcs_table, diff_sequences

EQUAL, INSERT, DELETE = DiffKind.EQUAL, DiffKind.INSERT, DiffKind.DELETE


def test_lcs_table_length():
    # Classic textbook pair, LCS "bcba" has length 4
    table = build_lcs_table("abcbdab", "bdcaba")
    assert len(table) == 8
    assert len(table[0]) == 7
    assert table[-1][-1] == 4


def test_empty_sequences():
    assert diff_sequences([], []) == []
    assert diff_sequences([], ["x"]) == [(INSERT, None, 0)]
    assert diff_sequences(["x"], []) == [(DELETE, 0, None)]


def test_identical_sequences_are_all_equal():
    assert diff_sequences("abc", "abc") == [(EQUAL, 0, 0), (EQUAL, 1, 1), (EQUAL, 2, 2)]


def test_disjoint_sequences_delete_before_insert():
    steps = diff_sequences(["x", "y"], ["p", "q"])
    assert steps == [(DELETE, 0, None), (DELETE, 1, None), (INSERT, None, 0), (INSERT, None, 1)]


def test_tie_prefers_insert_during_backtrack():
    # Both alignments keep one element; the insert of "a" is taken first
    # while walking back, so it lands last in the script.
    steps = diff_sequences(["a", "b"], ["b", "a"])
    assert steps == [(DELETE, 0, None), (EQUAL, 1, 0), (INSERT, None, 1)]


def test_custom_equality():
    steps = diff_sequences(["Foo", "BAR"], ["foo", "bar"], eq=lambda a, b: a.lower() == b.lower())
    assert [kind for kind, _, _ in steps] == [EQUAL, EQUAL]


def test_size_limit_rejects_large_tables():
    with pytest.raises(DiffTooLargeError) as exc_info:
        diff_sequences("abc", "abcd", max_cells=11)

    err = exc_info.value
    assert isinstance(err, ValueError)
    assert (err.left_size, err.right_size, err.cells, err.max_cells) == (3, 4, 12, 11)
    assert "too large" in str(err)


def test_size_limit_allows_tables_at_the_limit():
    assert len(diff_sequences("abc", "abcd", max_cells=12)) == 4
    assert diff_sequences("", "abcdef", max_cells=0) == [(INSERT, None, j) for j in range(6)]
