import random

import pytest

from linecompare.changes import Deletion, Insertion, LineRange, Replacement
from linecompare.lineindex import build_line_table
from linecompare.seqdiff import CompareCursor, SyncSequenceMatcher


def make_matcher(lines_a: list[str], lines_b: list[str], **options) -> SyncSequenceMatcher:
    table_a = build_line_table("".join(lines_a).encode("utf-8"))
    table_b = build_line_table("".join(lines_b).encode("utf-8"))
    return SyncSequenceMatcher(table_a, table_b, **options)


def changes(lines_a, lines_b, **options):
    return list(make_matcher(lines_a, lines_b, **options).get_changes())


@pytest.mark.parametrize("lines", [
    [],
    ["only\n"],
    ["a\n", "b\n", "a\n", "\n", "c"],
])
def test_identical_inputs(lines):
    assert changes(lines, list(lines)) == []


def test_empty_against_three_lines():
    three = ["x\n", "y\n", "z\n"]
    assert changes([], three) == [Insertion(LineRange(1, 3))]
    assert changes(three, []) == [Deletion(LineRange(1, 3))]


def test_changed_middle_line():
    a = ["apple\n", "banana\n", "cherry\n"]
    b = ["apple\n", "blueberry\n", "cherry\n"]
    assert changes(a, b) == [Replacement(LineRange(2, 2), LineRange(2, 2))]


def test_pure_insertion():
    assert changes(["x\n", "y\n"], ["x\n", "mid\n", "y\n"]) == [Insertion(LineRange(2, 2))]


def test_pure_deletion():
    assert changes(["x\n", "mid\n", "y\n"], ["x\n", "y\n"]) == [Deletion(LineRange(2, 2))]


def test_ambiguous_blank_line():
    # "2" never appears in A, so it is reported alone and the blank lines pair up.
    a = ["1\n", "\n", "3\n"]
    b = ["1\n", "2\n", "\n", "3\n"]
    assert changes(a, b) == [Insertion(LineRange(2, 2))]


def test_blank_line_anchor_desynchronizes():
    # Two lines were inserted before "x", but the leading blank line of B
    # resynchronizes against the blank line of A first.
    a = ["x\n", "\n", "y\n"]
    b = ["\n", "z\n", "x\n", "\n", "y\n"]
    assert changes(a, b) == [
        Deletion(LineRange(1, 1)),
        Insertion(LineRange(2, 2)),
        Insertion(LineRange(3, 3)),
        Insertion(LineRange(4, 4)),
    ]

    # Refusing blank anchors finds the real insertion.
    assert changes(a, b, sync_on_blank=False) == [
        Insertion(LineRange(1, 1)),
        Insertion(LineRange(2, 2)),
    ]


def test_shorter_gap_wins():
    # p reappears 2 lines ahead in B, r reappears 1 line ahead in A
    a = ["p\n", "r\n", "s\n"]
    b = ["r\n", "s\n", "p\n"]
    assert changes(a, b) == [Deletion(LineRange(1, 1)), Insertion(LineRange(3, 3))]


def test_multi_line_gap():
    a = ["p\n", "q\n", "r\n", "s\n", "t\n"]
    b = ["r\n", "s\n", "t\n", "x\n", "p\n", "q\n"]
    assert changes(a, b) == [Deletion(LineRange(1, 2)), Insertion(LineRange(4, 6))]


def test_multi_line_insertion_block():
    a = ["h\n", "t\n"]
    b = ["h\n", "n1\n", "n2\n", "n3\n", "t\n"]
    # each inserted line resynchronizes on "t" alone
    assert changes(a, b) == [
        Insertion(LineRange(2, 2)),
        Insertion(LineRange(3, 3)),
        Insertion(LineRange(4, 4)),
    ]


def test_equal_gaps_replace_one_line():
    a = ["p\n", "q\n", "p\n"]
    b = ["q\n", "p\n", "q\n"]
    # p is 1 ahead in B, q is 1 ahead in A
    assert changes(a, b)[0] == Replacement(LineRange(1, 1), LineRange(1, 1))


def test_max_gap_limits_lookahead():
    a = ["a\n", "b\n"]
    b = ["x1\n", "x2\n", "x3\n", "x4\n", "x5\n", "a\n", "b\n"]

    assert changes(a, b) == [Insertion(LineRange(i, i)) for i in range(1, 6)]
    assert changes(a, b, max_gap=2) == [
        Replacement(LineRange(1, 1), LineRange(1, 1)),
        Replacement(LineRange(2, 2), LineRange(2, 2)),
        Insertion(LineRange(3, 7)),
    ]


def test_max_gap_must_be_positive():
    with pytest.raises(ValueError):
        make_matcher(["a\n"], ["b\n"], max_gap=0)


def test_missing_final_newline_is_a_change():
    assert changes(["a\n", "b"], ["a\n", "b\n"]) == [Replacement(LineRange(2, 2), LineRange(2, 2))]


def test_step_is_pure():
    matcher = make_matcher(["a\n", "b\n"], ["a\n", "c\n"])
    cursor = CompareCursor(1, 1)
    first = matcher.step(cursor)
    assert matcher.step(cursor) == first
    assert first == (CompareCursor(2, 2), Replacement(LineRange(2, 2), LineRange(2, 2)))


def test_step_on_drained_cursor():
    matcher = make_matcher(["a\n"], ["a\n"])
    assert matcher.is_drained(CompareCursor(1, 1))
    with pytest.raises(ValueError):
        matcher.step(CompareCursor(1, 1))


@pytest.mark.parametrize("seed", range(20))
def test_cursor_strictly_advances(seed):
    rng = random.Random(seed)
    alphabet = ["a\n", "b\n", "c\n", "\n"]
    a = [rng.choice(alphabet) for _ in range(rng.randint(0, 30))]
    b = [rng.choice(alphabet) for _ in range(rng.randint(0, 30))]
    matcher = make_matcher(a, b)

    cursor = CompareCursor(0, 0)
    steps = 0
    while not matcher.is_drained(cursor):
        new_cursor, _ = matcher.step(cursor)
        assert new_cursor.a >= cursor.a
        assert new_cursor.b >= cursor.b
        assert sum(new_cursor) > sum(cursor)
        cursor = new_cursor
        steps += 1
    assert steps <= len(a) + len(b) + 1
    assert cursor == (len(a), len(b))


def test_get_opcodes():
    a = ["apple\n", "banana\n", "cherry\n"]
    b = ["apple\n", "blueberry\n", "cherry\n", "date\n"]
    assert list(make_matcher(a, b).get_opcodes()) == [
        ('equal', 0, 1, 0, 1),
        ('replace', 1, 2, 1, 2),
        ('equal', 2, 3, 2, 3),
        ('insert', 3, 3, 3, 4),
    ]
