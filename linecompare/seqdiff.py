# This is free and unencumbered software released into the public domain.
#
# Anyone is free to copy, modify, publish, use, compile, sell, or
# distribute this software, either in source code form or as a compiled
# binary, for any purpose, commercial or non-commercial, and by any
# means.
#
# In jurisdictions that recognize copyright laws, the author or authors
# of this software dedicate any and all copyright interest in the
# software to the public domain. We make this dedication for the benefit
# of the public at large and to the detriment of our heirs and
# successors. We intend this dedication to be an overt act of
# relinquishment in perpetuity of all present and future rights to this
# software under copyright law.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT.
# IN NO EVENT SHALL THE AUTHORS BE LIABLE FOR ANY CLAIM, DAMAGES OR
# OTHER LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE,
# ARISING FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR
# OTHER DEALINGS IN THE SOFTWARE.
#
# For more information, please refer to <http://unlicense.org/>

import logging
from collections.abc import Iterator
from typing import NamedTuple

from linecompare.changes import (
    ChangeRecord,
    Deletion,
    Insertion,
    LineRange,
    Replacement,
    changes_to_opcodes,
)
from linecompare.lineindex import LineTable, lines_equal


logger = logging.getLogger(__name__)


class CompareCursor(NamedTuple):
    """Lines of A and B fully accounted for so far."""
    a: int
    b: int


class SyncSequenceMatcher:
    """
    A single-pass, synchronizing line matcher for very large files.

    Walks both files in lock step. On a mismatch it looks ahead in each file
    for the stalled line of the other one and treats the side with the shorter
    gap as the inserted or deleted block. Decisions are greedy and never
    revisited, so the result is not minimal when several resynchronization
    points exist. Any matching line can serve as an anchor, blank lines
    included; pass ``sync_on_blank=False`` to refuse blank anchors.

    Cost is linear in the combined line count for files with small, localized
    changes; each mismatch costs one forward scan in each file.

    The matcher holds no comparison state: ``step`` maps a cursor to the next
    cursor and ``get_changes`` threads the cursor through until both files are
    drained.
    """

    def __init__(
        self,
        table_a: LineTable,
        table_b: LineTable,
        max_gap: int | None = None,
        sync_on_blank: bool = True,
    ) -> None:
        if max_gap is not None and max_gap < 1:
            raise ValueError(f"max_gap must be a positive number of lines, got {max_gap}")
        self.table_a = table_a
        self.table_b = table_b
        self.max_gap = max_gap
        self.sync_on_blank = sync_on_blank

    def is_drained(self, cursor: CompareCursor) -> bool:
        return cursor.a >= len(self.table_a) and cursor.b >= len(self.table_b)

    def _resync(self, stalled: LineTable, index: int, scanned: LineTable, start: int) -> int | None:
        """First index >= start+1 in ``scanned`` holding the stalled line, or None."""
        if not self.sync_on_blank and stalled.is_blank(index):
            return None
        limit = len(scanned)
        if self.max_gap is not None:
            limit = min(limit, start + self.max_gap + 1)
        for k in range(start + 1, limit):
            if lines_equal(stalled, index, scanned, k):
                return k
        return None

    def step(self, cursor: CompareCursor) -> tuple[CompareCursor, ChangeRecord | None]:
        """
        Advances the comparison by one decision.

        Returns the new cursor and the change it produced, or None when the
        lines under the cursor matched. The cursor sum strictly increases.
        """
        a, b = cursor
        len_a = len(self.table_a)
        len_b = len(self.table_b)

        if a >= len_a and b >= len_b:
            raise ValueError(f"cursor {cursor} is already drained")
        if a >= len_a:
            return CompareCursor(a, len_b), Insertion(LineRange.from_indices(b, len_b))
        if b >= len_b:
            return CompareCursor(len_a, b), Deletion(LineRange.from_indices(a, len_a))

        if lines_equal(self.table_a, a, self.table_b, b):
            return CompareCursor(a + 1, b + 1), None

        # Where does the stalled A line reappear in B, and the B line in A?
        b_sync = self._resync(self.table_a, a, self.table_b, b)
        a_sync = self._resync(self.table_b, b, self.table_a, a)

        if b_sync is None and a_sync is None:
            return CompareCursor(a + 1, b + 1), self._replace_one(a, b)
        if b_sync is None:
            # line a never comes back in B: it was deleted
            return CompareCursor(a + 1, b), Deletion(LineRange.from_indices(a, a + 1))
        if a_sync is None:
            return CompareCursor(a, b + 1), Insertion(LineRange.from_indices(b, b + 1))

        a_gap = a_sync - a
        b_gap = b_sync - b
        if a_gap < b_gap:
            return CompareCursor(a + a_gap, b), Deletion(LineRange.from_indices(a, a + a_gap))
        if b_gap < a_gap:
            return CompareCursor(a, b + b_gap), Insertion(LineRange.from_indices(b, b + b_gap))
        return CompareCursor(a + 1, b + 1), self._replace_one(a, b)

    @staticmethod
    def _replace_one(a: int, b: int) -> Replacement:
        return Replacement(LineRange.from_indices(a, a + 1), LineRange.from_indices(b, b + 1))

    def get_changes(self) -> Iterator[ChangeRecord]:
        """Lazily yields the change records, in file order."""
        cursor = CompareCursor(0, 0)
        steps = 0
        changes = 0
        while not self.is_drained(cursor):
            cursor, change = self.step(cursor)
            steps += 1
            if change is not None:
                changes += 1
                yield change
        logger.debug(f"Sequential compare drained after {steps} steps, {changes} change(s)")

    def get_opcodes(self) -> Iterator[tuple[str, int, int, int, int]]:
        """
        Return list of 5-tuples describing how to turn a into b.
        Each tuple is of the form (tag, i1, i2, j1, j2).
        """
        return changes_to_opcodes(self.get_changes(), len(self.table_a), len(self.table_b))
