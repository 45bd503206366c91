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


class MatchWindow(NamedTuple):
    """A run of ``length`` common lines starting at a_start in A and b_start in B."""
    length: int
    a_start: int
    b_start: int


class CommonBlockMatcher:
    """
    A divide-and-conquer line matcher built on the longest common block.

    Finds the longest run of lines present verbatim in both ranges, reports
    nothing for it, and repeats on the ranges before and after it. When two
    ranges share no line at all, their first lines are reported as a one-line
    replacement and the search continues on the rest.

    Among blocks of equal length the first one found wins: A offsets are tried
    in increasing order against the start of B, then B offsets against the
    start of A. That is not necessarily the earliest or the most central block,
    so the split can be unbalanced.

    Produces smaller diffs than SyncSequenceMatcher, but the nested window
    scans make it impractical for very large files.
    """

    def __init__(self, table_a: LineTable, table_b: LineTable) -> None:
        self.table_a = table_a
        self.table_b = table_b

    def _window_matches(self, a_start: int, b_start: int, length: int) -> bool:
        table_a = self.table_a
        table_b = self.table_b
        for k in range(length):
            if not lines_equal(table_a, a_start + k, table_b, b_start + k):
                return False
        return True

    def find_common_block(self, range_a: range, range_b: range) -> MatchWindow | None:
        """Longest common block of the two line ranges, or None if they share no line."""
        for length in range(min(len(range_a), len(range_b)), 0, -1):
            # slide the window down A against the start of B
            for a_start in range(range_a.start, range_a.stop - length + 1):
                if self._window_matches(a_start, range_b.start, length):
                    return MatchWindow(length, a_start, range_b.start)
            # then down B against the start of A
            for b_start in range(range_b.start, range_b.stop - length + 1):
                if self._window_matches(range_a.start, b_start, length):
                    return MatchWindow(length, range_a.start, b_start)
        return None

    @staticmethod
    def _check_range(rng: range | None, table: LineTable, name: str) -> range:
        if rng is None:
            return range(len(table))
        if rng.step != 1 or not 0 <= rng.start <= rng.stop <= len(table):
            raise ValueError(f"{name} {rng} is not a line range of a {len(table)}-line file")
        return rng

    def get_changes(self, range_a: range | None = None, range_b: range | None = None) -> Iterator[ChangeRecord]:
        """
        Yields the change records for the given line ranges (whole files by default),
        in file order.

        Pending sub-ranges are kept on an explicit stack instead of the call
        stack, so deeply alternating inputs cannot exhaust the interpreter's
        recursion limit. The range before a common block is always pushed last
        and therefore processed first.
        """
        range_a = self._check_range(range_a, self.table_a, 'range_a')
        range_b = self._check_range(range_b, self.table_b, 'range_b')

        stack = [(range_a, range_b)]
        max_depth = 1
        blocks = 0
        while stack:
            max_depth = max(max_depth, len(stack))
            rng_a, rng_b = stack.pop()

            if not rng_a and not rng_b:
                continue
            if not rng_a:
                yield Insertion(LineRange.from_indices(rng_b.start, rng_b.stop))
                continue
            if not rng_b:
                yield Deletion(LineRange.from_indices(rng_a.start, rng_a.stop))
                continue

            window = self.find_common_block(rng_a, rng_b)
            if window is None:
                yield Replacement(
                    LineRange.from_indices(rng_a.start, rng_a.start + 1),
                    LineRange.from_indices(rng_b.start, rng_b.start + 1),
                )
                stack.append((rng_a[1:], rng_b[1:]))
                continue

            blocks += 1
            a_end = window.a_start + window.length
            b_end = window.b_start + window.length
            stack.append((range(a_end, rng_a.stop), range(b_end, rng_b.stop)))
            stack.append((range(rng_a.start, window.a_start), range(rng_b.start, window.b_start)))

        logger.debug(f"Block compare found {blocks} common block(s), max pending ranges {max_depth}")

    def get_opcodes(self) -> Iterator[tuple[str, int, int, int, int]]:
        """
        Return list of 5-tuples describing how to turn a into b.
        Each tuple is of the form (tag, i1, i2, j1, j2).
        """
        return changes_to_opcodes(self.get_changes(), len(self.table_a), len(self.table_b))
