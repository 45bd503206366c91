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

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Union


SIDE_A = 'A'
SIDE_B = 'B'


@dataclass(frozen=True)
class LineRange:
    """Inclusive 1-based line interval, as printed in the report."""
    first: int
    last: int

    @classmethod
    def from_indices(cls, start: int, stop: int) -> 'LineRange':
        """Builds a range from 0-based half-open indices [start, stop)."""
        if stop <= start:
            raise ValueError(f"empty line range [{start}, {stop})")
        return cls(start + 1, stop)

    @property
    def start(self) -> int:
        return self.first - 1

    @property
    def stop(self) -> int:
        return self.last

    def __len__(self) -> int:
        return self.last - self.first + 1

    def __repr__(self):
        if self.first == self.last:
            return f"{self.first}"
        return f"{self.first}-{self.last}"


@dataclass(frozen=True)
class Deletion:
    """Lines of file A with no counterpart in file B."""
    lines: LineRange

    tag = 'delete'
    source = SIDE_A

    def __repr__(self):
        return f"DELETE(a={self.lines!r})"


@dataclass(frozen=True)
class Insertion:
    """Lines of file B with no counterpart in file A."""
    lines: LineRange

    tag = 'insert'
    source = SIDE_B

    def __repr__(self):
        return f"INSERT(b={self.lines!r})"


@dataclass(frozen=True)
class Replacement:
    """A line of file A reported against a line of file B."""
    a_lines: LineRange
    b_lines: LineRange

    tag = 'replace'
    source = None

    def __repr__(self):
        return f"REPLACE(a={self.a_lines!r}, b={self.b_lines!r})"


ChangeRecord = Union[Deletion, Insertion, Replacement]


def changes_to_opcodes(
    changes: Iterable[ChangeRecord],
    len_a: int,
    len_b: int,
) -> Iterator[tuple[str, int, int, int, int]]:
    """
    Converts an ordered change stream into difflib-style 5-tuples.

    Lines not covered by any change are matched in order, so the unreported
    stretches between changes become 'equal' opcodes. Adjacent changes are
    merged the way difflib groups them: a delete next to an insert is a replace.
    """
    i = j = 0
    diff_start_i = diff_start_j = 0

    def emit_diff(end_i, end_j):
        nonlocal diff_start_i, diff_start_j
        if diff_start_i < end_i and diff_start_j < end_j:
            yield ('replace', diff_start_i, end_i, diff_start_j, end_j)
        elif diff_start_i < end_i:
            yield ('delete', diff_start_i, end_i, diff_start_j, end_j)
        elif diff_start_j < end_j:
            yield ('insert', diff_start_i, end_i, diff_start_j, end_j)
        diff_start_i = end_i
        diff_start_j = end_j

    for change in changes:
        if change.tag == 'delete':
            start_i = change.lines.start
            start_j = j + (start_i - i)
            end_i, end_j = change.lines.stop, start_j
        elif change.tag == 'insert':
            start_j = change.lines.start
            start_i = i + (start_j - j)
            end_i, end_j = start_i, change.lines.stop
        else:
            start_i, start_j = change.a_lines.start, change.b_lines.start
            end_i, end_j = change.a_lines.stop, change.b_lines.stop

        if start_i > i:
            yield from emit_diff(i, j)
            yield ('equal', i, start_i, j, start_j)
            diff_start_i = start_i
            diff_start_j = start_j

        i, j = end_i, end_j

    yield from emit_diff(i, j)
    if i < len_a or j < len_b:
        yield ('equal', i, len_a, j, len_b)
