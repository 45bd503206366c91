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

import sys
from collections.abc import Iterable
from typing import TextIO

from linecompare.changes import SIDE_A, SIDE_B, ChangeRecord, LineRange
from linecompare.lineindex import LineTable


SEPARATOR = "--------------"
IDENTICAL_MESSAGE = "Files are identical"


class DiffReport:
    """
    Renders change records as labeled line listings separated by dashes.

    Each reported line is printed as ``"<file>", <line#>: <content>``. A
    separator goes between two records unless the second continues the first
    on the same side (previous last line + 1 == next first line), so runs of
    one-line edits read as a single block. ``close`` prints the trailing
    separator, or reports identical files on ``err`` when nothing was written.

    Records are rendered as they arrive and not retained.
    """

    def __init__(
        self,
        name_a: str,
        name_b: str,
        table_a: LineTable,
        table_b: LineTable,
        out: TextIO | None = None,
        err: TextIO | None = None,
        pad_names: bool = True,
        encoding: str = 'utf-8',
    ) -> None:
        if pad_names:
            # display-only alignment of the two filename columns
            width = max(len(name_a), len(name_b))
            name_a = name_a.ljust(width)
            name_b = name_b.ljust(width)
        self.names = {SIDE_A: name_a, SIDE_B: name_b}
        self.tables = {SIDE_A: table_a, SIDE_B: table_b}
        self.out = out if out is not None else sys.stdout
        self.err = err if err is not None else sys.stderr
        self.encoding = encoding
        self.count = 0
        self._last: ChangeRecord | None = None

    def _print_lines(self, side: str, lines: LineRange) -> None:
        name = self.names[side]
        table = self.tables[side]
        for index in range(lines.start, lines.stop):
            self.out.write(f'"{name}", {index + 1:4d}: {table.text(index, self.encoding)}\n')

    @staticmethod
    def _continues(prev: ChangeRecord, change: ChangeRecord) -> bool:
        if prev.source is None or prev.source != change.source:
            return False
        return prev.lines.last + 1 == change.lines.first

    def write(self, change: ChangeRecord) -> None:
        if self._last is not None and not self._continues(self._last, change):
            self.out.write(SEPARATOR + "\n")

        if change.tag == 'replace':
            self._print_lines(SIDE_A, change.a_lines)
            self._print_lines(SIDE_B, change.b_lines)
        else:
            self._print_lines(change.source, change.lines)

        self._last = change
        self.count += 1

    def close(self) -> bool:
        """Finishes the report. Returns True if any difference was written."""
        if self.count:
            self.out.write(SEPARATOR + "\n")
        else:
            self.err.write(IDENTICAL_MESSAGE + "\n")
        self.out.flush()
        return self.count > 0

    def write_all(self, changes: Iterable[ChangeRecord]) -> bool:
        for change in changes:
            self.write(change)
        return self.close()
