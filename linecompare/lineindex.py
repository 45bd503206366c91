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

from array import array
from typing import NamedTuple


class Span(NamedTuple):
    """Half-open byte range [start, end) of one line, terminator included."""
    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start


class LineTable:
    """
    Read-only index of the lines of a byte buffer.

    The table stores one boundary offset per span plus the buffer length, so
    span ``i`` is ``[bounds[i], bounds[i + 1])``. A buffer with N newline bytes
    has N + 1 spans; an empty buffer has none.

    The empty span that follows a final newline is kept in the span table but
    is not counted as a line: ``len(table)`` is the number of lines the engines
    compare. ``b"a\\nb\\n"`` has 3 spans and 2 lines, ``b"a\\nb"`` has 2 of each.
    """

    def __init__(self, buffer, bounds: array) -> None:
        self.buffer = buffer
        self._bounds = bounds
        self.span_count = len(bounds) - 1 if len(bounds) > 1 else 0
        if self.span_count and bounds[-1] == bounds[-2]:
            self.line_count = self.span_count - 1
        else:
            self.line_count = self.span_count

    def __len__(self) -> int:
        return self.line_count

    def span(self, index: int) -> Span:
        if not 0 <= index < self.span_count:
            raise IndexError(f"span index {index} out of range (0..{self.span_count - 1})")
        return Span(self._bounds[index], self._bounds[index + 1])

    def spans(self) -> list[Span]:
        return [self.span(i) for i in range(self.span_count)]

    def length(self, index: int) -> int:
        """Byte length of line ``index``, terminator included."""
        return self._bounds[index + 1] - self._bounds[index]

    def line(self, index: int) -> bytes:
        start, end = self.span(index)
        return bytes(self.buffer[start:end])

    def text(self, index: int, encoding: str = 'utf-8') -> str:
        """Line content without its newline, decoded for display."""
        raw = self.line(index)
        if raw.endswith(b'\n'):
            raw = raw[:-1]
        return raw.decode(encoding, errors='backslashreplace')

    def is_blank(self, index: int) -> bool:
        return self.line(index) == b'\n'


def build_line_table(buffer) -> LineTable:
    """
    Scans ``buffer`` once for newline bytes and returns its LineTable.

    Works on anything that supports ``find`` and slicing (bytes, bytearray, mmap).
    """
    size = len(buffer)
    bounds = array('q')
    if size == 0:
        return LineTable(buffer, bounds)

    bounds.append(0)
    pos = buffer.find(b'\n')
    while pos != -1:
        bounds.append(pos + 1)
        pos = buffer.find(b'\n', pos + 1)
    bounds.append(size)
    return LineTable(buffer, bounds)


def lines_equal(table_x: LineTable, index_x: int, table_y: LineTable, index_y: int) -> bool:
    """
    The single definition of line equality: byte lengths first, then content.
    No trimming or normalization, so a missing final newline makes lines differ.
    """
    if table_x.length(index_x) != table_y.length(index_y):
        return False
    return table_x.line(index_x) == table_y.line(index_y)
