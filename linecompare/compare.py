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
from typing import TextIO

from linecompare.blockdiff import CommonBlockMatcher
from linecompare.changes import ChangeRecord
from linecompare.fileio import mapped_file
from linecompare.lineindex import LineTable, build_line_table
from linecompare.report import DiffReport
from linecompare.seqdiff import SyncSequenceMatcher


logger = logging.getLogger(__name__)

ENGINES = {
    'sequential': SyncSequenceMatcher,
    'block': CommonBlockMatcher,
}


def make_matcher(engine: str, table_a: LineTable, table_b: LineTable, **options):
    try:
        matcher_cls = ENGINES[engine]
    except KeyError as e:
        raise ValueError(f"Unknown engine '{engine}'. Expected one of: {', '.join(ENGINES)}") from e
    return matcher_cls(table_a, table_b, **options)


def diff_buffers(buf_a, buf_b, engine: str = 'sequential', **options) -> Iterator[ChangeRecord]:
    """Change records between two in-memory buffers."""
    table_a = build_line_table(buf_a)
    table_b = build_line_table(buf_b)
    return make_matcher(engine, table_a, table_b, **options).get_changes()


def compare_files(
    path_a: str,
    path_b: str,
    engine: str = 'sequential',
    out: TextIO | None = None,
    err: TextIO | None = None,
    pad_names: bool = True,
    use_mmap: bool = True,
    **options,
) -> bool:
    """
    Compares two files and writes the report to ``out``.

    Both buffers stay mapped until the report is complete. Returns True if
    the files differ.
    """
    with mapped_file(path_a, use_mmap) as buf_a, mapped_file(path_b, use_mmap) as buf_b:
        table_a = build_line_table(buf_a)
        table_b = build_line_table(buf_b)
        logger.debug(f"Indexed {len(table_a)} lines of {path_a}, {len(table_b)} lines of {path_b}")

        matcher = make_matcher(engine, table_a, table_b, **options)
        report = DiffReport(path_a, path_b, table_a, table_b, out=out, err=err, pad_names=pad_names)
        return report.write_all(matcher.get_changes())
