# ruff: noqa: T201
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

import argparse
import logging
import sys
import time

from linecompare.compare import ENGINES, compare_files
from linecompare.errors import CompareError


logger = logging.getLogger(__name__)

SYNTAX = "Syntax: compare oldfile newfile"
NO_MEMORY = "* Internal error: insufficient RAM available to store pointers to every line."


class UsageParser(argparse.ArgumentParser):
    """ArgumentParser that prints the syntax line on misuse and exits with status 0."""

    def print_syntax(self) -> None:
        print(SYNTAX, file=sys.stderr)
        self.print_help(sys.stderr)

    def error(self, message: str) -> None:
        print(f"{self.prog}: {message}", file=sys.stderr)
        self.print_syntax()
        self.exit(0)


def build_parser(prog: str, engine: str | None = None) -> UsageParser:
    parser = UsageParser(
        prog=prog,
        description="Compare two large text files line by line.",
        add_help=False,
    )
    parser.add_argument("oldfile", help="Original file (A)")
    parser.add_argument("newfile", help="Changed file (B)")
    parser.add_argument("-h", "--help", action="store_true", help="Show this message and exit")
    if engine is None:
        parser.add_argument("--engine", default="sequential", choices=list(ENGINES),
                            help="sequential: fast, for huge files; block: smaller diffs, moderate files")
    parser.add_argument("--no-mmap", action="store_true", help="Read files into memory instead of mapping them")
    parser.add_argument("--no-pad", action="store_true", help="Do not pad file names to equal width")
    parser.add_argument("--max-gap", type=int, default=None,
                        help="sequential engine: lines to look ahead when resynchronizing (default: unlimited)")
    parser.add_argument("--no-blank-sync", action="store_true",
                        help="sequential engine: never resynchronize on a blank line")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging and timing on stderr")
    return parser


def main(argv: list[str] | None = None, engine: str | None = None, prog: str = "linecompare") -> int:
    if argv is None:
        argv = sys.argv[1:]
    parser = build_parser(prog, engine)
    if argv[:1] in (["-h"], ["--help"]):
        parser.print_syntax()
        return 0
    args = parser.parse_args(argv)
    if args.help:
        parser.print_syntax()
        return 0

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    engine = engine or args.engine
    options = {}
    if engine == "sequential":
        options = {"max_gap": args.max_gap, "sync_on_blank": not args.no_blank_sync}
    elif args.max_gap is not None or args.no_blank_sync:
        logger.warning("--max-gap and --no-blank-sync only apply to the sequential engine")

    start_time = time.perf_counter()
    try:
        compare_files(
            args.oldfile,
            args.newfile,
            engine=engine,
            pad_names=not args.no_pad,
            use_mmap=not args.no_mmap,
            **options,
        )
    except CompareError as e:
        print(e, file=sys.stderr)
        return 1
    except MemoryError:
        print(NO_MEMORY, file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"{prog}: {e}", file=sys.stderr)
        return 1
    logger.debug(f"Time taken: {time.perf_counter() - start_time:.4f}s")
    return 0


def bigcompare() -> None:
    sys.exit(main(engine="sequential", prog="bigcompare"))


def smallcompare() -> None:
    sys.exit(main(engine="block", prog="smallcompare"))


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
