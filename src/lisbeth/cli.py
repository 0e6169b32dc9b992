from __future__ import annotations

import argparse
import logging
import sys

from .errors import LexingFailed
from .numbers import parse_numbers
from .reporter import SourceReporter


log = logging.getLogger("lisbeth.cli")


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog="lisbeth-numbers",
        description="Check files of whitespace-separated numbers and report errors",
    )
    ap.add_argument("files", nargs="+", help="Input files")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log lexing progress to stderr")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(message)s",
    )

    status = 0
    for path in args.files:
        reporter = SourceReporter.from_path(path)
        try:
            numbers = parse_numbers(reporter)
        except LexingFailed as e:
            log.debug("%s: %d error(s)", path, len(e.errors))
            for error in e.errors:
                sys.stderr.write(reporter.format_error(error))
            status = 1
            continue
        print(" ".join(str(n) for n in numbers))
    return status
