#!/usr/bin/env python3
"""
📋 Happystack Table - Row Command
=================================
Copyright (c) 2025 Happystack

Renders one table row per invocation:

    hs-row top --columns=10,30
    hs-row middle --columns=10,30 --content='name,status,\\e[32mok'
    hs-row separator --columns=10,30 --cross
    hs-row bottom --columns=10,30

Exit status is 0 on success and 1 on any usage or rendering error.
"""

import re
import sys
import logging
import argparse
from typing import List, Optional, Tuple
from dataclasses import dataclass

from hs_config import OverflowPolicy, TerminalUnavailableError, create_config
from hs_table import Direction, RowKind, RowSpec, TableError, UsageError, parse_boundaries, render_row

logger = logging.getLogger('hs_row')

_CONTENT_SPLIT_RE = re.compile(r'\s*,\s*|\s+')
_ESCAPE_SPELLINGS_RE = re.compile(r'\\(?:e|033|x1[bB])')


@dataclass(frozen=True)
class RowOptions:
    """Parsed command line: what to render and how wide."""
    spec: RowSpec
    width: Optional[int] = None
    overflow: OverflowPolicy = OverflowPolicy.TRUNCATE
    verbose: bool = False


class RowArgumentParser(argparse.ArgumentParser):
    """Argument parser that exits with status 1 on usage errors."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def decode_escapes(text: str) -> str:
    """Turn literal \\e, \\033 and \\x1b spellings into the ESC character."""
    return _ESCAPE_SPELLINGS_RE.sub('\x1b', text)


def parse_content(raw: str) -> Tuple[str, ...]:
    """Split a content list on commas or whitespace; ',,' keeps an empty cell."""
    return tuple(decode_escapes(item) for item in _CONTENT_SPLIT_RE.split(raw.strip()))


def build_parser() -> argparse.ArgumentParser:
    parser = RowArgumentParser(
        prog='hs-row',
        description='Render one row of a terminal table',
        allow_abbrev=False,
    )
    parser.add_argument('kind', choices=[kind.value for kind in RowKind],
                        help='row kind')
    parser.add_argument('--columns', default='',
                        help='column boundaries, e.g. 10,30')
    parser.add_argument('--content', default=None,
                        help='cell contents for middle rows, one more than columns')

    # Last flag given wins
    for direction in Direction:
        parser.add_argument(f'--{direction.value}', dest='direction',
                            action='store_const', const=direction,
                            help=f'separator rows: merge {direction.value}')

    parser.add_argument('--width', type=int, default=None,
                        help='table width (default: query the terminal)')
    parser.add_argument('--overflow', choices=[policy.value for policy in OverflowPolicy],
                        default=OverflowPolicy.TRUNCATE.value,
                        help='what to do with cells wider than their column')
    parser.add_argument('--verbose', action='store_true',
                        help='debug logging on stderr')
    return parser


def parse_args(argv: Optional[List[str]] = None) -> RowOptions:
    """
    Parse the command line into typed row options.

    Raises:
        SystemExit: with status 1 on argparse usage errors
        UsageError: for malformed column boundaries
    """
    args = build_parser().parse_args(argv)

    spec = RowSpec(
        kind=RowKind(args.kind),
        columns=parse_boundaries(args.columns),
        content=parse_content(args.content) if args.content is not None else None,
        direction=args.direction,
    )
    return RowOptions(
        spec=spec,
        width=args.width,
        overflow=OverflowPolicy(args.overflow),
        verbose=args.verbose,
    )


def main(argv: Optional[List[str]] = None) -> int:
    try:
        options = parse_args(argv)
    except UsageError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if options.verbose else logging.WARNING,
        format='%(name)s: %(levelname)s: %(message)s',
    )
    logger.debug(f"Parsed options: {options}")

    try:
        config = create_config(width=options.width, overflow=options.overflow)
        line = render_row(options.spec, config)
    except (TableError, TerminalUnavailableError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
