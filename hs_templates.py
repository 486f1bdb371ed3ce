#!/usr/bin/env python3
"""
📋 Happystack Table - Header Template
=====================================
Copyright (c) 2025 Happystack
"""

import sys
import argparse
from typing import List, Optional

from hs_config import DEFAULT_COLOR, PURPLE

DEFAULT_TITLE = 'HAPPYSTACK'
DEFAULT_SUBTITLE = 'A Bash script'

HEADER_TEMPLATE = """
    /\\═════════\\™
   /__\\‸_____/__\\‸
  │    │         │   {title_color}{title}{reset}
  │    │  \\___/  │   {subtitle}
  ╰────┴─────────╯

"""


def template_header(*args: str) -> str:
    """
    Return the Happystack header block.

    Exactly two arguments replace the title and subtitle; any other
    number of arguments keeps the defaults.
    """
    title, subtitle = DEFAULT_TITLE, DEFAULT_SUBTITLE
    if len(args) == 2:
        title, subtitle = args

    return HEADER_TEMPLATE.format(
        title=title,
        subtitle=subtitle,
        title_color=PURPLE,
        reset=DEFAULT_COLOR,
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog='hs-header', description='Print the Happystack header')
    parser.add_argument('text', nargs='*', metavar='TEXT',
                        help='title and subtitle (both or neither)')
    args = parser.parse_args(argv)

    sys.stdout.write(template_header(*args.text))
    return 0


if __name__ == "__main__":
    sys.exit(main())
