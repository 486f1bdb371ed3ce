#!/usr/bin/env python3
"""
📋 Happystack Table - Configuration Module
==========================================
Copyright (c) 2025 Happystack

Centralized Configuration System
=================================
Everything a row render needs, built once at startup and passed
explicitly into every rendering call:
- Terminal geometry snapshot (queried once, never mutated)
- Box-drawing glyph set
- ANSI color tokens
- Overflow policy for cells wider than their column
- Width cache settings for hs_width

Glyph Set
=========
The table uses rounded corners and light box-drawing lines:

    ╭────┬────╮
    │    │    │
    ├────┼────┤
    ╰────┴────╯

Terminal Geometry
=================
The terminal is asked for its size through the controlling tty, never
through the COLUMNS/LINES environment variables. When no tty answers,
TerminalUnavailableError is raised; pass an explicit width instead.
"""

import logging
import os
from typing import Optional, Tuple
from dataclasses import dataclass, field, fields
from enum import Enum

from wcwidth import wcswidth

# Configure logging
logger = logging.getLogger('hs_config')

# ============================================================================
# COLORS
# ============================================================================

DEFAULT_COLOR = '\033[39m'
LIGHT_GREY = '\033[38;5;240m'
PURPLE = '\033[38;5;141m'

# ============================================================================
# TERMINAL GEOMETRY
# ============================================================================

# Narrowest table that still has room for both outer borders and one cell
MIN_TABLE_WIDTH = 3


class TerminalUnavailableError(OSError):
    """No controlling terminal reported its size."""


@dataclass(frozen=True)
class TerminalDimensions:
    """Terminal size snapshot in character cells."""
    width: int
    height: int


def get_terminal_dimensions() -> TerminalDimensions:
    """
    Query the controlling terminal for its column and row counts.

    Tries stdout, then stderr, then stdin, so a table piped into another
    program still measures the terminal it is displayed on.

    Returns:
        TerminalDimensions snapshot

    Raises:
        TerminalUnavailableError: if none of the standard streams is a tty
    """
    for fd in (1, 2, 0):
        try:
            size = os.get_terminal_size(fd)
        except OSError:
            continue
        logger.debug(f"Terminal size from fd {fd}: {size.columns}x{size.lines}")
        return TerminalDimensions(width=size.columns, height=size.lines)

    raise TerminalUnavailableError(
        "no terminal attached; pass an explicit width (--width)"
    )

# ============================================================================
# GLYPHS
# ============================================================================

@dataclass(frozen=True)
class GlyphSet:
    """
    Box-drawing characters addressed by semantic name.

    Attributes:
        corner_top_left: ╭
        corner_top_right: ╮
        corner_bottom_left: ╰
        corner_bottom_right: ╯
        separator_top: ┬ (vertical line leaving a border downwards)
        separator_bottom: ┴ (vertical line arriving at a border from above)
        separator_left: ├
        separator_right: ┤
        separator_cross: ┼
        line_horizontal: ─
        line_vertical: │
    """
    corner_top_left: str = '╭'
    corner_top_right: str = '╮'
    corner_bottom_left: str = '╰'
    corner_bottom_right: str = '╯'
    separator_top: str = '┬'
    separator_bottom: str = '┴'
    separator_left: str = '├'
    separator_right: str = '┤'
    separator_cross: str = '┼'
    line_horizontal: str = '─'
    line_vertical: str = '│'

    def get(self, name: str) -> str:
        """
        Look up a glyph by semantic name ('corner-top-left' or 'corner_top_left').

        Raises:
            KeyError: for a name that is not part of the glyph set
        """
        key = name.replace('-', '_')
        if key not in self.names():
            raise KeyError(f"unknown glyph: {name}")
        return getattr(self, key)

    @classmethod
    def names(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls))


@dataclass(frozen=True)
class ColorTokens:
    """The two colors a table is drawn with."""
    default: str = DEFAULT_COLOR
    dim: str = LIGHT_GREY


GLYPHS = GlyphSet()
COLORS = ColorTokens()

# ============================================================================
# CONFIGURATION ENUMS
# ============================================================================

class OverflowPolicy(Enum):
    """What to do with a cell whose content is wider than its column"""
    TRUNCATE = "truncate"
    ERROR = "error"
    OVERFLOW = "overflow"

# ============================================================================
# CACHE CONFIGURATION
# ============================================================================

@dataclass
class CacheConfig:
    """
    Width cache parameters for hs_width.

    Attributes:
        default_size: Maximum number of cached strings
        enable_caching: Master switch for caching
    """
    default_size: int = 256
    enable_caching: bool = True

    def validate(self) -> bool:
        """Validate cache configuration"""
        if self.default_size <= 0:
            raise ValueError("Cache size must be positive")
        return True

# ============================================================================
# MAIN CONFIGURATION CLASS
# ============================================================================

@dataclass(frozen=True)
class RenderConfig:
    """Complete render configuration for one process"""

    terminal: TerminalDimensions
    glyphs: GlyphSet = GLYPHS
    colors: ColorTokens = COLORS
    fill_char: str = ' '
    overflow: OverflowPolicy = OverflowPolicy.TRUNCATE
    cache: CacheConfig = field(default_factory=CacheConfig)

    @property
    def width(self) -> int:
        return self.terminal.width

    @property
    def interior_width(self) -> int:
        """Cells between the two outer border characters"""
        return self.terminal.width - 2

    def validate(self) -> bool:
        """Validate entire configuration"""
        if self.terminal.width < MIN_TABLE_WIDTH:
            raise ValueError(f"Table width must be at least {MIN_TABLE_WIDTH}")
        if wcswidth(self.fill_char) != 1:
            raise ValueError("Fill character must be exactly one cell wide")
        self.cache.validate()
        return True


def create_config(width: Optional[int] = None,
                  height: Optional[int] = None,
                  overflow: OverflowPolicy = OverflowPolicy.TRUNCATE,
                  fill_char: str = ' ') -> RenderConfig:
    """
    Build the render configuration for this process.

    Args:
        width: Fixed table width (queries the terminal if None)
        height: Fixed terminal height (taken from the query, or 0)
        overflow: Policy for cells wider than their column
        fill_char: Character used to pad cells

    Returns:
        Validated RenderConfig

    Raises:
        TerminalUnavailableError: if width is None and no terminal answers
        ValueError: if the resulting configuration is invalid
    """
    if width is None:
        terminal = get_terminal_dimensions()
        if height is not None:
            terminal = TerminalDimensions(width=terminal.width, height=height)
    else:
        terminal = TerminalDimensions(width=width, height=height or 0)

    config = RenderConfig(terminal=terminal, fill_char=fill_char, overflow=overflow)
    config.validate()

    logger.debug(f"Render config: width={terminal.width}, height={terminal.height}, "
                 f"overflow={overflow.value}")
    return config
