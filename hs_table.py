#!/usr/bin/env python3
"""
📋 Happystack Table - Row Rendering Engine
==========================================
Copyright (c) 2025 Happystack

Row Rendering System
====================
Renders one table row at a time at exactly the terminal width. A full
table is built by rendering its rows in order with the same column
boundaries:

    render_row(RowSpec(RowKind.TOP, columns=(10,)), config)
    render_row(RowSpec(RowKind.MIDDLE, columns=(10,), content=('a', 'b')), config)
    render_row(RowSpec(RowKind.BOTTOM, columns=(10,)), config)

Column Boundaries
=================
Boundaries are 0-based offsets inside the two outer border characters.
Border rows place a separator glyph at each boundary; content rows place
the vertical line there, so cells and separators line up across rows.

Row Kinds
=========
| kind      | left | right | separator          |
|-----------|------|-------|--------------------|
| TOP       | ╭    | ╮     | ┬                  |
| BOTTOM    | ╰    | ╯     | ┴                  |
| MIDDLE    | │    | │     | │ (between cells)  |
| SEPARATOR | ├    | ┤     | ─, or ┴ ┬ ┼ by dir |
"""

import re
import logging
from typing import Iterable, Optional, Sequence, Tuple, Union
from dataclasses import dataclass
from enum import Enum

from hs_config import ColorTokens, GlyphSet, OverflowPolicy, RenderConfig
from hs_width import WidthCalculator, get_calculator, sanitize_content

# Configure logging
logger = logging.getLogger('hs_table')

ColumnBoundaries = Tuple[int, ...]

_LIST_SPLIT_RE = re.compile(r'[,\s]+')

# ============================================================================
# ERRORS
# ============================================================================

class TableError(Exception):
    """Base class for every rendering error."""


class UsageError(TableError):
    """Missing or malformed arguments."""


class ContentMismatchError(UsageError):
    """Content cell count does not match the column boundaries."""


class BoundaryError(UsageError):
    """Column boundary outside the table interior."""


class CellOverflowError(TableError):
    """Cell content wider than its column under OverflowPolicy.ERROR."""

# ============================================================================
# ROW SPECIFICATION
# ============================================================================

class RowKind(Enum):
    TOP = "top"
    BOTTOM = "bottom"
    MIDDLE = "middle"
    SEPARATOR = "separator"


class Direction(Enum):
    """Which border a separator row merges with at its boundaries"""
    UP = "up"
    DOWN = "down"
    CROSS = "cross"


@dataclass(frozen=True)
class RowSpec:
    kind: RowKind
    columns: ColumnBoundaries = ()
    content: Optional[Tuple[str, ...]] = None
    direction: Optional[Direction] = None

# ============================================================================
# COLUMN LAYOUT
# ============================================================================

def parse_boundaries(raw: Union[str, Iterable[int]]) -> ColumnBoundaries:
    """
    Parse column boundaries into a sorted tuple without duplicates.

    Args:
        raw: Comma and/or space separated integers, or an iterable of ints

    Returns:
        Strictly increasing tuple of boundaries

    Raises:
        UsageError: if a token is not an integer
    """
    if isinstance(raw, str):
        tokens = [token for token in _LIST_SPLIT_RE.split(raw.strip()) if token]
        try:
            values = [int(token) for token in tokens]
        except ValueError:
            raise UsageError(f"column boundaries must be integers: {raw!r}") from None
    else:
        values = [int(value) for value in raw]

    boundaries = tuple(sorted(set(values)))
    if len(boundaries) != len(values):
        logger.debug(f"Dropped duplicate column boundaries from {values}")
    return boundaries


class ColumnLayout:
    """
    Segment lengths derived from column boundaries and a table width.

    Segment i is the run of interior cells before boundary i; the final
    segment runs from the last boundary to the right border. Every
    boundary after the first costs one cell for its separator glyph.
    """

    def __init__(self, boundaries: Sequence[int], width: int):
        self.width = width
        self.boundaries = parse_boundaries(boundaries)
        self._validate()

    def _validate(self):
        limit = self.width - 2
        for boundary in self.boundaries:
            if boundary < 0 or boundary >= limit:
                raise BoundaryError(
                    f"column boundary {boundary} outside 0..{limit - 1} "
                    f"for width {self.width}"
                )

    @property
    def interior_width(self) -> int:
        return self.width - 2

    @property
    def column_count(self) -> int:
        return len(self.boundaries) + 1

    def segment_lengths(self) -> Tuple[int, ...]:
        """Visible width available to each cell, left to right."""
        if not self.boundaries:
            return (self.interior_width,)

        lengths = [self.boundaries[0]]
        for previous, current in zip(self.boundaries, self.boundaries[1:]):
            lengths.append(current - previous - 1)
        lengths.append((self.width - 3) - self.boundaries[-1])
        return tuple(lengths)

# ============================================================================
# CELL RENDERER
# ============================================================================

def cell(content: str, pad_width: int, colors: ColorTokens, fill_char: str = ' ') -> str:
    """
    Render one cell: content in the default color, padding in dim.

    A negative pad width renders no padding at all.
    """
    return f"{colors.default}{content}{colors.dim}{fill_char * max(pad_width, 0)}"

# ============================================================================
# ROW BUILDER
# ============================================================================

def border_fill(layout: ColumnLayout, separator: str, glyphs: GlyphSet) -> str:
    """
    Interior of a border row: horizontal line with separator glyphs at
    the column boundaries.
    """
    fill = []
    boundaries = iter(layout.boundaries)
    next_boundary = next(boundaries, None)

    for offset in range(layout.interior_width):
        if offset == next_boundary:
            fill.append(separator)
            next_boundary = next(boundaries, None)
        else:
            fill.append(glyphs.line_horizontal)

    return ''.join(fill)


def _fit_content(content: str, length: int, index: int, config: RenderConfig,
                 calculator: WidthCalculator) -> Tuple[str, int]:
    """Apply the overflow policy; returns (content, pad width)."""
    pad_width = length - calculator.get_width(content)
    if pad_width >= 0:
        return content, pad_width

    if config.overflow is OverflowPolicy.ERROR:
        raise CellOverflowError(
            f"cell {index} is {length - pad_width} cells wide but its column "
            f"holds {length}"
        )
    if config.overflow is OverflowPolicy.TRUNCATE:
        logger.warning(f"Cell {index} truncated to {length} cells")
        cropped = calculator.crop(content, length)
        return cropped, length - calculator.get_width(cropped)

    logger.debug(f"Cell {index} overflows its column by {-pad_width} cells")
    return content, pad_width


def content_fill(layout: ColumnLayout, content: Optional[Sequence[str]],
                 config: RenderConfig,
                 calculator: Optional[WidthCalculator] = None) -> str:
    """
    Interior of a content row: padded cells joined by vertical lines.
    Control characters in content (tabs included) render as one space.

    Args:
        layout: Column layout for this row
        content: One string per column (None renders empty cells)
        config: Render configuration
        calculator: Width calculator (shared one for config.cache if None)

    Raises:
        ContentMismatchError: if content does not have one entry per column
        CellOverflowError: if a cell overflows under OverflowPolicy.ERROR
    """
    calculator = calculator or get_calculator(config.cache)
    if content is None:
        content = ('',) * layout.column_count
    if len(content) != layout.column_count:
        raise ContentMismatchError(
            f"expected {layout.column_count} content cells for "
            f"{len(layout.boundaries)} column boundaries, got {len(content)}"
        )

    cells = []
    for index, (text, length) in enumerate(zip(content, layout.segment_lengths())):
        text = sanitize_content(text)
        text, pad_width = _fit_content(text, length, index, config, calculator)
        cells.append(cell(text, pad_width, config.colors, config.fill_char))

    return config.glyphs.line_vertical.join(cells)

# ============================================================================
# TABLE ASSEMBLER
# ============================================================================

def row_glyphs(kind: RowKind, glyphs: GlyphSet) -> Tuple[str, str, str]:
    """(left, right, default separator) for a row kind."""
    if kind is RowKind.TOP:
        return glyphs.corner_top_left, glyphs.corner_top_right, glyphs.separator_top
    if kind is RowKind.BOTTOM:
        return glyphs.corner_bottom_left, glyphs.corner_bottom_right, glyphs.separator_bottom
    if kind is RowKind.MIDDLE:
        return glyphs.line_vertical, glyphs.line_vertical, glyphs.line_vertical
    return glyphs.separator_left, glyphs.separator_right, glyphs.line_horizontal


def direction_glyph(direction: Direction, glyphs: GlyphSet) -> str:
    if direction is Direction.UP:
        return glyphs.separator_bottom
    if direction is Direction.DOWN:
        return glyphs.separator_top
    return glyphs.separator_cross


def concat_row(left: str, fill: str, right: str, colors: ColorTokens) -> str:
    """Wrap a row fill with its outer glyphs, drawn dim."""
    return f"{colors.dim}{left}{fill}{right}{colors.default}"


def render_row(spec: RowSpec, config: RenderConfig,
               calculator: Optional[WidthCalculator] = None) -> str:
    """
    Render one complete table row.

    Args:
        spec: Row kind and options
        config: Render configuration (terminal width, glyphs, colors)
        calculator: Width calculator for content rows

    Returns:
        The row without a trailing newline

    Raises:
        TableError: for invalid boundaries, content, or overflow
    """
    glyphs = config.glyphs
    left, right, separator = row_glyphs(spec.kind, glyphs)
    layout = ColumnLayout(spec.columns, config.width)

    if spec.direction is not None:
        if spec.kind is RowKind.SEPARATOR:
            separator = direction_glyph(spec.direction, glyphs)
        else:
            logger.warning(f"--{spec.direction.value} only applies to separator rows; ignored")

    if spec.kind is RowKind.MIDDLE:
        fill = content_fill(layout, spec.content, config, calculator)
    else:
        if spec.content is not None:
            logger.warning(f"Content ignored on {spec.kind.value} row")
        fill = border_fill(layout, separator, glyphs)

    return concat_row(left, fill, right, config.colors)
