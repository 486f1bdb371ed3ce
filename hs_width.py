#!/usr/bin/env python3
"""
📋 Happystack Table - Visible Width Module
==========================================
Copyright (c) 2025 Happystack

Visible Width Calculation
=========================
Measures how many terminal cells a string occupies once its ANSI color
escape sequences are ignored. The escapes themselves are never removed
from what gets printed; they only drop out of the length computation.

Core Features
=============
- ANSI CSI color escape stripping (ESC '[' <params> 'm')
- Unicode-aware width of the remaining text via wcwidth
- Control characters counted as zero width
- Thread-safe LRU cache with statistics
- Escape-preserving crop to a visible width

Module Interface
================
- WidthCalculator: Main class with caching
- get_width(): Simple function for single strings
- strip_ansi(): Remove color escapes
- crop_visible(): Cut a string to a visible width, keeping its escapes
- sanitize_content(): Replace control characters with spaces
- get_calculator(): Shared calculator for a CacheConfig

Example Usage
=============
```python
from hs_width import get_width, crop_visible

get_width("\\033[32mdone\\033[39m")   # Returns 4
get_width("你好")                      # Returns 4
crop_visible("\\033[32mdone", 2)       # Returns "\\033[32mdo"
```
"""

import re
import threading
import logging
from typing import Optional, List, Dict, Union
from collections import OrderedDict

from wcwidth import wcwidth, wcswidth

from hs_config import CacheConfig

# Configure logging
logger = logging.getLogger('hs_width')

ANSI_COLOR_RE = re.compile(r'\x1b\[[0-9;]*m')
_CONTROL_RE = re.compile(r'[\x00-\x1f\x7f-\x9f]')


def strip_ansi(text: str) -> str:
    """Remove every ANSI color escape sequence from text."""
    return ANSI_COLOR_RE.sub('', text)


def _char_width(char: str) -> int:
    """Cell width of one character, with control characters as zero."""
    width = wcwidth(char)
    return width if width > 0 else 0


class WidthCalculator:
    """
    Thread-safe visible width calculator with caching.

    Attributes:
        stats: Dictionary containing calculation statistics

    Cache Behavior:
    - LRU eviction when size limit reached
    - Thread-safe for concurrent access
    """

    def __init__(self, cache_config: Optional[CacheConfig] = None):
        """
        Initialize width calculator.

        Args:
            cache_config: Cache settings (defaults to CacheConfig())
        """
        cache_config = cache_config or CacheConfig()
        cache_config.validate()

        self._string_cache = OrderedDict()
        self._cache_size = cache_config.default_size
        self._cache_enabled = cache_config.enable_caching
        self._lock = threading.Lock()

        self.stats = {
            'cache_hits': 0,
            'cache_misses': 0,
            'calculations': 0,
            'control_chars_handled': 0,
            'cache_evictions': 0,
        }

        logger.debug(f"WidthCalculator initialized with cache_size={self._cache_size}, "
                     f"cache_enabled={self._cache_enabled}")

    def get_width(self, text: str) -> int:
        """
        Get visible width of text in terminal cells.

        Args:
            text: Text to measure, possibly containing color escapes

        Returns:
            Visible width in cells (0 for empty or escape-only text)
        """
        if not text:
            return 0

        cached = self._get_cached(text)
        if cached is not None:
            return cached

        width = self._calculate_width(strip_ansi(text))
        self._cache_result(text, width)
        return width

    def get_widths(self, texts: List[str]) -> List[int]:
        """Get widths for multiple strings."""
        return [self.get_width(text) for text in texts]

    def crop(self, text: str, width: int) -> str:
        """
        Cut text down to a visible width.

        Escape sequences are copied through untouched, so colors opened
        before the cut and resets after it still apply. Visible characters
        stop at the first one that does not fit, so the result is always a
        prefix of the text; a wide character straddling the limit is dropped.

        Args:
            text: Text to crop
            width: Maximum visible width

        Returns:
            Cropped text whose visible width is at most width
        """
        if width <= 0:
            return ''.join(ANSI_COLOR_RE.findall(text))
        if self.get_width(text) <= width:
            return text

        out = []
        visible = 0
        full = False
        pos = 0
        while pos < len(text):
            match = ANSI_COLOR_RE.match(text, pos)
            if match:
                out.append(match.group(0))
                pos = match.end()
                continue
            char_width = _char_width(text[pos])
            if not full and visible + char_width <= width:
                out.append(text[pos])
                visible += char_width
            else:
                full = True
            pos += 1
        return ''.join(out)

    def _get_cached(self, text: str) -> Optional[int]:
        """Get cached width if available."""
        if not self._cache_enabled:
            return None

        with self._lock:
            if text in self._string_cache:
                self._string_cache.move_to_end(text)
                self.stats['cache_hits'] += 1
                return self._string_cache[text]
            self.stats['cache_misses'] += 1
        return None

    def _calculate_width(self, text: str) -> int:
        """
        Calculate width of text that no longer holds color escapes.

        Args:
            text: Stripped text

        Returns:
            Width in cells
        """
        with self._lock:
            self.stats['calculations'] += 1

        # Fast path: wcswidth is -1 as soon as a control character shows up
        width = wcswidth(text)
        if width >= 0:
            return width

        with self._lock:
            self.stats['control_chars_handled'] += 1
        return sum(_char_width(char) for char in text)

    def _cache_result(self, text: str, width: int):
        if not self._cache_enabled:
            return

        with self._lock:
            while len(self._string_cache) >= self._cache_size:
                self._string_cache.popitem(last=False)
                self.stats['cache_evictions'] += 1
            self._string_cache[text] = width

    def clear_cache(self):
        """Clear all cached widths."""
        with self._lock:
            self._string_cache.clear()

    def get_stats(self) -> Dict[str, Union[int, float, bool]]:
        """
        Get calculator statistics.

        Returns:
            Dictionary of statistics including the counters in `stats`,
            plus cache_hit_rate, cache_entries and cache_enabled
        """
        with self._lock:
            stats = self.stats.copy()

        total_requests = stats['cache_hits'] + stats['cache_misses']
        if total_requests > 0:
            stats['cache_hit_rate'] = stats['cache_hits'] / total_requests
        else:
            stats['cache_hit_rate'] = 0.0

        with self._lock:
            stats['cache_entries'] = len(self._string_cache)
            stats['cache_enabled'] = self._cache_enabled

        return stats


# ============================================================================
# CONVENIENCE FUNCTIONS
# ============================================================================

_default_calculator = None
_calculators = {}
_calculator_lock = threading.Lock()


def get_default_calculator() -> WidthCalculator:
    """Return the shared calculator, creating it on first use."""
    global _default_calculator

    if _default_calculator is None:
        with _calculator_lock:
            if _default_calculator is None:
                _default_calculator = WidthCalculator()

    return _default_calculator


def get_calculator(cache_config: Optional[CacheConfig] = None) -> WidthCalculator:
    """
    Return the shared calculator for a cache configuration.

    One calculator is kept per distinct (size, enabled) pair; the default
    CacheConfig maps to the default calculator.

    Args:
        cache_config: Cache settings (None for the defaults)
    """
    if cache_config is None or cache_config == CacheConfig():
        return get_default_calculator()

    key = (cache_config.default_size, cache_config.enable_caching)
    with _calculator_lock:
        if key not in _calculators:
            _calculators[key] = WidthCalculator(cache_config)
        return _calculators[key]


def sanitize_content(text: str) -> str:
    """
    Replace control characters with spaces, keeping color escapes.

    A terminal moves the cursor on tabs and other control characters, so
    they cannot be measured; each becomes a single space instead.
    """
    parts = []
    pos = 0
    for match in ANSI_COLOR_RE.finditer(text):
        parts.append(_CONTROL_RE.sub(' ', text[pos:match.start()]))
        parts.append(match.group(0))
        pos = match.end()
    parts.append(_CONTROL_RE.sub(' ', text[pos:]))
    return ''.join(parts)


def get_width(text: str) -> int:
    """
    Get visible width of text using the default calculator.

    Example:
        >>> get_width("Hello")
        5
        >>> get_width("\\033[31mHello\\033[39m")
        5
        >>> get_width("你好")
        4
    """
    return get_default_calculator().get_width(text)


def get_widths(texts: List[str]) -> List[int]:
    """Get widths for multiple strings using the default calculator."""
    return get_default_calculator().get_widths(texts)


def crop_visible(text: str, width: int) -> str:
    """Crop text to a visible width using the default calculator."""
    return get_default_calculator().crop(text, width)


def clear_default_cache():
    """Clear the default calculator's cache."""
    if _default_calculator is not None:
        _default_calculator.clear_cache()
