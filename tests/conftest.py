"""Shared fixtures for the table renderer tests."""

import sys
from pathlib import Path

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from hs_config import create_config


@pytest.fixture
def config():
    """60-column configuration so no test depends on a live terminal."""
    return create_config(width=60)
