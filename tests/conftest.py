"""
Pytest configuration and shared fixtures.
"""

import tempfile
from pathlib import Path

import pytest

from bach_theory.catalog import Registry
from bach_theory.instruments import StringedInstrument


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for config and catalog files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def registry() -> Registry:
    """A fresh registry over the built-in library."""
    return Registry()


@pytest.fixture
def guitar(registry: Registry) -> StringedInstrument:
    """Six-string guitar in standard tuning with 22 frets."""
    return registry.create_instrument("guitar", 22)
