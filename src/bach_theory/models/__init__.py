"""
Pydantic models for the YAML catalog.

This module provides:
- ScaleRecord / ChordRecord: Named formulas as stored in YAML
- TuningRecord / InstrumentRecord: Stringed instruments and their tunings
- ScaleLibrary / ChordLibrary / InstrumentLibrary: Whole library files
"""

from bach_theory.models.library import (
    ChordLibrary,
    ChordRecord,
    InstrumentLibrary,
    InstrumentRecord,
    ScaleLibrary,
    ScaleRecord,
    TuningRecord,
)

__all__ = [
    "ChordLibrary",
    "ChordRecord",
    "InstrumentLibrary",
    "InstrumentRecord",
    "ScaleLibrary",
    "ScaleRecord",
    "TuningRecord",
]
