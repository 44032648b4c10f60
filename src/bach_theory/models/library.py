"""
Library models - the YAML catalog of scales, chords and instruments.

These are the on-disk records. The registry turns them into core types
(ScaleFormula, ChordFormula, StringedInstrumentDefinition).
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from bach_theory.core.sequences import try_parse_intervals, try_parse_pitches


def _check_intervals(v: str) -> str:
    if try_parse_intervals(v) is None:
        raise ValueError(f"Invalid interval list: {v}")
    return v


class ScaleRecord(BaseModel):
    """A named scale formula."""

    key: str | None = Field(None, description="Lookup key; defaults to the name without spaces")
    name: str = Field(..., min_length=1, description="Display name (e.g., 'Natural Minor')")
    formula: str = Field(..., description="Interval list (e.g., '1,2,m3,4,5,m6,m7')")
    categories: list[str] = Field(default_factory=list, description="Extra categories")
    aliases: list[str] = Field(default_factory=list, description="Alternative names")

    model_config = {"frozen": True}

    @field_validator("formula")
    @classmethod
    def validate_formula(cls, v: str) -> str:
        return _check_intervals(v)


class ChordRecord(BaseModel):
    """A named chord formula with its symbol."""

    key: str = Field(..., min_length=1, description="Lookup key (e.g., 'Minor7')")
    name: str = Field(..., min_length=1, description="Display name (e.g., 'Minor Seventh')")
    symbol: str = Field("", description="Symbol appended to the root (e.g., 'm7')")
    formula: str = Field(..., description="Interval list (e.g., '1,m3,5,m7')")

    model_config = {"frozen": True}

    @field_validator("formula")
    @classmethod
    def validate_formula(cls, v: str) -> str:
        return _check_intervals(v)


class TuningRecord(BaseModel):
    """An instrument tuning, highest string first."""

    key: str = Field(..., min_length=1, description="Lookup key (e.g., 'standard')")
    name: str = Field(..., min_length=1, description="Display name (e.g., 'Drop D')")
    pitches: str = Field(..., description="Open string pitches, string 1 first (e.g., 'E4,B3')")

    model_config = {"frozen": True}

    @field_validator("pitches")
    @classmethod
    def validate_pitches(cls, v: str) -> str:
        if try_parse_pitches(v) is None:
            raise ValueError(f"Invalid pitch list: {v}")
        return v


class InstrumentRecord(BaseModel):
    """A stringed instrument and its tunings."""

    key: str = Field(..., min_length=1, description="Lookup key (e.g., 'guitar')")
    name: str = Field(..., min_length=1, description="Display name")
    string_count: int = Field(..., ge=1, le=12, description="Number of strings")
    tunings: list[TuningRecord] = Field(..., min_length=1, description="Available tunings")

    model_config = {"frozen": True}


class ScaleLibrary(BaseModel):
    """Contents of scales.yaml."""

    scales: list[ScaleRecord] = Field(default_factory=list)


class ChordLibrary(BaseModel):
    """Contents of chords.yaml."""

    chords: list[ChordRecord] = Field(default_factory=list)


class InstrumentLibrary(BaseModel):
    """Contents of instruments.yaml."""

    instruments: list[InstrumentRecord] = Field(default_factory=list)
