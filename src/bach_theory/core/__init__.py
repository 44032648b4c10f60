"""
Core music theory primitives.

The closed algebra everything else composes on:
- NoteName: The 7 letters C..B
- Accidental: Double flat to double sharp
- Interval: Quantity + quality, validated against the semitone table
- PitchClass: Spelled position in the octave, letter-steered arithmetic
- Pitch: Pitch class + octave, C0..G9
- Formula: Named interval sets and lazy generation
- ScaleFormula / Scale / ModeFormula / Mode
- ChordFormula / Chord
"""

from bach_theory.core.accidental import Accidental
from bach_theory.core.chord import Chord, ChordFormula
from bach_theory.core.formula import Formula
from bach_theory.core.interval import Interval, IntervalQuality, IntervalQuantity
from bach_theory.core.note_name import NoteName
from bach_theory.core.pitch import Pitch
from bach_theory.core.pitch_class import PitchClass
from bach_theory.core.scale import Mode, ModeFormula, Scale, ScaleFormula, ScaleFormulaBuilder
from bach_theory.core.sequences import (
    format_list,
    intervals_from_root,
    parse_intervals,
    parse_pitch_classes,
    parse_pitches,
    try_parse_intervals,
    try_parse_pitch_classes,
    try_parse_pitches,
)

__all__ = [
    # Letters and accidentals
    "NoteName",
    "Accidental",
    # Intervals
    "Interval",
    "IntervalQuality",
    "IntervalQuantity",
    # Pitch
    "PitchClass",
    "Pitch",
    # Formulas
    "Formula",
    "ScaleFormula",
    "ScaleFormulaBuilder",
    "Scale",
    "ModeFormula",
    "Mode",
    "ChordFormula",
    "Chord",
    # Lists
    "format_list",
    "intervals_from_root",
    "parse_intervals",
    "parse_pitch_classes",
    "parse_pitches",
    "try_parse_intervals",
    "try_parse_pitch_classes",
    "try_parse_pitches",
]
