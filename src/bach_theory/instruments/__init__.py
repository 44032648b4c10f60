"""
Stringed instruments - tunings, definitions, fingerings and fretboard rendering.
"""

from bach_theory.instruments.definition import (
    StringedInstrumentDefinition,
    StringedInstrumentDefinitionBuilder,
)
from bach_theory.instruments.fingering import Fingering
from bach_theory.instruments.stringed import StringedInstrument
from bach_theory.instruments.tuning import Tuning

__all__ = [
    "Fingering",
    "StringedInstrument",
    "StringedInstrumentDefinition",
    "StringedInstrumentDefinitionBuilder",
    "Tuning",
]
