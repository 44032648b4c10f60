"""
Constants and enums for the music theory model.

No magic strings - use enums and module constants for constrained values.
"""

from enum import Enum

# Pitch range: C0 is the lowest supported pitch, G9 (MIDI 127) the highest.
MIN_OCTAVE = 0
MAX_OCTAVE = 9
SEMITONES_PER_OCTAVE = 12
DIATONIC_STEPS = 7

A4_FREQUENCY = 440.0

# MIDI numbers start at C-1, absolute values start at C0
MIDI_OFFSET = 12
MIN_MIDI = 0
MAX_MIDI = 127

DEFAULT_OCTAVE = 4


class AccidentalMode(str, Enum):
    """
    Spelling preference used when no letter is implied by the operation.

    Adding a bare number of semitones to a pitch class cannot tell whether
    the result should be spelled C# or Db; the mode decides.
    """

    FAVOR_SHARPS = "favor_sharps"
    FAVOR_FLATS = "favor_flats"


class ErrorMessages:
    """Standardized error messages."""

    INVALID_NOTE_NAME = "'{value}' is not a valid note name."
    INVALID_ACCIDENTAL = "'{value}' is not a valid accidental."
    INVALID_INTERVAL = "'{value}' is not a valid interval."
    INVALID_PITCH_CLASS = "'{value}' is not a valid pitch class."
    INVALID_PITCH = "'{value}' is not a valid pitch."
    INVALID_LIST = "'{value}' contains invalid {kind}."
    ACCIDENTAL_OUT_OF_RANGE = "Accidental must be between -2 and 2, got {value}."
    INTERVAL_COMBINATION = "{quantity} {quality} is not a valid interval."
    INTERVAL_SEMITONES = "A {quantity} spanning {semitones} semitones is not a valid interval."
    OCTAVE_OUT_OF_RANGE = "Octave must be between {min} and {max}, got {value}."
    PITCH_OUT_OF_RANGE = "Pitch must be between {min} and {max}, got absolute value {value}."
    MIDI_OUT_OF_RANGE = "MIDI number must be between {min} and {max}, got {value}."
    FORMULA_EMPTY = "Formula '{name}' must contain at least one interval."
    SCALE_NAME_REQUIRED = "Must provide a scale name."
    SCALE_NOT_SORTED = "A scale's intervals must be sorted and without duplicates."
    SCALE_FORMULA_NOT_FOUND = "Scale formula '{key}' not found."
    CHORD_FORMULA_NOT_FOUND = "Chord formula '{key}' not found."
    INSTRUMENT_NOT_FOUND = "Instrument '{key}' not found."
    TUNING_NOT_FOUND = "Tuning '{key}' not found for instrument '{instrument}'."
    TUNING_STRING_COUNT = "Tuning '{key}' has {count} pitches, instrument has {strings} strings."
    INVERSION_OUT_OF_RANGE = "Inversion must be between 0 and {max}, got {value}."
    TONIC_OUT_OF_RANGE = "Mode tonic must be between 1 and 7, got {value}."
    STRING_OUT_OF_RANGE = "String must be between 1 and {max}, got {value}."
    FRET_OUT_OF_RANGE = "Fret must be between 0 and {max}, got {value}."
    FRET_WINDOW = "Fret window {start}+{span} does not fit a {frets}-fret instrument."
    LIBRARY_INVALID = "Library file '{path}' is invalid: {error}"
