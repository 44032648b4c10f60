"""
Pitch - a pitch class in a specific octave.

The absolute value counts semitones from C0, so the spelled letter and
accidental decide which octave a pitch belongs to: B#3 and C4 share an
absolute value (48) but not an octave.
"""

from __future__ import annotations

from functools import total_ordering
from typing import ClassVar

from ..constants import (
    A4_FREQUENCY,
    MAX_MIDI,
    MAX_OCTAVE,
    MIDI_OFFSET,
    MIN_MIDI,
    MIN_OCTAVE,
    SEMITONES_PER_OCTAVE,
    AccidentalMode,
    ErrorMessages,
)
from ..errors import MusicFormatError, MusicRangeError
from .accidental import Accidental
from .interval import Interval
from .note_name import NoteName
from .pitch_class import PitchClass

MIN_ABSOLUTE = 0  # C0
MAX_ABSOLUTE = 115  # G9, MIDI 127
_A4_ABSOLUTE = 57

_ACCIDENTAL_CHARS = frozenset("bB#♭♯♮")


def _offset_in_octave(pitch_class: PitchClass) -> int:
    """Semitones from C to the spelled pitch class, before octave wrapping."""
    return NoteName.C.semitones_to(pitch_class.note_name) + pitch_class.accidental.value


@total_ordering
class Pitch:
    """
    A pitch class at an octave, between C0 and G9 inclusive.

    Pitches compare by absolute value, so B#3 == C4.
    """

    __slots__ = ("_pitch_class", "_octave", "_absolute")
    _pitch_class: PitchClass
    _octave: int
    _absolute: int

    MIN_VALUE: ClassVar[Pitch]
    MAX_VALUE: ClassVar[Pitch]

    def __init__(self, pitch_class: PitchClass, octave: int) -> None:
        if not MIN_OCTAVE <= octave <= MAX_OCTAVE:
            raise MusicRangeError(
                ErrorMessages.OCTAVE_OUT_OF_RANGE.format(
                    min=MIN_OCTAVE, max=MAX_OCTAVE, value=octave
                )
            )
        absolute = octave * SEMITONES_PER_OCTAVE + _offset_in_octave(pitch_class)
        if not MIN_ABSOLUTE <= absolute <= MAX_ABSOLUTE:
            raise MusicRangeError(
                ErrorMessages.PITCH_OUT_OF_RANGE.format(
                    min="C0", max="G9", value=absolute
                )
            )
        object.__setattr__(self, "_pitch_class", pitch_class)
        object.__setattr__(self, "_octave", octave)
        object.__setattr__(self, "_absolute", absolute)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("Pitch is immutable")

    @classmethod
    def create(cls, pitch_class: PitchClass, octave: int) -> Pitch:
        """Create a pitch. Raises MusicRangeError outside octaves 0-9 or C0..G9."""
        return cls(pitch_class, octave)

    @classmethod
    def from_note(
        cls, note_name: NoteName, accidental: Accidental, octave: int
    ) -> Pitch:
        return cls(PitchClass.create(note_name, accidental), octave)

    @classmethod
    def from_absolute(
        cls, absolute: int, mode: AccidentalMode = AccidentalMode.FAVOR_SHARPS
    ) -> Pitch:
        """Create a pitch from its absolute value, spelled by the accidental mode."""
        if not MIN_ABSOLUTE <= absolute <= MAX_ABSOLUTE:
            raise MusicRangeError(
                ErrorMessages.PITCH_OUT_OF_RANGE.format(min="C0", max="G9", value=absolute)
            )
        # Mode spellings never cross the octave boundary (C and B are natural)
        octave, index = divmod(absolute, SEMITONES_PER_OCTAVE)
        return cls(PitchClass.from_index(index, mode), octave)

    @classmethod
    def from_midi(cls, midi: int, mode: AccidentalMode = AccidentalMode.FAVOR_SHARPS) -> Pitch:
        """
        Create a pitch from a MIDI note number.

        MIDI 12 is C0. Numbers 0-11 are valid MIDI but lie below the
        supported range and raise MusicRangeError like any other pitch
        out of range.
        """
        if not MIN_MIDI <= midi <= MAX_MIDI:
            raise MusicRangeError(
                ErrorMessages.MIDI_OUT_OF_RANGE.format(min=MIN_MIDI, max=MAX_MIDI, value=midi)
            )
        return cls.from_absolute(midi - MIDI_OFFSET, mode)

    @classmethod
    def floor(cls, pitch_class: PitchClass, absolute: int) -> Pitch:
        """
        The highest pitch spelled as pitch_class at or below an absolute value.

        Falls back to the lowest such pitch when none fits below (Cb near C0).
        """
        offset = _offset_in_octave(pitch_class)
        octave = (absolute - offset) // SEMITONES_PER_OCTAVE
        if octave * SEMITONES_PER_OCTAVE + offset < MIN_ABSOLUTE:
            octave += 1
        return cls(pitch_class, max(octave, MIN_OCTAVE))

    @classmethod
    def _from_spelling(cls, pitch_class: PitchClass, absolute: int) -> Pitch:
        # Octave follows the spelled letter so the absolute value is kept
        octave = (absolute - _offset_in_octave(pitch_class)) // SEMITONES_PER_OCTAVE
        return cls(pitch_class, octave)

    @property
    def pitch_class(self) -> PitchClass:
        return self._pitch_class

    @property
    def octave(self) -> int:
        return self._octave

    @property
    def absolute_value(self) -> int:
        """Semitones above C0."""
        return self._absolute

    @property
    def midi(self) -> int:
        return self._absolute + MIDI_OFFSET

    @property
    def frequency(self) -> float:
        """Equal-tempered frequency in Hz with A4 = 440."""
        return A4_FREQUENCY * 2 ** ((self._absolute - _A4_ABSOLUTE) / SEMITONES_PER_OCTAVE)

    def add(
        self,
        value: int | Interval,
        mode: AccidentalMode = AccidentalMode.FAVOR_SHARPS,
    ) -> Pitch:
        """
        Add semitones or an interval.

        Interval addition is letter-steered like PitchClass.add; the octave
        is re-derived from the result's spelling. Raises MusicRangeError
        past G9.
        """
        if isinstance(value, Interval):
            absolute = self._absolute + value.semitones
            return self._from_spelling(self._pitch_class.add(value, mode), absolute)
        return self.from_absolute(self._absolute + value, mode)

    def subtract(
        self,
        value: int | Interval,
        mode: AccidentalMode = AccidentalMode.FAVOR_SHARPS,
    ) -> Pitch:
        """Subtract semitones or an interval. Raises MusicRangeError below C0."""
        if isinstance(value, Interval):
            absolute = self._absolute - value.semitones
            return self._from_spelling(self._pitch_class.subtract(value, mode), absolute)
        return self.from_absolute(self._absolute - value, mode)

    def with_octave(self, octave: int) -> Pitch:
        """The same spelling in another octave."""
        return Pitch(self._pitch_class, octave)

    def __add__(self, other: int | Interval) -> Pitch:
        if isinstance(other, (int, Interval)):
            return self.add(other)
        return NotImplemented

    def __sub__(self, other: int | Interval | Pitch) -> Pitch | int:
        if isinstance(other, Pitch):
            return self._absolute - other._absolute
        if isinstance(other, (int, Interval)):
            return self.subtract(other)
        return NotImplemented

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pitch):
            return NotImplemented
        return self._absolute == other._absolute

    def __lt__(self, other: Pitch) -> bool:
        if not isinstance(other, Pitch):
            return NotImplemented
        return self._absolute < other._absolute

    def __hash__(self) -> int:
        return hash(self._absolute)

    def __str__(self) -> str:
        return f"{self._pitch_class}{self._octave}"

    def __repr__(self) -> str:
        return f"Pitch.parse({str(self)!r})"

    @classmethod
    def try_parse(
        cls,
        value: str | None,
        default_octave: int | None = None,
        mode: AccidentalMode = AccidentalMode.FAVOR_SHARPS,
    ) -> Pitch | None:
        """
        Parse 'C#4', 'Bb2', 'e5' or a MIDI number like '60'. Returns None on failure.

        The octave digit is required unless default_octave is given. The
        accidental mode spells MIDI numbers.
        """
        if value is None:
            return None
        value = value.strip()
        if not value:
            return None

        try:
            if value[0].isdigit():
                if not (value.isascii() and value.isdigit()):
                    return None
                return cls.from_midi(int(value), mode)

            note_name = NoteName.try_parse(value)
            if note_name is None:
                return None
            end = 1
            while end < len(value) and value[end] in _ACCIDENTAL_CHARS:
                end += 1
            accidental = Accidental.try_parse(value[1:end])
            if accidental is None:
                return None

            rest = value[end:]
            if not rest:
                if default_octave is None:
                    return None
                octave = default_octave
            elif len(rest) == 1 and rest.isascii() and rest.isdigit():
                octave = int(rest)
            else:
                return None
            return cls(PitchClass.create(note_name, accidental), octave)
        except MusicRangeError:
            return None

    @classmethod
    def parse(
        cls,
        value: str,
        default_octave: int | None = None,
        mode: AccidentalMode = AccidentalMode.FAVOR_SHARPS,
    ) -> Pitch:
        """Parse a pitch. Raises MusicFormatError on failure."""
        result = cls.try_parse(value, default_octave, mode)
        if result is None:
            raise MusicFormatError(ErrorMessages.INVALID_PITCH.format(value=value))
        return result


# Initialize class constants after class is defined
Pitch.MIN_VALUE = Pitch(PitchClass.C, MIN_OCTAVE)
Pitch.MAX_VALUE = Pitch(PitchClass.G, MAX_OCTAVE)
