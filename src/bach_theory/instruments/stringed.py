"""
StringedInstrument - a tuned instrument with a fret count, and fretboard rendering.

Rendering walks the strings from the lowest (highest-numbered) string up to
string 1, placing chord or scale tones inside a fret window.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from itertools import chain

from bach_theory.constants import MAX_OCTAVE, MIN_OCTAVE, ErrorMessages
from bach_theory.core.chord import Chord
from bach_theory.core.pitch import Pitch
from bach_theory.core.scale import Scale
from bach_theory.errors import MusicRangeError
from bach_theory.instruments.definition import StringedInstrumentDefinition
from bach_theory.instruments.fingering import Fingering
from bach_theory.instruments.tuning import Tuning

logger = logging.getLogger(__name__)

DEFAULT_FRET_SPAN = 4


@dataclass(frozen=True)
class StringedInstrument:
    """An instrument definition with a chosen tuning and fret count."""

    definition: StringedInstrumentDefinition
    tuning: Tuning
    fret_count: int

    def __post_init__(self) -> None:
        if self.fret_count < 1:
            raise MusicRangeError(f"Fret count must be positive, got {self.fret_count}.")
        if self.tuning.string_count != self.definition.string_count:
            raise MusicRangeError(
                ErrorMessages.TUNING_STRING_COUNT.format(
                    key=self.tuning.key,
                    count=self.tuning.string_count,
                    strings=self.definition.string_count,
                )
            )

    @classmethod
    def create(
        cls,
        definition: StringedInstrumentDefinition,
        fret_count: int,
        tuning: Tuning | str | None = None,
    ) -> StringedInstrument:
        """
        Create an instrument.

        Args:
            definition: Instrument definition
            fret_count: Number of frets
            tuning: A Tuning, a tuning key, or None for standard tuning
        """
        if tuning is None:
            tuning = definition.standard
        elif isinstance(tuning, str):
            tuning = definition.tuning(tuning)
        return cls(definition, tuning, fret_count)

    @property
    def string_count(self) -> int:
        return self.definition.string_count

    def get_pitch(self, string: int, fret: int) -> Pitch:
        """The pitch sounded by a string at a fret."""
        self._check_fret(fret)
        return self.tuning[string].add(fret)

    def fingering(self, string: int, fret: int) -> Fingering:
        return Fingering(string, fret, self.get_pitch(string, fret))

    def render_chord(
        self, chord: Chord, start_fret: int, fret_span: int = DEFAULT_FRET_SPAN
    ) -> Iterator[Fingering]:
        """
        One fingering per string for a chord, lowest string first.

        Chord tones are taken in ascending order starting with the bass at
        or above the lowest string's window. Strings with no chord tone in
        their window are muted.
        """
        self._check_window(start_fret, fret_span)
        lowest = self.string_count
        start = self._absolute(lowest, start_fret)
        notes = self._chord_pitches(chord, start)
        current = next(notes, None)
        logger.debug(f"Rendering {chord.name} from fret {start_fret} (span {fret_span})")

        for string in range(lowest, 0, -1):
            low = self._absolute(string, start_fret)
            high = low + fret_span
            while current is not None and current.absolute_value < low:
                current = next(notes, None)
            if current is not None and current.absolute_value <= high:
                yield Fingering(string, current.absolute_value - low + start_fret, current)
                current = next(notes, None)
            else:
                yield Fingering.muted(string)

    def render_scale(
        self, scale: Scale, start_fret: int, fret_span: int = DEFAULT_FRET_SPAN
    ) -> Iterator[Fingering]:
        """
        Every scale tone reachable in a fret window, lowest string first.

        A string's window stops just below the next string's window so
        each tone is played once. Tones that fall between one string's
        window and the next are skipped.
        """
        self._check_window(start_fret, fret_span)
        lowest = self.string_count
        start = self.tuning[lowest].add(start_fret)
        notes = scale.render(start)
        current = next(notes, None)
        logger.debug(f"Rendering {scale.name} from fret {start_fret} (span {fret_span})")

        for string in range(lowest, 0, -1):
            low = self._absolute(string, start_fret)
            high = low + fret_span
            if string > 1:
                high = min(high, self._absolute(string - 1, start_fret) - 1)
            while current is not None and current.absolute_value < low:
                current = next(notes, None)
            while current is not None and current.absolute_value <= high:
                yield Fingering(string, current.absolute_value - low + start_fret, current)
                current = next(notes, None)

    def _absolute(self, string: int, fret: int) -> int:
        return self.tuning[string].absolute_value + fret

    def _chord_pitches(self, chord: Chord, start: int) -> Iterator[Pitch]:
        # Lowest placement of the chord whose bass is not below start
        for octave in range(MIN_OCTAVE, MAX_OCTAVE + 1):
            try:
                pitches = chord.render(octave)
            except MusicRangeError:
                # Root spelling does not exist in this octave (Cb0)
                continue
            first = next(pitches, None)
            if first is None:
                break
            if first.absolute_value >= start:
                return chain([first], pitches)
        return iter(())

    def _check_fret(self, fret: int) -> None:
        if not 0 <= fret <= self.fret_count:
            raise MusicRangeError(
                ErrorMessages.FRET_OUT_OF_RANGE.format(max=self.fret_count, value=fret)
            )

    def _check_window(self, start_fret: int, fret_span: int) -> None:
        if start_fret < 0 or fret_span < 2 or start_fret + fret_span > self.fret_count:
            raise MusicRangeError(
                ErrorMessages.FRET_WINDOW.format(
                    start=start_fret, span=fret_span, frets=self.fret_count
                )
            )

    def __str__(self) -> str:
        return f"{self.definition.name} ({self.tuning.name}, {self.fret_count} frets)"
