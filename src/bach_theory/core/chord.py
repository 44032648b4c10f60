"""
Chord primitives - ChordFormula and Chord.

A chord formula is an interval set from the root plus a display symbol
("m7", "dim", "6/9"). A chord is a formula on a spelled root, optionally
inverted so that another chord tone sits in the bass.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from itertools import islice
from typing import ClassVar

from ..constants import AccidentalMode, ErrorMessages
from ..errors import MusicRangeError
from .formula import Formula
from .pitch import Pitch
from .pitch_class import PitchClass
from .sequences import format_list


@dataclass(frozen=True)
class ChordFormula(Formula):
    """
    A chord formula with its symbol.

    The symbol is appended to the root in chord names: C + "m7" = "Cm7".
    Major triads have an empty symbol.
    """

    symbol: str = ""

    # Common chord formulas (defined after class)
    MAJOR: ClassVar[ChordFormula]
    MAJOR_7: ClassVar[ChordFormula]
    MAJOR_9: ClassVar[ChordFormula]
    MAJOR_11: ClassVar[ChordFormula]
    MAJOR_13: ClassVar[ChordFormula]
    MINOR: ClassVar[ChordFormula]
    MINOR_7: ClassVar[ChordFormula]
    MINOR_9: ClassVar[ChordFormula]
    MINOR_11: ClassVar[ChordFormula]
    MINOR_13: ClassVar[ChordFormula]
    DOMINANT_7: ClassVar[ChordFormula]
    DOMINANT_9: ClassVar[ChordFormula]
    DOMINANT_11: ClassVar[ChordFormula]
    DOMINANT_13: ClassVar[ChordFormula]
    SIX_NINE: ClassVar[ChordFormula]
    ADD_NINE: ClassVar[ChordFormula]
    DIMINISHED: ClassVar[ChordFormula]
    DIMINISHED_7: ClassVar[ChordFormula]
    HALF_DIMINISHED: ClassVar[ChordFormula]
    AUGMENTED: ClassVar[ChordFormula]

    def __repr__(self) -> str:
        return f"ChordFormula({self.key!r}, {self.symbol!r}, {format_list(self.intervals)!r})"


@dataclass(frozen=True)
class Chord:
    """
    A chord: root, formula and inversion.

    Inversion 0 is root position; inversion n puts the n-th chord tone
    in the bass. Two chords are equal when root, formula and inversion match.
    """

    root: PitchClass
    formula: ChordFormula
    inversion: int = 0
    mode: AccidentalMode = field(default=AccidentalMode.FAVOR_SHARPS, compare=False)

    def __post_init__(self) -> None:
        if not 0 <= self.inversion < len(self.formula):
            raise MusicRangeError(
                ErrorMessages.INVERSION_OUT_OF_RANGE.format(
                    max=len(self.formula) - 1, value=self.inversion
                )
            )

    @property
    def pitch_classes(self) -> tuple[PitchClass, ...]:
        """Chord tones, starting from the bass."""
        tones = self.formula.generate_pitch_classes(self.root, self.inversion, self.mode)
        return tuple(islice(tones, len(self.formula)))

    @property
    def bass(self) -> PitchClass:
        return self.pitch_classes[0]

    @property
    def name(self) -> str:
        """'C', 'Cm7', 'C/E' for a first inversion C major."""
        name = f"{self.root}{self.formula.symbol}"
        if self.inversion:
            name += f"/{self.bass}"
        return name

    def invert(self, inversion: int = 1) -> Chord:
        """The same chord in another inversion."""
        return Chord(self.root, self.formula, inversion, self.mode)

    def render(self, octave: int) -> Iterator[Pitch]:
        """
        Lazily yield the chord's pitches upward, bass first.

        The root is placed in the given octave; an inverted chord starts
        from its bass tone above that root. Ends at G9.
        """
        root = Pitch.create(self.root, octave)
        return self.formula.generate_pitches(root, self.inversion, self.mode)

    def __iter__(self) -> Iterator[PitchClass]:
        return iter(self.pitch_classes)

    def __len__(self) -> int:
        return len(self.formula)

    def __str__(self) -> str:
        return self.name


def _chord(key: str, name: str, symbol: str, intervals: str) -> ChordFormula:
    return ChordFormula.from_text(key, name, intervals, symbol=symbol)


# Initialize class constants after class is defined
ChordFormula.MAJOR = _chord("Major", "Major", "", "1,3,5")
ChordFormula.MAJOR_7 = _chord("Major7", "Major Seventh", "M7", "1,3,5,7")
ChordFormula.MAJOR_9 = _chord("Major9", "Major Ninth", "M9", "1,3,5,7,9")
ChordFormula.MAJOR_11 = _chord("Major11", "Major Eleventh", "M11", "1,3,5,7,9,11")
ChordFormula.MAJOR_13 = _chord("Major13", "Major Thirteenth", "M13", "1,3,5,7,9,11,13")
ChordFormula.MINOR = _chord("Minor", "Minor", "m", "1,m3,5")
ChordFormula.MINOR_7 = _chord("Minor7", "Minor Seventh", "m7", "1,m3,5,m7")
ChordFormula.MINOR_9 = _chord("Minor9", "Minor Ninth", "m9", "1,m3,5,m7,9")
ChordFormula.MINOR_11 = _chord("Minor11", "Minor Eleventh", "m11", "1,m3,5,m7,9,11")
ChordFormula.MINOR_13 = _chord("Minor13", "Minor Thirteenth", "m13", "1,m3,5,m7,9,11,13")
ChordFormula.DOMINANT_7 = _chord("Dominant7", "Dominant Seventh", "7", "1,3,5,m7")
ChordFormula.DOMINANT_9 = _chord("Dominant9", "Dominant Ninth", "9", "1,3,5,m7,9")
ChordFormula.DOMINANT_11 = _chord("Dominant11", "Dominant Eleventh", "11", "1,3,5,m7,9,11")
ChordFormula.DOMINANT_13 = _chord("Dominant13", "Dominant Thirteenth", "13", "1,3,5,m7,9,11,13")
ChordFormula.SIX_NINE = _chord("SixNine", "Six Nine", "6/9", "1,3,5,6,9")
ChordFormula.ADD_NINE = _chord("AddNine", "Add Nine", "add9", "1,3,5,9")
ChordFormula.DIMINISHED = _chord("Diminished", "Diminished", "dim", "1,m3,d5")
ChordFormula.DIMINISHED_7 = _chord("Diminished7", "Diminished Seventh", "dim7", "1,m3,d5,d7")
ChordFormula.HALF_DIMINISHED = _chord("HalfDiminished", "Half Diminished", "7dim5", "1,m3,d5,m7")
ChordFormula.AUGMENTED = _chord("Augmented", "Augmented", "aug", "1,3,A5")
