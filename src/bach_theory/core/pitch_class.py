"""
PitchClass - a spelled position within the octave.

Every pitch class has an enharmonic index (0-11, C = 0) and one of the 35
valid letter + accidental spellings for that index. Equality, ordering and
hashing use the index only: C# == Db, but str() shows the spelling.

Interval arithmetic is letter-steered: Eb + M3 is spelled G, never F## or
Abb. Plain semitone arithmetic has no letter to aim for, so the spelling is
chosen by an AccidentalMode.
"""

from __future__ import annotations

from functools import total_ordering
from typing import ClassVar

from ..constants import SEMITONES_PER_OCTAVE, AccidentalMode, ErrorMessages
from ..errors import InternalTableError, MusicFormatError, MusicRangeError
from .accidental import Accidental
from .interval import Interval, IntervalQuantity
from .note_name import NoteName

_EMPTY = -1

# The 35 spellings: (enharmonic index, letter, accidental)
_SPELLINGS: tuple[tuple[int, NoteName, Accidental], ...] = (
    (0, NoteName.D, Accidental.DOUBLE_FLAT),
    (0, NoteName.C, Accidental.NATURAL),
    (0, NoteName.B, Accidental.SHARP),
    (1, NoteName.D, Accidental.FLAT),
    (1, NoteName.C, Accidental.SHARP),
    (1, NoteName.B, Accidental.DOUBLE_SHARP),
    (2, NoteName.E, Accidental.DOUBLE_FLAT),
    (2, NoteName.D, Accidental.NATURAL),
    (2, NoteName.C, Accidental.DOUBLE_SHARP),
    (3, NoteName.F, Accidental.DOUBLE_FLAT),
    (3, NoteName.E, Accidental.FLAT),
    (3, NoteName.D, Accidental.SHARP),
    (4, NoteName.F, Accidental.FLAT),
    (4, NoteName.E, Accidental.NATURAL),
    (4, NoteName.D, Accidental.DOUBLE_SHARP),
    (5, NoteName.G, Accidental.DOUBLE_FLAT),
    (5, NoteName.F, Accidental.NATURAL),
    (5, NoteName.E, Accidental.SHARP),
    (6, NoteName.G, Accidental.FLAT),
    (6, NoteName.F, Accidental.SHARP),
    (6, NoteName.E, Accidental.DOUBLE_SHARP),
    (7, NoteName.A, Accidental.DOUBLE_FLAT),
    (7, NoteName.G, Accidental.NATURAL),
    (7, NoteName.F, Accidental.DOUBLE_SHARP),
    (8, NoteName.A, Accidental.FLAT),
    (8, NoteName.G, Accidental.SHARP),
    (9, NoteName.B, Accidental.DOUBLE_FLAT),
    (9, NoteName.A, Accidental.NATURAL),
    (9, NoteName.G, Accidental.DOUBLE_SHARP),
    (10, NoteName.C, Accidental.DOUBLE_FLAT),
    (10, NoteName.B, Accidental.FLAT),
    (10, NoteName.A, Accidental.SHARP),
    (11, NoteName.C, Accidental.FLAT),
    (11, NoteName.B, Accidental.NATURAL),
    (11, NoteName.A, Accidental.DOUBLE_SHARP),
)

# Row in _SPELLINGS of each natural letter, indexed by NoteName
_NATURAL_ROWS: tuple[int, ...] = (1, 7, 13, 16, 22, 27, 33)

# Row in _SPELLINGS per enharmonic index (rows) and accidental (columns).
# Columns: bb, b, natural, #, ##
_ENHARMONICS: tuple[tuple[int, ...], ...] = (
    (0, -1, 1, 2, -1),
    (-1, 3, -1, 4, 5),
    (6, -1, 7, -1, 8),
    (9, 10, -1, 11, -1),
    (-1, 12, 13, -1, 14),
    (15, -1, 16, 17, -1),
    (-1, 18, -1, 19, 20),
    (21, -1, 22, -1, 23),
    (-1, 24, -1, 25, -1),
    (26, -1, 27, -1, 28),
    (29, 30, -1, 31, -1),
    (-1, 32, 33, -1, 34),
)

# Column scan order for semitone arithmetic, per accidental mode
_SCAN_ORDER: dict[AccidentalMode, tuple[int, ...]] = {
    AccidentalMode.FAVOR_SHARPS: (2, 3, 4),
    AccidentalMode.FAVOR_FLATS: (2, 1, 0),
}


def _column(accidental: Accidental) -> int:
    return accidental.value + 2


@total_ordering
class PitchClass:
    """
    A spelled pitch class (C, C#, Db, ..., B).

    Construct with PitchClass.create(note_name, accidental) or parse().
    Immutable.
    """

    __slots__ = ("_row",)
    _row: int

    # Named pitch classes (class constants)
    C: ClassVar[PitchClass]
    C_SHARP: ClassVar[PitchClass]
    D_FLAT: ClassVar[PitchClass]
    D: ClassVar[PitchClass]
    D_SHARP: ClassVar[PitchClass]
    E_FLAT: ClassVar[PitchClass]
    E: ClassVar[PitchClass]
    F: ClassVar[PitchClass]
    F_SHARP: ClassVar[PitchClass]
    G_FLAT: ClassVar[PitchClass]
    G: ClassVar[PitchClass]
    G_SHARP: ClassVar[PitchClass]
    A_FLAT: ClassVar[PitchClass]
    A: ClassVar[PitchClass]
    A_SHARP: ClassVar[PitchClass]
    B_FLAT: ClassVar[PitchClass]
    B: ClassVar[PitchClass]

    def __init__(self, row: int) -> None:
        # Use create() or parse(); rows are an implementation detail
        if not 0 <= row < len(_SPELLINGS):
            raise InternalTableError(f"Pitch class row {row} does not exist.")
        object.__setattr__(self, "_row", row)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("PitchClass is immutable")

    @classmethod
    def create(
        cls, note_name: NoteName, accidental: Accidental = Accidental.NATURAL
    ) -> PitchClass:
        """Create the pitch class spelled with a letter and accidental."""
        natural = _SPELLINGS[_NATURAL_ROWS[note_name]][0]
        index = (natural + accidental.value) % SEMITONES_PER_OCTAVE
        row = _ENHARMONICS[index][_column(accidental)]
        if row == _EMPTY:
            raise InternalTableError(
                f"No spelling for {note_name}{accidental} at enharmonic index {index}."
            )
        return cls(row)

    @classmethod
    def from_index(
        cls, index: int, mode: AccidentalMode = AccidentalMode.FAVOR_SHARPS
    ) -> PitchClass:
        """Pick a spelling for an enharmonic index using the accidental mode."""
        index %= SEMITONES_PER_OCTAVE
        for column in _SCAN_ORDER[mode]:
            row = _ENHARMONICS[index][column]
            if row != _EMPTY:
                return cls(row)
        raise InternalTableError(f"No {mode.value} spelling at enharmonic index {index}.")

    @classmethod
    def all_spellings(cls) -> tuple[PitchClass, ...]:
        """Every valid spelling, ordered by enharmonic index."""
        return tuple(cls(row) for row in range(len(_SPELLINGS)))

    @property
    def enharmonic_index(self) -> int:
        return _SPELLINGS[self._row][0]

    @property
    def note_name(self) -> NoteName:
        return _SPELLINGS[self._row][1]

    @property
    def accidental(self) -> Accidental:
        return _SPELLINGS[self._row][2]

    def add(
        self,
        value: int | Interval,
        mode: AccidentalMode = AccidentalMode.FAVOR_SHARPS,
    ) -> PitchClass:
        """
        Add semitones or an interval.

        With an interval the result is spelled with the letter the interval
        implies when such a spelling exists; otherwise (and for a bare
        semitone count) the accidental mode picks the spelling.
        """
        if isinstance(value, Interval):
            expected = self.note_name.add(value.quantity)
            naive = self.from_index(self.enharmonic_index + value.semitones, mode)
            return self._steer(naive, expected)
        return self.from_index(self.enharmonic_index + value, mode)

    def subtract(
        self,
        value: int | Interval,
        mode: AccidentalMode = AccidentalMode.FAVOR_SHARPS,
    ) -> PitchClass:
        """Subtract semitones or an interval. Mirrors add()."""
        if isinstance(value, Interval):
            expected = self.note_name.subtract(value.quantity)
            naive = self.from_index(self.enharmonic_index - value.semitones, mode)
            return self._steer(naive, expected)
        return self.from_index(self.enharmonic_index - value, mode)

    @staticmethod
    def _steer(naive: PitchClass, expected: NoteName) -> PitchClass:
        if naive.note_name == expected:
            return naive
        respelled = naive.get_enharmonic(expected)
        return respelled if respelled is not None else naive

    def interval_to(self, other: PitchClass) -> Interval:
        """
        The interval from this pitch class up to another.

        C -> E is M3, E -> C is m6, C -> B# is A7. Raises MusicRangeError
        when the spellings imply no valid interval (C -> Cb).
        """
        quantity = self.note_name.steps_to(other.note_name)
        semitones = (other.enharmonic_index - self.enharmonic_index) % SEMITONES_PER_OCTAVE
        try:
            return Interval.from_semitones(quantity, semitones)
        except MusicRangeError:
            # An augmented seventh spans a full octave of semitones
            if quantity != IntervalQuantity.SEVENTH:
                raise
            return Interval.from_semitones(quantity, semitones + SEMITONES_PER_OCTAVE)

    def get_enharmonic(self, note_name: NoteName) -> PitchClass | None:
        """The spelling of this pitch class that uses a letter, if one exists."""
        for row in _ENHARMONICS[self.enharmonic_index]:
            if row != _EMPTY and _SPELLINGS[row][1] == note_name:
                return PitchClass(row)
        return None

    def enharmonics(self) -> tuple[PitchClass, ...]:
        """Every spelling of this pitch class, double flat first."""
        return tuple(
            PitchClass(row) for row in _ENHARMONICS[self.enharmonic_index] if row != _EMPTY
        )

    def same_spelling(self, other: PitchClass) -> bool:
        """Whether both letter and accidental match (== ignores spelling)."""
        return self._row == other._row

    def __add__(self, other: int | Interval) -> PitchClass:
        if isinstance(other, (int, Interval)):
            return self.add(other)
        return NotImplemented

    def __sub__(self, other: int | Interval | PitchClass) -> PitchClass | Interval:
        if isinstance(other, PitchClass):
            return self.interval_to(other)
        if isinstance(other, (int, Interval)):
            return self.subtract(other)
        return NotImplemented

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PitchClass):
            return NotImplemented
        return self.enharmonic_index == other.enharmonic_index

    def __lt__(self, other: PitchClass) -> bool:
        if not isinstance(other, PitchClass):
            return NotImplemented
        return self.enharmonic_index < other.enharmonic_index

    def __hash__(self) -> int:
        return hash(self.enharmonic_index)

    def __str__(self) -> str:
        return f"{self.note_name}{self.accidental}"

    def __repr__(self) -> str:
        return f"PitchClass.parse({str(self)!r})"

    @classmethod
    def try_parse(cls, value: str | None) -> PitchClass | None:
        """Parse a letter followed by an accidental, e.g. 'C#' or 'eb'."""
        if value is None:
            return None
        value = value.strip()
        note_name = NoteName.try_parse(value)
        if note_name is None:
            return None
        accidental = Accidental.try_parse(value[1:])
        if accidental is None:
            return None
        return cls.create(note_name, accidental)

    @classmethod
    def parse(cls, value: str) -> PitchClass:
        """Parse a pitch class. Raises MusicFormatError on failure."""
        result = cls.try_parse(value)
        if result is None:
            raise MusicFormatError(ErrorMessages.INVALID_PITCH_CLASS.format(value=value))
        return result


def _named(note_name: NoteName, accidental: Accidental = Accidental.NATURAL) -> PitchClass:
    return PitchClass.create(note_name, accidental)


# Initialize class constants after class is defined
PitchClass.C = _named(NoteName.C)
PitchClass.C_SHARP = _named(NoteName.C, Accidental.SHARP)
PitchClass.D_FLAT = _named(NoteName.D, Accidental.FLAT)
PitchClass.D = _named(NoteName.D)
PitchClass.D_SHARP = _named(NoteName.D, Accidental.SHARP)
PitchClass.E_FLAT = _named(NoteName.E, Accidental.FLAT)
PitchClass.E = _named(NoteName.E)
PitchClass.F = _named(NoteName.F)
PitchClass.F_SHARP = _named(NoteName.F, Accidental.SHARP)
PitchClass.G_FLAT = _named(NoteName.G, Accidental.FLAT)
PitchClass.G = _named(NoteName.G)
PitchClass.G_SHARP = _named(NoteName.G, Accidental.SHARP)
PitchClass.A_FLAT = _named(NoteName.A, Accidental.FLAT)
PitchClass.A = _named(NoteName.A)
PitchClass.A_SHARP = _named(NoteName.A, Accidental.SHARP)
PitchClass.B_FLAT = _named(NoteName.B, Accidental.FLAT)
PitchClass.B = _named(NoteName.B)
