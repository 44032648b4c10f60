"""
Interval primitives - IntervalQuantity, IntervalQuality and Interval.

An interval is a letter distance (quantity: unison, second, ...) plus a
chromatic adjustment (quality: diminished, minor, perfect, major, augmented).
Not every pair exists: there is no "perfect second" or "major fifth". The
semitone table below is the single source of truth for which pairs are valid.
"""

from __future__ import annotations

from enum import IntEnum
from functools import total_ordering
from typing import ClassVar

from ..constants import DIATONIC_STEPS, ErrorMessages
from ..errors import MusicFormatError, MusicRangeError

_INVALID = -1

# Semitone count per quantity (rows) and quality (columns).
# Columns: Diminished, Minor, Perfect, Major, Augmented
_SEMITONES: tuple[tuple[int, ...], ...] = (
    (-1, -1, 0, -1, 1),  # Unison
    (0, 1, -1, 2, 3),  # Second
    (2, 3, -1, 4, 5),  # Third
    (4, -1, 5, -1, 6),  # Fourth
    (6, -1, 7, -1, 8),  # Fifth
    (7, 8, -1, 9, 10),  # Sixth
    (9, 10, -1, 11, 12),  # Seventh
    (11, -1, 12, -1, 13),  # Octave
    (12, 13, -1, 14, 15),  # Ninth
    (14, 15, -1, 16, 17),  # Tenth
    (16, -1, 17, -1, 18),  # Eleventh
    (18, -1, 19, -1, 20),  # Twelfth
    (19, 20, -1, 21, 22),  # Thirteenth
    (21, 22, -1, 23, 24),  # Fourteenth
)

_QUALITY_SYMBOLS: tuple[str, ...] = ("d", "m", "P", "M", "A")
_QUALITY_SHORT_NAMES: tuple[str, ...] = ("dim", "min", "Perf", "Maj", "Aug")
_QUALITY_LONG_NAMES: tuple[str, ...] = ("diminished", "minor", "perfect", "major", "augmented")

_QUANTITY_NAMES: tuple[str, ...] = (
    "Unison",
    "Second",
    "Third",
    "Fourth",
    "Fifth",
    "Sixth",
    "Seventh",
    "Octave",
    "Ninth",
    "Tenth",
    "Eleventh",
    "Twelfth",
    "Thirteenth",
    "Fourteenth",
)

# Legacy symbol for the root of a formula
_ROOT_SYMBOL = "R"

DEFAULT_FORMAT = "sq"


class IntervalQuality(IntEnum):
    """Interval quality, ordered from narrowest to widest."""

    DIMINISHED = 0
    MINOR = 1
    PERFECT = 2
    MAJOR = 3
    AUGMENTED = 4

    @property
    def symbol(self) -> str:
        return _QUALITY_SYMBOLS[self.value]

    @property
    def short_name(self) -> str:
        return _QUALITY_SHORT_NAMES[self.value]

    @property
    def long_name(self) -> str:
        return _QUALITY_LONG_NAMES[self.value]

    @classmethod
    def try_parse(cls, value: str | None) -> IntervalQuality | None:
        """Parse a quality symbol (d, m, P, M, A). Case sensitive."""
        if not value or value not in _QUALITY_SYMBOLS:
            return None
        return cls(_QUALITY_SYMBOLS.index(value))

    @classmethod
    def parse(cls, value: str) -> IntervalQuality:
        result = cls.try_parse(value)
        if result is None:
            raise MusicFormatError(f"'{value}' is not a valid interval quality.")
        return result


class IntervalQuantity(IntEnum):
    """Interval quantity (letter distance), unison through fourteenth."""

    UNISON = 0
    SECOND = 1
    THIRD = 2
    FOURTH = 3
    FIFTH = 4
    SIXTH = 5
    SEVENTH = 6
    OCTAVE = 7
    NINTH = 8
    TENTH = 9
    ELEVENTH = 10
    TWELFTH = 11
    THIRTEENTH = 12
    FOURTEENTH = 13

    @property
    def display_name(self) -> str:
        return _QUANTITY_NAMES[self.value]

    @property
    def ordinal(self) -> int:
        """1-based number used in interval symbols (unison = 1)."""
        return self.value + 1

    @property
    def is_compound(self) -> bool:
        return self.value > IntervalQuantity.OCTAVE


def _lookup(quantity: int, quality: int) -> int:
    if not 0 <= quantity < len(_SEMITONES):
        return _INVALID
    if not 0 <= quality < len(_QUALITY_SYMBOLS):
        return _INVALID
    return _SEMITONES[quantity][quality]


def _default_quality(ordinal: int) -> IntervalQuality:
    # Unisons, fourths, fifths (and their compounds) are perfect by default
    simple = ((ordinal - 1) % DIATONIC_STEPS) + 1
    if simple in (1, 4, 5):
        return IntervalQuality.PERFECT
    return IntervalQuality.MAJOR


@total_ordering
class Interval:
    """
    A validated (quantity, quality) pair.

    The semitone count is derived from the table on construction and cannot
    be set independently. Intervals order by quantity, then quality.

    Immutable and hashable.
    """

    __slots__ = ("_quantity", "_quality", "_semitones")
    _quantity: IntervalQuantity
    _quality: IntervalQuality
    _semitones: int

    # Named intervals (class constants)
    UNISON: ClassVar[Interval]
    AUGMENTED_UNISON: ClassVar[Interval]
    DIMINISHED_SECOND: ClassVar[Interval]
    MINOR_SECOND: ClassVar[Interval]
    MAJOR_SECOND: ClassVar[Interval]
    AUGMENTED_SECOND: ClassVar[Interval]
    DIMINISHED_THIRD: ClassVar[Interval]
    MINOR_THIRD: ClassVar[Interval]
    MAJOR_THIRD: ClassVar[Interval]
    AUGMENTED_THIRD: ClassVar[Interval]
    DIMINISHED_FOURTH: ClassVar[Interval]
    PERFECT_FOURTH: ClassVar[Interval]
    AUGMENTED_FOURTH: ClassVar[Interval]
    DIMINISHED_FIFTH: ClassVar[Interval]
    PERFECT_FIFTH: ClassVar[Interval]
    AUGMENTED_FIFTH: ClassVar[Interval]
    DIMINISHED_SIXTH: ClassVar[Interval]
    MINOR_SIXTH: ClassVar[Interval]
    MAJOR_SIXTH: ClassVar[Interval]
    AUGMENTED_SIXTH: ClassVar[Interval]
    DIMINISHED_SEVENTH: ClassVar[Interval]
    MINOR_SEVENTH: ClassVar[Interval]
    MAJOR_SEVENTH: ClassVar[Interval]
    AUGMENTED_SEVENTH: ClassVar[Interval]
    DIMINISHED_OCTAVE: ClassVar[Interval]
    OCTAVE: ClassVar[Interval]

    # Short aliases
    P1: ClassVar[Interval]
    m2: ClassVar[Interval]
    M2: ClassVar[Interval]
    m3: ClassVar[Interval]
    M3: ClassVar[Interval]
    P4: ClassVar[Interval]
    A4: ClassVar[Interval]
    d5: ClassVar[Interval]
    P5: ClassVar[Interval]
    A5: ClassVar[Interval]
    m6: ClassVar[Interval]
    M6: ClassVar[Interval]
    m7: ClassVar[Interval]
    M7: ClassVar[Interval]
    P8: ClassVar[Interval]

    def __init__(self, quantity: IntervalQuantity | int, quality: IntervalQuality | int) -> None:
        """Create an interval, validating the combination against the table."""
        semitones = self.get_semitone_count(quantity, quality)
        object.__setattr__(self, "_quantity", IntervalQuantity(quantity))
        object.__setattr__(self, "_quality", IntervalQuality(quality))
        object.__setattr__(self, "_semitones", semitones)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("Interval is immutable")

    @classmethod
    def from_semitones(cls, quantity: IntervalQuantity | int, semitones: int) -> Interval:
        """
        Create an interval from its quantity and semitone count.

        The quality is the first one, from diminished upward, whose table
        entry matches.
        """
        for quality in IntervalQuality:
            if _lookup(int(quantity), quality) == semitones:
                return cls(quantity, quality)
        name = _QUANTITY_NAMES[quantity] if 0 <= quantity < len(_QUANTITY_NAMES) else quantity
        raise MusicRangeError(
            ErrorMessages.INTERVAL_SEMITONES.format(quantity=name, semitones=semitones)
        )

    @staticmethod
    def is_valid(quantity: int, quality: int) -> bool:
        """Whether (quantity, quality) names an existing interval."""
        return _lookup(quantity, quality) != _INVALID

    @staticmethod
    def get_semitone_count(quantity: int, quality: int) -> int:
        """Semitones spanned by (quantity, quality). Raises for invalid pairs."""
        semitones = _lookup(quantity, quality)
        if semitones == _INVALID:
            quantity_name = (
                _QUANTITY_NAMES[quantity] if 0 <= quantity < len(_QUANTITY_NAMES) else quantity
            )
            quality_name = (
                _QUALITY_LONG_NAMES[quality]
                if 0 <= quality < len(_QUALITY_LONG_NAMES)
                else quality
            )
            raise MusicRangeError(
                ErrorMessages.INTERVAL_COMBINATION.format(
                    quantity=quantity_name, quality=quality_name
                )
            )
        return semitones

    @property
    def quantity(self) -> IntervalQuantity:
        return self._quantity

    @property
    def quality(self) -> IntervalQuality:
        return self._quality

    @property
    def semitones(self) -> int:
        """Number of semitones in this interval."""
        return self._semitones

    @property
    def inversion(self) -> Interval:
        """
        The complementary interval within an octave.

        M3 -> m6, P5 -> P4, A4 -> d5, P1 -> P8. Compound intervals invert
        their simple form (M9 -> m7).
        """
        quantity = self._quantity.value
        if quantity > IntervalQuantity.OCTAVE:
            quantity -= DIATONIC_STEPS
        return Interval(
            IntervalQuantity.OCTAVE - quantity,
            IntervalQuality.AUGMENTED - self._quality,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return self._quantity == other._quantity and self._quality == other._quality

    def __lt__(self, other: Interval) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return (self._quantity, self._quality) < (other._quantity, other._quality)

    def __hash__(self) -> int:
        return hash((self._quantity.value, self._quality.value))

    def __repr__(self) -> str:
        return f"Interval.parse({format(self, 'Sq')!r})"

    def __str__(self) -> str:
        return format(self, DEFAULT_FORMAT)

    def __format__(self, format_spec: str) -> str:
        """
        Format with per-character codes.

        s - quality symbol, omitted for perfect and major
        S - quality symbol, always
        q - 1-based quantity number
        Q - quantity name

        Any other character is copied. An empty format string means "sq".
        """
        parts: list[str] = []
        for code in format_spec or DEFAULT_FORMAT:
            if code == "s":
                if self._quality not in (IntervalQuality.PERFECT, IntervalQuality.MAJOR):
                    parts.append(self._quality.symbol)
            elif code == "S":
                parts.append(self._quality.symbol)
            elif code == "q":
                parts.append(str(self._quantity.ordinal))
            elif code == "Q":
                parts.append(self._quantity.display_name)
            else:
                parts.append(code)
        return "".join(parts)

    @classmethod
    def try_parse(cls, value: str | None) -> Interval | None:
        """
        Parse an interval like 'M3', 'P5', 'd7' or '9'. Returns None on failure.

        A missing quality defaults to perfect for 1, 4, 5 (and 8, 11, 12) and
        to major otherwise. 'R' alone means unison.
        """
        if value is None:
            return None
        value = value.strip()
        if not value:
            return None
        if value == _ROOT_SYMBOL:
            return cls.UNISON

        quality: IntervalQuality | None = None
        if value[0].isalpha():
            quality = IntervalQuality.try_parse(value[0])
            if quality is None:
                return None
            value = value[1:]

        if not (value.isascii() and value.isdigit()):
            return None
        ordinal = int(value)
        if quality is None:
            quality = _default_quality(ordinal)

        quantity = ordinal - 1
        if not cls.is_valid(quantity, quality):
            return None
        return cls(quantity, quality)

    @classmethod
    def parse(cls, value: str) -> Interval:
        """Parse an interval. Raises MusicFormatError on failure."""
        result = cls.try_parse(value)
        if result is None:
            raise MusicFormatError(ErrorMessages.INVALID_INTERVAL.format(value=value))
        return result


# Initialize class constants after class is defined
Interval.UNISON = Interval(IntervalQuantity.UNISON, IntervalQuality.PERFECT)
Interval.AUGMENTED_UNISON = Interval(IntervalQuantity.UNISON, IntervalQuality.AUGMENTED)
Interval.DIMINISHED_SECOND = Interval(IntervalQuantity.SECOND, IntervalQuality.DIMINISHED)
Interval.MINOR_SECOND = Interval(IntervalQuantity.SECOND, IntervalQuality.MINOR)
Interval.MAJOR_SECOND = Interval(IntervalQuantity.SECOND, IntervalQuality.MAJOR)
Interval.AUGMENTED_SECOND = Interval(IntervalQuantity.SECOND, IntervalQuality.AUGMENTED)
Interval.DIMINISHED_THIRD = Interval(IntervalQuantity.THIRD, IntervalQuality.DIMINISHED)
Interval.MINOR_THIRD = Interval(IntervalQuantity.THIRD, IntervalQuality.MINOR)
Interval.MAJOR_THIRD = Interval(IntervalQuantity.THIRD, IntervalQuality.MAJOR)
Interval.AUGMENTED_THIRD = Interval(IntervalQuantity.THIRD, IntervalQuality.AUGMENTED)
Interval.DIMINISHED_FOURTH = Interval(IntervalQuantity.FOURTH, IntervalQuality.DIMINISHED)
Interval.PERFECT_FOURTH = Interval(IntervalQuantity.FOURTH, IntervalQuality.PERFECT)
Interval.AUGMENTED_FOURTH = Interval(IntervalQuantity.FOURTH, IntervalQuality.AUGMENTED)
Interval.DIMINISHED_FIFTH = Interval(IntervalQuantity.FIFTH, IntervalQuality.DIMINISHED)
Interval.PERFECT_FIFTH = Interval(IntervalQuantity.FIFTH, IntervalQuality.PERFECT)
Interval.AUGMENTED_FIFTH = Interval(IntervalQuantity.FIFTH, IntervalQuality.AUGMENTED)
Interval.DIMINISHED_SIXTH = Interval(IntervalQuantity.SIXTH, IntervalQuality.DIMINISHED)
Interval.MINOR_SIXTH = Interval(IntervalQuantity.SIXTH, IntervalQuality.MINOR)
Interval.MAJOR_SIXTH = Interval(IntervalQuantity.SIXTH, IntervalQuality.MAJOR)
Interval.AUGMENTED_SIXTH = Interval(IntervalQuantity.SIXTH, IntervalQuality.AUGMENTED)
Interval.DIMINISHED_SEVENTH = Interval(IntervalQuantity.SEVENTH, IntervalQuality.DIMINISHED)
Interval.MINOR_SEVENTH = Interval(IntervalQuantity.SEVENTH, IntervalQuality.MINOR)
Interval.MAJOR_SEVENTH = Interval(IntervalQuantity.SEVENTH, IntervalQuality.MAJOR)
Interval.AUGMENTED_SEVENTH = Interval(IntervalQuantity.SEVENTH, IntervalQuality.AUGMENTED)
Interval.DIMINISHED_OCTAVE = Interval(IntervalQuantity.OCTAVE, IntervalQuality.DIMINISHED)
Interval.OCTAVE = Interval(IntervalQuantity.OCTAVE, IntervalQuality.PERFECT)

# Short aliases
Interval.P1 = Interval.UNISON
Interval.m2 = Interval.MINOR_SECOND
Interval.M2 = Interval.MAJOR_SECOND
Interval.m3 = Interval.MINOR_THIRD
Interval.M3 = Interval.MAJOR_THIRD
Interval.P4 = Interval.PERFECT_FOURTH
Interval.A4 = Interval.AUGMENTED_FOURTH
Interval.d5 = Interval.DIMINISHED_FIFTH
Interval.P5 = Interval.PERFECT_FIFTH
Interval.A5 = Interval.AUGMENTED_FIFTH
Interval.m6 = Interval.MINOR_SIXTH
Interval.M6 = Interval.MAJOR_SIXTH
Interval.m7 = Interval.MINOR_SEVENTH
Interval.M7 = Interval.MAJOR_SEVENTH
Interval.P8 = Interval.OCTAVE
