"""
Accidental - raises or lowers a letter by up to two semitones.
"""

from __future__ import annotations

from enum import IntEnum

from ..constants import ErrorMessages
from ..errors import MusicFormatError, MusicRangeError

# Indexed by value + 2
_SYMBOLS: tuple[str, ...] = ("bb", "b", "", "#", "##")
_UNICODE_SYMBOLS: tuple[str, ...] = ("𝄫", "♭", "♮", "♯", "𝄪")
_NAMES: tuple[str, ...] = ("double flat", "flat", "natural", "sharp", "double sharp")

_FLAT_CHARS = frozenset("bB♭")
_SHARP_CHARS = frozenset("#♯")
_NATURAL_CHAR = "♮"

_MAX_SYMBOL_LENGTH = 2


class Accidental(IntEnum):
    """
    Accidentals from double flat (-2) to double sharp (+2).

    The value is the number of semitones applied to the letter.
    """

    DOUBLE_FLAT = -2
    FLAT = -1
    NATURAL = 0
    SHARP = 1
    DOUBLE_SHARP = 2

    @property
    def symbol(self) -> str:
        """ASCII symbol: 'bb', 'b', '', '#', '##'."""
        return _SYMBOLS[self.value + 2]

    @property
    def unicode_symbol(self) -> str:
        return _UNICODE_SYMBOLS[self.value + 2]

    @property
    def long_name(self) -> str:
        return _NAMES[self.value + 2]

    def add(self, steps: int) -> Accidental:
        """
        Raise the accidental by a number of semitones.

        Leaving the double-flat..double-sharp range is an error; respelling
        the note is the caller's job.
        """
        return self.from_value(self.value + steps)

    def subtract(self, steps: int) -> Accidental:
        return self.add(-steps)

    def __str__(self) -> str:
        return self.symbol

    @classmethod
    def from_value(cls, value: int) -> Accidental:
        """Get the accidental for a semitone offset, validating the range."""
        if not cls.DOUBLE_FLAT <= value <= cls.DOUBLE_SHARP:
            raise MusicRangeError(ErrorMessages.ACCIDENTAL_OUT_OF_RANGE.format(value=value))
        return cls(value)

    @classmethod
    def try_parse(cls, value: str | None) -> Accidental | None:
        """
        Parse an accidental symbol. Returns None on failure.

        Accepts up to two characters from b, B, ♭, #, ♯ which are summed
        (so "#b" would be zero). The empty string and a lone "♮" are the only
        ways to write natural: a flat/sharp mix that cancels out is rejected.
        """
        if value is None:
            return None
        if value == "" or value == _NATURAL_CHAR:
            return cls.NATURAL
        if len(value) > _MAX_SYMBOL_LENGTH:
            return None

        total = 0
        for char in value:
            if char in _FLAT_CHARS:
                total -= 1
            elif char in _SHARP_CHARS:
                total += 1
            else:
                return None

        if total == 0:
            return None
        return cls(total)

    @classmethod
    def parse(cls, value: str) -> Accidental:
        """Parse an accidental symbol like '#', 'bb' or '♭'."""
        result = cls.try_parse(value)
        if result is None:
            raise MusicFormatError(ErrorMessages.INVALID_ACCIDENTAL.format(value=value))
        return result
