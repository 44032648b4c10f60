"""
NoteName - the seven diatonic letters.

Letter arithmetic is cyclic (B + 1 = C). Distances between letters are
measured in semitones along the C major skeleton.
"""

from __future__ import annotations

from enum import IntEnum

from ..constants import DIATONIC_STEPS, ErrorMessages
from ..errors import MusicFormatError

_LETTERS = "CDEFGAB"

# Semitones from each letter to the next one: C-D, D-E, E-F, F-G, G-A, A-B, B-C
_STEPS: tuple[int, ...] = (2, 2, 1, 2, 2, 2, 1)


class NoteName(IntEnum):
    """
    The 7 letter names (C..B) of the English naming convention.

    Values are 0-6. Use add/subtract for cyclic arithmetic; the int
    operators are left alone so the enum stays a plain IntEnum.
    """

    C = 0
    D = 1
    E = 2
    F = 3
    G = 4
    A = 5
    B = 6

    def add(self, steps: int) -> NoteName:
        """Move forward a number of letters, wrapping around."""
        return NoteName((self.value + steps) % DIATONIC_STEPS)

    def subtract(self, steps: int) -> NoteName:
        """Move backward a number of letters, wrapping around."""
        return self.add(-steps)

    def next(self) -> NoteName:
        return self.add(1)

    def previous(self) -> NoteName:
        return self.add(-1)

    def steps_to(self, other: NoteName) -> int:
        """Number of letters from this note name up to another (0-6)."""
        return (other.value - self.value) % DIATONIC_STEPS

    def semitones_to(self, other: NoteName) -> int:
        """
        Semitones walking forward from this letter to another.

        Always >= 0; wraps past B. C -> E is 4, E -> C is 8, C -> C is 0.
        """
        semitones = 0
        current = self.value
        while current != other.value:
            semitones += _STEPS[current]
            current = (current + 1) % DIATONIC_STEPS
        return semitones

    def __str__(self) -> str:
        return self.name

    @classmethod
    def try_parse(cls, value: str | None) -> NoteName | None:
        """Parse the first character as a letter name. Returns None on failure."""
        if value is None:
            return None
        value = value.strip()
        if not value:
            return None
        index = _LETTERS.find(value[0].upper())
        if index == -1:
            return None
        return cls(index)

    @classmethod
    def parse(cls, value: str) -> NoteName:
        """Parse a letter name like 'C' or 'g'."""
        result = cls.try_parse(value)
        if result is None:
            raise MusicFormatError(ErrorMessages.INVALID_NOTE_NAME.format(value=value))
        return result
