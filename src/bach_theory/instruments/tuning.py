"""
Tuning - the open-string pitches of a stringed instrument.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from bach_theory.constants import ErrorMessages
from bach_theory.core.pitch import Pitch
from bach_theory.core.sequences import format_list
from bach_theory.errors import MusicRangeError


@dataclass(frozen=True)
class Tuning:
    """
    Open-string pitches, indexed by 1-based string number.

    String 1 is the highest-sounding string (high E on a guitar).
    """

    key: str
    name: str
    pitches: tuple[Pitch, ...]

    def __post_init__(self) -> None:
        if not self.key or not self.name:
            raise MusicRangeError("A tuning needs both a key and a name.")
        if not self.pitches:
            raise MusicRangeError(f"Tuning '{self.key}' has no pitches.")
        object.__setattr__(self, "pitches", tuple(self.pitches))

    @property
    def string_count(self) -> int:
        return len(self.pitches)

    def __getitem__(self, string: int) -> Pitch:
        """Open pitch of a string (1-based)."""
        if not 1 <= string <= len(self.pitches):
            raise MusicRangeError(
                ErrorMessages.STRING_OUT_OF_RANGE.format(max=len(self.pitches), value=string)
            )
        return self.pitches[string - 1]

    def __iter__(self) -> Iterator[Pitch]:
        return iter(self.pitches)

    def __len__(self) -> int:
        return len(self.pitches)

    def __str__(self) -> str:
        return f"{self.name}: {format_list(self.pitches)}"
