"""
Fingering - where to put a finger on one string.
"""

from __future__ import annotations

from dataclasses import dataclass

from bach_theory.core.pitch import Pitch

MUTED = -1


@dataclass(frozen=True)
class Fingering:
    """
    A string and fret position, with the pitch it sounds.

    A muted string has position -1 and no pitch. str() gives the
    compact chart form: "53" is string 5 at fret 3, "6x" is string 6 muted.
    """

    string: int
    position: int
    pitch: Pitch | None = None

    @classmethod
    def muted(cls, string: int) -> Fingering:
        return cls(string, MUTED)

    @property
    def is_muted(self) -> bool:
        return self.position == MUTED

    def __str__(self) -> str:
        if self.is_muted:
            return f"{self.string}x"
        return f"{self.string}{self.position}"
