"""
Stringed instrument definitions and their builder.

A definition names an instrument, its string count and the tunings it
supports. Every definition has a "standard" tuning.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from bach_theory.constants import ErrorMessages
from bach_theory.core.pitch import Pitch
from bach_theory.core.sequences import parse_pitches
from bach_theory.errors import CatalogError, MusicRangeError
from bach_theory.instruments.tuning import Tuning

STANDARD_TUNING = "standard"


@dataclass(frozen=True)
class StringedInstrumentDefinition:
    """
    A stringed instrument: key, display name, string count and tunings.

    Immutable. Tunings are looked up case-insensitively by key or name.
    """

    key: str
    name: str
    string_count: int
    tunings: tuple[Tuning, ...]

    def __post_init__(self) -> None:
        if self.string_count < 1:
            raise MusicRangeError(f"String count must be positive, got {self.string_count}.")
        for tuning in self.tunings:
            if tuning.string_count != self.string_count:
                raise MusicRangeError(
                    ErrorMessages.TUNING_STRING_COUNT.format(
                        key=tuning.key, count=tuning.string_count, strings=self.string_count
                    )
                )
        if self.find_tuning(STANDARD_TUNING) is None:
            raise CatalogError(
                ErrorMessages.TUNING_NOT_FOUND.format(key=STANDARD_TUNING, instrument=self.key)
            )

    @property
    def standard(self) -> Tuning:
        return self.tuning(STANDARD_TUNING)

    def find_tuning(self, key: str) -> Tuning | None:
        """Find a tuning by key or name, ignoring case and spaces."""
        wanted = key.replace(" ", "").casefold()
        for tuning in self.tunings:
            if wanted in (tuning.key.casefold(), tuning.name.replace(" ", "").casefold()):
                return tuning
        return None

    def tuning(self, key: str) -> Tuning:
        """Get a tuning by key or name. Raises CatalogError if missing."""
        tuning = self.find_tuning(key)
        if tuning is None:
            raise CatalogError(ErrorMessages.TUNING_NOT_FOUND.format(key=key, instrument=self.key))
        return tuning

    def __str__(self) -> str:
        return self.name


class StringedInstrumentDefinitionBuilder:
    """
    Builds a StringedInstrumentDefinition one tuning at a time.

    Example:
        guitar = (
            StringedInstrumentDefinitionBuilder("guitar", "Guitar", 6)
            .add_tuning("standard", "Standard", "E4,B3,G3,D3,A2,E2")
            .build()
        )
    """

    def __init__(self, key: str, name: str, string_count: int) -> None:
        if not key or not name:
            raise MusicRangeError("An instrument needs both a key and a name.")
        if string_count < 1:
            raise MusicRangeError(f"String count must be positive, got {string_count}.")
        self.key = key
        self.name = name
        self.string_count = string_count
        self._tunings: list[Tuning] = []

    def add_tuning(
        self, key: str, name: str, pitches: str | Iterable[Pitch]
    ) -> StringedInstrumentDefinitionBuilder:
        """
        Add a tuning. Pitches may be a list or a string like 'E4,B3,...'.

        Raises:
            MusicRangeError: The pitch count does not match the string count.
        """
        parsed = parse_pitches(pitches) if isinstance(pitches, str) else tuple(pitches)
        if len(parsed) != self.string_count:
            raise MusicRangeError(
                ErrorMessages.TUNING_STRING_COUNT.format(
                    key=key, count=len(parsed), strings=self.string_count
                )
            )
        self._tunings.append(Tuning(key, name, parsed))
        return self

    def build(self) -> StringedInstrumentDefinition:
        return StringedInstrumentDefinition(
            key=self.key,
            name=self.name,
            string_count=self.string_count,
            tunings=tuple(self._tunings),
        )
