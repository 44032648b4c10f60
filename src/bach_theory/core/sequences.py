"""
Comma-separated lists of pitch classes, pitches and intervals.

A list parses only if every token does; one bad token fails the whole list.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import TypeVar

from ..constants import AccidentalMode, ErrorMessages
from ..errors import MusicFormatError
from .interval import Interval
from .pitch import Pitch
from .pitch_class import PitchClass

T = TypeVar("T")

SEPARATOR = ","


def split_tokens(text: str) -> list[str]:
    """Split on commas, dropping blank tokens."""
    return [token.strip() for token in text.split(SEPARATOR) if token.strip()]


def _try_parse_list(text: str | None, parse: Callable[[str], T | None]) -> tuple[T, ...] | None:
    if text is None:
        return None
    tokens = split_tokens(text)
    if not tokens:
        return None
    result: list[T] = []
    for token in tokens:
        value = parse(token)
        if value is None:
            return None
        result.append(value)
    return tuple(result)


def try_parse_pitch_classes(text: str | None) -> tuple[PitchClass, ...] | None:
    return _try_parse_list(text, PitchClass.try_parse)


def parse_pitch_classes(text: str) -> tuple[PitchClass, ...]:
    """Parse 'C,E,G' into pitch classes."""
    result = try_parse_pitch_classes(text)
    if result is None:
        raise MusicFormatError(ErrorMessages.INVALID_LIST.format(value=text, kind="pitch classes"))
    return result


def try_parse_pitches(
    text: str | None,
    default_octave: int | None = None,
    mode: AccidentalMode = AccidentalMode.FAVOR_SHARPS,
) -> tuple[Pitch, ...] | None:
    return _try_parse_list(text, lambda token: Pitch.try_parse(token, default_octave, mode))


def parse_pitches(
    text: str,
    default_octave: int | None = None,
    mode: AccidentalMode = AccidentalMode.FAVOR_SHARPS,
) -> tuple[Pitch, ...]:
    """Parse 'E2,A2,D3' into pitches."""
    result = try_parse_pitches(text, default_octave, mode)
    if result is None:
        raise MusicFormatError(ErrorMessages.INVALID_LIST.format(value=text, kind="pitches"))
    return result


def try_parse_intervals(text: str | None) -> tuple[Interval, ...] | None:
    return _try_parse_list(text, Interval.try_parse)


def parse_intervals(text: str) -> tuple[Interval, ...]:
    """Parse '1,3,5' or 'P1,m3,d5' into intervals."""
    result = try_parse_intervals(text)
    if result is None:
        raise MusicFormatError(ErrorMessages.INVALID_LIST.format(value=text, kind="intervals"))
    return result


def format_list(values: Iterable[object], separator: str = SEPARATOR) -> str:
    return separator.join(str(value) for value in values)


def intervals_from_root(pitch_classes: Iterable[PitchClass]) -> Iterator[Interval]:
    """
    The interval from the first pitch class to each one in turn.

    The first result is always the unison. C,E,G gives P1,M3,P5.
    """
    iterator = iter(pitch_classes)
    root = next(iterator, None)
    if root is None:
        return
    yield Interval.UNISON
    for pitch_class in iterator:
        yield root.interval_to(pitch_class)
