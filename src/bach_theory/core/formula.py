"""
Formula - a named set of intervals measured from a root.

Scale and chord formulas share this base. Generation is lazy: pitches are
produced one cycle of the formula at a time, each cycle an octave higher.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from itertools import count
from typing import TypeVar

from ..constants import SEMITONES_PER_OCTAVE, AccidentalMode, ErrorMessages
from ..errors import MusicRangeError
from .interval import Interval
from .pitch import MAX_ABSOLUTE, Pitch
from .pitch_class import PitchClass
from .sequences import format_list, parse_intervals

F = TypeVar("F", bound="Formula")


def relative_steps(intervals: Sequence[Interval]) -> tuple[int, ...]:
    """
    Semitones between consecutive intervals, closing back to the octave.

    Major (1,2,3,4,5,6,7) gives (2, 2, 1, 2, 2, 2, 1).
    """
    semitones = [interval.semitones for interval in intervals]
    steps = [b - a for a, b in zip(semitones, semitones[1:])]
    steps.append(SEMITONES_PER_OCTAVE - semitones[-1] + semitones[0])
    return tuple(steps)


@dataclass(frozen=True)
class Formula:
    """
    A key, a display name and a sorted, de-duplicated, non-empty interval set.

    Intervals are always measured from the root, not stacked:
    a major triad is P1, M3, P5.

    Immutable and hashable.
    """

    key: str
    name: str
    intervals: tuple[Interval, ...]

    def __post_init__(self) -> None:
        if not self.key or not self.name:
            raise MusicRangeError("A formula needs both a key and a name.")
        intervals = tuple(sorted(set(self.intervals)))
        if not intervals:
            raise MusicRangeError(ErrorMessages.FORMULA_EMPTY.format(name=self.name))
        object.__setattr__(self, "intervals", intervals)

    @classmethod
    def from_text(cls: type[F], key: str, name: str, formula: str, **kwargs: object) -> F:
        """Build a formula from an interval list like '1,3,5'."""
        return cls(key, name, parse_intervals(formula), **kwargs)  # type: ignore[arg-type]

    @staticmethod
    def parse_intervals(text: str) -> tuple[Interval, ...]:
        return parse_intervals(text)

    @property
    def interval_count(self) -> int:
        return len(self.intervals)

    def __len__(self) -> int:
        return len(self.intervals)

    def relative_steps(self) -> tuple[int, ...]:
        return relative_steps(self.intervals)

    def generate_pitches(
        self,
        root: Pitch,
        skip_count: int = 0,
        mode: AccidentalMode = AccidentalMode.FAVOR_SHARPS,
    ) -> Iterator[Pitch]:
        """
        Lazily generate pitches from a root, cycling the formula upward.

        Element i is root + intervals[i % n] raised by i // n octaves, with
        the first skip_count elements skipped. Stops at the first pitch
        that would lie above G9.
        """
        n = len(self.intervals)
        for index in count(skip_count):
            interval = self.intervals[index % n]
            octaves = index // n
            absolute = root.absolute_value + interval.semitones + octaves * SEMITONES_PER_OCTAVE
            if absolute > MAX_ABSOLUTE:
                return
            pitch = root.add(interval, mode)
            yield pitch.with_octave(pitch.octave + octaves) if octaves else pitch

    def generate_pitch_classes(
        self,
        root: PitchClass,
        skip_count: int = 0,
        mode: AccidentalMode = AccidentalMode.FAVOR_SHARPS,
    ) -> Iterator[PitchClass]:
        """Unbounded cycle of root + each interval. Callers limit consumption."""
        n = len(self.intervals)
        for index in count(skip_count):
            yield root.add(self.intervals[index % n], mode)

    def pitch_classes(
        self, root: PitchClass, mode: AccidentalMode = AccidentalMode.FAVOR_SHARPS
    ) -> tuple[PitchClass, ...]:
        """One cycle of the formula from a root."""
        return tuple(root.add(interval, mode) for interval in self.intervals)

    def contains_all(self, intervals: Iterable[Interval]) -> bool:
        return set(intervals) <= set(self.intervals)

    def __str__(self) -> str:
        return f"{self.name}: {format_list(self.intervals)}"
