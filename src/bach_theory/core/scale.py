"""
Scale primitives - ScaleFormula, ScaleFormulaBuilder, Scale, ModeFormula, Mode.

A scale formula is an interval set from the root (1,2,3,4,5,6,7 for major).
A scale is a formula applied to a spelled root; its notes are spelled by
interval arithmetic, so C natural minor is C D Eb F G Ab Bb.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from itertools import chain, dropwhile, islice
from typing import ClassVar

from ..constants import DIATONIC_STEPS, AccidentalMode, ErrorMessages
from ..errors import MusicRangeError
from .formula import Formula, relative_steps
from .interval import Interval
from .pitch import Pitch
from .pitch_class import PitchClass
from .sequences import format_list, parse_intervals

CATEGORY_DIATONIC = "Diatonic"
CATEGORY_MAJOR = "Major"
CATEGORY_MINOR = "Minor"

_NAME_SEPARATOR = ";"
_WHITESPACE = re.compile(r"\s+")

# One spelling per enharmonic index, used when searching for scales
SEARCH_ROOTS: tuple[PitchClass, ...] = tuple(
    PitchClass.parse(name)
    for name in ("C", "Db", "D", "Eb", "E", "F", "F#", "G", "Ab", "A", "Bb", "B")
)


def _remove_whitespace(value: str) -> str:
    return _WHITESPACE.sub("", value)


@dataclass(frozen=True)
class ScaleFormula(Formula):
    """
    A scale formula with categories (Diatonic, Major, ...) and aliases.

    Immutable and hashable.
    """

    categories: frozenset[str] = field(default_factory=frozenset)
    aliases: frozenset[str] = field(default_factory=frozenset)

    # Common scale formulas (defined after class)
    MAJOR: ClassVar[ScaleFormula]
    NATURAL_MINOR: ClassVar[ScaleFormula]
    HARMONIC_MINOR: ClassVar[ScaleFormula]
    MELODIC_MINOR: ClassVar[ScaleFormula]
    DIMINISHED: ClassVar[ScaleFormula]
    POLYTONAL: ClassVar[ScaleFormula]
    WHOLE_TONE: ClassVar[ScaleFormula]
    PENTATONIC: ClassVar[ScaleFormula]
    MINOR_PENTATONIC: ClassVar[ScaleFormula]
    BLUES: ClassVar[ScaleFormula]
    GOSPEL: ClassVar[ScaleFormula]

    def has_category(self, category: str) -> bool:
        return category.casefold() in {c.casefold() for c in self.categories}

    def __repr__(self) -> str:
        return f"ScaleFormula({self.key!r}, {format_list(self.intervals)!r})"


class ScaleFormulaBuilder:
    """
    Fluent builder for ScaleFormula.

    Example:
        formula = (
            ScaleFormulaBuilder("Dorian")
            .set_intervals("1,2,m3,4,5,6,m7")
            .add_alias("Russian Minor")
            .build()
        )
    """

    def __init__(self, name: str | None = None, key: str | None = None) -> None:
        self._key: str | None = None
        self._name: str | None = None
        self._intervals: list[Interval] = []
        self._aliases: dict[str, str] = {}
        self._categories: dict[str, str] = {}
        if key is not None:
            self.set_id(key)
        if name is not None:
            self.set_name(name)

    def set_id(self, key: str) -> ScaleFormulaBuilder:
        """Set the key. Whitespace is removed."""
        self._key = _remove_whitespace(key)
        return self

    def set_name(self, name: str) -> ScaleFormulaBuilder:
        self._name = name.strip()
        return self

    def set_intervals(self, intervals: Iterable[Interval] | str | None) -> ScaleFormulaBuilder:
        """Replace the intervals with a list or a string like '1,2,m3'."""
        if intervals is None:
            self._intervals = []
        elif isinstance(intervals, str):
            self._intervals = list(parse_intervals(intervals)) if intervals.strip() else []
        else:
            self._intervals = list(intervals)
        return self

    def append_interval(self, interval: Interval) -> ScaleFormulaBuilder:
        self._intervals.append(interval)
        return self

    def add_alias(self, alias: str | None) -> ScaleFormulaBuilder:
        """Add one alias, or several separated by ';'."""
        if alias is None:
            return self
        return self.add_aliases(alias.split(_NAME_SEPARATOR))

    def add_aliases(self, aliases: Iterable[str] | None) -> ScaleFormulaBuilder:
        _add_names(self._aliases, aliases)
        return self

    def add_category(self, category: str | None) -> ScaleFormulaBuilder:
        """Add one category, or several separated by ';'."""
        if category is None:
            return self
        return self.add_categories(category.split(_NAME_SEPARATOR))

    def add_categories(self, categories: Iterable[str] | None) -> ScaleFormulaBuilder:
        _add_names(self._categories, categories)
        return self

    def build(self) -> ScaleFormula:
        """
        Build the formula.

        Raises:
            MusicRangeError: No name, no intervals, or intervals that are not
                strictly ascending.
        """
        if not self._name:
            raise MusicRangeError(ErrorMessages.SCALE_NAME_REQUIRED)
        if not self._intervals:
            raise MusicRangeError(ErrorMessages.FORMULA_EMPTY.format(name=self._name))
        if any(a >= b for a, b in zip(self._intervals, self._intervals[1:])):
            raise MusicRangeError(ErrorMessages.SCALE_NOT_SORTED)

        categories = dict(self._categories)
        if self._is_diatonic():
            _add_names(categories, [CATEGORY_DIATONIC])
        if self._starts_with_triad(Interval.MAJOR_THIRD):
            _add_names(categories, [CATEGORY_MAJOR])
        if self._starts_with_triad(Interval.MINOR_THIRD):
            _add_names(categories, [CATEGORY_MINOR])

        return ScaleFormula(
            key=self._key or _remove_whitespace(self._name),
            name=self._name,
            intervals=tuple(self._intervals),
            categories=frozenset(categories.values()),
            aliases=frozenset(self._aliases.values()),
        )

    def _is_diatonic(self) -> bool:
        if len(self._intervals) != DIATONIC_STEPS:
            return False
        steps = relative_steps(self._intervals)
        return steps.count(2) == 5 and steps.count(1) == 2

    def _starts_with_triad(self, third: Interval) -> bool:
        return (
            self._intervals[0] == Interval.UNISON
            and third in self._intervals
            and Interval.PERFECT_FIFTH in self._intervals
        )


def _add_names(target: dict[str, str], names: Iterable[str] | None) -> None:
    # Case-insensitive set; the first spelling seen wins
    for name in names or ():
        trimmed = name.strip() if name else ""
        if trimmed:
            target.setdefault(trimmed.casefold(), trimmed)


@dataclass(frozen=True)
class Scale:
    """
    A scale formula applied to a root pitch class.

    Iterating a scale yields one cycle of its pitch classes.
    """

    root: PitchClass
    formula: ScaleFormula
    mode: AccidentalMode = field(default=AccidentalMode.FAVOR_SHARPS, compare=False)

    @property
    def name(self) -> str:
        """'C', 'C Natural Minor', 'F# Blues'. A major scale is just its root."""
        if self.formula.name.casefold() == "major":
            return str(self.root)
        return f"{self.root} {self.formula.name}"

    @property
    def pitch_classes(self) -> tuple[PitchClass, ...]:
        return self.formula.pitch_classes(self.root, self.mode)

    def get_pitch_classes(self, start: int = 0) -> tuple[PitchClass, ...]:
        """One cycle of the scale, starting at a degree (0-based)."""
        return tuple(islice(self.generate(start), len(self.formula)))

    def generate(self, start: int = 0) -> Iterator[PitchClass]:
        """The scale's pitch classes repeated forever."""
        return self.formula.generate_pitch_classes(self.root, start, self.mode)

    def index_of(self, value: PitchClass | Pitch) -> int:
        """0-based degree of a pitch class, or -1 if it is not in the scale."""
        pitch_class = value.pitch_class if isinstance(value, Pitch) else value
        try:
            return self.pitch_classes.index(pitch_class)
        except ValueError:
            return -1

    def contains(self, value: PitchClass | Pitch) -> bool:
        return self.index_of(value) != -1

    def contains_all(self, pitch_classes: Iterable[PitchClass]) -> bool:
        own = set(self.pitch_classes)
        return all(pitch_class in own for pitch_class in pitch_classes)

    def render(self, start: Pitch) -> Iterator[Pitch]:
        """
        Lazily yield the scale's pitches from the first one at or above start.

        Ends at G9.
        """
        root = Pitch.floor(self.root, start.absolute_value)
        pitches = self.formula.generate_pitches(root, mode=self.mode)
        if root.absolute_value > start.absolute_value:
            # No spelling of the root fits at or below start (Cb near C0)
            pitches = chain(self._below(root), pitches)
        return dropwhile(lambda pitch: pitch < start, pitches)

    def _below(self, root: Pitch) -> Iterator[Pitch]:
        """The scale tones in the octave beneath root that are still in range."""
        first = islice(self.formula.generate_pitches(root, mode=self.mode), len(self.formula))
        for pitch in first:
            try:
                lower = pitch.with_octave(pitch.octave - 1)
            except MusicRangeError:
                continue
            if lower < root:
                yield lower

    @classmethod
    def scales_containing(
        cls,
        pitch_classes: Iterable[PitchClass],
        formulas: Iterable[ScaleFormula],
        roots: Iterable[PitchClass] = SEARCH_ROOTS,
    ) -> Iterator[Scale]:
        """Every (root, formula) scale that contains all the given pitch classes."""
        wanted = tuple(pitch_classes)
        roots = tuple(roots)
        for formula in formulas:
            for root in roots:
                scale = cls(root, formula)
                if scale.contains_all(wanted):
                    yield scale

    def __iter__(self) -> Iterator[PitchClass]:
        return iter(self.pitch_classes)

    def __len__(self) -> int:
        return len(self.formula)

    def __contains__(self, value: object) -> bool:
        if isinstance(value, (PitchClass, Pitch)):
            return self.contains(value)
        return False

    def __str__(self) -> str:
        return format_list(self.pitch_classes)


@dataclass(frozen=True)
class ModeFormula:
    """A named mode: the degree (1-7) of the parent scale used as tonic."""

    name: str = field(compare=False)
    tonic: int

    IONIAN: ClassVar[ModeFormula]
    DORIAN: ClassVar[ModeFormula]
    PHRYGIAN: ClassVar[ModeFormula]
    LYDIAN: ClassVar[ModeFormula]
    MIXOLYDIAN: ClassVar[ModeFormula]
    AEOLIAN: ClassVar[ModeFormula]
    LOCRIAN: ClassVar[ModeFormula]

    def __post_init__(self) -> None:
        if not self.name:
            raise MusicRangeError("A mode needs a name.")
        if not 1 <= self.tonic <= DIATONIC_STEPS:
            raise MusicRangeError(ErrorMessages.TONIC_OUT_OF_RANGE.format(value=self.tonic))

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Mode:
    """A scale read from one of its degrees: C major in Dorian starts on D."""

    scale: Scale
    formula: ModeFormula

    def __post_init__(self) -> None:
        if self.formula.tonic > len(self.scale):
            raise MusicRangeError(
                ErrorMessages.TONIC_OUT_OF_RANGE.format(value=self.formula.tonic)
            )

    @property
    def name(self) -> str:
        return f"{self.scale.name} {self.formula.name}"

    @property
    def pitch_classes(self) -> tuple[PitchClass, ...]:
        return self.scale.get_pitch_classes(self.formula.tonic - 1)

    def __iter__(self) -> Iterator[PitchClass]:
        return iter(self.pitch_classes)

    def __str__(self) -> str:
        return format_list(self.pitch_classes)


def _scale(name: str, intervals: str) -> ScaleFormula:
    return ScaleFormulaBuilder(name).set_intervals(intervals).build()


# Initialize class constants after class is defined
ScaleFormula.MAJOR = _scale("Major", "1,2,3,4,5,6,7")
ScaleFormula.NATURAL_MINOR = _scale("Natural Minor", "1,2,m3,4,5,m6,m7")
ScaleFormula.HARMONIC_MINOR = _scale("Harmonic Minor", "1,2,m3,4,5,m6,7")
ScaleFormula.MELODIC_MINOR = _scale("Melodic Minor", "1,2,m3,4,5,6,7")
ScaleFormula.DIMINISHED = _scale("Diminished", "1,2,m3,4,d5,A5,6,7")
ScaleFormula.POLYTONAL = _scale("Polytonal", "1,m2,m3,d4,A4,5,6,m7")
ScaleFormula.WHOLE_TONE = _scale("Whole Tone", "1,2,3,A4,A5,A6")
ScaleFormula.PENTATONIC = _scale("Pentatonic", "1,2,3,5,6")
ScaleFormula.MINOR_PENTATONIC = _scale("Minor Pentatonic", "1,m3,4,5,m7")
ScaleFormula.BLUES = _scale("Blues", "1,m3,4,d5,5,m7")
ScaleFormula.GOSPEL = _scale("Gospel", "1,2,m3,3,5,6")

ModeFormula.IONIAN = ModeFormula("Ionian", 1)
ModeFormula.DORIAN = ModeFormula("Dorian", 2)
ModeFormula.PHRYGIAN = ModeFormula("Phrygian", 3)
ModeFormula.LYDIAN = ModeFormula("Lydian", 4)
ModeFormula.MIXOLYDIAN = ModeFormula("Mixolydian", 5)
ModeFormula.AEOLIAN = ModeFormula("Aeolian", 6)
ModeFormula.LOCRIAN = ModeFormula("Locrian", 7)
