"""
Tests for list parsing and Formula.
"""

from itertools import islice

import pytest

from bach_theory.core import (
    Formula,
    Interval,
    Pitch,
    PitchClass,
    format_list,
    intervals_from_root,
    parse_intervals,
    parse_pitch_classes,
    parse_pitches,
    try_parse_intervals,
    try_parse_pitch_classes,
    try_parse_pitches,
)
from bach_theory.core.formula import relative_steps
from bach_theory.errors import MusicFormatError, MusicRangeError


class TestSequences:
    """Tests for comma-separated lists."""

    def test_parse_pitch_classes(self) -> None:
        """Tokens are trimmed; blanks are dropped."""
        result = parse_pitch_classes("C, E ,G,,")
        assert [str(pc) for pc in result] == ["C", "E", "G"]

    def test_parse_pitches(self) -> None:
        """Pitches with an optional default octave."""
        assert [str(p) for p in parse_pitches("E2,A2,D3")] == ["E2", "A2", "D3"]
        assert [str(p) for p in parse_pitches("C,E5", 3)] == ["C3", "E5"]

    def test_parse_intervals(self) -> None:
        """Mixed interval notation."""
        result = parse_intervals("1,m3,P5,7")
        assert result == (Interval.P1, Interval.m3, Interval.P5, Interval.M7)

    def test_one_bad_token_fails_the_list(self) -> None:
        """A single invalid token fails the whole list."""
        assert try_parse_pitch_classes("C,E,H") is None
        assert try_parse_pitches("C4,E4,G") is None
        assert try_parse_intervals("1,3,P3") is None
        with pytest.raises(MusicFormatError):
            parse_pitch_classes("C,X")

    def test_empty_list_fails(self) -> None:
        """Nothing to parse is a failure."""
        assert try_parse_pitch_classes("") is None
        assert try_parse_intervals(" , ") is None
        assert try_parse_pitch_classes(None) is None

    def test_format_list(self) -> None:
        """Values joined by commas."""
        assert format_list(parse_pitch_classes("C,Eb,G")) == "C,Eb,G"
        assert format_list([Interval.M3, Interval.m7], " ") == "3 m7"

    def test_intervals_from_root(self) -> None:
        """Intervals measured from the first pitch class."""
        result = list(intervals_from_root(parse_pitch_classes("C,E,G,Bb")))
        assert result == [Interval.P1, Interval.M3, Interval.P5, Interval.m7]
        assert list(intervals_from_root([])) == []


class TestFormula:
    """Tests for the Formula base."""

    def test_intervals_sorted_and_unique(self) -> None:
        """Intervals are sorted and de-duplicated on construction."""
        formula = Formula.from_text("Test", "Test", "5,3,1,3")
        assert formula.intervals == (Interval.P1, Interval.M3, Interval.P5)
        assert len(formula) == 3
        assert formula.interval_count == 3

    def test_empty_formula(self) -> None:
        """A formula needs at least one interval."""
        with pytest.raises(MusicRangeError):
            Formula("Empty", "Empty", ())

    def test_requires_key_and_name(self) -> None:
        """Key and name are required."""
        with pytest.raises(MusicRangeError):
            Formula("", "Name", (Interval.P1,))

    def test_equality(self) -> None:
        """Formulas compare by value."""
        a = Formula.from_text("Triad", "Triad", "1,3,5")
        b = Formula.from_text("Triad", "Triad", "5,1,3")
        assert a == b
        assert hash(a) == hash(b)

    def test_relative_steps(self) -> None:
        """Steps between consecutive intervals close to the octave."""
        major = Formula.from_text("Major", "Major", "1,2,3,4,5,6,7")
        assert major.relative_steps() == (2, 2, 1, 2, 2, 2, 1)
        assert relative_steps(parse_intervals("1,3,5")) == (4, 3, 5)

    def test_pitch_classes(self) -> None:
        """One cycle from a root."""
        minor = Formula.from_text("Minor", "Minor", "1,m3,5")
        assert [str(pc) for pc in minor.pitch_classes(PitchClass.A)] == ["A", "C", "E"]

    def test_generate_pitch_classes_cycles(self) -> None:
        """The pitch-class generator is unbounded."""
        triad = Formula.from_text("Triad", "Triad", "1,3,5")
        result = list(islice(triad.generate_pitch_classes(PitchClass.C, 1), 5))
        assert [str(pc) for pc in result] == ["E", "G", "C", "E", "G"]

    def test_generate_pitches_cycles_upward(self) -> None:
        """Each cycle is an octave higher."""
        triad = Formula.from_text("Triad", "Triad", "1,3,5")
        result = list(islice(triad.generate_pitches(Pitch.parse("C4")), 6))
        assert [str(p) for p in result] == ["C4", "E4", "G4", "C5", "E5", "G5"]

    def test_generate_pitches_skip(self) -> None:
        """skip_count drops leading elements."""
        triad = Formula.from_text("Triad", "Triad", "1,3,5")
        result = list(islice(triad.generate_pitches(Pitch.parse("C4"), 2), 3))
        assert [str(p) for p in result] == ["G4", "C5", "E5"]

    def test_generate_pitches_stops_at_g9(self) -> None:
        """Generation ends at the top of the range."""
        triad = Formula.from_text("Triad", "Triad", "1,3,5")
        result = list(triad.generate_pitches(Pitch.parse("C8")))
        assert [str(p) for p in result] == ["C8", "E8", "G8", "C9", "E9", "G9"]

    def test_contains_all(self) -> None:
        """Subset check on intervals."""
        formula = Formula.from_text("Seventh", "Seventh", "1,3,5,m7")
        assert formula.contains_all([Interval.M3, Interval.m7])
        assert not formula.contains_all([Interval.M7])

    def test_str(self) -> None:
        """Name and intervals."""
        formula = Formula.from_text("Minor", "Minor", "1,m3,5")
        assert str(formula) == "Minor: 1,m3,5"
