"""
Tests for tunings, instrument definitions, fingerings and fretboard rendering.
"""

import pytest

from bach_theory.core import Chord, ChordFormula, Pitch, PitchClass, Scale, ScaleFormula
from bach_theory.errors import CatalogError, MusicRangeError
from bach_theory.instruments import (
    Fingering,
    StringedInstrument,
    StringedInstrumentDefinitionBuilder,
    Tuning,
)


def chart(fingerings) -> str:
    return " ".join(str(fingering) for fingering in fingerings)


class TestTuning:
    """Tests for Tuning."""

    def test_strings_are_one_based(self) -> None:
        """String 1 is the first pitch."""
        tuning = Tuning("standard", "Standard", (Pitch.parse("E4"), Pitch.parse("B3")))
        assert str(tuning[1]) == "E4"
        assert str(tuning[2]) == "B3"
        assert tuning.string_count == len(tuning) == 2

    def test_string_out_of_range(self) -> None:
        """Strings outside 1..n fail."""
        tuning = Tuning("one", "One", (Pitch.parse("E4"),))
        with pytest.raises(MusicRangeError):
            tuning[0]
        with pytest.raises(MusicRangeError):
            tuning[2]

    def test_needs_pitches(self) -> None:
        """An empty tuning fails."""
        with pytest.raises(MusicRangeError):
            Tuning("none", "None", ())


class TestStringedInstrumentDefinition:
    """Tests for definitions and their builder."""

    def test_build(self) -> None:
        """Tunings are parsed from text."""
        definition = (
            StringedInstrumentDefinitionBuilder("ukulele", "Ukulele", 4)
            .add_tuning("standard", "Standard", "A4,E4,C4,G4")
            .add_tuning("baritone", "Baritone", "E4,B3,G3,D3")
            .build()
        )
        assert definition.standard.key == "standard"
        assert definition.tuning("BARITONE").name == "Baritone"
        assert definition.find_tuning("nope") is None
        assert len(definition.tunings) == 2

    def test_tuning_must_match_string_count(self) -> None:
        """Pitch count must equal string count."""
        builder = StringedInstrumentDefinitionBuilder("mandolin", "Mandolin", 4)
        with pytest.raises(MusicRangeError):
            builder.add_tuning("standard", "Standard", "E5,A4,D4")

    def test_standard_tuning_required(self) -> None:
        """Every definition has a standard tuning."""
        builder = StringedInstrumentDefinitionBuilder("mandolin", "Mandolin", 4)
        builder.add_tuning("cross", "Cross", "E5,A4,E4,A3")
        with pytest.raises(CatalogError):
            builder.build()

    def test_unknown_tuning(self, registry) -> None:
        """Asking for a missing tuning fails."""
        with pytest.raises(CatalogError):
            registry.instrument_definitions["guitar"].tuning("nashville")


class TestFingering:
    """Tests for Fingering."""

    def test_str(self) -> None:
        """String then fret, or x when muted."""
        assert str(Fingering(5, 3, Pitch.parse("C3"))) == "53"
        assert str(Fingering.muted(6)) == "6x"

    def test_muted(self) -> None:
        """Muted strings have no pitch."""
        fingering = Fingering.muted(1)
        assert fingering.is_muted
        assert fingering.position == -1
        assert fingering.pitch is None


class TestStringedInstrument:
    """Tests for StringedInstrument."""

    def test_get_pitch(self, guitar: StringedInstrument) -> None:
        """Open string plus frets."""
        assert str(guitar.get_pitch(6, 0)) == "E2"
        assert str(guitar.get_pitch(6, 5)) == "A2"
        assert str(guitar.get_pitch(1, 12)) == "E5"
        assert str(guitar.fingering(2, 1)) == "21"

    def test_get_pitch_out_of_range(self, guitar: StringedInstrument) -> None:
        """Frets and strings are checked."""
        with pytest.raises(MusicRangeError):
            guitar.get_pitch(1, 23)
        with pytest.raises(MusicRangeError):
            guitar.get_pitch(7, 0)

    def test_create_with_tuning(self, registry) -> None:
        """Tunings by key or object."""
        definition = registry.instrument_definitions["guitar"]
        by_key = StringedInstrument.create(definition, 22, "dadgad")
        by_object = StringedInstrument.create(definition, 22, definition.tuning("dadgad"))
        assert by_key == by_object
        assert StringedInstrument.create(definition, 22).tuning.key == "standard"

    def test_str(self, guitar: StringedInstrument) -> None:
        """Name, tuning and fret count."""
        assert str(guitar) == "Guitar (Standard, 22 frets)"


class TestRenderChord:
    """Tests for chord fingerings."""

    def test_c_major_open(self, guitar: StringedInstrument) -> None:
        """Open C: low E muted, bass C on the A string."""
        chord = Chord(PitchClass.C, ChordFormula.MAJOR)
        assert chart(guitar.render_chord(chord, 0)) == "6x 53 42 30 21 10"

    def test_g_major_open(self, guitar: StringedInstrument) -> None:
        """Open G on all six strings."""
        chord = Chord(PitchClass.G, ChordFormula.MAJOR)
        assert chart(guitar.render_chord(chord, 0)) == "63 52 40 30 20 13"

    def test_fingering_pitches(self, guitar: StringedInstrument) -> None:
        """Fingerings carry the sounded pitch."""
        chord = Chord(PitchClass.C, ChordFormula.MAJOR)
        pitches = [str(f.pitch) for f in guitar.render_chord(chord, 0) if not f.is_muted]
        assert pitches == ["C3", "E3", "G3", "C4", "E4"]

    def test_one_fingering_per_string(self, guitar: StringedInstrument) -> None:
        """Every string is listed, lowest first."""
        chord = Chord(PitchClass.A, ChordFormula.MINOR)
        fingerings = list(guitar.render_chord(chord, 5))
        assert [f.string for f in fingerings] == [6, 5, 4, 3, 2, 1]

    def test_window_checked(self, guitar: StringedInstrument) -> None:
        """The fret window must fit the neck."""
        chord = Chord(PitchClass.C, ChordFormula.MAJOR)
        with pytest.raises(MusicRangeError):
            list(guitar.render_chord(chord, 20, 4))
        with pytest.raises(MusicRangeError):
            list(guitar.render_chord(chord, -1))
        with pytest.raises(MusicRangeError):
            list(guitar.render_chord(chord, 0, 1))


class TestRenderScale:
    """Tests for scale fingerings."""

    def test_c_major_open(self, guitar: StringedInstrument) -> None:
        """C major in open position, no tone repeated across strings."""
        scale = Scale(PitchClass.C, ScaleFormula.MAJOR)
        assert chart(guitar.render_scale(scale, 0)) == (
            "60 61 63 50 52 53 40 42 43 30 32 20 21 23 10 11 13"
        )

    def test_pitches_ascend(self, guitar: StringedInstrument) -> None:
        """Rendered pitches are strictly ascending and all in the scale."""
        scale = Scale(PitchClass.A, ScaleFormula.MINOR_PENTATONIC)
        fingerings = list(guitar.render_scale(scale, 5))
        pitches = [f.pitch for f in fingerings]
        assert pitches == sorted(pitches)
        assert len(set(pitches)) == len(pitches)
        assert all(pitch.pitch_class in scale for pitch in pitches)
        assert all(5 <= f.position <= 9 for f in fingerings)

    def test_narrow_span(self, guitar: StringedInstrument) -> None:
        """Tones between two strings' windows are skipped, never fretted below the window."""
        scale = Scale(PitchClass.C, ScaleFormula.MAJOR)
        fingerings = list(guitar.render_scale(scale, 0, 2))
        assert chart(fingerings) == "60 61 50 52 40 42 30 32 20 21 10 11"
        assert all(0 <= f.position <= 2 for f in fingerings)

    def test_narrow_span_up_the_neck(self, guitar: StringedInstrument) -> None:
        """Every position stays inside the window."""
        scale = Scale(PitchClass.G, ScaleFormula.MAJOR)
        fingerings = list(guitar.render_scale(scale, 7, 2))
        assert fingerings
        assert all(7 <= f.position <= 9 for f in fingerings)
