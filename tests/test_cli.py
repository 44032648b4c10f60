"""
Tests for the command line.
"""

from pathlib import Path

import pytest
from rich.console import Console

from bach_theory import cli
from bach_theory.config import CONFIG_ENV_VAR


@pytest.fixture(autouse=True)
def plain_console(monkeypatch) -> None:
    """Wide, uncoloured output and no config file from the environment."""
    monkeypatch.setattr(cli, "console", Console(width=200, force_terminal=False, no_color=True))
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


def run(capsys, *argv: str) -> tuple[int, str]:
    status = cli.main(list(argv))
    return status, capsys.readouterr().out


class TestParser:
    """Tests for argument parsing."""

    def test_command_required(self) -> None:
        """A subcommand is required."""
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args([])

    def test_global_options(self) -> None:
        """Global options come before the command."""
        args = cli.build_parser().parse_args(["--debug", "--flats", "intervals", "C", "E"])
        assert args.debug
        assert args.flats
        assert args.notes == ["C", "E"]


class TestCommands:
    """Tests for each command's output."""

    def test_notes(self, capsys) -> None:
        """Notes from a root and intervals."""
        status, out = run(capsys, "notes", "C", "P1", "M3", "P5")
        assert status == 0
        assert "C, E, G" in out
        assert "P1, M3, P5" in out

    def test_notes_comma_separated(self, capsys) -> None:
        """Comma-separated tokens work too."""
        status, out = run(capsys, "notes", "Eb", "1,3,5")
        assert status == 0
        assert "Eb, G, Bb" in out

    def test_intervals(self, capsys) -> None:
        """Intervals from the first note."""
        status, out = run(capsys, "intervals", "C", "Eb", "G", "Bb")
        assert status == 0
        assert "P1, m3, P5, m7" in out

    def test_scale(self, capsys) -> None:
        """A scale on several roots."""
        status, out = run(capsys, "scale", "major", "C", "F")
        assert status == 0
        assert "C, D, E, F, G, A, B" in out
        assert "F, G, A, Bb, C, D, E" in out

    def test_scales_containing(self, capsys) -> None:
        """Catalog search."""
        status, out = run(capsys, "scales-containing", "C,E,G,B")
        assert status == 0
        assert "A Natural Minor" in out

    def test_chord(self, capsys) -> None:
        """Chord tones and name."""
        status, out = run(capsys, "chord", "Minor7", "A")
        assert status == 0
        assert "Am7" in out
        assert "A, C, E, G" in out

    def test_chord_inversion(self, capsys) -> None:
        """Inverted chords name their bass."""
        status, out = run(capsys, "chord", "major", "C", "--inversion", "1")
        assert status == 0
        assert "C/E" in out
        assert "E, G, C" in out

    def test_fretboard_chord(self, capsys) -> None:
        """Chord fingerings on the default guitar."""
        status, out = run(capsys, "fretboard", "chord", "major", "C")
        assert status == 0
        assert "6x 53 42 30 21 10" in out

    def test_fretboard_scale(self, capsys) -> None:
        """Scale fingerings on the default guitar."""
        status, out = run(capsys, "fretboard", "scale", "major", "C", "--fret", "0")
        assert status == 0
        assert "60 61 63 50 52 53 40 42 43 30 32 20 21 23 10 11 13" in out

    def test_fretboard_instrument(self, capsys) -> None:
        """Instrument and tuning can be chosen."""
        status, out = run(
            capsys, "fretboard", "chord", "major", "G", "--instrument", "bass", "--tuning", "dropd"
        )
        assert status == 0
        assert "Bass Guitar (Drop D" in out

    def test_pitch(self, capsys) -> None:
        """Absolute value, MIDI number and frequency."""
        status, out = run(capsys, "pitch", "A4", "60")
        assert status == 0
        assert "440.00" in out
        assert "69" in out
        assert "C4" in out

    def test_pitch_flats(self, capsys) -> None:
        """--flats spells MIDI numbers with flats."""
        status, out = run(capsys, "--flats", "pitch", "61")
        assert status == 0
        assert "Db4" in out

    def test_list(self, capsys) -> None:
        """Catalog listings."""
        status, out = run(capsys, "list", "chords")
        assert status == 0
        assert "Minor7" in out
        status, out = run(capsys, "list", "instruments")
        assert "guitar" in out
        assert "dadgad" in out


class TestErrors:
    """Tests for error reporting."""

    def test_bad_note(self, capsys) -> None:
        """Parse errors print and exit 1."""
        status, out = run(capsys, "notes", "H", "M3")
        assert status == 1
        assert "Error" in out
        assert "'H' is not a valid pitch class" in out

    def test_unknown_scale(self, capsys) -> None:
        """Unknown catalog names exit 1."""
        status, out = run(capsys, "scale", "bebop", "C")
        assert status == 1
        assert "Scale formula 'bebop' not found" in out

    def test_bad_window(self, capsys) -> None:
        """Fret windows past the neck exit 1."""
        status, _ = run(capsys, "fretboard", "chord", "major", "C", "--fret", "21")
        assert status == 1

    def test_bad_config(self, capsys, temp_dir: Path) -> None:
        """An invalid config file exits 1."""
        path = temp_dir / "config.yaml"
        path.write_text("fret_count: -3\n")
        status, out = run(capsys, "--config", str(path), "pitch", "C4")
        assert status == 1
        assert "invalid" in out

    def test_config_default_octave(self, capsys, temp_dir: Path) -> None:
        """The config supplies the octave for bare note names."""
        path = temp_dir / "config.yaml"
        path.write_text("default_octave: 2\n")
        status, out = run(capsys, "--config", str(path), "pitch", "E")
        assert status == 0
        assert "E2" in out
