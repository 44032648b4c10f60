#!/usr/bin/env python3
"""
bach-theory command line.

Prints notes, intervals, scales, chords and fretboard fingerings computed
from the catalog. Note and interval lists may be given as separate
arguments or as one comma-separated argument.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from bach_theory.catalog import Registry
from bach_theory.config import TheoryConfig, load_config
from bach_theory.constants import AccidentalMode
from bach_theory.core import (
    Chord,
    PitchClass,
    Scale,
    intervals_from_root,
    parse_intervals,
    parse_pitch_classes,
    parse_pitches,
)
from bach_theory.errors import MusicTheoryError

logger = logging.getLogger(__name__)

console = Console()


@dataclass(frozen=True)
class Context:
    """What every command needs: settings, catalog and spelling preference."""

    config: TheoryConfig
    registry: Registry
    mode: AccidentalMode


def _joined(values: Sequence[str]) -> str:
    return ",".join(values)


def _styled(values: Iterable[object]) -> str:
    return ", ".join(f"[yellow]{value}[/yellow]" for value in values)


def _print_list(prompt: str, values: Iterable[object]) -> None:
    console.print(f"{prompt}{_styled(values)}")


def _intervals_row(intervals: Iterable[object]) -> list[str]:
    return [format(interval, "Sq") for interval in intervals]


# ============================================================================
# Commands
# ============================================================================


def cmd_notes(args: argparse.Namespace, context: Context) -> None:
    root = PitchClass.parse(args.root)
    intervals = parse_intervals(_joined(args.intervals))
    _print_list("Notes:     ", [root.add(interval, context.mode) for interval in intervals])
    _print_list("Intervals: ", _intervals_row(intervals))


def cmd_intervals(args: argparse.Namespace, context: Context) -> None:
    pitch_classes = parse_pitch_classes(_joined(args.notes))
    _print_list("Notes:     ", pitch_classes)
    _print_list("Intervals: ", _intervals_row(intervals_from_root(pitch_classes)))


def cmd_scale(args: argparse.Namespace, context: Context) -> None:
    formula = context.registry.scale_formulas[args.name]
    _print_list(f"{formula.name} scale => ", formula.intervals)
    for root in parse_pitch_classes(_joined(args.roots)):
        scale = Scale(root, formula, context.mode)
        _print_list(f"  {root} {formula.name}: ", scale.pitch_classes)


def cmd_scales_containing(args: argparse.Namespace, context: Context) -> None:
    pitch_classes = parse_pitch_classes(_joined(args.notes))
    _print_list("Scales containing: ", pitch_classes)

    scales = context.registry.scales_containing(pitch_classes)
    if not scales:
        console.print("[dim]No scales found[/dim]")
        return

    table = Table(title="Scales")
    table.add_column("Scale", style="cyan")
    table.add_column("Notes", style="yellow")
    table.add_column("Intervals", style="green")
    for scale in scales:
        table.add_row(
            scale.name,
            ", ".join(str(pc) for pc in scale.pitch_classes),
            ", ".join(_intervals_row(scale.formula.intervals)),
        )
    console.print(table)


def cmd_chord(args: argparse.Namespace, context: Context) -> None:
    formula = context.registry.chord_formulas[args.name]
    root = PitchClass.parse(args.root)
    chord = Chord(root, formula, args.inversion, context.mode)
    _print_list(f"{chord.name} ({formula.name}): ", chord.pitch_classes)
    _print_list("Intervals: ", _intervals_row(formula.intervals))


def cmd_fretboard(args: argparse.Namespace, context: Context) -> None:
    config = context.config
    instrument = context.registry.create_instrument(
        args.instrument or config.instrument,
        config.fret_count,
        args.tuning or config.tuning,
    )
    span = args.span if args.span is not None else config.fret_span
    root = PitchClass.parse(args.root)

    if args.kind == "chord":
        chord = Chord(root, context.registry.chord_formulas[args.name], mode=context.mode)
        title = chord.name
        fingerings = list(instrument.render_chord(chord, args.fret, span))
    else:
        scale = Scale(root, context.registry.scale_formulas[args.name], context.mode)
        title = scale.name
        fingerings = list(instrument.render_scale(scale, args.fret, span))

    console.print(f"[bold]{title}[/bold] on {instrument}")
    table = Table()
    table.add_column("String", justify="right", style="cyan")
    table.add_column("Fret", justify="right")
    table.add_column("Pitch", style="yellow")
    for fingering in fingerings:
        if fingering.is_muted:
            table.add_row(str(fingering.string), "x", "")
        else:
            table.add_row(str(fingering.string), str(fingering.position), str(fingering.pitch))
    console.print(table)
    console.print(" ".join(str(fingering) for fingering in fingerings))


def cmd_pitch(args: argparse.Namespace, context: Context) -> None:
    pitches = parse_pitches(_joined(args.pitches), context.config.default_octave, context.mode)

    table = Table(title="Pitches")
    table.add_column("Pitch", style="cyan")
    table.add_column("Absolute", justify="right")
    table.add_column("MIDI", justify="right")
    table.add_column("Frequency", justify="right", style="green")
    for pitch in pitches:
        table.add_row(
            str(pitch), str(pitch.absolute_value), str(pitch.midi), f"{pitch.frequency:.2f}"
        )
    console.print(table)


def cmd_list(args: argparse.Namespace, context: Context) -> None:
    registry = context.registry
    table = Table(title=args.kind.capitalize())
    table.add_column("Key", style="cyan")
    table.add_column("Name")

    if args.kind == "scales":
        table.add_column("Formula", style="yellow")
        table.add_column("Categories")
        table.add_column("Aliases")
        for formula in registry.scale_formulas:
            table.add_row(
                formula.key,
                formula.name,
                ", ".join(str(interval) for interval in formula.intervals),
                ", ".join(sorted(formula.categories)),
                ", ".join(sorted(formula.aliases)),
            )
    elif args.kind == "chords":
        table.add_column("Symbol", style="green")
        table.add_column("Formula", style="yellow")
        for chord_formula in registry.chord_formulas:
            table.add_row(
                chord_formula.key,
                chord_formula.name,
                chord_formula.symbol,
                ", ".join(str(interval) for interval in chord_formula.intervals),
            )
    else:
        table.add_column("Strings", justify="right")
        table.add_column("Tunings", style="yellow")
        for definition in registry.instrument_definitions:
            table.add_row(
                definition.key,
                definition.name,
                str(definition.string_count),
                ", ".join(tuning.key for tuning in definition.tunings),
            )
    console.print(table)


# ============================================================================
# Entry point
# ============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bach-theory",
        description="Music theory calculator: notes, intervals, scales, chords and fretboards",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--config", help="YAML config file (default: $BACH_THEORY_CONFIG)")
    parser.add_argument(
        "--flats", action="store_true", help="Spell computed notes with flats"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    notes = subparsers.add_parser("notes", help="Notes generated from a root and intervals")
    notes.add_argument("root", help="Root note, e.g. C or Eb")
    notes.add_argument("intervals", nargs="+", help="Intervals, e.g. P1 M3 P5 or 1,3,5")
    notes.set_defaults(handler=cmd_notes)

    intervals = subparsers.add_parser("intervals", help="Intervals of each note from the first")
    intervals.add_argument("notes", nargs="+", help="Notes, e.g. C E G")
    intervals.set_defaults(handler=cmd_intervals)

    scale = subparsers.add_parser("scale", help="A scale spelled from one or more roots")
    scale.add_argument("name", help="Scale key, name or alias")
    scale.add_argument("roots", nargs="+", help="Scale roots")
    scale.set_defaults(handler=cmd_scale)

    containing = subparsers.add_parser(
        "scales-containing", help="Every catalog scale containing the notes"
    )
    containing.add_argument("notes", nargs="+", help="Notes to search for")
    containing.set_defaults(handler=cmd_scales_containing)

    chord = subparsers.add_parser("chord", help="Chord tones")
    chord.add_argument("name", help="Chord key or name")
    chord.add_argument("root", help="Chord root")
    chord.add_argument("--inversion", type=int, default=0, help="Inversion (0 = root position)")
    chord.set_defaults(handler=cmd_chord)

    fretboard = subparsers.add_parser("fretboard", help="Fingerings on a stringed instrument")
    fretboard.add_argument("kind", choices=["chord", "scale"])
    fretboard.add_argument("name", help="Chord or scale key or name")
    fretboard.add_argument("root", help="Root note")
    fretboard.add_argument("--fret", type=int, default=0, help="First fret of the window")
    fretboard.add_argument("--span", type=int, help="Frets in the window")
    fretboard.add_argument("--instrument", help="Instrument key")
    fretboard.add_argument("--tuning", help="Tuning key")
    fretboard.set_defaults(handler=cmd_fretboard)

    pitch = subparsers.add_parser("pitch", help="Absolute value, MIDI number and frequency")
    pitch.add_argument("pitches", nargs="+", help="Pitches, e.g. A4 C#3 60")
    pitch.set_defaults(handler=cmd_pitch)

    listing = subparsers.add_parser("list", help="List catalog entries")
    listing.add_argument("kind", choices=["scales", "chords", "instruments"])
    listing.set_defaults(handler=cmd_list)

    return parser


def _create_context(args: argparse.Namespace) -> Context:
    config = load_config(args.config)
    logger.debug(f"Using config: {config.model_dump()}")
    if config.library_path or config.project_path:
        registry = Registry(config.library_path, config.project_path)
    else:
        registry = Registry.default()
    mode = AccidentalMode.FAVOR_FLATS if args.flats else config.accidental_mode
    return Context(config, registry, mode)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line. Returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    handler: Callable[[argparse.Namespace, Context], None] = args.handler
    try:
        handler(args, _create_context(args))
    except MusicTheoryError as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
