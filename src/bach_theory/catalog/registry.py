"""
Registry - discovers and loads the named scale, chord and instrument catalog.

Entries can come from:
1. Built-in library (shipped with package)
2. Project directory (user's own YAML files with the same names)

Project entries override library entries with the same key.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path
from typing import Any, Generic, TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from bach_theory.constants import ErrorMessages
from bach_theory.core.chord import ChordFormula
from bach_theory.core.pitch_class import PitchClass
from bach_theory.core.scale import Scale, ScaleFormula, ScaleFormulaBuilder
from bach_theory.errors import CatalogError, MusicTheoryError
from bach_theory.instruments.definition import (
    StringedInstrumentDefinition,
    StringedInstrumentDefinitionBuilder,
)
from bach_theory.instruments.stringed import StringedInstrument
from bach_theory.models.library import (
    ChordLibrary,
    ChordRecord,
    InstrumentLibrary,
    InstrumentRecord,
    ScaleLibrary,
    ScaleRecord,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)

LIBRARY_PATH = Path(__file__).parent / "library"

SCALES_FILE = "scales.yaml"
CHORDS_FILE = "chords.yaml"
INSTRUMENTS_FILE = "instruments.yaml"


def _normalize(name: str) -> str:
    return "".join(name.split()).casefold()


def _key_and_name(item: Any) -> Iterable[str]:
    return (item.key, item.name)


def _scale_names(formula: ScaleFormula) -> Iterable[str]:
    return (formula.key, formula.name, *formula.aliases)


class KeyedCollection(Generic[T]):
    """
    Items looked up by key, name or alias, ignoring case and whitespace.

    Adding an item whose key already exists replaces it. Keys win over
    names and aliases when they collide.
    """

    def __init__(
        self,
        not_found: str,
        names: Callable[[T], Iterable[str]] = _key_and_name,
        items: Iterable[T] = (),
    ) -> None:
        self._not_found = not_found
        self._names = names
        self._items: dict[str, T] = {}
        for item in items:
            self.add(item)

    def add(self, item: T) -> None:
        self._items[_normalize(item.key)] = item  # type: ignore[attr-defined]

    def get(self, name: str, default: T | None = None) -> T | None:
        wanted = _normalize(name)
        if wanted in self._items:
            return self._items[wanted]
        for item in self._items.values():
            if any(_normalize(n) == wanted for n in self._names(item)):
                return item
        return default

    def __getitem__(self, name: str) -> T:
        item = self.get(name)
        if item is None:
            raise CatalogError(self._not_found.format(key=name))
        return item

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None

    def __iter__(self) -> Iterator[T]:
        return iter(self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def keys(self) -> list[str]:
        return [item.key for item in self._items.values()]  # type: ignore[attr-defined]


class Registry:
    """
    The catalog of scale formulas, chord formulas and instrument definitions.

    Each collection is loaded on first use and cached.
    """

    _default: Registry | None = None

    def __init__(
        self,
        library_path: Path | None = None,
        project_path: Path | None = None,
    ):
        """
        Initialize the registry.

        Args:
            library_path: Path to the built-in library
            project_path: Path to project overrides (optional)
        """
        self.library_path = library_path or LIBRARY_PATH
        self.project_path = project_path
        self._scale_formulas: KeyedCollection[ScaleFormula] | None = None
        self._chord_formulas: KeyedCollection[ChordFormula] | None = None
        self._instruments: KeyedCollection[StringedInstrumentDefinition] | None = None

    @classmethod
    def default(cls) -> Registry:
        """The shared registry over the built-in library."""
        if cls._default is None:
            cls._default = cls()
        return cls._default

    @property
    def scale_formulas(self) -> KeyedCollection[ScaleFormula]:
        if self._scale_formulas is None:
            collection: KeyedCollection[ScaleFormula] = KeyedCollection(
                ErrorMessages.SCALE_FORMULA_NOT_FOUND, _scale_names
            )
            for record in self._records(SCALES_FILE, ScaleLibrary, "scales"):
                self._add(collection, self._build_scale, record)
            logger.debug(f"Loaded {len(collection)} scale formulas")
            self._scale_formulas = collection
        return self._scale_formulas

    @property
    def chord_formulas(self) -> KeyedCollection[ChordFormula]:
        if self._chord_formulas is None:
            collection: KeyedCollection[ChordFormula] = KeyedCollection(
                ErrorMessages.CHORD_FORMULA_NOT_FOUND
            )
            for record in self._records(CHORDS_FILE, ChordLibrary, "chords"):
                self._add(collection, self._build_chord, record)
            logger.debug(f"Loaded {len(collection)} chord formulas")
            self._chord_formulas = collection
        return self._chord_formulas

    @property
    def instrument_definitions(self) -> KeyedCollection[StringedInstrumentDefinition]:
        if self._instruments is None:
            collection: KeyedCollection[StringedInstrumentDefinition] = KeyedCollection(
                ErrorMessages.INSTRUMENT_NOT_FOUND
            )
            for record in self._records(INSTRUMENTS_FILE, InstrumentLibrary, "instruments"):
                self._add(collection, self._build_instrument, record)
            logger.debug(f"Loaded {len(collection)} instrument definitions")
            self._instruments = collection
        return self._instruments

    def create_instrument(
        self, key: str, fret_count: int, tuning: str | None = None
    ) -> StringedInstrument:
        """Create an instrument from the catalog. Standard tuning by default."""
        return StringedInstrument.create(self.instrument_definitions[key], fret_count, tuning)

    def scales_containing(self, pitch_classes: Iterable[PitchClass]) -> list[Scale]:
        """Every catalog scale, on any root, that contains all the pitch classes."""
        return list(Scale.scales_containing(pitch_classes, self.scale_formulas))

    def clear_cache(self) -> None:
        """Forget loaded collections so the next access reloads the YAML."""
        self._scale_formulas = None
        self._chord_formulas = None
        self._instruments = None

    def _records(
        self, filename: str, model: type[M], field: str
    ) -> Iterator[tuple[Path, bool, Any]]:
        # Library entries first, then project entries (which override)
        library_file = self.library_path / filename
        if library_file.exists():
            library = self._load_file(library_file, model, strict=True)
            for record in getattr(library, field):
                yield library_file, True, record

        if self.project_path:
            project_file = self.project_path / filename
            if project_file.exists():
                project = self._load_file(project_file, model, strict=False)
                if project is not None:
                    logger.info(f"Loading project overrides from {project_file}")
                    for record in getattr(project, field):
                        yield project_file, False, record

    def _load_file(self, path: Path, model: type[M], strict: bool) -> M | None:
        """Load and validate a YAML file. Library errors raise, project errors are skipped."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
            return model.model_validate(data or {})
        except (OSError, yaml.YAMLError, ValidationError) as exc:
            if strict:
                raise CatalogError(
                    ErrorMessages.LIBRARY_INVALID.format(path=path, error=exc)
                ) from exc
            logger.warning(ErrorMessages.LIBRARY_INVALID.format(path=path, error=exc))
            return None

    @staticmethod
    def _add(
        collection: KeyedCollection[T],
        build: Callable[[Any], T],
        entry: tuple[Path, bool, Any],
    ) -> None:
        path, strict, record = entry
        try:
            collection.add(build(record))
        except MusicTheoryError as exc:
            if strict:
                raise CatalogError(
                    ErrorMessages.LIBRARY_INVALID.format(path=path, error=exc)
                ) from exc
            logger.warning(ErrorMessages.LIBRARY_INVALID.format(path=path, error=exc))

    @staticmethod
    def _build_scale(record: ScaleRecord) -> ScaleFormula:
        builder = ScaleFormulaBuilder(record.name, record.key)
        return (
            builder.set_intervals(record.formula)
            .add_categories(record.categories)
            .add_aliases(record.aliases)
            .build()
        )

    @staticmethod
    def _build_chord(record: ChordRecord) -> ChordFormula:
        return ChordFormula.from_text(record.key, record.name, record.formula, symbol=record.symbol)

    @staticmethod
    def _build_instrument(record: InstrumentRecord) -> StringedInstrumentDefinition:
        builder = StringedInstrumentDefinitionBuilder(record.key, record.name, record.string_count)
        for tuning in record.tunings:
            builder.add_tuning(tuning.key, tuning.name, tuning.pitches)
        return builder.build()
