"""
Tests for the catalog registry and library models.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from bach_theory.catalog import KeyedCollection, Registry
from bach_theory.catalog.registry import LIBRARY_PATH
from bach_theory.core import ChordFormula, PitchClass, ScaleFormula, parse_pitch_classes
from bach_theory.errors import CatalogError
from bach_theory.models import ChordRecord, InstrumentRecord, ScaleRecord


class TestLibraryModels:
    """Tests for the YAML record models."""

    def test_scale_record(self) -> None:
        """Minimal scale record."""
        record = ScaleRecord(name="Dorian", formula="1,2,m3,4,5,6,m7")
        assert record.key is None
        assert record.aliases == []

    def test_invalid_formula(self) -> None:
        """Formulas are validated."""
        with pytest.raises(ValidationError):
            ScaleRecord(name="Bad", formula="1,P3")
        with pytest.raises(ValidationError):
            ChordRecord(key="Bad", name="Bad", formula="1,x")

    def test_invalid_tuning(self) -> None:
        """Tuning pitches are validated."""
        with pytest.raises(ValidationError):
            InstrumentRecord(
                key="lute",
                name="Lute",
                string_count=1,
                tunings=[{"key": "standard", "name": "Standard", "pitches": "H2"}],
            )

    def test_instrument_needs_a_tuning(self) -> None:
        """At least one tuning is required."""
        with pytest.raises(ValidationError):
            InstrumentRecord(key="lute", name="Lute", string_count=6, tunings=[])


class TestKeyedCollection:
    """Tests for KeyedCollection lookups."""

    def test_lookup_ignores_case_and_spaces(self) -> None:
        """Keys and names match loosely."""
        collection = KeyedCollection("'{key}' missing", items=[ChordFormula.MINOR_7])
        assert collection["minor7"] is ChordFormula.MINOR_7
        assert collection["Minor Seventh"] is ChordFormula.MINOR_7
        assert collection["MINORSEVENTH"] is ChordFormula.MINOR_7
        assert "minor 7" in collection
        assert "Dominant7" not in collection

    def test_missing_key(self) -> None:
        """Unknown names raise CatalogError."""
        collection = KeyedCollection("'{key}' missing", items=[ChordFormula.MAJOR])
        assert collection.get("Nope") is None
        with pytest.raises(CatalogError, match="'Nope' missing"):
            collection["Nope"]

    def test_add_replaces_same_key(self) -> None:
        """A later item with the same key wins."""
        replacement = ChordFormula.from_text("Major", "Major Triad", "1,3,5")
        collection = KeyedCollection("'{key}'", items=[ChordFormula.MAJOR, replacement])
        assert len(collection) == 1
        assert collection["major"].name == "Major Triad"
        assert collection.keys() == ["Major"]


class TestRegistry:
    """Tests for the built-in catalog."""

    def test_default_is_shared(self) -> None:
        """default() returns the same instance."""
        assert Registry.default() is Registry.default()

    def test_library_path(self, registry: Registry) -> None:
        """The built-in library ships with the package."""
        assert registry.library_path == LIBRARY_PATH
        assert (LIBRARY_PATH / "scales.yaml").exists()

    def test_scale_formulas(self, registry: Registry) -> None:
        """Scales load with derived categories."""
        major = registry.scale_formulas["Major"]
        assert major.intervals == ScaleFormula.MAJOR.intervals
        assert major.has_category("Diatonic")
        assert registry.scale_formulas["NaturalMinor"].name == "Natural Minor"
        assert len(registry.scale_formulas) >= 11

    def test_scale_aliases(self, registry: Registry) -> None:
        """Scales are found by alias."""
        assert registry.scale_formulas["Ionian"].key == "Major"
        assert registry.scale_formulas["minor"].key == "NaturalMinor"
        assert registry.scale_formulas["natural minor"].key == "NaturalMinor"

    def test_chord_formulas(self, registry: Registry) -> None:
        """Chords load with their symbols."""
        minor7 = registry.chord_formulas["Minor7"]
        assert minor7.symbol == "m7"
        assert minor7 == ChordFormula.MINOR_7
        assert len(registry.chord_formulas) == 20

    def test_instrument_definitions(self, registry: Registry) -> None:
        """Guitar and bass with their tunings."""
        guitar = registry.instrument_definitions["guitar"]
        assert guitar.string_count == 6
        assert str(guitar.standard) == "Standard: E4,B3,G3,D3,A2,E2"
        assert guitar.tuning("Drop D").key == "dropd"
        assert registry.instrument_definitions["Bass Guitar"].string_count == 4

    def test_missing_entries(self, registry: Registry) -> None:
        """Unknown keys raise CatalogError."""
        with pytest.raises(CatalogError):
            registry.scale_formulas["Bebop"]
        with pytest.raises(CatalogError):
            registry.chord_formulas["Sus2"]
        with pytest.raises(CatalogError):
            registry.create_instrument("banjo", 22)

    def test_collections_are_cached(self, registry: Registry) -> None:
        """Collections load once until the cache is cleared."""
        first = registry.scale_formulas
        assert registry.scale_formulas is first
        registry.clear_cache()
        assert registry.scale_formulas is not first

    def test_scales_containing(self, registry: Registry) -> None:
        """Search across the catalog."""
        scales = registry.scales_containing(parse_pitch_classes("C,D,E,F,G,A,B"))
        found = {scale.name for scale in scales}
        assert "C" in found
        assert "A Natural Minor" in found
        assert "D Dorian" in found
        assert all(scale.contains_all(parse_pitch_classes("C,E,G")) for scale in scales)

    def test_create_instrument(self, registry: Registry) -> None:
        """Instruments come from the catalog with a tuning."""
        guitar = registry.create_instrument("guitar", 20, "dropd")
        assert guitar.tuning.key == "dropd"
        assert guitar.fret_count == 20
        assert str(guitar.tuning[6]) == "D2"


class TestProjectOverrides:
    """Tests for project directory overrides."""

    def test_project_adds_and_overrides(self, temp_dir: Path) -> None:
        """Project entries extend the library and replace matching keys."""
        (temp_dir / "scales.yaml").write_text(
            "scales:\n"
            "  - name: Hirajoshi\n"
            "    formula: '1,2,m3,5,m6'\n"
            "  - key: Major\n"
            "    name: Major\n"
            "    formula: '1,2,3,5,6'\n"
        )
        registry = Registry(project_path=temp_dir)
        hirajoshi = registry.scale_formulas["hirajoshi"]
        assert [str(pc) for pc in hirajoshi.pitch_classes(PitchClass.A)] == [
            "A", "B", "C", "E", "F",
        ]
        assert len(registry.scale_formulas["Major"]) == 5
        assert registry.scale_formulas["Dorian"].name == "Dorian"

    def test_invalid_project_file_is_skipped(self, temp_dir: Path, caplog) -> None:
        """A malformed project file logs a warning and the library is used."""
        (temp_dir / "chords.yaml").write_text("chords:\n  - key: Bad\n    formula: [\n")
        registry = Registry(project_path=temp_dir)
        assert len(registry.chord_formulas) == 20
        assert "invalid" in caplog.text

    def test_invalid_project_entry_is_skipped(self, temp_dir: Path, caplog) -> None:
        """An entry that fails to build is skipped with a warning."""
        (temp_dir / "scales.yaml").write_text(
            "scales:\n"
            "  - name: Backwards\n"
            "    formula: '1,3,2'\n"
            "  - name: Fifths\n"
            "    formula: '1,5'\n"
        )
        registry = Registry(project_path=temp_dir)
        assert "Fifths" in registry.scale_formulas
        assert "Backwards" not in registry.scale_formulas
        assert "invalid" in caplog.text

    def test_invalid_library_raises(self, temp_dir: Path) -> None:
        """A malformed built-in library is an error."""
        (temp_dir / "chords.yaml").write_text("chords:\n  - key: Bad\n    name: Bad\n")
        registry = Registry(library_path=temp_dir)
        with pytest.raises(CatalogError):
            registry.chord_formulas

    def test_missing_library_files(self, temp_dir: Path) -> None:
        """A library without files gives empty collections."""
        registry = Registry(library_path=temp_dir)
        assert len(registry.instrument_definitions) == 0
