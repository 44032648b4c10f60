"""
Configuration - defaults for the command line, loaded from YAML.

The file named by BACH_THEORY_CONFIG is used when no path is given;
a missing file means all defaults.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from bach_theory.constants import DEFAULT_OCTAVE, MAX_OCTAVE, MIN_OCTAVE, AccidentalMode
from bach_theory.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "BACH_THEORY_CONFIG"


class TheoryConfig(BaseModel):
    """Settings shared by the command-line commands."""

    accidental_mode: AccidentalMode = Field(
        AccidentalMode.FAVOR_SHARPS,
        description="Spelling used when arithmetic implies no letter",
    )
    default_octave: int = Field(
        DEFAULT_OCTAVE,
        ge=MIN_OCTAVE,
        le=MAX_OCTAVE,
        description="Octave assumed for pitches written without one",
    )
    instrument: str = Field("guitar", description="Instrument key for fretboard rendering")
    tuning: str = Field("standard", description="Tuning key for fretboard rendering")
    fret_count: int = Field(22, ge=1, le=36, description="Number of frets")
    fret_span: int = Field(4, ge=2, le=12, description="Frets covered by one hand position")
    library_path: Path | None = Field(None, description="Replacement for the built-in library")
    project_path: Path | None = Field(None, description="Directory of catalog overrides")

    model_config = {"frozen": True}


def load_config(path: Path | str | None = None) -> TheoryConfig:
    """
    Load configuration from a YAML file.

    Args:
        path: Config file. Defaults to $BACH_THEORY_CONFIG.

    Returns:
        The configuration; defaults when there is no file.

    Raises:
        ConfigError: The file exists but is not valid YAML or has bad values.
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR)
    if not path:
        return TheoryConfig()

    config_file = Path(path)
    if not config_file.exists():
        logger.debug(f"Config file {config_file} not found, using defaults")
        return TheoryConfig()

    try:
        with open(config_file) as f:
            data = yaml.safe_load(f)
        config = TheoryConfig.model_validate(data or {})
    except (OSError, yaml.YAMLError, ValidationError) as exc:
        raise ConfigError(f"Config file '{config_file}' is invalid: {exc}") from exc

    logger.debug(f"Loaded config from {config_file}")
    return config
