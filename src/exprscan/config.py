# Copyright 2026 ExprScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Scan settings loaded from an optional YAML file and the environment."""

from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

# ###############
# Public Interface
# ###############

SETTINGS_FILE_NAME = ".exprscan.yaml"

DEBUG_ENV_VAR = "DEBUG"


class ConfigError(Exception):
    """Raised when the settings file cannot be read or is invalid."""


class ScanSettings(BaseModel):
    """Options controlling a tokenizer run.

    Attributes:
        debug: Dump the token stream after tokenizing.
        flush_trailing: Emit a token still in progress at the end of the input.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    debug: bool = False
    flush_trailing: bool = Field(alias="flush-trailing", default=False)


def load_settings(path: Path) -> ScanSettings:
    """Load and validate a settings file.

    An empty file yields the default settings.

    Args:
        path: Path to the ``.exprscan.yaml`` file.

    Returns:
        A validated ScanSettings instance.

    Raises:
        ConfigError: If the file cannot be read, contains invalid YAML,
            or does not conform to the expected schema.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read settings file '{path}': {exc}") from exc

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in settings file '{path}': {exc}") from exc

    if data is None:
        data = {}

    try:
        return ScanSettings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid settings file '{path}': {exc}") from exc


def resolve_settings(path: Path | None, environ: Mapping[str, str]) -> ScanSettings:
    """Combine the settings file (if any) with the environment.

    The ``DEBUG`` variable enables the token dump when present, whatever its
    value; it never disables a dump requested by the file.

    Raises:
        ConfigError: If *path* is given and cannot be loaded.
    """
    settings = load_settings(path) if path is not None else ScanSettings()
    if DEBUG_ENV_VAR in environ:
        settings = settings.model_copy(update={"debug": True})
    return settings
