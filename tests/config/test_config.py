# Copyright 2026 ExprScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for scan settings loading."""

from pathlib import Path

import pytest

from exprscan.config import (
    DEBUG_ENV_VAR,
    SETTINGS_FILE_NAME,
    ConfigError,
    ScanSettings,
    load_settings,
    resolve_settings,
)

# ###############
# Helpers
# ###############


def _write_settings(tmp_path: Path, content: str) -> Path:
    """Write a settings file and return its path."""
    settings_file = tmp_path / SETTINGS_FILE_NAME
    settings_file.write_text(content, encoding="utf-8")
    return settings_file


# ###############
# Normal Cases
# ###############


def test_settings_file_name_constant():
    """SETTINGS_FILE_NAME has the expected value."""
    assert SETTINGS_FILE_NAME == ".exprscan.yaml"


def test_defaults():
    """Settings default to no dump and dropping trailing runs."""
    settings = ScanSettings()
    assert settings.debug is False
    assert settings.flush_trailing is False


def test_empty_file_yields_defaults(tmp_path: Path) -> None:
    """An empty YAML file is treated as default settings."""
    assert load_settings(_write_settings(tmp_path, "")) == ScanSettings()


def test_load_all_fields(tmp_path: Path) -> None:
    """Both fields are read, using the dashed key for flush-trailing."""
    settings = load_settings(_write_settings(tmp_path, "debug: true\nflush-trailing: true\n"))
    assert settings.debug is True
    assert settings.flush_trailing is True


def test_populate_by_field_name():
    """The model also accepts the Python field name."""
    assert ScanSettings(flush_trailing=True).flush_trailing is True


# ###############
# Error Cases
# ###############


def test_missing_file_raises(tmp_path: Path) -> None:
    """A missing settings file raises ConfigError."""
    with pytest.raises(ConfigError, match="Cannot read settings file"):
        load_settings(tmp_path / "missing.yaml")


def test_invalid_yaml_raises(tmp_path: Path) -> None:
    """Malformed YAML raises ConfigError."""
    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_settings(_write_settings(tmp_path, "debug: [unclosed\n"))


def test_unknown_key_raises(tmp_path: Path) -> None:
    """Unknown keys are rejected."""
    with pytest.raises(ConfigError, match="Invalid settings file"):
        load_settings(_write_settings(tmp_path, "verbose: true\n"))


def test_non_mapping_raises(tmp_path: Path) -> None:
    """A top-level list is rejected."""
    with pytest.raises(ConfigError):
        load_settings(_write_settings(tmp_path, "- debug\n"))


def test_wrong_type_raises(tmp_path: Path) -> None:
    """A non-boolean value is rejected."""
    with pytest.raises(ConfigError):
        load_settings(_write_settings(tmp_path, "debug: [1, 2]\n"))


# ###############
# Environment
# ###############


def test_resolve_without_file_or_env():
    """Without a file or DEBUG, defaults apply."""
    assert resolve_settings(None, {}) == ScanSettings()


def test_debug_env_enables_dump():
    """DEBUG enables the dump whatever its value."""
    assert resolve_settings(None, {DEBUG_ENV_VAR: ""}).debug is True
    assert resolve_settings(None, {DEBUG_ENV_VAR: "0"}).debug is True


def test_env_combines_with_file(tmp_path: Path) -> None:
    """File settings are kept when DEBUG is set."""
    path = _write_settings(tmp_path, "flush-trailing: true\n")
    settings = resolve_settings(path, {DEBUG_ENV_VAR: "1"})
    assert settings.debug is True
    assert settings.flush_trailing is True


def test_env_absent_keeps_file_debug(tmp_path: Path) -> None:
    """A dump requested by the file is not disabled by a missing DEBUG."""
    path = _write_settings(tmp_path, "debug: true\n")
    assert resolve_settings(path, {}).debug is True
