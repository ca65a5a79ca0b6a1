"""Unit tests for marklink configuration.

Tests field-by-field normalization, TOML loading and atomic saving.
"""

import logging
import tomllib
from pathlib import Path
from unittest.mock import patch

import pytest
from marklink.core.config import (
    DEFAULT_EXCLUDE_FOLDERS,
    DEFAULT_MARKER_FOLDERS,
    ConfigError,
    ConfigParseError,
    DestinationRootMode,
    LinkerConfig,
    load_config,
    normalize_config,
    sanitize_folder_names,
    save_config,
)


class TestSanitizeFolderNames:
    """Tests for sanitize_folder_names."""

    def test_trims_and_deduplicates(self) -> None:
        result = sanitize_folder_names([" .vscode ", ".vscode", ".idea"], ["x"])
        assert result == [".vscode", ".idea"]

    def test_drops_blank_and_non_string(self) -> None:
        result = sanitize_folder_names(["", "   ", 3, None, ".vscode"], ["x"])
        assert result == [".vscode"]

    @pytest.mark.parametrize("value", [None, ".vscode", 42, {"a": 1}, [], ["", "  "], [1, 2]])
    def test_falls_back(self, value: object) -> None:
        assert sanitize_folder_names(value, ("fallback",)) == ["fallback"]


class TestNormalizeConfig:
    """Tests for normalize_config."""

    def test_defaults(self) -> None:
        config = normalize_config()

        assert config.marker_folder_names == list(DEFAULT_MARKER_FOLDERS)
        assert config.exclude_dir_names == list(DEFAULT_EXCLUDE_FOLDERS)
        assert config.follow_symlinks is False
        assert config.destination_root_mode == DestinationRootMode.PICK_WHEN_MULTIPLE

    def test_default_markers_are_vscode(self) -> None:
        assert normalize_config().marker_folder_names == [".vscode"]

    def test_default_excludes(self) -> None:
        assert set(normalize_config().exclude_dir_names) == {
            ".git",
            "node_modules",
            "venv",
            ".venv",
            "dist",
            "build",
            "out",
            "target",
            ".idea",
            ".tox",
        }

    def test_valid_values_kept(self) -> None:
        config = normalize_config(
            {
                "marker_folder_names": [".settings"],
                "exclude_dir_names": ["vendor"],
                "follow_symlinks": True,
                "destination_root_mode": "first_root",
            }
        )

        assert config.marker_folder_names == [".settings"]
        assert config.exclude_dir_names == ["vendor"]
        assert config.follow_symlinks is True
        assert config.destination_root_mode == DestinationRootMode.FIRST_ROOT

    def test_bad_field_does_not_discard_others(self) -> None:
        """One malformed value falls back alone."""
        config = normalize_config(
            {
                "marker_folder_names": "not-a-list",
                "exclude_dir_names": ["vendor"],
                "destination_root_mode": "sideways",
            }
        )

        assert config.marker_folder_names == list(DEFAULT_MARKER_FOLDERS)
        assert config.exclude_dir_names == ["vendor"]
        assert config.destination_root_mode == DestinationRootMode.PICK_WHEN_MULTIPLE

    def test_unknown_mode_logs_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="marklink"):
            normalize_config({"destination_root_mode": "sideways"})

        assert "destination_root_mode" in caplog.text

    def test_unknown_keys_ignored(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="marklink"):
            config = normalize_config({"colour": "blue"})

        assert config == LinkerConfig()
        assert "colour" in caplog.text

    @pytest.mark.parametrize("value", [True, False])
    def test_follow_symlinks_bool_kept(self, value: bool) -> None:
        assert normalize_config({"follow_symlinks": value}).follow_symlinks is value

    @pytest.mark.parametrize("value", ["false", "true", 1, 0, None, [True]])
    def test_follow_symlinks_non_bool_is_false(self, value: object) -> None:
        assert normalize_config({"follow_symlinks": value}).follow_symlinks is False

    def test_follow_symlinks_string_logs_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="marklink"):
            config = normalize_config({"follow_symlinks": "false", "exclude_dir_names": ["vendor"]})

        assert config.follow_symlinks is False
        assert config.exclude_dir_names == ["vendor"]
        assert "follow_symlinks" in caplog.text

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("pickWhenMultiple", DestinationRootMode.PICK_WHEN_MULTIPLE),
            ("firstRoot", DestinationRootMode.FIRST_ROOT),
            ("first_root", DestinationRootMode.FIRST_ROOT),
            ("FirstRoot", DestinationRootMode.PICK_WHEN_MULTIPLE),
            (["firstRoot"], DestinationRootMode.PICK_WHEN_MULTIPLE),
        ],
    )
    def test_destination_mode_spellings(self, value: object, expected: DestinationRootMode) -> None:
        assert normalize_config({"destination_root_mode": value}).destination_root_mode == expected

    def test_camel_case_mode_from_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text('destination_root_mode = "firstRoot"\n')

        assert load_config(path).destination_root_mode == DestinationRootMode.FIRST_ROOT

    def test_config_is_frozen(self) -> None:
        config = normalize_config()
        with pytest.raises(ValueError):
            config.follow_symlinks = True  # type: ignore[misc]


class TestLoadConfig:
    """Tests for load_config."""

    def test_missing_file_returns_defaults(self, tmp_path: Path) -> None:
        assert load_config(tmp_path / "missing.toml") == LinkerConfig()

    def test_default_path_used(self, tmp_path: Path) -> None:
        """Without a path, the XDG config location is read."""
        config_file = tmp_path / "xdg" / "config" / "marklink" / "config.toml"
        config_file.parent.mkdir(parents=True)
        config_file.write_text('marker_folder_names = [".settings"]\n')

        assert load_config().marker_folder_names == [".settings"]

    def test_loads_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text(
            'marker_folder_names = [".vscode", ".fleet"]\n'
            "follow_symlinks = true\n"
            'destination_root_mode = "first_root"\n'
        )

        config = load_config(path)

        assert config.marker_folder_names == [".vscode", ".fleet"]
        assert config.follow_symlinks is True
        assert config.destination_root_mode == DestinationRootMode.FIRST_ROOT
        assert config.exclude_dir_names == list(DEFAULT_EXCLUDE_FOLDERS)

    def test_invalid_toml_raises_parse_error(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("marker_folder_names = [\n")

        with pytest.raises(ConfigParseError, match="Invalid TOML syntax"):
            load_config(path)

    def test_unreadable_file_raises_config_error(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("")

        with (
            patch("builtins.open", side_effect=PermissionError("denied")),
            pytest.raises(ConfigError, match="Failed to read config"),
        ):
            load_config(path)


class TestSaveConfig:
    """Tests for save_config."""

    def test_save_and_reload(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "config.toml"
        config = LinkerConfig(
            marker_folder_names=[".settings"],
            destination_root_mode=DestinationRootMode.FIRST_ROOT,
        )

        saved = save_config(config, path)

        assert saved == path
        assert load_config(path) == config

    def test_writes_plain_toml(self, tmp_path: Path) -> None:
        path = save_config(LinkerConfig(), tmp_path / "config.toml")

        with open(path, "rb") as f:
            data = tomllib.load(f)

        assert data["destination_root_mode"] == "pick_when_multiple"
        assert data["marker_folder_names"] == [".vscode"]

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        save_config(LinkerConfig(), tmp_path / "config.toml")

        assert [p.name for p in tmp_path.iterdir()] == ["config.toml"]

    def test_write_failure_raises_config_error(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"

        with (
            patch("marklink.core.config.os.replace", side_effect=OSError("read-only")),
            pytest.raises(ConfigError, match="Failed to write config"),
        ):
            save_config(LinkerConfig(), path)

        assert not path.exists()
        assert list(tmp_path.iterdir()) == []
