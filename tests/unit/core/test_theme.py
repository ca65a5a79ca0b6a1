"""Unit tests for theme loading."""

import tomllib
from pathlib import Path

import pytest
from marklink.core.theme import ThemeColors, get_bundled_theme_path, get_rich_theme, load_theme
from pydantic import ValidationError


class TestThemeColors:
    """Tests for ThemeColors validation."""

    def test_defaults_are_valid(self) -> None:
        colors = ThemeColors()
        assert colors.link.startswith("#")

    @pytest.mark.parametrize("value", ["#abc", "#A1B2C3", " #ffffff "])
    def test_valid_hex(self, value: str) -> None:
        assert ThemeColors(info=value).info == value.strip()

    @pytest.mark.parametrize("value", ["red", "#12", "#gggggg", "#1234567"])
    def test_invalid_hex_rejected(self, value: str) -> None:
        with pytest.raises(ValidationError):
            ThemeColors(info=value)

    def test_non_string_rejected(self) -> None:
        with pytest.raises(ValidationError, match="must be a string"):
            ThemeColors(info=123)  # type: ignore[arg-type]

    def test_unknown_key_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ThemeColors(sparkle="#ffffff")  # type: ignore[call-arg]


class TestLoadTheme:
    """Tests for load_theme."""

    def test_bundled_theme_exists(self) -> None:
        assert Path(str(get_bundled_theme_path())).name == "theme.toml"
        assert load_theme() == ThemeColors(**_bundled_colors())

    def test_user_override_is_partial(self, isolated_xdg: Path) -> None:
        user_theme = isolated_xdg / "config" / "marklink" / "theme.toml"
        user_theme.parent.mkdir(parents=True)
        user_theme.write_text('[colors]\nlink = "#123456"\n')

        colors = load_theme()

        assert colors.link == "#123456"
        assert colors.target == _bundled_colors()["target"]

    def test_invalid_user_theme_falls_back(self, isolated_xdg: Path) -> None:
        user_theme = isolated_xdg / "config" / "marklink" / "theme.toml"
        user_theme.parent.mkdir(parents=True)
        user_theme.write_text('[colors]\nlink = "green"\n')

        assert load_theme() == ThemeColors()

    def test_unparsable_user_theme_ignored(self, isolated_xdg: Path) -> None:
        user_theme = isolated_xdg / "config" / "marklink" / "theme.toml"
        user_theme.parent.mkdir(parents=True)
        user_theme.write_text("[colors\n")

        assert load_theme() == ThemeColors(**_bundled_colors())


class TestGetRichTheme:
    def test_styles_present(self) -> None:
        theme = get_rich_theme(ThemeColors())

        for name in ("success", "warning", "error", "info", "link", "target", "muted"):
            assert name in theme.styles


def _bundled_colors() -> dict[str, str]:
    with open(str(get_bundled_theme_path()), "rb") as f:
        return tomllib.load(f)["colors"]
