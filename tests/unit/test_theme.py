"""Tests for theme palette and CSS variable generation."""

import pytest

from devtools.core.exceptions import ValidationError
from devtools.core.theme import (
    DEFAULT_DARK_THEME,
    DEFAULT_LIGHT_THEME,
    ColorValue,
    apply_overrides,
    generate_css,
    hex_to_hsl,
    normalize_hex,
    theme_values,
)


@pytest.mark.parametrize(
    "hex_value,expected",
    [
        ("#ffffff", "0 0% 100%"),
        ("#000000", "0 0% 0%"),
        ("#ff0000", "0 100% 50%"),
        ("#808080", "0 0% 50.2%"),
        ("#2563eb", "221.2 83.2% 53.3%"),
        ("2563EB", "221.2 83.2% 53.3%"),
        ("#fff", "0 0% 100%"),
    ],
)
def test_hex_to_hsl(hex_value, expected):
    assert hex_to_hsl(hex_value) == expected


@pytest.mark.parametrize("value", ["", "#12", "#12345", "#gggggg", "rgb(0,0,0)"])
def test_normalize_hex_rejects_malformed(value):
    with pytest.raises(ValidationError) as exc_info:
        normalize_hex(value)
    assert exc_info.value.status_code == 400


def test_normalize_hex_expands_shorthand():
    assert normalize_hex(" #AbC ") == "#aabbcc"


def test_palettes_share_keys():
    assert list(DEFAULT_LIGHT_THEME) == list(DEFAULT_DARK_THEME)
    assert DEFAULT_LIGHT_THEME["radius"] == "0.5rem"


def test_generate_css_default_blocks():
    css = generate_css()

    assert css.startswith(":root {\n  --background: 0 0% 100%;\n")
    assert "\n}\n\n.dark {\n  --background: 240 10% 3.9%;\n" in css
    assert "  --radius: 0.5rem;" in css
    assert css.endswith("}")
    assert css.count("--primary:") == 2


def test_apply_overrides_converts_hex():
    theme = apply_overrides(DEFAULT_LIGHT_THEME, {"primary": "#2563EB", "radius": "1rem"})

    assert theme["primary"] == ColorValue(hex="#2563eb", hsl="221.2 83.2% 53.3%")
    assert theme["radius"] == "1rem"
    # Base palette is untouched
    assert DEFAULT_LIGHT_THEME["primary"].hex == "#18181b"


def test_apply_overrides_rejects_unknown_key():
    with pytest.raises(ValidationError, match="Unknown theme variable"):
        apply_overrides(DEFAULT_LIGHT_THEME, {"primery": "#000000"})


def test_apply_overrides_rejects_bad_radius():
    with pytest.raises(ValidationError):
        apply_overrides(DEFAULT_LIGHT_THEME, {"radius": "8px"})


def test_generate_css_with_overrides():
    light = apply_overrides(DEFAULT_LIGHT_THEME, {"primary": "#ff0000"})

    css = generate_css(light=light)

    assert "  --primary: 0 100% 50%;" in css.split(".dark")[0]
    assert "  --primary: 0 0% 98%;" in css.split(".dark")[1]


def test_theme_values():
    values = theme_values(DEFAULT_DARK_THEME)

    assert values["ring"] == "240 4.9% 83.9%"
    assert values["radius"] == "0.5rem"
