"""shadcn/ui theme palettes and CSS variable generation."""

import colorsys
import re
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Union

from devtools.core.exceptions import ValidationError

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_RADIUS_RE = re.compile(r"^\d+(\.\d+)?rem$")


@dataclass(frozen=True)
class ColorValue:
    hex: str
    hsl: str

    @classmethod
    def from_hex(cls, value: str) -> "ColorValue":
        return cls(hex=normalize_hex(value), hsl=hex_to_hsl(value))


ThemeValue = Union[ColorValue, str]
Theme = Dict[str, ThemeValue]


def _c(hex_value: str, hsl: str) -> ColorValue:
    return ColorValue(hex=hex_value, hsl=hsl)


DEFAULT_LIGHT_THEME: Theme = {
    "background": _c("#ffffff", "0 0% 100%"),
    "foreground": _c("#09090b", "240 10% 3.9%"),
    "card": _c("#ffffff", "0 0% 100%"),
    "card-foreground": _c("#09090b", "240 10% 3.9%"),
    "popover": _c("#ffffff", "0 0% 100%"),
    "popover-foreground": _c("#09090b", "240 10% 3.9%"),
    "primary": _c("#18181b", "240 5.9% 10%"),
    "primary-foreground": _c("#fafafa", "0 0% 98%"),
    "secondary": _c("#f4f4f5", "240 4.8% 95.9%"),
    "secondary-foreground": _c("#18181b", "240 5.9% 10%"),
    "muted": _c("#f4f4f5", "240 4.8% 95.9%"),
    "muted-foreground": _c("#71717a", "240 3.8% 46.1%"),
    "accent": _c("#f4f4f5", "240 4.8% 95.9%"),
    "accent-foreground": _c("#18181b", "240 5.9% 10%"),
    "destructive": _c("#ef4444", "0 84.2% 60.2%"),
    "destructive-foreground": _c("#fafafa", "0 0% 98%"),
    "border": _c("#e4e4e7", "240 5.9% 90%"),
    "input": _c("#e4e4e7", "240 5.9% 90%"),
    "ring": _c("#18181b", "240 10% 3.9%"),
    "radius": "0.5rem",
    "chart-1": _c("#3b82f6", "217 91% 60%"),
    "chart-2": _c("#10b981", "152 76% 40%"),
    "chart-3": _c("#f59e0b", "35 92% 50%"),
    "chart-4": _c("#8b5cf6", "258 90% 66%"),
    "chart-5": _c("#ef4444", "0 84% 60%"),
}

DEFAULT_DARK_THEME: Theme = {
    "background": _c("#09090b", "240 10% 3.9%"),
    "foreground": _c("#fafafa", "0 0% 98%"),
    "card": _c("#09090b", "240 10% 3.9%"),
    "card-foreground": _c("#fafafa", "0 0% 98%"),
    "popover": _c("#09090b", "240 10% 3.9%"),
    "popover-foreground": _c("#fafafa", "0 0% 98%"),
    "primary": _c("#fafafa", "0 0% 98%"),
    "primary-foreground": _c("#18181b", "240 5.9% 10%"),
    "secondary": _c("#27272a", "240 3.7% 15.9%"),
    "secondary-foreground": _c("#fafafa", "0 0% 98%"),
    "muted": _c("#27272a", "240 3.7% 15.9%"),
    "muted-foreground": _c("#a1a1aa", "240 5% 64.9%"),
    "accent": _c("#27272a", "240 3.7% 15.9%"),
    "accent-foreground": _c("#fafafa", "0 0% 98%"),
    "destructive": _c("#7f1d1d", "0 62.8% 30.6%"),
    "destructive-foreground": _c("#fafafa", "0 0% 98%"),
    "border": _c("#27272a", "240 3.7% 15.9%"),
    "input": _c("#27272a", "240 3.7% 15.9%"),
    "ring": _c("#d4d4d8", "240 4.9% 83.9%"),
    "radius": "0.5rem",
    "chart-1": _c("#3b82f6", "217 91% 60%"),
    "chart-2": _c("#10b981", "152 76% 40%"),
    "chart-3": _c("#f59e0b", "35 92% 50%"),
    "chart-4": _c("#8b5cf6", "258 90% 66%"),
    "chart-5": _c("#ef4444", "0 84% 60%"),
}


def normalize_hex(value: str) -> str:
    """Return a lowercase #rrggbb string, expanding #rgb shorthand."""
    match = _HEX_RE.match(value.strip())
    if not match:
        raise ValidationError(
            f"Invalid hex color: {value!r}",
            details={"field_value": value, "constraints": "#rgb or #rrggbb"},
        )
    digits = match.group(1).lower()
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return f"#{digits}"


def _fmt(value: float) -> str:
    rounded = round(value, 1)
    if rounded == int(rounded):
        return str(int(rounded))
    return f"{rounded:.1f}"


def hex_to_hsl(value: str) -> str:
    """Convert a hex color to the space separated "H S% L%" form shadcn uses."""
    digits = normalize_hex(value)[1:]
    r, g, b = (int(digits[i : i + 2], 16) / 255 for i in (0, 2, 4))
    h, l, s = colorsys.rgb_to_hls(r, g, b)
    return f"{_fmt(h * 360)} {_fmt(s * 100)}% {_fmt(l * 100)}%"


def css_value(value: ThemeValue) -> str:
    return value if isinstance(value, str) else value.hsl


def apply_overrides(base: Theme, overrides: Optional[Mapping[str, str]]) -> Theme:
    """
    Return a copy of base with overrides applied.

    Color keys take hex strings; `radius` takes a rem length. Unknown keys are
    rejected so typos do not silently produce unused variables.
    """
    theme = dict(base)
    for key, raw in (overrides or {}).items():
        if key not in base:
            raise ValidationError(
                f"Unknown theme variable: {key}",
                details={"field_name": key, "expected_values": sorted(base)},
            )
        if key == "radius":
            if not _RADIUS_RE.match(raw.strip()):
                raise ValidationError(
                    f"Invalid radius: {raw!r}",
                    details={"field_name": key, "constraints": "e.g. 0.5rem"},
                )
            theme[key] = raw.strip()
        else:
            theme[key] = ColorValue.from_hex(raw)
    return theme


def _block(selector: str, theme: Theme) -> str:
    lines = [f"{selector} {{"]
    lines.extend(f"  --{key}: {css_value(value)};" for key, value in theme.items())
    lines.append("}")
    return "\n".join(lines)


def generate_css(light: Optional[Theme] = None, dark: Optional[Theme] = None) -> str:
    """Render `:root` and `.dark` blocks of CSS custom properties."""
    light = DEFAULT_LIGHT_THEME if light is None else light
    dark = DEFAULT_DARK_THEME if dark is None else dark
    return _block(":root", light) + "\n\n" + _block(".dark", dark)


def theme_values(theme: Theme) -> Dict[str, str]:
    return {key: css_value(value) for key, value in theme.items()}
