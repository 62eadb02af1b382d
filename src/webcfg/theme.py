"""
Color theme for the generated page.

A Theme is itself a plain dataclass, so it can be embedded in the
configuration object as a section and edited from the page it styles.
theme_css() turns its hex colors into Bulma 1.0 HSL custom properties.
"""

from dataclasses import dataclass, fields
import colorsys
from typing import List, Tuple


@dataclass
class Theme:
    """Bulma palette overrides. Empty or non-hex values keep Bulma's default."""
    primary: str = ""
    link: str = ""
    info: str = ""
    success: str = ""
    warning: str = ""
    danger: str = ""
    dark: str = ""
    text: str = ""


def hex_to_rgb(value: str) -> Tuple[float, float, float]:
    """Parse ``#rgb`` or ``#rrggbb`` into floats in [0, 1].

    Raises:
        ValueError: Not a valid hex color
    """
    digits = value.lstrip("#")
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    if len(digits) != 6:
        raise ValueError(f"invalid hex color {value!r}")
    r, g, b = (int(digits[i:i + 2], 16) for i in (0, 2, 4))
    return r / 255, g / 255, b / 255


def color_vars(name: str, value: str) -> List[str]:
    """CSS declarations for one color, or [] when the value is not hex."""
    if not value or not value.startswith("#"):
        return []
    h, l, s = colorsys.rgb_to_hls(*hex_to_rgb(value))
    # Bulma 1.0 takes the hue in degrees, saturation and lightness in percent
    return [
        f"\t--bulma-{name}-h: {h * 360:.0f}deg;",
        f"\t--bulma-{name}-s: {s * 100:.0f}%;",
        f"\t--bulma-{name}-l: {l * 100:.0f}%;",
    ]


def theme_css(theme: Theme) -> str:
    """Render the ``:root`` block overriding Bulma's palette."""
    lines = [":root {"]
    for f in fields(theme):
        value = getattr(theme, f.name)
        if isinstance(value, str):
            lines.extend(color_vars(f.name.lower(), value))
    lines.append("}")
    return "\n".join(lines) + "\n"
