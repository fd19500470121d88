# cmdtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Nord colors and the rich theme used when rendering usage and errors.

`get_nord_theme()` maps the semantic style names used by `cmdtree.usage`
("usage.heading", "usage.command", ...) onto Nord colors.
"""
from rich.theme import Theme


class NordColors:
    """Nord palette entries used by the default theme."""

    POLAR_NIGHT_ORIGIN = "#2E3440"
    SNOW_STORM_BRIGHTEST = "#ECEFF4"
    FROST_TEAL = "#8FBCBB"
    FROST_ICE = "#88C0D0"
    FROST_SKY = "#81A1C1"
    FROST_DEEP = "#5E81AC"
    AURORA_RED = "#BF616A"
    AURORA_ORANGE = "#D08770"
    AURORA_YELLOW = "#EBCB8B"
    AURORA_GREEN = "#A3BE8C"
    AURORA_PURPLE = "#B48EAD"


def get_nord_theme() -> Theme:
    """Rich theme with the style names cmdtree renders with."""
    return Theme(
        {
            "usage.heading": f"bold {NordColors.FROST_ICE}",
            "usage.command": f"bold {NordColors.FROST_TEAL}",
            "usage.flag": NordColors.FROST_SKY,
            "usage.dim": "dim",
            "error": f"bold {NordColors.AURORA_RED}",
            "warning": NordColors.AURORA_YELLOW,
            "success": NordColors.AURORA_GREEN,
        }
    )
