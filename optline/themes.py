# Optline Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Colour constants and the rich `Theme` used when rendering usage text.

The style names registered in the theme are the ones the usage renderer refers to
in its markup (`[option]`, `[doc]`, ...), so swapping the theme restyles help
output without touching the renderer.
"""
from rich.theme import Theme


class OneColors:
    """Subset of the One Dark palette used by Optline."""

    BLACK = "#282C34"
    WHITE = "#FFFFFF"
    DARK_RED = "#BE5046"
    LIGHT_RED = "#E06C75"
    GREEN = "#98C379"
    CYAN = "#56B6C2"
    DARK_CYAN = "#2E8C98"
    BLUE = "#61AFEF"
    LIGHT_YELLOW = "#E5C07B"
    COMMENT_GREY = "#5C6370"


def get_usage_theme() -> Theme:
    """Return the theme that maps Optline's usage style names to colours."""
    return Theme(
        {
            "preamble": OneColors.LIGHT_RED,
            "program": f"bold {OneColors.DARK_RED}",
            "version": OneColors.LIGHT_RED,
            "rule": OneColors.WHITE,
            "section": OneColors.LIGHT_RED,
            "option": OneColors.GREEN,
            "doc": OneColors.CYAN,
            "error": f"bold {OneColors.DARK_RED}",
            "remaining": OneColors.LIGHT_YELLOW,
        }
    )
