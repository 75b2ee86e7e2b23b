# Optline Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global console instance for Optline usage output."""
from rich.console import Console

from optline.themes import get_usage_theme

console = Console(color_system="truecolor", theme=get_usage_theme())
