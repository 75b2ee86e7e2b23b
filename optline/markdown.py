# Optline Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Renders Markdown documentation of commands and arguments to plain text or HTML.

The parser core treats documentation as opaque Markdown. Whoever needs it
rendered (usage screens, `optline.metadata`) goes through a `MarkdownRenderer`,
which uses `rich.markdown.Markdown` for wrapped terminal text and
`markdown-it-py` for HTML.
"""
from __future__ import annotations

from markdown_it import MarkdownIt
from rich.console import Console
from rich.markdown import Markdown


class MarkdownRenderer:
    """Markdown to text and HTML, wrapping text output to `width` columns."""

    def __init__(self, width: int = 120) -> None:
        self.width = width
        self._markdown_it = MarkdownIt()

    def to_lines(self, text: str) -> list[str]:
        """Render `text` to plain lines without trailing whitespace."""
        if not text.strip():
            return []
        console = Console(
            width=self.width,
            color_system=None,
            force_terminal=False,
            highlight=False,
            emoji=False,
        )
        with console.capture() as capture:
            console.print(Markdown(text))
        lines = [line.rstrip() for line in capture.get().splitlines()]
        while lines and not lines[-1]:
            lines.pop()
        return lines

    def to_text(self, text: str) -> str:
        return "\n".join(self.to_lines(text))

    def to_html(self, text: str) -> str:
        return self._markdown_it.render(text).strip()


DEFAULT_RENDERER = MarkdownRenderer()
