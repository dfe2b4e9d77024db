"""Formatting engines for the presentation stage.

Two variants share the MarkupRenderer contract: RichMarkdownRenderer
turns Markdown into formatted terminal text with rich, PlainTextRenderer
passes the raw text through. The choice is made once at startup and
injected; content is never dropped by either.
"""

from __future__ import annotations

import io

from rich.console import Console
from rich.markdown import Markdown

from core.interfaces import MarkupRenderer


class RichMarkdownRenderer:
    available = True

    def __init__(self, *, width: int = 100) -> None:
        self._width = max(20, int(width))

    def render(self, text: str) -> str:
        buf = io.StringIO()
        # No color codes: the output travels as plain tool text
        console = Console(
            file=buf,
            width=self._width,
            color_system=None,
            force_terminal=False,
            legacy_windows=False,
        )
        console.print(Markdown(text or ""))
        lines = [line.rstrip() for line in buf.getvalue().splitlines()]
        return "\n".join(lines).strip("\n")


class PlainTextRenderer:
    available = False

    def render(self, text: str) -> str:
        return text or ""


def get_renderer(*, enabled: bool, width: int = 100) -> MarkupRenderer:
    if enabled:
        return RichMarkdownRenderer(width=width)
    return PlainTextRenderer()
