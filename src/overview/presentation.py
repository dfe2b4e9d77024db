"""Presentation stage: map a GenerationState to what the panel shows.

The panel has four mutually exclusive regions (idle call-to-action,
loading, error, content). Success content goes through the injected
formatting engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from core.interfaces import MarkupRenderer
from core.models import Failure, GenerationState, Idle, Loading, Success


Region = Literal["idle", "loading", "error", "content"]

PANEL_TITLE = "Codebase Overview"
IDLE_HEADING = "Analyze Your Codebase"
IDLE_BODY = (
    "Get a high-level overview of your project's purpose, technologies, "
    "components, and potential improvements powered by AI."
)
START_ACTION = "Generate Overview"
LOADING_HEADING = "Analyzing codebase..."
LOADING_BODY = "This might take a moment."
ERROR_HEADING = "An Error Occurred"


@dataclass(frozen=True)
class DisplayPayload:
    region: Region
    heading: str = ""
    body: str = ""
    action: Optional[str] = None

    def as_text(self) -> str:
        parts = [f"# {PANEL_TITLE}"]
        if self.heading:
            parts.append(self.heading)
        if self.body:
            parts.append(self.body)
        if self.action:
            parts.append(f"[{self.action}]")
        return "\n\n".join(parts)


def render(state: GenerationState, renderer: MarkupRenderer) -> DisplayPayload:
    if isinstance(state, Loading):
        return DisplayPayload(region="loading", heading=LOADING_HEADING, body=LOADING_BODY)

    if isinstance(state, Failure):
        return DisplayPayload(region="error", heading=ERROR_HEADING, body=state.message)

    if isinstance(state, Success):
        body = renderer.render(state.content) if renderer.available else state.content
        if not body.strip():
            # Never show an empty panel for a successful result
            body = state.content
        return DisplayPayload(region="content", body=body)

    if isinstance(state, Idle):
        return DisplayPayload(region="idle", heading=IDLE_HEADING, body=IDLE_BODY, action=START_ACTION)

    raise TypeError(f"Unknown generation state: {state!r}")
