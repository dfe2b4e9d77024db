"""Core protocol and interface definitions.

Defines the collaborator contracts consumed by the overview pipeline:
the FileSource (tree service), the OverviewGenerator (generation
service) and the MarkupRenderer (optional formatting engine).
"""

from __future__ import annotations

from typing import Protocol

from core.models import TreeNode


class FileSource(Protocol):
    """Contract for any tree source (local, GitHub, etc.)."""
    async def fetch_tree(self) -> TreeNode:
        ...

    async def read_file(
        self,
        *,
        path: str,
        max_chars: int,
    ) -> str:
        ...


class OverviewGenerator(Protocol):
    """Contract for the text-generation service."""
    async def generate_overview(self, document: str) -> str:
        ...


class MarkupRenderer(Protocol):
    """Contract for the formatting engine used by the presentation stage."""
    available: bool

    def render(self, text: str) -> str:
        ...
