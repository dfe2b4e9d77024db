"""MCP tools that drive the codebase overview panel.

Registers 'start_overview', 'get_overview' and 'close_overview', all bound
to one OverviewOrchestrator and returning the rendered panel as text.
"""

from __future__ import annotations

from typing import Optional

from mcp.server.fastmcp import FastMCP

from clients.github import GitHubClient
from config import EXCLUDE_GLOBS, PROJECT_ROOT
from core.errors import ValidationError
from core.interfaces import MarkupRenderer
from core.models import SourceType
from overview.orchestrator import OverviewOrchestrator
from overview.presentation import render
from sources.source_factory import get_file_source


def register(
    mcp: FastMCP,
    *,
    orchestrator: OverviewOrchestrator,
    renderer: MarkupRenderer,
    github_client: Optional[GitHubClient] = None,
) -> None:
    def _panel() -> str:
        return render(orchestrator.state, renderer).as_text()

    @mcp.tool(name="start_overview")
    async def start_overview(
        source: SourceType = "local",
        repo_url: Optional[str] = None,
        ref: str = "main",
        wait: bool = True,
    ) -> str:
        """Generate a high-level overview of a codebase.

        Aggregates every readable file of the source, sends the assembled
        document to the generation service and returns the panel.

        Params:
          - source: "local" or "github" (default: "local").
          - repo_url: required when source is "github" (URL or owner/repo).
          - ref: git reference to resolve (default: "main").
          - wait: wait for the overview before returning (default: True).
            When False the panel shows the loading state; poll get_overview.

        Returns:
          The rendered panel text. Generation failures are reported in the
          panel, not raised. A start while an overview is loading or shown
          is ignored; call close_overview first.

        Raises:
          ValidationError for invalid inputs.
        """
        if source == "github" and (not repo_url or not repo_url.strip()):
            raise ValidationError("Missing repo_url for github source")

        src = get_file_source(
            source,
            project_root=PROJECT_ROOT,
            repo_url=repo_url,
            ref=ref,
            exclude=EXCLUDE_GLOBS,
            github_client=github_client,
        )

        orchestrator.start(src)
        if wait:
            await orchestrator.wait()
        return _panel()

    @mcp.tool(name="get_overview")
    async def get_overview() -> str:
        """Return the current overview panel (idle, loading, error or overview)."""
        return _panel()

    @mcp.tool(name="close_overview")
    async def close_overview() -> str:
        """Dismiss the panel: reset to idle and discard any pending result."""
        orchestrator.reset()
        return _panel()
