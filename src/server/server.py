"""Server bootstrap for the codebase overview MCP service.

Creates the FastMCP instance, wires the GitHub and Gemini clients, the
formatting engine and the orchestrator into the panel tools, registers
prompts, and starts the MCP server (stdio transport).
"""

import logging
import sys

from mcp.server.fastmcp import FastMCP

from clients.gemini_client import GeminiClient
from clients.github import GitHubClient
from config import (
    GEMINI_API_KEY,
    GEMINI_BASE_URL,
    GEMINI_MODEL,
    GEMINI_TIMEOUT,
    GITHUB_MAX_CONCURRENCY,
    GITHUB_TIMEOUT,
    GITHUB_TOKEN,
    HTTP_VERIFY,
    LOG_LEVEL,
    MAX_FILE_CHARS,
    RENDER_MARKDOWN,
    RENDER_WIDTH,
)
from overview.orchestrator import OverviewOrchestrator
from overview.renderers import get_renderer

from tools.overview_panel import register as register_overview_panel

from prompts.overview_prompt import register_prompts

mcp = FastMCP("codebase-overview")


def register_tools() -> None:
    github_client = GitHubClient(
        token=GITHUB_TOKEN,
        timeout=GITHUB_TIMEOUT,
        verify=HTTP_VERIFY,
        max_concurrency=GITHUB_MAX_CONCURRENCY,
    )
    gemini_client = GeminiClient(
        api_key=GEMINI_API_KEY,
        model=GEMINI_MODEL,
        base_url=GEMINI_BASE_URL,
        timeout=GEMINI_TIMEOUT,
        verify=HTTP_VERIFY,
    )
    orchestrator = OverviewOrchestrator(generator=gemini_client, max_chars=MAX_FILE_CHARS)
    renderer = get_renderer(enabled=RENDER_MARKDOWN, width=RENDER_WIDTH)

    register_overview_panel(
        mcp,
        orchestrator=orchestrator,
        renderer=renderer,
        github_client=github_client,
    )


def register_all() -> None:
    register_tools()
    register_prompts(mcp)


register_all()


def configure_logging(level_name: str = LOG_LEVEL) -> None:
    # stdout carries the stdio transport; logs go to stderr
    level = getattr(logging, (level_name or "INFO").upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="[%(levelname)s] %(asctime)s %(name)s:%(lineno)d - %(message)s",
    )
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))


def main() -> None:
    configure_logging()
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
