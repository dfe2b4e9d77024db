from mcp.server.fastmcp import FastMCP


OVERVIEW_INSTRUCTIONS = """\
You are a senior software engineer reviewing an unfamiliar codebase.
The complete readable contents of the repository follow. Every file is
introduced by a "// Path: <path>" header and enclosed between separator
lines.

Write a high-level overview of the project in Markdown with these sections:

## Purpose
What the project does and who it is for.

## Technologies
Languages, frameworks, libraries and services it relies on.

## Architecture & Key Components
The main modules, how they fit together and how data flows between them.
Reference file paths where helpful.

## Potential Improvements
Concrete suggestions about structure, robustness, testing or security.

Only describe what the files show. Do not invent files or behavior.
"""


def build_overview_prompt(document: str) -> str:
    """Wrap the assembled codebase document with the overview instructions."""
    return f"{OVERVIEW_INSTRUCTIONS}\nHere is the full codebase:\n{document}"


def register_prompts(mcp: FastMCP) -> None:
    @mcp.prompt(
        name="codebase_overview",
        description=(
            "Generate a high-level overview of a local project or GitHub "
            "repository with the overview panel tools."
        ),
    )
    def codebase_overview_prompt() -> str:
        return r"""
You have access to an overview panel backed by three tools:
- start_overview: aggregate a source tree and ask the generation service for an overview
- get_overview: show the current panel state
- close_overview: dismiss the panel and discard any pending result

Workflow:
1) Call start_overview.
   - For a GitHub repository pass {"source": "github", "repo_url": "<url or owner/repo>", "ref": "<ref-or-main>"}.
   - For the local project pass {"source": "local"}.
2) If the panel reports "Analyzing codebase...", call get_overview until it shows
   the overview or an error.
3) Present the overview to the user as returned. On an error, report the message verbatim.
4) Call close_overview when the user is done.
"""
