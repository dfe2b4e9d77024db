"""Configuration and environment helpers for the project.

Provides small helpers to read typed environment variables and exposes
project-level configuration constants used across the codebase (e.g.
PROJECT_ROOT, HTTP_VERIFY, GEMINI_MODEL, timeouts, limits and the
formatting-engine switch).
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Sequence


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


def _env_list(name: str, default: Sequence[str]) -> List[str]:
    # Comma-separated; an empty value disables the list
    raw = os.environ.get(name)
    if raw is None:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


# Project root for LocalSource security boundary
PROJECT_ROOT = Path(os.environ.get("PROJECT_ROOT", ".")).resolve()

# Network / HTTP
HTTP_VERIFY = _env_bool("HTTP_VERIFY", True)

# GitHub (tree service)
GITHUB_TOKEN = (os.environ.get("GITHUB_TOKEN") or "").strip()
GITHUB_TIMEOUT = _env_float("GITHUB_TIMEOUT", 20.0)
GITHUB_MAX_CONCURRENCY = _env_int("GITHUB_MAX_CONCURRENCY", 5)

# Gemini (generation service)
GEMINI_API_KEY = (os.environ.get("GEMINI_API_KEY") or "").strip()
GEMINI_MODEL = os.environ.get("GEMINI_MODEL", "gemini-2.5-flash").strip()
GEMINI_BASE_URL = os.environ.get("GEMINI_BASE_URL", "https://generativelanguage.googleapis.com").strip()
GEMINI_TIMEOUT = _env_float("GEMINI_TIMEOUT", 120.0)

# Aggregation limits
MAX_FILE_CHARS = _env_int("MAX_FILE_CHARS", 200_000)
EXCLUDE_GLOBS = _env_list(
    "EXCLUDE_GLOBS",
    [
        "**/.git/**",
        "**/node_modules/**",
        "**/__pycache__/**",
        "**/.venv/**",
        "**/dist/**",
        "**/build/**",
        "**/*.lock",
    ],
)

# Presentation
RENDER_MARKDOWN = _env_bool("RENDER_MARKDOWN", True)
RENDER_WIDTH = _env_int("RENDER_WIDTH", 100)

# Logging
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").strip().upper()
