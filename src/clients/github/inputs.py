from __future__ import annotations

import re
from typing import Tuple

from core.errors import ValidationError
from core.paths import normalize_posix_relpath


_REPO_URL_RE = re.compile(r"^https?://github\.com/([^/\s]+)/([^/\s]+?)(?:\.git)?/?$")
_REPO_SLUG_RE = re.compile(r"^([A-Za-z0-9_.-]+)/([A-Za-z0-9_.-]+?)(?:\.git)?$")


def parse_repo_url(repo_url: str) -> Tuple[str, str]:
    """Split a repository reference into (owner, repo).

    Accepts an HTTPS URL (https://github.com/owner/repo[.git]) or the
    short "owner/repo" form.
    """
    raw = (repo_url or "").strip()
    m = _REPO_URL_RE.match(raw) or _REPO_SLUG_RE.match(raw)
    if not m:
        raise ValidationError("Invalid GitHub repository URL")
    return m.group(1), m.group(2)


def normalize_ref(ref: str) -> str:
    ref_clean = (ref or "main").strip()
    if not ref_clean:
        raise ValidationError("ref must be non-empty")
    return ref_clean


def normalize_path(path: str) -> str:
    # Keep GitHub paths stable and OS-independent
    path_clean = normalize_posix_relpath(path)
    if not path_clean:
        raise ValidationError("path must be non-empty")
    return path_clean


def normalize_max_chars(max_chars: int) -> int:
    n = int(max_chars)
    if n <= 0:
        raise ValidationError("max_chars must be positive")
    return n
