from __future__ import annotations

import asyncio
import os
from pathlib import Path
from typing import List, Optional, Sequence

from core.errors import AccessDeniedError, NotFoundError, ValidationError
from core.models import TreeNode
from core.paths import matches_any
from core.tree import build_tree


"""Local filesystem FileSource implementation.

Provides sandboxed access to files under PROJECT_ROOT with strong
containment checks to prevent access outside the project.
"""


class LocalSource:
    # Local filesystem implementation of FileSource.

    def __init__(self, *, project_root: Path, exclude: Optional[Sequence[str]] = None) -> None:
        self._project_root = project_root.resolve()
        self._exclude = list(exclude or ())

    def _resolve_under_root(self, rel_path: str) -> Path:
        raw = (rel_path or "").strip()
        if not raw:
            raise ValidationError("Path is empty")

        p = (self._project_root / raw).resolve()

        # Strong containment check to prevent directory traversal/outside access
        try:
            p.relative_to(self._project_root)
        except ValueError as e:
            raise AccessDeniedError("Access outside project root is not allowed") from e

        return p

    async def fetch_tree(self) -> TreeNode:
        root = self._project_root

        def _do() -> List[str]:
            if not root.is_dir():
                raise NotFoundError(f"Not a directory: {root}")

            out: List[str] = []
            for dirpath, dirnames, filenames in os.walk(root):
                rel_dir = Path(dirpath).relative_to(root).as_posix()
                rel_dir = "" if rel_dir == "." else rel_dir
                # Prune excluded directories in place so os.walk skips them
                dirnames[:] = [
                    d for d in dirnames
                    if not matches_any(f"{rel_dir}/{d}" if rel_dir else d, self._exclude)
                ]
                for name in filenames:
                    out.append(f"{rel_dir}/{name}" if rel_dir else name)
            # Sorted POSIX paths keep the tree stable across OSes
            return sorted(out)

        # Offload blocking filesystem IO to a thread to keep async loop responsive
        paths = await asyncio.to_thread(_do)
        return build_tree(paths, exclude=self._exclude)

    async def read_file(self, *, path: str, max_chars: int) -> str:
        p = self._resolve_under_root(path)

        def _do() -> str:
            if not p.exists():
                raise NotFoundError(f"File not found: {path}")
            if not p.is_file():
                raise ValidationError(f"Not a file: {path}")

            # Read text with replacement to avoid decode errors on bad files
            try:
                data = p.read_text(encoding="utf-8", errors="replace")
            except OSError as e:
                raise AccessDeniedError(f"Cannot read file: {path}") from e
            if len(data) > max_chars:
                # Truncate long files to keep the assembled document bounded
                return data[:max_chars] + "\n\n...[TRUNCATED]..."
            return data

        return await asyncio.to_thread(_do)
