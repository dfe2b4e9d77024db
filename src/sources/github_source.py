from __future__ import annotations

from typing import Optional, Sequence

from clients.github import GitHubClient
from core.errors import ValidationError
from core.models import TreeNode
from core.paths import normalize_posix_relpath
from core.tree import build_tree


"""GitHub-backed FileSource implementation.

- `fetch_tree` lists every blob at `ref` and folds it into a TreeNode.
- `read_file` reads one file's raw text at the same `ref`.
"""


class GitHubSource:
    def __init__(
        self,
        *,
        client: GitHubClient,
        repo_url: str,
        ref: str = "main",
        exclude: Optional[Sequence[str]] = None,
    ) -> None:
        self._client = client
        self._repo_url = (repo_url or "").strip()
        self._ref = (ref or "main").strip()
        self._exclude = list(exclude or ())

        if not self._repo_url:
            raise ValidationError("Missing repo_url")

    async def fetch_tree(self) -> TreeNode:
        paths = await self._client.list_files_from_url(
            repo_url=self._repo_url,
            ref=self._ref,
        )
        return build_tree(paths, exclude=self._exclude)

    async def read_file(self, *, path: str, max_chars: int) -> str:
        p = normalize_posix_relpath(path)
        if not p:
            raise ValidationError("Missing path")

        return await self._client.read_text_file_from_url(
            repo_url=self._repo_url,
            path=p,
            ref=self._ref,
            max_chars=max_chars,
        )
