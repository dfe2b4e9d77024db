"""GitHub client module: list repository files and read file contents.

This module provides a small async client focused on the two operations
the tree source needs: listing repository files (Git Trees API) and
reading raw file contents (Contents API). Results are never cached; every
overview attempt sees the repository as it is at request time.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Mapping, Optional

import httpx

from core.errors import ExternalServiceError, NotFoundError

from .inputs import parse_repo_url, normalize_max_chars, normalize_path, normalize_ref
from .refs import resolve_tree_sha


logger = logging.getLogger(__name__)

TRUNCATION_MARKER = "\n\n...[TRUNCATED]..."


class GitHubClient:
    """Async GitHub client for listing and reading repository files.

    Purpose:
      - list_files_from_url(repo_url, ref='main') -> List[str]
      - read_text_file_from_url(repo_url, path, ref='main', max_chars=200_000) -> str

    Key behavior:
      - Authenticates with an optional bearer token.
      - Limits concurrent requests with a Semaphore so per-file reads issued
        together do not flood the API.
    """

    BASE_URL = "https://api.github.com"
    JSON_ACCEPT = "application/vnd.github+json"
    RAW_ACCEPT = "application/vnd.github.raw"

    def __init__(
        self,
        *,
        token: Optional[str] = None,
        timeout: float = 20.0,
        verify: bool = True,
        max_concurrency: int = 5,
    ) -> None:
        self._timeout = float(timeout)
        self._verify = bool(verify)

        self._headers = self._build_headers(token)

        self._sem = asyncio.Semaphore(max(1, int(max_concurrency)))

    async def list_files_from_url(
        self,
        *,
        repo_url: str,
        ref: str = "main",
    ) -> List[str]:
        """List repository file paths at `ref` in the order the Trees API returns them."""
        owner, repo = parse_repo_url(repo_url)
        ref_clean = normalize_ref(ref)

        async with self._create_client() as client:
            # Resolve the ref to a tree SHA; this may fall back to default branch
            tree_sha = await resolve_tree_sha(
                self._request,
                client,
                owner=owner,
                repo=repo,
                ref=ref_clean,
            )

            resp = await self._request(
                client,
                f"/repos/{owner}/{repo}/git/trees/{tree_sha}",
                params={"recursive": "1"},
            )
            if resp.status_code == 404:
                raise NotFoundError(f"Tree not found for ref: {ref_clean}")

            self._raise_for_status(resp, context="list_files_from_url(tree)")
            data = resp.json()
            if data.get("truncated"):
                logger.warning("GitHub tree listing for %s/%s was truncated", owner, repo)

            paths = [
                item["path"]
                for item in data.get("tree", [])
                if item.get("type") == "blob" and isinstance(item.get("path"), str)
            ]
            logger.debug("Listed %d files in %s/%s@%s", len(paths), owner, repo, ref_clean)
            return paths

    async def read_text_file_from_url(
        self,
        *,
        repo_url: str,
        path: str,
        ref: str = "main",
        max_chars: int = 200_000,
    ) -> str:
        """Read a file from GitHub at `ref`, decode as text, and truncate past `max_chars`."""
        owner, repo = parse_repo_url(repo_url)
        ref_clean = normalize_ref(ref)
        path_clean = normalize_path(path)
        max_chars_clean = normalize_max_chars(max_chars)

        # Request raw file bytes so httpx decodes to text reliably
        async with self._create_client(custom_headers={"Accept": self.RAW_ACCEPT}) as client:
            resp = await self._request(
                client,
                f"/repos/{owner}/{repo}/contents/{path_clean}",
                params={"ref": ref_clean},
            )

            if resp.status_code == 404:
                raise NotFoundError(f"File not found: {path_clean}")

            self._raise_for_status(resp, context="read_text_file_from_url(contents)")
            text = resp.text or ""
            if len(text) > max_chars_clean:
                return text[:max_chars_clean] + TRUNCATION_MARKER
            return text

    # --- HTTP helpers ---

    def _build_headers(self, token: Optional[str]) -> dict[str, str]:
        headers = {
            "Accept": self.JSON_ACCEPT,
            "User-Agent": "codebase-overview-mcp",
        }
        token_clean = (token or "").strip()
        if token_clean:
            headers["Authorization"] = f"Bearer {token_clean}"
        return headers

    def _create_client(self, custom_headers: Optional[Mapping[str, str]] = None) -> httpx.AsyncClient:
        headers = {**self._headers, **dict(custom_headers or {})}
        return httpx.AsyncClient(
            base_url=self.BASE_URL,
            headers=headers,
            timeout=self._timeout,
            verify=self._verify,
        )

    def _external(self, context: str, err: BaseException) -> ExternalServiceError:
        return ExternalServiceError(f"GitHub request failed ({context}): {err}")

    def _raise_for_status(self, resp: httpx.Response, *, context: str) -> None:
        try:
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise self._external(context, e) from e

    async def _request(
        self,
        client: httpx.AsyncClient,
        url: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
    ) -> httpx.Response:
        """GET bounded by the concurrency semaphore; transport errors become ExternalServiceError."""
        try:
            async with self._sem:
                return await client.get(url, params=dict(params or {}))
        except httpx.HTTPError as e:
            raise self._external(f"GET {url}", e) from e
