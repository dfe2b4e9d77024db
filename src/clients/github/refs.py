"""Resolve a branch, tag or commit reference to a Git tree SHA.

Falls back to the repository's default branch when the requested ref
does not exist, so a missing "main" still lists a "master" repository.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Optional

import httpx

from core.errors import ExternalServiceError, NotFoundError

RequestFn = Callable[[httpx.AsyncClient, str], Awaitable[httpx.Response]]

logger = logging.getLogger(__name__)


def _check(resp: httpx.Response, context: str) -> None:
    try:
        resp.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise ExternalServiceError(f"GitHub request failed ({context}): {e}") from e


async def fetch_tree_sha(
    request: RequestFn,
    client: httpx.AsyncClient,
    *,
    owner: str,
    repo: str,
    ref: str,
) -> Optional[str]:
    # Commits API resolves branches, tags and SHAs alike to commit.tree.sha
    resp = await request(client, f"/repos/{owner}/{repo}/commits/{ref}")
    if resp.status_code in (404, 422):
        return None
    _check(resp, "commits")
    try:
        return str(resp.json()["commit"]["tree"]["sha"])
    except (KeyError, TypeError, ValueError) as e:
        raise ExternalServiceError(f"Unexpected commit payload for ref {ref}") from e


async def resolve_tree_sha(
    request: RequestFn,
    client: httpx.AsyncClient,
    *,
    owner: str,
    repo: str,
    ref: str,
) -> str:
    sha = await fetch_tree_sha(request, client, owner=owner, repo=repo, ref=ref)
    if sha:
        return sha

    repo_resp = await request(client, f"/repos/{owner}/{repo}")
    if repo_resp.status_code == 404:
        raise NotFoundError(f"Repository not found: {owner}/{repo}")
    _check(repo_resp, "repository")

    default_branch = (repo_resp.json() or {}).get("default_branch") or "main"
    default_branch = str(default_branch).strip() or "main"
    if default_branch != ref:
        logger.info("Ref %r not found in %s/%s, using default branch %r", ref, owner, repo, default_branch)
        sha2 = await fetch_tree_sha(request, client, owner=owner, repo=repo, ref=default_branch)
        if sha2:
            return sha2

    raise NotFoundError(f"Unable to resolve reference: {ref}")
