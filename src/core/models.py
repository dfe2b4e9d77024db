"""Immutable dataclasses shared by the sources, the overview pipeline and the tools.

Includes the tree snapshot (TreeNode), the per-file aggregation result
(FetchedFile) and the generation lifecycle states (Idle, Loading,
Success, Failure).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Tuple, Union


SourceType = Literal["local", "github"]
NodeKind = Literal["file", "directory"]


@dataclass(frozen=True)
class TreeNode:
    """One entry of a repository listing.

    The root node has an empty path. Children keep the order the tree
    service reported them in.
    """

    path: str
    kind: NodeKind
    children: Tuple["TreeNode", ...] = field(default_factory=tuple)

    @property
    def is_file(self) -> bool:
        return self.kind == "file"


@dataclass(frozen=True)
class FetchedFile:
    path: str
    content: str


# --- Generation lifecycle ---


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Loading:
    pass


@dataclass(frozen=True)
class Success:
    content: str


@dataclass(frozen=True)
class Failure:
    message: str


GenerationState = Union[Idle, Loading, Success, Failure]
