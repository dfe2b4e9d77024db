"""Generation lifecycle: Idle -> Loading -> Success | Failure, and Reset.

The orchestrator is the only writer of the GenerationState. Each start
opens a numbered attempt; a result is applied only while its attempt is
still current, so a response that arrives after reset() is dropped.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, List, Optional, Sequence, Set

from core.errors import EmptyInputError
from core.interfaces import FileSource, OverviewGenerator
from core.models import FetchedFile, Failure, GenerationState, Idle, Loading, Success, TreeNode
from overview.aggregator import aggregate
from overview.assembler import assemble


logger = logging.getLogger(__name__)

EMPTY_INPUT_MESSAGE = "No readable files found in the repository to generate an overview."
FAILURE_PREFIX = "Failed to generate overview: "
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred."

AggregateFn = Callable[..., Awaitable[Sequence[FetchedFile]]]


def failure_message(err: BaseException) -> str:
    detail = str(err).strip() or UNKNOWN_ERROR_MESSAGE
    return f"{FAILURE_PREFIX}{detail}"


class OverviewOrchestrator:
    """Drive one overview generation per Loading episode.

    Params:
      - generator: the generation service.
      - max_chars: per-file character limit passed to the aggregator.
      - aggregate_fn: aggregation step, replaceable in tests.
    """

    def __init__(
        self,
        *,
        generator: OverviewGenerator,
        max_chars: int = 200_000,
        aggregate_fn: AggregateFn = aggregate,
    ) -> None:
        self._generator = generator
        self._max_chars = int(max_chars)
        self._aggregate = aggregate_fn

        self._state: GenerationState = Idle()
        self._attempt = 0
        self._current: Optional[asyncio.Task] = None
        # Strong references so pending tasks are not garbage collected after reset()
        self._pending: Set[asyncio.Task] = set()

    @property
    def state(self) -> GenerationState:
        return self._state

    @property
    def attempt(self) -> int:
        return self._attempt

    def start(self, source: FileSource, tree: Optional[TreeNode] = None) -> bool:
        """Enter Loading and schedule the generation task.

        Only accepted from Idle; returns False (and does nothing) otherwise.
        When `tree` is None the source's tree is fetched inside the episode.
        Must be called from a running event loop.
        """
        if not isinstance(self._state, Idle):
            logger.info("Ignoring start while %s", type(self._state).__name__)
            return False

        self._attempt += 1
        attempt = self._attempt
        self._state = Loading()
        logger.info("Overview attempt %d started", attempt)

        task = asyncio.create_task(self._run(attempt, source, tree))
        self._current = task
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return True

    def reset(self) -> None:
        """Return to Idle unconditionally. Outstanding work is not cancelled."""
        self._attempt += 1
        self._current = None
        if not isinstance(self._state, Idle):
            logger.info("Overview reset from %s", type(self._state).__name__)
        self._state = Idle()

    async def wait(self) -> GenerationState:
        """Wait for the current attempt (if any) to settle and return the state."""
        task = self._current
        if task is not None:
            # Cancelling a waiter leaves the episode running
            await asyncio.shield(task)
        return self._state

    async def run(self, source: FileSource, tree: Optional[TreeNode] = None) -> GenerationState:
        self.start(source, tree)
        return await self.wait()

    # --- Episode ---

    async def _run(self, attempt: int, source: FileSource, tree: Optional[TreeNode]) -> None:
        try:
            outcome: GenerationState = Success(await self._generate(source, tree))
        except EmptyInputError as e:
            # Fixed message, shown without the "Failed to generate overview: " prefix
            outcome = Failure(str(e))
        except Exception as e:
            # Every failure inside the episode becomes a Failure state
            outcome = Failure(failure_message(e))
        self._apply(attempt, outcome)

    async def _generate(self, source: FileSource, tree: Optional[TreeNode]) -> str:
        if tree is None:
            tree = await source.fetch_tree()

        files: List[FetchedFile] = list(await self._aggregate(source, tree, max_chars=self._max_chars))
        if not files:
            raise EmptyInputError(EMPTY_INPUT_MESSAGE)

        document = assemble(files)
        return await self._generator.generate_overview(document)

    def _apply(self, attempt: int, outcome: GenerationState) -> None:
        if attempt != self._attempt:
            logger.info("Discarding result of stale overview attempt %d", attempt)
            return

        if isinstance(outcome, Failure):
            logger.warning("Overview attempt %d failed: %s", attempt, outcome.message)
        else:
            logger.info("Overview attempt %d succeeded", attempt)
        self._state = outcome
