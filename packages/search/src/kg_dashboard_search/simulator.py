"""Per-source progress simulation.

Each triggered source gets one ProgressSimulator running as its own asyncio
task. The simulator owns the source's progress for a single session epoch and
writes every new state through the orchestrator's commit function, which
discards writes from stale epochs.
"""

import asyncio
import random
from typing import Callable, Optional

from kg_dashboard_common import get_logger
from kg_dashboard_contracts import ProgressState

from kg_dashboard_search.config import SimulationConfig

logger = get_logger(__name__)

# commit(epoch, source_id, state) -> accepted
CommitFn = Callable[[int, str, ProgressState], bool]


class ProgressSimulator:
    """Drive one source from 0% to a terminal state on a random cadence.

    The tick interval is drawn once per simulator from
    [tick_interval_min, tick_interval_max], so each source advances at its
    own speed. Every tick adds uniform(0, max_increment) percent; reaching
    100 (inclusive) ends the run as complete or, with
    ``failure_probability``, as error.

    Attributes:
        source_id: Source this simulator drives
        epoch: Session epoch the simulator belongs to
        tick_interval: Seconds between ticks
    """

    def __init__(
        self,
        source_id: str,
        epoch: int,
        commit: CommitFn,
        config: Optional[SimulationConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        self.source_id = source_id
        self.epoch = epoch
        self._commit = commit
        self._config = config or SimulationConfig()
        self._rng = rng or random.Random()
        self._progress = 0.0
        self._task: Optional[asyncio.Task] = None

        self.tick_interval = self._rng.uniform(
            self._config.tick_interval_min, self._config.tick_interval_max
        )

    @property
    def progress(self) -> float:
        return self._progress

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task:
        """Spawn the simulation task on the running loop."""
        if self._task is not None:
            raise RuntimeError(f"simulator for {self.source_id} already started")

        self._task = asyncio.get_running_loop().create_task(
            self.run(), name=f"progress-{self.source_id}-{self.epoch}"
        )
        self._task.add_done_callback(self._on_done)
        return self._task

    def stop(self) -> None:
        """Cancel the simulation task. No further ticks are applied."""
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def run(self) -> Optional[ProgressState]:
        """Tick until a terminal state is committed.

        Returns:
            The terminal state, or None if a commit was rejected (session
            ended or source already finished)
        """
        self._progress = 0.0
        if not self._commit(self.epoch, self.source_id, ProgressState.searching(0.0)):
            return None

        while True:
            await asyncio.sleep(self.tick_interval)

            state = self.advance()
            if not self._commit(self.epoch, self.source_id, state):
                return None
            if state.is_terminal:
                return state

    def advance(self) -> ProgressState:
        """Apply one tick and return the resulting state.

        Progress of exactly 100 counts as finished.
        """
        progress = self._progress + self._rng.uniform(0.0, self._config.max_increment)

        if progress < 100.0:
            self._progress = progress
            return ProgressState.searching(progress)

        self._progress = 100.0
        if self._rng.random() < self._config.failure_probability:
            return ProgressState.failed(self._config.failure_message)
        return ProgressState.complete(self._config.success_message)

    def _on_done(self, task: asyncio.Task) -> None:
        if task.cancelled():
            logger.debug("simulator_cancelled", source_id=self.source_id, epoch=self.epoch)
            return

        error = task.exception()
        if error is not None:
            logger.error(
                "simulator_crashed",
                source_id=self.source_id,
                epoch=self.epoch,
                error=str(error),
            )
