"""Search progress orchestrator for the data-sources panel.

Turns a single "is a search running" signal into per-source progress:

    isSearching False -> True:
        every source reset to searching at 0%, staggered triggers scheduled,
        each trigger spawns a ProgressSimulator for its source
    isSearching True -> False:
        pending triggers cancelled, simulators stopped, every source idle

Every session gets a new epoch. Triggers and ticks carry the epoch they were
created in and commit() rejects anything that does not match the current
one, so a callback that slips past cancellation can never touch state.
"""

import asyncio
import random
from functools import partial
from types import MappingProxyType
from typing import Callable, Mapping, Optional

from kg_dashboard_common import (
    OrchestratorDisposedError,
    OrchestratorError,
    SessionCancelledError,
    get_logger,
    instrument_function,
    session_context,
)
from kg_dashboard_contracts import ProgressState, Source, SourceSnapshot, SourceStatus

from kg_dashboard_search.config import SimulationConfig
from kg_dashboard_search.registry import SourceRegistry, default_registry
from kg_dashboard_search.scheduler import ScheduleManager
from kg_dashboard_search.simulator import ProgressSimulator

logger = get_logger(__name__)

SourceHandler = Callable[[SourceSnapshot], None]


class SearchProgressOrchestrator:
    """Own the per-source ProgressState map and the timers that drive it.

    Must be started from within a running asyncio event loop; every
    mutation happens on that loop.

    Example:
        >>> async with SearchProgressOrchestrator(rng=random.Random(7)) as orch:
        ...     orch.on_searching_changed(True)
        ...     final = await orch.wait_settled(timeout=30)
    """

    def __init__(
        self,
        registry: Optional[SourceRegistry] = None,
        config: Optional[SimulationConfig] = None,
        *,
        rng: Optional[random.Random] = None,
        on_source_click: Optional[SourceHandler] = None,
    ):
        self.registry = registry or default_registry()
        self.config = config or SimulationConfig.from_settings()
        self._rng = rng or random.Random()
        self._on_source_click = on_source_click

        self._states: dict[str, ProgressState] = {
            source.id: ProgressState.idle() for source in self.registry
        }
        self._scheduler = ScheduleManager(self.config.stagger_interval)
        self._simulators: dict[str, ProgressSimulator] = {}
        self._listeners: list[SourceHandler] = []
        self._settled: Optional[asyncio.Future] = None
        self._epoch = 0
        self._searching = False
        self._disposed = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def epoch(self) -> int:
        """Current session epoch; increases on every start and stop."""
        return self._epoch

    @property
    def is_searching(self) -> bool:
        return self._searching

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    @property
    def is_settled(self) -> bool:
        """True when a session is running and every source is terminal."""
        return self._searching and all(s.is_terminal for s in self._states.values())

    def on_searching_changed(self, is_searching: bool) -> None:
        """React to the external search signal. Repeated values are no-ops."""
        if is_searching:
            self.start()
        else:
            self.stop()

    @instrument_function("search_session_start")
    def start(self) -> None:
        """Begin a search session.

        Raises:
            OrchestratorDisposedError: After dispose()
            RuntimeError: If no event loop is running
        """
        if self._disposed:
            raise OrchestratorDisposedError("orchestrator has been disposed")
        if self._searching:
            return

        loop = asyncio.get_running_loop()

        self._epoch += 1
        self._searching = True
        self._settled = loop.create_future()
        epoch = self._epoch
        self._reset_all(ProgressState.searching(0.0))
        if self._epoch != epoch:
            # A listener ended or replaced this session during the reset
            return

        # Triggers and the tasks they spawn inherit the bound session context
        with session_context(search_epoch=epoch):
            self._scheduler.start(self.registry.list(), partial(self._on_trigger, epoch))

        logger.info(
            "search_session_started",
            epoch=self._epoch,
            sources=len(self.registry),
            stagger_interval=self.config.stagger_interval,
        )

    @instrument_function("search_session_stop")
    def stop(self) -> None:
        """End the current session and return every source to idle."""
        if not self._searching:
            return

        cancelled_triggers = self._scheduler.cancel()
        running = [sim for sim in self._simulators.values() if sim.running]
        for simulator in self._simulators.values():
            simulator.stop()
        self._simulators.clear()

        ended_epoch = self._epoch
        self._epoch += 1
        self._searching = False

        if self._settled is not None and not self._settled.done():
            self._settled.cancel()
        self._settled = None

        self._reset_all(ProgressState.idle())

        logger.info(
            "search_session_stopped",
            epoch=ended_epoch,
            cancelled_triggers=cancelled_triggers,
            stopped_simulators=len(running),
        )

    def dispose(self) -> None:
        """Stop any session and release listeners. Idempotent."""
        if self._disposed:
            return

        self.stop()
        self._listeners.clear()
        self._disposed = True
        logger.info("orchestrator_disposed", epoch=self._epoch)

    async def __aenter__(self) -> "SearchProgressOrchestrator":
        return self

    async def __aexit__(self, *args) -> None:
        self.dispose()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def get_state(self) -> Mapping[str, ProgressState]:
        """Read-only snapshot of every source's state, in registry order."""
        return MappingProxyType(dict(self._states))

    def snapshot(self, source_id: str) -> SourceSnapshot:
        """Source plus its current state.

        Raises:
            UnknownSourceError: If the id is not registered
        """
        source = self.registry.get(source_id)
        return SourceSnapshot(source=source, state=self._states[source.id])

    def snapshots(self) -> list[SourceSnapshot]:
        return [
            SourceSnapshot(source=source, state=self._states[source.id])
            for source in self.registry
        ]

    def commit(self, epoch: int, source_id: str, state: ProgressState) -> bool:
        """Apply a session write. The only path by which sessions mutate state.

        Writes are discarded (returning False) when the epoch is stale, no
        session is running, or the source already reached a terminal state.

        Raises:
            UnknownSourceError: If the id is not registered
            OrchestratorError: If asked to write an idle state
        """
        source = self.registry.get(source_id)
        if state.status == SourceStatus.IDLE:
            raise OrchestratorError("sessions cannot write idle states")

        if epoch != self._epoch or not self._searching:
            logger.debug(
                "stale_commit_discarded",
                source_id=source_id,
                epoch=epoch,
                current_epoch=self._epoch,
            )
            return False

        if self._states[source.id].is_terminal:
            return False

        self._states[source.id] = state
        self._notify(source)

        if state.is_terminal:
            event = "source_completed" if state.status == SourceStatus.COMPLETE else "source_failed"
            logger.info(event, source_id=source.id, epoch=epoch, info=state.info)
            self._resolve_if_settled()

        return True

    async def wait_settled(
        self, timeout: Optional[float] = None
    ) -> Mapping[str, ProgressState]:
        """Wait until every source of the current session is terminal.

        Args:
            timeout: Seconds to wait (default: no limit)

        Returns:
            Final state snapshot

        Raises:
            SessionCancelledError: No session is running, or it ended first
            asyncio.TimeoutError: Timeout elapsed; the session keeps running
        """
        settled = self._settled
        if settled is None:
            raise SessionCancelledError("no search session is running")

        try:
            return await asyncio.wait_for(asyncio.shield(settled), timeout)
        except asyncio.CancelledError:
            if settled.cancelled():
                raise SessionCancelledError("search session ended before settling") from None
            raise

    # ------------------------------------------------------------------
    # Collaborators
    # ------------------------------------------------------------------

    def on_source_selected(self, source_id: str) -> None:
        """Forward a source row activation to the click handler, if any."""
        snapshot = self.snapshot(source_id)
        if self._on_source_click is not None:
            self._on_source_click(snapshot)

    def add_listener(self, listener: SourceHandler) -> None:
        """Call ``listener(snapshot)`` after every state change."""
        self._listeners.append(listener)

    def remove_listener(self, listener: SourceHandler) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _on_trigger(self, epoch: int, source: Source) -> None:
        if epoch != self._epoch or not self._searching:
            return

        simulator = ProgressSimulator(
            source.id,
            epoch,
            self.commit,
            self.config,
            # Independent stream per source, reproducible from the root rng
            random.Random(self._rng.getrandbits(64)),
        )
        self._simulators[source.id] = simulator
        simulator.start()

        logger.debug(
            "source_triggered",
            source_id=source.id,
            epoch=epoch,
            tick_interval=round(simulator.tick_interval, 3),
        )

    def _reset_all(self, state: ProgressState) -> None:
        for source in self.registry:
            self._states[source.id] = state

        epoch = self._epoch
        for source in self.registry:
            if self._epoch != epoch:
                # Re-entrant start/stop already reset and notified every source
                return
            self._notify(source)

    def _resolve_if_settled(self) -> None:
        if self._settled is None or self._settled.done():
            return
        if all(s.is_terminal for s in self._states.values()):
            self._settled.set_result(self.get_state())
            logger.info("search_session_settled", epoch=self._epoch)

    def _notify(self, source: Source) -> None:
        if not self._listeners:
            return

        snapshot = SourceSnapshot(source=source, state=self._states[source.id])
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:
                logger.error("listener_failed", source_id=source.id, error=str(e))
