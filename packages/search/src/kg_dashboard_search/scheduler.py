"""Staggered start triggers for a search session.

The k-th source is triggered ``k * stagger_interval`` seconds after start().
Triggers are asyncio timer handles on the running loop, so cancelling one
guarantees its callback never runs.
"""

import asyncio
from typing import Callable, Iterable

from kg_dashboard_common import get_logger
from kg_dashboard_contracts import Source

logger = get_logger(__name__)

TriggerCallback = Callable[[Source], None]


class ScheduleManager:
    """Deferred, cancellable per-source start triggers.

    Example:
        >>> scheduler = ScheduleManager(stagger_interval=0.3)
        >>> scheduler.start(registry.list(), on_trigger=print)
        >>> scheduler.cancel()  # nothing prints
    """

    def __init__(self, stagger_interval: float = 0.3):
        if stagger_interval < 0:
            raise ValueError(f"stagger_interval must be non-negative, got {stagger_interval}")
        self.stagger_interval = stagger_interval
        # Keyed by position so repeated ids never overwrite a handle
        self._handles: dict[int, asyncio.TimerHandle] = {}

    @property
    def pending(self) -> int:
        """Number of triggers scheduled but not yet fired."""
        return len(self._handles)

    def start(self, sources: Iterable[Source], on_trigger: TriggerCallback) -> None:
        """Schedule one trigger per source, in iteration order.

        Any triggers still pending from a previous start() are cancelled
        first, so a source is never scheduled twice.

        Raises:
            RuntimeError: If called outside a running event loop
        """
        loop = asyncio.get_running_loop()
        self.cancel()

        for index, source in enumerate(sources):
            delay = index * self.stagger_interval
            self._handles[index] = loop.call_later(
                delay, self._fire, index, source, on_trigger
            )

        logger.debug(
            "triggers_scheduled",
            count=len(self._handles),
            stagger_interval=self.stagger_interval,
        )

    def cancel(self) -> int:
        """Cancel every pending trigger.

        Already fired triggers are unaffected. Safe to call repeatedly.

        Returns:
            Number of triggers that were cancelled
        """
        cancelled = len(self._handles)
        for handle in self._handles.values():
            handle.cancel()
        self._handles.clear()

        if cancelled:
            logger.debug("triggers_cancelled", count=cancelled)
        return cancelled

    def _fire(self, index: int, source: Source, on_trigger: TriggerCallback) -> None:
        self._handles.pop(index, None)
        on_trigger(source)
