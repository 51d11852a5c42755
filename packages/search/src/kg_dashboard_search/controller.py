"""Search input controller.

Owns the query text and the "is searching" signal the orchestrator observes:
blank queries are ignored, re-submitting the running query is a no-op, and a
new query supersedes the running session.
"""

import asyncio
from typing import Optional

from kg_dashboard_common import get_logger

from kg_dashboard_search.orchestrator import SearchProgressOrchestrator

logger = get_logger(__name__)


class SearchController:
    """Feed query submissions into a SearchProgressOrchestrator.

    Args:
        orchestrator: The orchestrator whose signal this controller drives
        hold_seconds: If set, each search is flagged finished this many
            seconds after submission (the dashboard uses 5)
    """

    def __init__(
        self,
        orchestrator: SearchProgressOrchestrator,
        hold_seconds: Optional[float] = None,
    ):
        if hold_seconds is not None and hold_seconds < 0:
            raise ValueError(f"hold_seconds must be non-negative, got {hold_seconds}")
        self._orchestrator = orchestrator
        self._hold_seconds = hold_seconds
        self._hold_handle: Optional[asyncio.TimerHandle] = None
        self._query: Optional[str] = None

    @property
    def query(self) -> Optional[str]:
        """Most recently accepted query."""
        return self._query

    @property
    def is_searching(self) -> bool:
        return self._orchestrator.is_searching

    def submit(self, query: str) -> bool:
        """Submit a query.

        Returns:
            True if a new search session was started
        """
        query = query.strip()
        if not query:
            return False
        if query == self._query and self._orchestrator.is_searching:
            return False

        self._cancel_hold()
        if self._orchestrator.is_searching:
            logger.info("search_superseded", previous=self._query, query=query)
            self._orchestrator.on_searching_changed(False)

        self._query = query
        self._orchestrator.on_searching_changed(True)

        if self._hold_seconds is not None:
            self._hold_handle = asyncio.get_running_loop().call_later(
                self._hold_seconds, self._finish, self._orchestrator.epoch
            )

        logger.info("search_submitted", query=query, epoch=self._orchestrator.epoch)
        return True

    def cancel(self) -> None:
        """Stop the running search, if any."""
        self._cancel_hold()
        self._orchestrator.on_searching_changed(False)

    def close(self) -> None:
        """Drop the pending hold timer. The orchestrator is left as is."""
        self._cancel_hold()

    def _finish(self, epoch: int) -> None:
        self._hold_handle = None
        if self._orchestrator.epoch == epoch:
            self._orchestrator.on_searching_changed(False)

    def _cancel_hold(self) -> None:
        if self._hold_handle is not None:
            self._hold_handle.cancel()
            self._hold_handle = None
