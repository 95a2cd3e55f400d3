"""Limits on how long or how far a search may run."""

from __future__ import annotations

import threading
import time
from typing import Callable, Optional


class SearchError(Exception):
    """A search could not complete."""


class SearchTimeout(SearchError):
    """A search was stopped by its limit before it finished."""


class SearchLimit:
    """A thread-safe limit on search time and node count.

    A fresh limit never stops on its own. `nodes_cap` caps the total
    nodes searched and `search_duration` (seconds) caps the search time;
    either may be None for no cap.
    """

    def __init__(
        self,
        nodes_cap: Optional[int] = None,
        search_duration: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.nodes_cap = nodes_cap
        self.search_duration = search_duration
        self._clock = clock
        self._lock = threading.Lock()
        self._over = threading.Event()
        self._num_nodes = 0
        self._start_time = clock()
        self._end_time: Optional[float] = None

    def start(self) -> None:
        """Reset the node count and start the clock from now."""
        with self._lock:
            self._num_nodes = 0
            self._over.clear()
            now = self._clock()
            self._start_time = now
            if self.search_duration is not None:
                self._end_time = now + self.search_duration

    def stop(self) -> None:
        """Mark the search as over immediately."""
        self._over.set()

    def is_over(self) -> bool:
        return self._over.is_set()

    def update_time(self) -> bool:
        """Mark the search over if its time has run out; return whether it has."""
        with self._lock:
            end = self._end_time
        if end is not None and self._clock() > end:
            self._over.set()
            return True
        return False

    def add_nodes(self, nodes: int) -> None:
        """Add to the node count, stopping the search if it passes the cap."""
        with self._lock:
            self._num_nodes += nodes
            total = self._num_nodes
            cap = self.nodes_cap
        if cap is not None and total > cap:
            self._over.set()

    def num_nodes(self) -> int:
        """The number of nodes searched since the last start."""
        with self._lock:
            return self._num_nodes