from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from typing import Any, Callable, Generic, Hashable, Optional, TypeVar

from ..core.constants import REPORT_VIEW_CACHE_SIZE
from ..core.enums import ViewState

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ReportView(Generic[T]):
    """State of one report surface: LOADING while a fetch is in flight, LOADED otherwise.

    Each ``begin_load`` hands out a ticket numbered in issue order. Results
    are applied only if their ticket is newer than the last applied one, so a
    slow response from an older fetch can never overwrite a newer one. A
    failed fetch keeps the last good data and leaves a transient notice.
    """

    def __init__(self, initial: Optional[T] = None):
        self._lock = threading.Lock()
        self._state = ViewState.LOADING
        self._data: Optional[T] = initial
        self._issued = 0
        self._applied = 0
        self._notice: Optional[str] = None

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def data(self) -> Optional[T]:
        return self._data

    @property
    def seq(self) -> int:
        return self._applied

    def begin_load(self) -> int:
        with self._lock:
            self._issued += 1
            self._state = ViewState.LOADING
            return self._issued

    def complete(self, ticket: int, data: T) -> bool:
        with self._lock:
            if ticket <= self._applied:
                logger.debug("discarding stale result #%s (applied #%s)", ticket, self._applied)
                return False
            self._applied = ticket
            self._data = data
            self._notice = None
            self._settle(ticket)
            return True

    def fail(self, ticket: int, error: Any) -> bool:
        with self._lock:
            if ticket <= self._applied:
                return False
            logger.warning("report fetch #%s failed: %s", ticket, error)
            self._applied = ticket
            self._notice = str(error) or "Failed to load data"
            self._settle(ticket)
            return True

    def _settle(self, ticket: int) -> None:
        # Stay LOADING while a newer fetch is still outstanding.
        if ticket >= self._issued:
            self._state = ViewState.LOADED

    def pop_notice(self) -> Optional[str]:
        with self._lock:
            notice, self._notice = self._notice, None
            return notice

    @property
    def notice(self) -> Optional[str]:
        return self._notice


class ReportViewCache(Generic[T]):
    """Most-recently-used ``ReportView`` per key, bounded to ``maxsize`` entries.

    Lets a server-rendered page keep its last good result across requests, so
    a failed reload shows the previous report with a notice instead of nothing.
    """

    def __init__(self, maxsize: int = REPORT_VIEW_CACHE_SIZE):
        self._maxsize = maxsize
        self._views: "OrderedDict[Hashable, ReportView[T]]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: Hashable) -> ReportView[T]:
        with self._lock:
            view = self._views.pop(key, None)
            if view is None:
                view = ReportView()
            self._views[key] = view
            while len(self._views) > self._maxsize:
                self._views.popitem(last=False)
            return view

    def discard_if(self, predicate: Callable[[Hashable], bool]) -> None:
        with self._lock:
            for key in [k for k in self._views if predicate(k)]:
                del self._views[key]

    def __len__(self) -> int:
        return len(self._views)
