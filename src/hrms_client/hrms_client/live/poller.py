"""Background refresh of the admin dashboard.

One cycle runs at a time: the loop fetches, waits for the fetch to settle,
then sleeps for the interval. ``refresh_now`` and ``resume`` wake the loop
instead of starting a second fetch, and every result still passes through
a ``ReportView`` so anything that settles out of order is dropped.

The loop ends on ``stop``, when the API rejects the session (401/403), or
when nobody has read a snapshot for ``idle_timeout`` seconds, which is what
happens once the dashboard page is closed.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Generic, Optional, TypeVar

from ..auth.model import AuthSession
from ..core.constants import DEFAULT_REFRESH_SECONDS
from ..core.exceptions import ApiError, DomainError
from ..reports.view_state import ReportView

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DashboardPoller(Generic[T]):
    def __init__(
        self,
        fetch: Callable[[], T],
        *,
        interval: float = DEFAULT_REFRESH_SECONDS,
        idle_timeout: Optional[float] = None,
        name: str = "dashboard-poller",
    ):
        self._fetch = fetch
        self._interval = interval
        self._idle_timeout = idle_timeout
        self._name = name
        self._view: ReportView[T] = ReportView()
        self._lock = threading.Lock()
        self._wake = threading.Event()
        self._stopped = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._live = True
        self._manual = False
        self._last_read = time.monotonic()

    @property
    def view(self) -> ReportView[T]:
        return self._view

    @property
    def live(self) -> bool:
        return self._live

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def stopped(self) -> bool:
        return self._stopped.is_set()

    def start(self) -> None:
        with self._lock:
            if self._thread is not None or self._stopped.is_set():
                return
            self._last_read = time.monotonic()
            self._thread = threading.Thread(target=self._run, name=self._name, daemon=True)
            self._thread.start()
        logger.debug("%s started (every %ss)", self._name, self._interval)

    def pause(self) -> None:
        self._live = False

    def resume(self) -> None:
        if not self._live:
            self._live = True
            self._wake.set()

    def refresh_now(self) -> None:
        """Fetch once, immediately, even while paused.

        With the loop running this only wakes it, so the manual fetch takes
        the next slot instead of overlapping a scheduled one. Without a loop
        the cycle runs on the caller's thread.
        """
        if self._stopped.is_set():
            return
        if self.running:
            with self._lock:
                self._manual = True
            self._wake.set()
        else:
            self._cycle()

    def stop(self, timeout: Optional[float] = None) -> None:
        """Tear down. A fetch already in flight is not aborted; its result is dropped."""
        self._stopped.set()
        self._wake.set()
        thread = self._thread
        if timeout is not None and thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        logger.debug("%s stopped", self._name)

    def snapshot(self) -> dict:
        self._last_read = time.monotonic()
        return {
            "state": self._view.state.value,
            "live": self._live,
            "seq": self._view.seq,
            "data": self._view.data,
            "notice": self._view.pop_notice(),
        }

    def _idle(self) -> bool:
        return self._idle_timeout is not None and time.monotonic() - self._last_read > self._idle_timeout

    def _run(self) -> None:
        while not self._stopped.is_set():
            if self._idle():
                logger.info("%s: no reader for %ss, stopping", self._name, self._idle_timeout)
                self._stopped.set()
                break
            with self._lock:
                manual, self._manual = self._manual, False
            if self._live or manual:
                self._cycle()
            self._wake.wait(self._interval)
            self._wake.clear()

    def _cycle(self) -> None:
        ticket = self._view.begin_load()
        try:
            data = self._fetch()
        except ApiError as e:
            if not self._stopped.is_set():
                self._view.fail(ticket, e)
            if e.is_unauthorized or e.is_forbidden:
                logger.info("%s: session rejected (%s), stopping", self._name, e.status_code)
                self._stopped.set()
                self._wake.set()
            return
        except DomainError as e:
            if not self._stopped.is_set():
                self._view.fail(ticket, e)
            return
        except Exception:
            # Any other failure becomes a notice; the loop keeps running.
            logger.exception("%s: unexpected error while refreshing", self._name)
            if not self._stopped.is_set():
                self._view.fail(ticket, "Failed to load dashboard data")
            return
        if self._stopped.is_set():
            return
        self._view.complete(ticket, data)


class PollerRegistry:
    """One poller per logged-in session, keyed by its bearer token.

    Pollers that stopped on their own (idle or rejected session) are pruned
    on the next access.
    """

    def __init__(self, factory: Callable[[AuthSession], DashboardPoller]):
        self._factory = factory
        self._pollers: dict[str, DashboardPoller] = {}
        self._lock = threading.Lock()

    def _prune(self) -> None:
        for token in [t for t, p in self._pollers.items() if p.stopped]:
            del self._pollers[token]

    def get(self, auth: AuthSession) -> Optional[DashboardPoller]:
        with self._lock:
            self._prune()
            return self._pollers.get(auth.token)

    def get_or_start(self, auth: AuthSession) -> DashboardPoller:
        with self._lock:
            self._prune()
            poller = self._pollers.get(auth.token)
            if poller is None:
                poller = self._factory(auth)
                self._pollers[auth.token] = poller
        poller.start()
        return poller

    def stop(self, auth: AuthSession) -> None:
        with self._lock:
            poller = self._pollers.pop(auth.token, None)
        if poller is not None:
            poller.stop()

    def stop_all(self) -> None:
        with self._lock:
            pollers = list(self._pollers.values())
            self._pollers.clear()
        for p in pollers:
            p.stop()

    def __len__(self) -> int:
        with self._lock:
            self._prune()
            return len(self._pollers)
