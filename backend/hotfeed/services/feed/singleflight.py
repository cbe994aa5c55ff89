"""
Single-flight: concurrent calls for the same key share one execution.

The first caller for a key runs the function; callers arriving while it runs wait on
the same Future and get its result (or its exception). Once it finishes the key is
free again, so the next call runs fresh.
"""
import logging
import threading
from concurrent.futures import Future
from typing import Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SingleFlight(Generic[T]):
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._in_flight: dict[str, Future] = {}
        self._waiters: dict[str, int] = {}

    def in_flight(self) -> list[str]:
        with self._lock:
            return list(self._in_flight.keys())

    def waiting(self, key: str) -> int:
        """Callers currently joined to the in-flight call for key."""
        with self._lock:
            return self._waiters.get(key, 0)

    def do(self, key: str, fn: Callable[[], T], timeout: float | None = None) -> tuple[T, bool]:
        """
        Run fn once per key at a time. Returns (result, shared) where shared is True for
        callers that joined someone else's call.
        """
        with self._lock:
            fut = self._in_flight.get(key)
            leader = fut is None
            if leader:
                fut = Future()
                self._in_flight[key] = fut
            else:
                self._waiters[key] = self._waiters.get(key, 0) + 1
        if not leader:
            logger.debug("Joining in-flight call for %s", key)
            return fut.result(timeout=timeout), True
        try:
            result = fn()
        except BaseException as e:
            fut.set_exception(e)
            raise
        else:
            fut.set_result(result)
            return result, False
        finally:
            with self._lock:
                self._in_flight.pop(key, None)
                self._waiters.pop(key, None)
