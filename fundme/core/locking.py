"""Mutual exclusion for ledger operations.

An asyncio.Lock only coordinates coroutines on the event loop it is
bound to. A ledger may be driven from several threads, each running its
own loop, so whole operations are serialized by a threading.Lock.

Coroutines on the same loop first queue on a per-loop asyncio.Lock, so
at most one coroutine per loop waits for the thread lock. That wait
polls instead of blocking, which keeps the loop free to run other tasks.
"""

import asyncio
import threading
import weakref

DEFAULT_POLL_INTERVAL_SECONDS = 0.001


class OperationLock:
    """Async context manager held for the full duration of an operation.

    Usable from any number of threads and event loops. Not reentrant.
    """

    def __init__(self, poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS):
        if poll_interval <= 0:
            raise ValueError(f"poll_interval must be positive, got {poll_interval}")

        self._poll_interval = poll_interval
        self._thread_lock = threading.Lock()
        self._registry_lock = threading.Lock()
        self._loop_locks: weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, asyncio.Lock] = (
            weakref.WeakKeyDictionary()
        )

    def locked(self) -> bool:
        """Return True if some operation currently holds the lock."""
        return self._thread_lock.locked()

    def _loop_lock(self) -> asyncio.Lock:
        loop = asyncio.get_running_loop()
        with self._registry_lock:
            lock = self._loop_locks.get(loop)
            if lock is None:
                lock = asyncio.Lock()
                self._loop_locks[loop] = lock
            return lock

    async def __aenter__(self) -> "OperationLock":
        loop_lock = self._loop_lock()
        await loop_lock.acquire()
        try:
            while not self._thread_lock.acquire(blocking=False):
                await asyncio.sleep(self._poll_interval)
        except BaseException:
            # Cancelled while waiting: the thread lock was never taken.
            loop_lock.release()
            raise
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self._thread_lock.release()
        self._loop_lock().release()
