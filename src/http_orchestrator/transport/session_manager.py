# src/http_orchestrator/transport/session_manager.py
"""
Thread-local requests.Session storage for RequestsTransport.

Every thread that sends through a transport gets its own Session (and so
its own connection pool); close_all() reaches sessions created by any thread.
"""
import threading
from typing import Callable, Set
import weakref

import requests


class ThreadLocalSessions:
    """
    Lazily created per-thread sessions.

    Example:
        >>> sessions = ThreadLocalSessions(requests.Session)
        >>> session = sessions.get()
        >>> sessions.get() is session
        True
        >>> sessions.close_all()
    """

    def __init__(self, factory: Callable[[], requests.Session]):
        self._factory = factory
        self._local = threading.local()

        # weak references so sessions of finished threads can be collected
        self._refs: Set[weakref.ref] = set()
        self._lock = threading.RLock()

    def get(self) -> requests.Session:
        """Session of the calling thread."""
        session = getattr(self._local, 'session', None)
        if session is None:
            session = self._factory()
            self._local.session = session
            with self._lock:
                self._refs.add(weakref.ref(session, self._forget))
        return session

    def _forget(self, ref: weakref.ref) -> None:
        with self._lock:
            self._refs.discard(ref)

    def close_current(self) -> None:
        """Close the calling thread's session; the next get() creates a fresh one."""
        session = getattr(self._local, 'session', None)
        self._local.session = None
        if session is not None:
            session.close()

    def close_all(self) -> None:
        """Close sessions of every thread. Safe to call more than once."""
        self._local.session = None
        with self._lock:
            refs = list(self._refs)
            self._refs.clear()

        for ref in refs:
            session = ref()
            if session is not None:
                session.close()

    @property
    def active_count(self) -> int:
        """Sessions not yet closed or collected."""
        with self._lock:
            return sum(1 for ref in self._refs if ref() is not None)
