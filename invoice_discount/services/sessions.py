import logging
import threading
import time
from collections import OrderedDict
from dataclasses import replace
from typing import Callable
from uuid import uuid4

from ..config import settings
from ..models import InvoiceSession
from . import lines as lines_service
from .formatting import parse_amount

logger = logging.getLogger(__name__)


def new_session_id() -> str:
    return uuid4().hex


def new_session() -> InvoiceSession:
    return InvoiceSession(lines=lines_service.seed_lines())


def set_final_amount(session: InvoiceSession, raw) -> InvoiceSession:
    raw_text = "" if raw is None else str(raw).strip()
    return replace(session, final_amount=parse_amount(raw), final_amount_raw=raw_text)


class SessionStore:
    """In-memory calculator sessions, keyed by the browser's session cookie.

    Snapshots are swapped under a lock so a recomputation never reads a
    half-applied edit. Sessions idle for longer than ``idle_seconds`` are
    dropped, and the least recently used ones go first once ``max_count``
    is reached.
    """

    def __init__(
        self,
        max_count: int | None = None,
        idle_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        max_count = settings.session_max_count if max_count is None else max_count
        self.max_count = max(max_count, 1)
        self.idle_seconds = (
            settings.session_idle_seconds if idle_seconds is None else idle_seconds
        )
        self._clock = clock
        self._sessions: OrderedDict[str, tuple[InvoiceSession, float]] = OrderedDict()
        self._lock = threading.Lock()

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def get(self, session_id: str) -> InvoiceSession:
        with self._lock:
            return self._get_or_create(session_id)

    def replace(self, session_id: str, session: InvoiceSession) -> InvoiceSession:
        with self._lock:
            self._store(session_id, session)
            return session

    def apply(
        self, session_id: str, change: Callable[[InvoiceSession], InvoiceSession]
    ) -> InvoiceSession:
        with self._lock:
            current = self._get_or_create(session_id)
            updated = change(current)
            self._sessions[session_id] = (updated, self._clock())
            return updated

    def reset(self, session_id: str) -> InvoiceSession:
        logger.info("Resetting session %s", session_id)
        return self.replace(session_id, new_session())

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()

    def _get_or_create(self, session_id: str) -> InvoiceSession:
        entry = self._sessions.get(session_id)
        if entry is not None and not self._is_idle(entry[1]):
            session = entry[0]
            self._sessions[session_id] = (session, self._clock())
            self._sessions.move_to_end(session_id)
            return session
        logger.info("Creating session %s", session_id)
        session = new_session()
        self._store(session_id, session)
        return session

    def _store(self, session_id: str, session: InvoiceSession) -> None:
        self._sessions[session_id] = (session, self._clock())
        self._sessions.move_to_end(session_id)
        self._evict()

    def _is_idle(self, last_access: float) -> bool:
        return self._clock() - last_access > self.idle_seconds

    def _evict(self) -> None:
        # Entries are kept in access order, so idle ones sit at the front.
        while self._sessions:
            oldest_id, (_, last_access) = next(iter(self._sessions.items()))
            if len(self._sessions) <= self.max_count and not self._is_idle(last_access):
                break
            del self._sessions[oldest_id]
            logger.debug("Evicted session %s", oldest_id)


_store = SessionStore()


def get_store() -> SessionStore:
    return _store
