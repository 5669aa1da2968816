"""In-memory session registry keyed by device id and by token."""

from __future__ import annotations

import secrets
from collections.abc import Callable
from datetime import datetime, timedelta
from threading import Lock

from k2auth.core.modules.session.models import DeviceDescriptor, Session, SessionGrant, SessionToken
from k2auth.errors import ValidationError
from k2auth.utils import now


def _new_token() -> SessionToken:
    return SessionToken(secrets.token_urlsafe(32))


def _require(value: str, message: str) -> None:
    if not value or not value.strip():
        raise ValidationError(message)


class SessionStore:
    """Holds live sessions for the lifetime of the process.

    Both indexes are read and written under a single lock, so a session is
    always present in both or in neither. Expired sessions are evicted
    lazily whenever a lookup touches them; ``purge_expired`` sweeps the rest.

    A device keeps its token until it expires: creating a session for a
    device that already holds a live one returns the existing session.
    """

    def __init__(
        self,
        ttl: timedelta,
        *,
        clock: Callable[[], datetime] = now,
        token_factory: Callable[[], SessionToken] = _new_token,
    ) -> None:
        if ttl <= timedelta(0):
            raise ValueError("ttl must be positive")
        self._ttl = ttl
        self._clock = clock
        self._token_factory = token_factory
        self._by_device: dict[str, Session] = {}
        self._by_token: dict[SessionToken, Session] = {}
        self._lock = Lock()

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def create_session(self, device_id: str, descriptor: DeviceDescriptor) -> SessionGrant:
        """Return the device's live session, issuing a new one if it has none."""
        _require(device_id, "Device id is required")

        with self._lock:
            current_time = self._clock()
            existing = self._by_device.get(device_id)
            if existing is not None:
                if existing.is_live(current_time):
                    return SessionGrant(session=existing, is_new=False)
                self._evict(existing)

            token = self._token_factory()
            while token in self._by_token:
                token = self._token_factory()

            session = Session(
                token=token,
                device_id=device_id,
                descriptor=descriptor,
                created_at=current_time,
                expires_at=current_time + self._ttl,
            )
            self._by_device[device_id] = session
            self._by_token[token] = session
            return SessionGrant(session=session, is_new=True)

    def get_by_device_id(self, device_id: str) -> Session | None:
        _require(device_id, "Device id is required")
        with self._lock:
            return self._live_or_evict(self._by_device.get(device_id))

    def get_by_token(self, token: str) -> Session | None:
        _require(token, "Session token is required")
        with self._lock:
            return self._live_or_evict(self._by_token.get(SessionToken(token)))

    def clear_session(self, token: str) -> bool:
        """Remove the session for ``token``; False if it was unknown or no longer live."""
        _require(token, "Session token is required")
        with self._lock:
            session = self._by_token.get(SessionToken(token))
            if session is None:
                return False
            self._evict(session)
            return session.is_live(self._clock())

    def clear_all(self) -> int:
        """Empty the store and return how many live sessions were revoked."""
        with self._lock:
            current_time = self._clock()
            count = sum(1 for s in self._by_token.values() if s.is_live(current_time))
            self._by_token.clear()
            self._by_device.clear()
            return count

    def purge_expired(self) -> int:
        """Drop every expired session and return how many were removed."""
        with self._lock:
            current_time = self._clock()
            expired = [s for s in self._by_token.values() if not s.is_live(current_time)]
            for session in expired:
                self._evict(session)
            return len(expired)

    def count(self) -> int:
        """Number of live sessions."""
        with self._lock:
            current_time = self._clock()
            return sum(1 for s in self._by_token.values() if s.is_live(current_time))

    # Callers must hold self._lock
    def _live_or_evict(self, session: Session | None) -> Session | None:
        if session is None:
            return None
        if session.is_live(self._clock()):
            return session
        self._evict(session)
        return None

    def _evict(self, session: Session) -> None:
        self._by_token.pop(session.token, None)
        if self._by_device.get(session.device_id) is session:
            del self._by_device[session.device_id]
