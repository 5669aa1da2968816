import asyncio
import contextlib
from datetime import timedelta

import structlog

from k2auth.config import Config
from k2auth.core.core import Service
from k2auth.core.modules.session.models import DeviceDescriptor, Session, SessionGrant
from k2auth.core.modules.session.store import SessionStore

logger = structlog.get_logger(__name__)


class SessionService(Service):
    """Issues, looks up and revokes device session tokens."""

    def __init__(self, config: Config) -> None:
        super().__init__(config)
        self.store = SessionStore(timedelta(hours=config.token_expiration_hours))
        self._sweep_task: asyncio.Task[None] | None = None

    async def on_start(self) -> None:
        """Start the expired-session sweep if an interval is configured."""
        interval = self.config.session_sweep_interval_seconds
        if interval > 0:
            self._sweep_task = asyncio.create_task(self._sweep_loop(interval))
        logger.debug(
            "session_service_started",
            ttl_hours=self.store.ttl.total_seconds() / 3600,
            sweep_interval_seconds=interval,
        )

    async def on_stop(self) -> None:
        if self._sweep_task is not None:
            self._sweep_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._sweep_task
            self._sweep_task = None

    def create_session(self, device_id: str, descriptor: DeviceDescriptor) -> SessionGrant:
        grant = self.store.create_session(device_id, descriptor)
        if grant.is_new:
            logger.info("session_created", device_id=device_id, expires_at=grant.session.expires_at.isoformat())
        else:
            logger.debug("session_reused", device_id=device_id)
        return grant

    def get_by_device_id(self, device_id: str) -> Session | None:
        return self.store.get_by_device_id(device_id)

    def get_by_token(self, token: str) -> Session | None:
        return self.store.get_by_token(token)

    def clear_session(self, token: str) -> bool:
        cleared = self.store.clear_session(token)
        if cleared:
            logger.info("session_cleared")
        return cleared

    def clear_all(self) -> int:
        count = self.store.clear_all()
        logger.warning("all_sessions_cleared", count=count)
        return count

    def count_active(self) -> int:
        return self.store.count()

    def purge_expired(self) -> int:
        removed = self.store.purge_expired()
        if removed:
            logger.debug("expired_sessions_purged", count=removed)
        return removed

    async def _sweep_loop(self, interval: int) -> None:
        while True:
            await asyncio.sleep(interval)
            self.purge_expired()
