from collections.abc import AsyncGenerator, Mapping
from contextlib import asynccontextmanager

from k2auth.config import Config
from k2auth.core.core import Core
from k2auth.core.modules.device.models import ServerDeviceInfo
from k2auth.core.modules.session.models import DeviceDescriptor, Session, SessionGrant
from k2auth.errors import NotFoundError, ValidationError


class App:
    """Facade for all application operations, validates input before delegating to Core."""

    def __init__(self, config: Config) -> None:
        self._core = Core(config)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    def create_session(self, headers: Mapping[str, str], peer_host: str | None, client_id: str | None) -> SessionGrant:
        """Issue a token for the calling device, or return the one it already holds."""
        device_id = self._core.services.device.resolve_device_id(headers, peer_host, client_id)
        descriptor = self._core.services.device.describe(headers, peer_host)
        return self._core.services.session.create_session(device_id, descriptor)

    def validate_session(self, token: str | None) -> Session:
        """Return the live session for a token. Raises NotFoundError if unknown or expired."""
        session = self._core.services.session.get_by_token(self._require_token(token))
        if session is None:
            raise NotFoundError("Session token not found or already expired")
        return session

    def get_device_session(self, headers: Mapping[str, str], peer_host: str | None, client_id: str | None) -> Session:
        """Return the live session held by the calling device."""
        session = self._core.services.device.find_session(headers, peer_host, client_id)
        if session is None:
            raise NotFoundError("No active session for this device")
        return session

    def clear_session(self, token: str | None) -> str:
        """Revoke a token and return it. Raises NotFoundError if it was not live."""
        token = self._require_token(token)
        if not self._core.services.session.clear_session(token):
            raise NotFoundError("Session token not found or already expired")
        return token

    def clear_all_sessions(self) -> int:
        """Revoke every token (development and testing only)."""
        return self._core.services.session.clear_all()

    def count_active_sessions(self) -> int:
        return self._core.services.session.count_active()

    def describe_device(self, headers: Mapping[str, str], peer_host: str | None) -> DeviceDescriptor:
        return self._core.services.device.describe(headers, peer_host)

    def get_server_device_info(self) -> ServerDeviceInfo:
        return self._core.services.device.get_server_device_info()

    # === Private helpers ===
    @staticmethod
    def _require_token(token: str | None) -> str:
        if token is None or not token.strip():
            raise ValidationError("Session token is required (?token=xxx)")
        return token.strip()
