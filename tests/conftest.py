"""Shared pytest fixtures."""

from datetime import UTC, datetime, timedelta

import pytest

from k2auth.config import Config
from k2auth.core.modules.session.models import DeviceDescriptor
from k2auth.core.modules.session.store import SessionStore


class FakeClock:
    """Manually advanced clock for expiry tests."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs: float) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def clock():
    """Clock starting at a fixed instant."""
    return FakeClock(datetime(2025, 1, 1, 8, 0, tzinfo=UTC))


@pytest.fixture
def store(clock):
    """Session store with a one hour TTL driven by the fake clock."""
    return SessionStore(timedelta(hours=1), clock=clock)


@pytest.fixture
def descriptor():
    """Create a device descriptor as the extractor would."""
    return DeviceDescriptor(
        ip_address="203.0.113.10",
        real_ip_address="203.0.113.10",
        user_agent="Mozilla/5.0 (Windows NT 10.0; Win64; x64)",
        device_name="Windows Device",
        is_vpn_connection=False,
    )


@pytest.fixture
def config():
    """Config isolated from the environment and any .env file."""
    return Config(
        _env_file=None,
        host="127.0.0.1",
        port=8080,
        debug=True,
        token_expiration_hours=24,
        session_sweep_interval_seconds=0,
    )
