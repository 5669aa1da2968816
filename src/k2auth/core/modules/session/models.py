"""Session management models."""

from datetime import datetime
from typing import NewType

from pydantic import BaseModel, ConfigDict, Field

SessionToken = NewType("SessionToken", str)


class DeviceDescriptor(BaseModel):
    """Request metadata captured when a session is issued.

    The session store keeps it alongside the session and hands it back
    unchanged; nothing in the core reads these fields.
    """

    ip_address: str | None = Field(None, description="Client IP address (first hop of X-Forwarded-For when proxied)")
    real_ip_address: str | None = Field(None, description="Original client IP for VPN/proxy chains")
    user_agent: str | None = Field(None, description="User-Agent header")
    device_name: str | None = Field(None, description="Device name from X-Device-Name or guessed from the user agent")
    is_vpn_connection: bool = Field(False, description="Whether the request arrived through a proxy or VPN")

    model_config = ConfigDict(frozen=True)


class Session(BaseModel):
    """Issued session token bound to a single device.

    Immutable after creation; liveness is derived from expires_at.
    """

    token: SessionToken
    device_id: str
    descriptor: DeviceDescriptor
    created_at: datetime
    expires_at: datetime

    model_config = ConfigDict(frozen=True)

    def is_live(self, at: datetime) -> bool:
        return at < self.expires_at


class SessionGrant(BaseModel):
    """Result of a create call: the device's session and whether it was just issued."""

    session: Session
    is_new: bool

    model_config = ConfigDict(frozen=True)
