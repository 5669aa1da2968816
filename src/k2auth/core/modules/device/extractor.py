"""Device fingerprinting from request headers.

Clients cannot report their own MAC address over HTTP, so a device is
described by what the server can see: the forwarding chain, the peer
address and the User-Agent string.

Header lookups expect a case-insensitive mapping such as starlette's
``Headers``; plain dicts must use lowercase keys.
"""

import hashlib
from collections.abc import Mapping

from k2auth.core.modules.session.models import DeviceDescriptor

UNKNOWN = "unknown"

# Checked in order; the first marker found in the User-Agent wins
_USER_AGENT_DEVICES: list[tuple[tuple[str, ...], str]] = [
    (("Windows",), "Windows Device"),
    (("Mac",), "Mac Device"),
    (("Linux",), "Linux Device"),
    (("Android",), "Android Device"),
    (("iPhone", "iPad"), "iOS Device"),
]


def _forwarded_for(headers: Mapping[str, str]) -> list[str]:
    value = headers.get("x-forwarded-for") or ""
    return [ip.strip() for ip in value.split(",") if ip.strip()]


def get_client_ip(headers: Mapping[str, str], peer_host: str | None) -> str:
    """First hop of X-Forwarded-For, then X-Real-IP, then the socket peer."""
    forwarded = _forwarded_for(headers)
    if forwarded:
        return forwarded[0]

    real_ip = headers.get("x-real-ip")
    if real_ip:
        return real_ip

    return peer_host or UNKNOWN


def get_real_ip(headers: Mapping[str, str], peer_host: str | None) -> str:
    """Last hop of a multi-entry X-Forwarded-For chain, otherwise the client IP."""
    forwarded = _forwarded_for(headers)
    if len(forwarded) > 1:
        return forwarded[-1]
    return get_client_ip(headers, peer_host)


def get_user_agent(headers: Mapping[str, str]) -> str:
    return headers.get("user-agent") or UNKNOWN


def is_vpn_connection(headers: Mapping[str, str]) -> bool:
    return any(name in headers for name in ("x-forwarded-for", "x-real-ip", "via"))


def get_device_name(headers: Mapping[str, str]) -> str:
    device_name = headers.get("x-device-name")
    if device_name:
        return device_name

    user_agent = get_user_agent(headers)
    for markers, name in _USER_AGENT_DEVICES:
        if any(marker in user_agent for marker in markers):
            return name
    return "Unknown Device"


def get_unique_device_id(headers: Mapping[str, str], peer_host: str | None) -> str:
    """Derive a stable 16-character device id from client IP and User-Agent."""
    combined = f"{get_client_ip(headers, peer_host)}_{get_user_agent(headers)}"
    return hashlib.sha256(combined.encode("utf-8")).hexdigest()[:16].upper()


def extract_descriptor(headers: Mapping[str, str], peer_host: str | None) -> DeviceDescriptor:
    return DeviceDescriptor(
        ip_address=get_client_ip(headers, peer_host),
        real_ip_address=get_real_ip(headers, peer_host),
        user_agent=get_user_agent(headers),
        device_name=get_device_name(headers),
        is_vpn_connection=is_vpn_connection(headers),
    )
