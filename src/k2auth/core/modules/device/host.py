"""Network information about the machine running the service."""

import socket

import psutil
import structlog

from k2auth.core.modules.device.models import NetworkInterfaceInfo, ServerDeviceInfo
from k2auth.utils import now

logger = structlog.get_logger(__name__)

NULL_MAC = "00-00-00-00-00-00"


def format_mac_address(address: str) -> str:
    """Normalize a MAC address to upper-case, dash separated form."""
    return address.replace(":", "-").replace(".", "-").upper()


def get_hostname() -> str:
    try:
        return socket.gethostname()
    except OSError:
        return "Unknown"


def get_network_interfaces() -> list[NetworkInterfaceInfo]:
    """List interfaces that are up, not loopback or tunnels, and carry a real MAC address."""
    try:
        addresses = psutil.net_if_addrs()
        stats = psutil.net_if_stats()
    except (OSError, psutil.Error) as exc:
        logger.warning("network_interfaces_unavailable", error=str(exc))
        return []

    interfaces: list[NetworkInterfaceInfo] = []
    for name, addrs in addresses.items():
        stat = stats.get(name)
        if stat is None or not stat.isup:
            continue
        flags = getattr(stat, "flags", "").split(",")
        if "loopback" in flags or "pointopoint" in flags:
            continue
        # Tunnels (tun, wg, ppp) report a point-to-point peer address
        if any(a.ptp for a in addrs):
            continue

        mac = next((format_mac_address(a.address) for a in addrs if a.family == psutil.AF_LINK), "")
        if not mac or mac == NULL_MAC:
            continue

        ipv4 = [a for a in addrs if a.family == socket.AF_INET]
        interfaces.append(
            NetworkInterfaceInfo(
                name=name,
                mac_address=mac,
                mtu=stat.mtu,
                speed_mbps=stat.speed,
                ipv4_addresses=[a.address for a in ipv4],
                ipv6_addresses=[a.address for a in addrs if a.family == socket.AF_INET6],
                subnet_masks=[a.netmask or "N/A" for a in ipv4],
            )
        )
    return interfaces


def get_primary_mac_address(interfaces: list[NetworkInterfaceInfo] | None = None) -> str:
    if interfaces is None:
        interfaces = get_network_interfaces()
    return next((i.mac_address for i in interfaces if i.is_active), NULL_MAC)


def get_server_device_info() -> ServerDeviceInfo:
    interfaces = get_network_interfaces()
    return ServerDeviceInfo(
        hostname=get_hostname(),
        primary_mac_address=get_primary_mac_address(interfaces),
        network_interfaces=interfaces,
        total_interfaces=len(interfaces),
        active_interfaces=sum(1 for i in interfaces if i.is_active),
        retrieved_at=now(),
    )
