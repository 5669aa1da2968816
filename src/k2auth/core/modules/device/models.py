"""Host network information models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class NetworkInterfaceInfo(BaseModel):
    """Active network interface on the machine running the service."""

    name: str
    mac_address: str = Field(..., description="MAC address formatted as XX-XX-XX-XX-XX-XX")
    is_active: bool = True
    mtu: int = 0
    speed_mbps: int = 0  # 0 when the OS does not report a link speed
    ipv4_addresses: list[str] = []
    ipv6_addresses: list[str] = []
    subnet_masks: list[str] = []

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ServerDeviceInfo(BaseModel):
    """Hostname and network interfaces of the machine running the service."""

    hostname: str
    primary_mac_address: str
    network_interfaces: list[NetworkInterfaceInfo]
    total_interfaces: int
    active_interfaces: int
    retrieved_at: datetime

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
