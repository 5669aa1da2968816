from collections.abc import Mapping

from k2auth.core.core import Service
from k2auth.core.modules.device import extractor, host
from k2auth.core.modules.device.models import ServerDeviceInfo
from k2auth.core.modules.session.models import DeviceDescriptor, Session


class DeviceService(Service):
    """Identifies calling devices and reports on the host machine."""

    def describe(self, headers: Mapping[str, str], peer_host: str | None) -> DeviceDescriptor:
        """Build the device descriptor for an incoming request."""
        return extractor.extract_descriptor(headers, peer_host)

    def resolve_device_id(self, headers: Mapping[str, str], peer_host: str | None, client_id: str | None) -> str:
        """Use the caller-supplied client id, or fingerprint the request when absent."""
        if client_id and client_id.strip():
            return client_id.strip()
        return extractor.get_unique_device_id(headers, peer_host)

    def find_session(self, headers: Mapping[str, str], peer_host: str | None, client_id: str | None) -> Session | None:
        """Look up the live session held by the calling device."""
        device_id = self.resolve_device_id(headers, peer_host, client_id)
        return self.core.services.session.get_by_device_id(device_id)

    def get_server_device_info(self) -> ServerDeviceInfo:
        return host.get_server_device_info()
