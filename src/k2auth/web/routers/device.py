"""Host device information endpoint."""

from fastapi import APIRouter

from k2auth.core.modules.device.models import ServerDeviceInfo
from k2auth.web.deps import AppDep
from k2auth.web.envelope import K2Response

router = APIRouter(prefix="/api/device", tags=["Device Information"])


@router.get(
    "/info",
    summary="Get host device information",
    description=(
        "Hostname, primary MAC address and active network interfaces of the machine running this service. "
        "Browsers cannot expose a client's MAC address, so this only describes the server side."
    ),
    operation_id="getDeviceInfo",
)
async def get_device_info(app: AppDep) -> K2Response[ServerDeviceInfo]:
    info = app.get_server_device_info()
    return K2Response[ServerDeviceInfo].success(
        info, "Device information retrieved successfully", total_records=info.total_interfaces
    )
