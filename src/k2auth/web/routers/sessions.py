from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Query
from pydantic import Field

from k2auth.core.modules.device.models import ServerDeviceInfo
from k2auth.core.modules.session.models import DeviceDescriptor, Session
from k2auth.utils import now
from k2auth.web.deps import AppDep, RequestSourceDep
from k2auth.web.envelope import CamelModel, K2Response

router = APIRouter(prefix="/api/session", tags=["Session Management"])

ClientIdQuery = Annotated[
    str | None,
    Query(
        alias="clientId",
        description="Unique client identifier (e.g. a GUID generated client-side). "
        "When omitted the device is fingerprinted from its IP address and User-Agent.",
    ),
]
TokenQuery = Annotated[str | None, Query(description="Session token issued by /api/session/create")]


class DeviceInfoView(CamelModel):
    """Device metadata recorded when the token was issued."""

    ip_address: str | None
    real_ip_address: str | None
    user_agent: str | None
    device_name: str | None
    is_vpn_connection: bool

    @classmethod
    def from_domain(cls, descriptor: DeviceDescriptor) -> "DeviceInfoView":
        return cls.model_validate(descriptor.model_dump())


class SessionTokenData(CamelModel):
    """Issued session token."""

    session_token: str = Field(..., description="Token to attach to subsequent requests")
    created_at: datetime
    expires_at: datetime
    is_new_session: bool = Field(..., description="False when the device already held this live token")
    device_info: DeviceInfoView
    server_device_info: ServerDeviceInfo | None = None

    @classmethod
    def from_domain(
        cls, session: Session, is_new: bool, server_device_info: ServerDeviceInfo | None = None
    ) -> "SessionTokenData":
        return cls(
            session_token=session.token,
            created_at=session.created_at,
            expires_at=session.expires_at,
            is_new_session=is_new,
            device_info=DeviceInfoView.from_domain(session.descriptor),
            server_device_info=server_device_info,
        )


class ValidationData(CamelModel):
    """Validated token plus what the current request looks like."""

    session_token: str
    expires_at: datetime
    client_ip: str | None
    real_ip: str | None
    user_agent: str | None
    device_name: str | None
    is_vpn_connection: bool
    validated_at: datetime


class ClearedData(CamelModel):
    token: str
    cleared_at: datetime


class ClearedAllData(CamelModel):
    cleared_count: int
    cleared_at: datetime


@router.get(
    "/create",
    summary="Create session token",
    description=(
        "Create a session token for a K2 SmartObject client. A device holds one token at a time: "
        "calling again before it expires returns the same token with isNewSession=false."
    ),
    operation_id="createSessionToken",
)
async def create_session(
    app: AppDep, source: RequestSourceDep, client_id: ClientIdQuery = None
) -> K2Response[SessionTokenData]:
    grant = app.create_session(source.headers, source.peer_host, client_id)
    data = SessionTokenData.from_domain(grant.session, grant.is_new, app.get_server_device_info())
    message = (
        "Session token created successfully. Store this token in K2 SmartObject for future requests."
        if grant.is_new
        else "Existing session token returned. It stays valid until it expires or is cleared."
    )
    return K2Response[SessionTokenData].success(data, message)


@router.get(
    "/validate",
    summary="Validate session token",
    description="Check that a token is still live. Returns the current request's device info and validation time.",
    operation_id="validateSessionToken",
)
async def validate_session(
    app: AppDep, source: RequestSourceDep, token: TokenQuery = None
) -> K2Response[ValidationData]:
    session = app.validate_session(token)
    current = app.describe_device(source.headers, source.peer_host)
    data = ValidationData(
        session_token=session.token,
        expires_at=session.expires_at,
        client_ip=current.ip_address,
        real_ip=current.real_ip_address,
        user_agent=current.user_agent,
        device_name=current.device_name,
        is_vpn_connection=current.is_vpn_connection,
        validated_at=now(),
    )
    return K2Response[ValidationData].success(data, "Session validated successfully")


@router.get(
    "/device",
    summary="Get device session",
    description="Return the live token held by the calling device, identified by clientId or by fingerprint.",
    operation_id="getDeviceSession",
)
async def get_device_session(
    app: AppDep, source: RequestSourceDep, client_id: ClientIdQuery = None
) -> K2Response[SessionTokenData]:
    session = app.get_device_session(source.headers, source.peer_host, client_id)
    data = SessionTokenData.from_domain(session, is_new=False)
    return K2Response[SessionTokenData].success(data, "Active session found")


@router.delete(
    "/clear",
    summary="Clear session token",
    description="Revoke a single token (?token=xxx). Also available as GET for browser use.",
    operation_id="clearSessionToken",
)
@router.get("/clear", include_in_schema=False)
async def clear_session(app: AppDep, token: TokenQuery = None) -> K2Response[ClearedData]:
    cleared_token = app.clear_session(token)
    data = ClearedData(token=cleared_token, cleared_at=now())
    return K2Response[ClearedData].success(data, "Session token cleared successfully")


@router.delete(
    "/clear-all",
    summary="Clear all session tokens",
    description="Revoke every token. Intended for development and testing. Also available as GET.",
    operation_id="clearAllSessions",
)
@router.get("/clear-all", include_in_schema=False)
async def clear_all_sessions(app: AppDep) -> K2Response[ClearedAllData]:
    count = app.clear_all_sessions()
    data = ClearedAllData(cleared_count=count, cleared_at=now())
    return K2Response[ClearedAllData].success(data, f"Cleared {count} session token(s) successfully")
