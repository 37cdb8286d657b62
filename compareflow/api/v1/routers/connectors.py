"""REST endpoints for the connector catalogue — /api/v1/connectors."""

from fastapi import APIRouter

from compareflow.api.v1.dependencies import ConnectionSvc, CurrentUser
from compareflow.api.v1.models.connections import (
    ConfigValidateRequest,
    ConfigValidateResponse,
    ConnectorListResponse,
)
from compareflow.connectors.errors import ConfigError

router = APIRouter(prefix="/connectors", tags=["connectors"])


@router.get("/", response_model=ConnectorListResponse)
def list_connectors(service: ConnectionSvc, _: CurrentUser) -> ConnectorListResponse:
    return ConnectorListResponse(connectors=sorted(service.get_supported_connectors()))


@router.post("/{connector_type}/validate", response_model=ConfigValidateResponse)
def validate_config(
    connector_type: str,
    body: ConfigValidateRequest,
    service: ConnectionSvc,
    _: CurrentUser,
) -> ConfigValidateResponse:
    """Check a configuration against a connector without connecting.

    An unknown connector type is a 404; an invalid configuration is
    reported in the response body.
    """
    try:
        service.validate_connection_config(connector_type, body.config)
    except ConfigError as exc:
        return ConfigValidateResponse(valid=False, error=exc.message)
    return ConfigValidateResponse(valid=True)
