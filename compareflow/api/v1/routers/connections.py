"""REST endpoints for Connection — /api/v1/connections.

Every route is scoped to the authenticated user.  Connector failures
propagate to the exception handlers registered in compareflow/main.py,
except for the test endpoint which reports them in its body.
"""

from uuid import UUID

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from compareflow.api.v1.dependencies import (
    ConnectionRepo,
    ConnectionSvc,
    CurrentUser,
    PaginationDep,
)
from compareflow.api.v1.models.connections import (
    ColumnListResponse,
    ConnectionCreate,
    ConnectionListResponse,
    ConnectionResponse,
    ConnectionTestResponse,
    ConnectionUpdate,
    QueryRequest,
    QueryResponse,
    TableListResponse,
)
from compareflow.connectors.errors import ConnectorError
from compareflow.core.errors import NotFoundError
from compareflow.db.repositories.connection import ConnectionRepository
from compareflow.models.schema import Connection

router = APIRouter(prefix="/connections", tags=["connections"])


def _get_owned(repo: ConnectionRepository, connection_id: UUID, user_id: UUID) -> Connection:
    connection = repo.get_for_user(connection_id, user_id)
    if connection is None:
        raise NotFoundError("Connection", connection_id)
    return connection


# ---------------------------------------------------------------------------
# CRUD
# ---------------------------------------------------------------------------


@router.post("/", response_model=ConnectionResponse, status_code=status.HTTP_201_CREATED)
def create_connection(
    body: ConnectionCreate, repo: ConnectionRepo, user: CurrentUser
) -> ConnectionResponse:
    return repo.create(body.to_domain(user.id))


@router.get("/", response_model=ConnectionListResponse)
def list_connections(
    repo: ConnectionRepo, user: CurrentUser, pagination: PaginationDep
) -> ConnectionListResponse:
    items = repo.list_by_user(user.id)
    paged = items[pagination.skip : pagination.skip + pagination.limit]
    return ConnectionListResponse(items=paged, count=len(items))


@router.get("/{connection_id}", response_model=ConnectionResponse)
def get_connection(
    connection_id: UUID, repo: ConnectionRepo, user: CurrentUser
) -> ConnectionResponse:
    return _get_owned(repo, connection_id, user.id)


@router.put("/{connection_id}", response_model=ConnectionResponse)
def update_connection(
    connection_id: UUID, body: ConnectionUpdate, repo: ConnectionRepo, user: CurrentUser
) -> ConnectionResponse:
    connection = _get_owned(repo, connection_id, user.id)
    return repo.update(body.apply_to(connection))


@router.delete("/{connection_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_connection(connection_id: UUID, repo: ConnectionRepo, user: CurrentUser) -> None:
    if not repo.delete_for_user(connection_id, user.id):
        raise NotFoundError("Connection", connection_id)


# ---------------------------------------------------------------------------
# Connector operations
# ---------------------------------------------------------------------------


@router.post(
    "/{connection_id}/test",
    response_model=ConnectionTestResponse,
    responses={400: {"model": ConnectionTestResponse}},
)
def test_connection(
    connection_id: UUID, repo: ConnectionRepo, service: ConnectionSvc, user: CurrentUser
):
    connection = _get_owned(repo, connection_id, user.id)
    try:
        service.test_connection(connection)
    except ConnectorError as exc:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ConnectionTestResponse(success=False, message=exc.message).model_dump(),
        )
    return ConnectionTestResponse(success=True, message="Connection test successful")


@router.get("/{connection_id}/tables", response_model=TableListResponse)
def list_tables(
    connection_id: UUID, repo: ConnectionRepo, service: ConnectionSvc, user: CurrentUser
) -> TableListResponse:
    connection = _get_owned(repo, connection_id, user.id)
    return TableListResponse(tables=service.get_tables(connection))


@router.get("/{connection_id}/tables/{table_name}/columns", response_model=ColumnListResponse)
def list_columns(
    connection_id: UUID,
    table_name: str,
    repo: ConnectionRepo,
    service: ConnectionSvc,
    user: CurrentUser,
) -> ColumnListResponse:
    connection = _get_owned(repo, connection_id, user.id)
    return ColumnListResponse(columns=service.get_columns(connection, table_name))


@router.post("/{connection_id}/query", response_model=QueryResponse)
def run_query(
    connection_id: UUID,
    body: QueryRequest,
    repo: ConnectionRepo,
    service: ConnectionSvc,
    user: CurrentUser,
) -> QueryResponse:
    connection = _get_owned(repo, connection_id, user.id)
    rows = service.execute_query(connection, body.query)
    return QueryResponse(rows=rows, row_count=len(rows))
