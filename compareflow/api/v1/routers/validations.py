"""REST endpoints for Validation — /api/v1/validations."""

from uuid import UUID

from fastapi import APIRouter, HTTPException, status

from compareflow.api.v1.dependencies import (
    ConnectionRepo,
    ConnectionSvc,
    CurrentUser,
    PaginationDep,
    ValidationRepo,
)
from compareflow.api.v1.models.validations import (
    ValidationCreate,
    ValidationListResponse,
    ValidationResponse,
    ValidationStatusResponse,
    ValidationUpdate,
)
from compareflow.core.errors import NotFoundError
from compareflow.db.repositories.connection import ConnectionRepository
from compareflow.db.repositories.validation import ValidationRepository
from compareflow.models.schema import Connection, Validation
from compareflow.services.validation_service import ValidationService

router = APIRouter(prefix="/validations", tags=["validations"])


def _get_owned(repo: ValidationRepository, validation_id: UUID, user_id: UUID) -> Validation:
    validation = repo.get_for_user(validation_id, user_id)
    if validation is None:
        raise NotFoundError("Validation", validation_id)
    return validation


def _owned_connection(
    connections: ConnectionRepository, connection_id: UUID, user_id: UUID, role: str
) -> Connection:
    connection = connections.get_for_user(connection_id, user_id)
    if connection is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid {role} connection",
        )
    return connection


def _embed(
    connections: ConnectionRepository, validation: Validation, user_id: UUID
) -> ValidationResponse:
    return ValidationResponse.embed(
        validation,
        connections.get_for_user(validation.source_connection_id, user_id),
        connections.get_for_user(validation.target_connection_id, user_id),
    )


# ---------------------------------------------------------------------------
# CRUD
# ---------------------------------------------------------------------------


@router.post("/", response_model=ValidationResponse, status_code=status.HTTP_201_CREATED)
def create_validation(
    body: ValidationCreate,
    repo: ValidationRepo,
    connections: ConnectionRepo,
    user: CurrentUser,
) -> ValidationResponse:
    source = _owned_connection(connections, body.source_connection_id, user.id, "source")
    target = _owned_connection(connections, body.target_connection_id, user.id, "target")
    return ValidationResponse.embed(repo.create(body.to_domain(user.id)), source, target)


@router.get("/", response_model=ValidationListResponse)
def list_validations(
    repo: ValidationRepo,
    connections: ConnectionRepo,
    user: CurrentUser,
    pagination: PaginationDep,
) -> ValidationListResponse:
    items = repo.list_by_user(user.id)
    paged = items[pagination.skip : pagination.skip + pagination.limit]
    return ValidationListResponse(
        items=[_embed(connections, v, user.id) for v in paged], count=len(items)
    )


@router.get("/{validation_id}", response_model=ValidationResponse)
def get_validation(
    validation_id: UUID, repo: ValidationRepo, connections: ConnectionRepo, user: CurrentUser
) -> ValidationResponse:
    return _embed(connections, _get_owned(repo, validation_id, user.id), user.id)


@router.put("/{validation_id}", response_model=ValidationResponse)
def update_validation(
    validation_id: UUID,
    body: ValidationUpdate,
    repo: ValidationRepo,
    connections: ConnectionRepo,
    user: CurrentUser,
) -> ValidationResponse:
    validation = _get_owned(repo, validation_id, user.id)
    updated = body.apply_to(validation)
    source = _owned_connection(connections, updated.source_connection_id, user.id, "source")
    target = _owned_connection(connections, updated.target_connection_id, user.id, "target")
    return ValidationResponse.embed(repo.update(updated), source, target)


@router.delete("/{validation_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_validation(validation_id: UUID, repo: ValidationRepo, user: CurrentUser) -> None:
    if not repo.delete_for_user(validation_id, user.id):
        raise NotFoundError("Validation", validation_id)


# ---------------------------------------------------------------------------
# Runs
# ---------------------------------------------------------------------------


@router.post("/{validation_id}/run", response_model=ValidationResponse)
def run_validation(
    validation_id: UUID,
    repo: ValidationRepo,
    connections: ConnectionRepo,
    service: ConnectionSvc,
    user: CurrentUser,
) -> ValidationResponse:
    validation = _get_owned(repo, validation_id, user.id)
    source = _owned_connection(connections, validation.source_connection_id, user.id, "source")
    target = _owned_connection(connections, validation.target_connection_id, user.id, "target")
    finished = ValidationService(repo, service).run(validation, source, target)
    return ValidationResponse.embed(finished, source, target)


@router.get("/{validation_id}/status", response_model=ValidationStatusResponse)
def validation_status(
    validation_id: UUID, repo: ValidationRepo, user: CurrentUser
) -> ValidationStatusResponse:
    validation = _get_owned(repo, validation_id, user.id)
    return ValidationStatusResponse(
        id=validation.id,
        name=validation.name,
        status=validation.status,
        updated_at=validation.updated_at,
    )
