import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from compareflow.api.v1.routers import auth as auth_router
from compareflow.api.v1.routers import connections, connectors, validations
from compareflow.connectors import list_types, register_builtin_connectors
from compareflow.connectors.errors import ConnectorError
from compareflow.core.config import settings
from compareflow.core.errors import (
    ConflictError,
    NotFoundError,
    UnprocessableError,
    conflict_handler,
    connector_error_handler,
    generic_error_handler,
    not_found_handler,
    unprocessable_handler,
)
from compareflow.core.security import hash_password
from compareflow.db.constraints import apply_constraints_and_indexes
from compareflow.db.neo4j import close_driver, get_session, store_status
from compareflow.db.repositories.user import User, UserRepository, UserRole

logger = logging.getLogger(__name__)


def _seed_first_admin() -> None:
    """Create the bootstrap admin user if no users exist in the database."""
    with get_session() as session:
        repo = UserRepository(session)
        if repo.count() == 0:
            admin = User(
                email=settings.FIRST_ADMIN_EMAIL.lower(),
                hashed_password=hash_password(settings.FIRST_ADMIN_PASSWORD),
                role=UserRole.ADMIN,
                full_name="Bootstrap Admin",
            )
            repo.create(admin)
            logger.info("Seeded bootstrap admin %s", admin.email)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    register_builtin_connectors()
    logger.info("Registered connectors: %s", ", ".join(sorted(list_types())))
    with get_session() as session:
        apply_constraints_and_indexes(session)
    _seed_first_admin()
    yield
    close_driver()


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan,
)

# --- Middleware ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Exception handlers ---
app.add_exception_handler(NotFoundError, not_found_handler)  # type: ignore[arg-type]
app.add_exception_handler(ConflictError, conflict_handler)  # type: ignore[arg-type]
app.add_exception_handler(UnprocessableError, unprocessable_handler)  # type: ignore[arg-type]
app.add_exception_handler(ConnectorError, connector_error_handler)  # type: ignore[arg-type]
app.add_exception_handler(Exception, generic_error_handler)  # type: ignore[arg-type]

# --- Routers ---
app.include_router(auth_router.router, prefix=settings.API_V1_STR)
app.include_router(connections.router, prefix=settings.API_V1_STR)
app.include_router(connectors.router, prefix=settings.API_V1_STR)
app.include_router(validations.router, prefix=settings.API_V1_STR)


# --- Health ---
@app.get("/health", tags=["health"])
async def health_check() -> dict:
    neo4j = store_status()
    return {
        "status": "ok" if neo4j["connected"] else "degraded",
        "version": settings.VERSION,
        "services": {"neo4j": neo4j},
        "connectors": sorted(list_types()),
    }
