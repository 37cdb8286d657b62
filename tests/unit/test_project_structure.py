"""
Acceptance tests for the project layout and importability.
"""

import importlib.util
import tomllib
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent.parent

REQUIRED_DIRS = [
    "compareflow",
    "compareflow/api",
    "compareflow/api/v1",
    "compareflow/connectors",
    "compareflow/connectors/postgresql",
    "compareflow/connectors/sqlserver",
    "compareflow/connectors/databricks",
    "compareflow/models",
    "compareflow/db",
    "compareflow/core",
    "compareflow/services",
    "tests",
    "tests/unit",
    "tests/integration",
    "scripts",
]

REQUIRED_FILES = [
    "pyproject.toml",
    "compareflow/__init__.py",
    "compareflow/main.py",
    "compareflow/core/config.py",
    "compareflow/connectors/base.py",
    "compareflow/connectors/registry.py",
    "compareflow/services/connection_service.py",
    "compareflow/api/__init__.py",
    "compareflow/api/v1/__init__.py",
    "compareflow/models/__init__.py",
    "compareflow/db/__init__.py",
]


def test_required_directories_exist():
    for directory in REQUIRED_DIRS:
        path = PROJECT_ROOT / directory
        assert path.is_dir(), f"Missing required directory: {directory}"


def test_required_files_exist():
    for filename in REQUIRED_FILES:
        path = PROJECT_ROOT / filename
        assert path.is_file(), f"Missing required file: {filename}"


def test_pyproject_has_core_dependencies():
    with open(PROJECT_ROOT / "pyproject.toml", "rb") as fh:
        project = tomllib.load(fh)["project"]
    deps = " ".join(project["dependencies"])
    for pkg in ("fastapi", "neo4j", "pydantic", "psycopg2", "pymssql", "databricks-sql-connector"):
        assert pkg in deps, f"Missing dependency in pyproject.toml: {pkg}"


def test_package_importable():
    spec = importlib.util.find_spec("compareflow")
    assert spec is not None, "compareflow package is not importable"


def test_base_connector_importable():
    from compareflow.connectors.base import BaseConnector, ColumnInfo

    assert issubclass(BaseConnector, object)
    assert set(ColumnInfo.model_fields) == {"name", "data_type", "nullable"}


def test_settings_importable():
    from compareflow.core.config import settings

    assert settings.PROJECT_NAME == "CompareFlow"
    assert settings.API_V1_STR == "/api/v1"
    assert settings.NEO4J_URI
    assert settings.CONNECTOR_CONNECT_TIMEOUT_S > 0


def test_fastapi_app_importable():
    from compareflow.main import app

    assert app is not None
    routes = [r.path for r in app.routes]
    assert "/health" in routes
    assert "/api/v1/connections/{connection_id}/test" in routes
    assert "/api/v1/validations/{validation_id}/run" in routes
