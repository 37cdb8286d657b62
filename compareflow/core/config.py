from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)

    PROJECT_NAME: str = "CompareFlow"
    VERSION: str = "0.1.0"
    API_V1_STR: str = "/api/v1"

    # CORS
    CORS_ORIGINS: list[str] = ["http://localhost:3000", "http://localhost:5173"]

    LOG_LEVEL: str = "INFO"

    # Neo4j (application store for users, connections and validations)
    NEO4J_URI: str = "bolt://localhost:7687"
    NEO4J_USER: str = "neo4j"
    NEO4J_PASSWORD: str = "password"
    # Connection pool
    NEO4J_MAX_CONNECTION_POOL_SIZE: int = 50
    NEO4J_MAX_CONNECTION_LIFETIME_S: float = 3600.0
    NEO4J_CONNECTION_ACQUISITION_TIMEOUT_S: float = 60.0
    NEO4J_CONNECTION_TIMEOUT_S: float = 30.0

    # Deadlines applied by every connector when talking to a user database
    CONNECTOR_CONNECT_TIMEOUT_S: float = 10.0
    CONNECTOR_QUERY_TIMEOUT_S: float = 60.0

    # Auth
    SECRET_KEY: str = "change-me-in-production"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7
    # Bootstrapped admin (created on first startup when no users exist)
    FIRST_ADMIN_EMAIL: str = "admin@compareflow.dev"
    FIRST_ADMIN_PASSWORD: str = "change-me-in-production"


settings = Settings()
