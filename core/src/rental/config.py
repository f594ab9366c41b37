"""Environment-driven configuration.

All settings come from environment variables so the same code runs locally,
under moto in tests, and on Lambda.
"""

import os


def get_environment() -> str:
    """Deployment environment name (dev/prod/test)."""
    return os.getenv("ENVIRONMENT", "dev")


def get_table_prefix(environment: str | None = None) -> str:
    """Prefix for DynamoDB table names.

    DYNAMODB_TABLE_PREFIX overrides the default `rental-{environment}`.
    """
    env = environment or get_environment()
    return os.getenv("DYNAMODB_TABLE_PREFIX", f"rental-{env}")


def get_cors_origins() -> list[str]:
    """Allowed CORS origins (comma-separated CORS_ORIGINS)."""
    raw = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()
