"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    environment: str = "development"
    debug: bool = False
    service_name: str = "skill-dispatch"

    # AWS
    aws_region: str = "us-east-1"

    # CORS
    cors_origins: list[str] = ["*"]

    # Request verification
    application_id: str = ""  # Skill ID from the developer console, empty disables the check
    timestamp_tolerance: float = 150.0  # Seconds of allowed clock skew
    ignore_timestamp: bool = False  # Only for replaying captured requests

    # DynamoDB persistent attributes
    persistence_table_name: str = ""  # Empty disables persistence
    persistence_partition_key: str = "id"
    persistence_attribute_name: str = "attributes"

    class Config:
        env_prefix = "SKILL_"
        case_sensitive = False


settings = Settings()
