"""Configuration management for storx-mcp."""

from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Process settings with environment variable support.

    Storage credentials are not read here; see ``storx_mcp.storage_config``.
    """

    log_level: str = "INFO"
    log_format: str = "json"
    otel_enabled: bool = False
    otel_service_name: str = "storx-mcp"
    otel_exporter_endpoint: str = "http://localhost:4317"
    config_path: Optional[str] = None

    model_config = {
        "env_prefix": "STORX_MCP_",
        "case_sensitive": False,
    }


settings = Settings()
