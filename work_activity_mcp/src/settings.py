"""Settings for the Work Activity MCP Server."""

from typing import Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

from work_activity_mcp.utils.pylogger import get_python_logger

# Initialize logger
logger = get_python_logger()

# Load environment variables with error handling
try:
    load_dotenv()
except Exception as e:
    # Environment variables might be set directly
    logger.warning(f"Could not load .env file: {e}")


class Settings(BaseSettings):
    """Configuration settings for the Work Activity MCP Server.

    Loaded from environment variables. Credentials are optional here and
    checked when a tool that needs them is invoked.
    """

    # MCP Server Configuration
    MCP_HOST: str = Field(
        default="0.0.0.0",
        json_schema_extra={
            "env": "MCP_HOST",
            "description": "Host address for the MCP server",
            "example": "localhost",
        },
    )
    MCP_PORT: int = Field(
        default=8080,
        ge=1024,
        le=65535,
        json_schema_extra={
            "env": "MCP_PORT",
            "description": "Port number for the MCP server",
            "example": 8080,
        },
    )
    MCP_TRANSPORT: str = Field(
        default="stdio",
        json_schema_extra={
            "env": "MCP_TRANSPORT",
            "description": "Transport protocol for the MCP server",
            "example": "stdio",
            "enum": ["stdio", "http", "sse"],
        },
    )
    FASTMCP_HOST: str = Field(
        default="0.0.0.0",
        json_schema_extra={
            "env": "FASTMCP_HOST",
            "description": "FastMCP host address",
            "example": "localhost",
        },
    )
    FASTMCP_PORT: int = Field(
        default=8000,
        ge=1024,
        le=65535,
        json_schema_extra={
            "env": "FASTMCP_PORT",
            "description": "FastMCP port number",
            "example": 8000,
        },
    )

    # Logging Configuration
    PYTHON_LOG_LEVEL: str = Field(
        default="INFO",
        json_schema_extra={
            "env": "PYTHON_LOG_LEVEL",
            "description": "Logging level for the application",
            "example": "INFO",
            "enum": ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        },
    )

    # Jira Configuration
    JIRA_API_KEY: Optional[str] = Field(
        default=None,
        json_schema_extra={
            "env": "JIRA_API_KEY",
            "description": "Base64 encoded 'email:apitoken' used for Basic auth",
            "example": "YWxpY2VAZXhhbXBsZS5jb206dG9rZW4=",
            "sensitive": True,
        },
    )
    JIRA_BASE_URL: str = Field(
        default="https://sipgatede.atlassian.net/",
        json_schema_extra={
            "env": "JIRA_BASE_URL",
            "description": "Jira Cloud base URL",
            "example": "https://example.atlassian.net/",
        },
    )
    JIRA_EMAIL: Optional[str] = Field(
        default=None,
        json_schema_extra={
            "env": "JIRA_EMAIL",
            "description": "Default identity for Jira worklog queries",
            "example": "alice@example.com",
        },
    )

    # GitHub Configuration
    GITHUB_TOKEN: Optional[str] = Field(
        default=None,
        json_schema_extra={
            "env": "GITHUB_TOKEN",
            "description": "GitHub personal access token",
            "example": "ghp_xxx",
            "sensitive": True,
        },
    )
    GITHUB_BASE_URL: str = Field(
        default="https://api.github.com",
        json_schema_extra={
            "env": "GITHUB_BASE_URL",
            "description": "GitHub REST API base URL",
            "example": "https://api.github.com",
        },
    )

    # Metrics Configuration
    ENABLE_METRICS: bool = Field(
        default=False,
        json_schema_extra={
            "env": "ENABLE_METRICS",
            "description": "Enable Prometheus metrics",
            "example": True,
        },
    )
    METRICS_PORT: int = Field(
        default=8000,
        ge=1024,
        le=65535,
        json_schema_extra={
            "env": "METRICS_PORT",
            "description": "Port for Prometheus metrics server",
            "example": 8000,
        },
    )

    # HTTP Configuration
    MAX_HTTP_CONNECTIONS: int = Field(
        default=20,
        ge=1,
        le=100,
        json_schema_extra={
            "env": "MAX_HTTP_CONNECTIONS",
            "description": "Maximum HTTP connections per upstream",
            "example": 20,
        },
    )
    HTTP_TIMEOUT_SECONDS: int = Field(
        default=30,
        ge=1,
        json_schema_extra={
            "env": "HTTP_TIMEOUT_SECONDS",
            "description": "Per-request timeout in seconds",
            "example": 30,
        },
    )
    TOOL_TIMEOUT_SECONDS: int = Field(
        default=60,
        ge=1,
        json_schema_extra={
            "env": "TOOL_TIMEOUT_SECONDS",
            "description": "Deadline for a whole tool invocation in seconds",
            "example": 60,
        },
    )


def validate_config(settings: Settings) -> None:
    """Validate configuration settings.

    Args:
        settings: Settings instance to validate.

    Raises:
        ValueError: If a setting is outside its accepted values.
    """
    if not (1024 <= settings.MCP_PORT <= 65535):
        raise ValueError(
            f"MCP_PORT must be between 1024 and 65535, got {settings.MCP_PORT}"
        )

    if not (1024 <= settings.FASTMCP_PORT <= 65535):
        raise ValueError(
            f"FASTMCP_PORT must be between 1024 and 65535, got {settings.FASTMCP_PORT}"
        )

    valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    if settings.PYTHON_LOG_LEVEL.upper() not in valid_log_levels:
        raise ValueError(
            f"PYTHON_LOG_LEVEL must be one of {valid_log_levels}, got {settings.PYTHON_LOG_LEVEL}"
        )

    valid_transport_protocols = ["stdio", "http", "sse"]
    if settings.MCP_TRANSPORT not in valid_transport_protocols:
        raise ValueError(
            f"MCP_TRANSPORT must be one of {valid_transport_protocols}, got {settings.MCP_TRANSPORT}"
        )

    # Missing credentials only disable the tools that need them
    if not settings.JIRA_API_KEY:
        logger.warning("JIRA_API_KEY is not set; Jira tools will fail when invoked")
    if not settings.JIRA_EMAIL:
        logger.warning("JIRA_EMAIL is not set; Jira tools will require a username")
    if not settings.GITHUB_TOKEN:
        logger.warning("GITHUB_TOKEN is not set; GitHub tools will fail when invoked")


# Validation happens in main.py
settings = Settings()
