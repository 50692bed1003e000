# rootfs/config.py
from pathlib import Path
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # Root directory (CLI argument takes precedence)
    ROOT_DIRECTORY: Path | None = None

    # MCP server identity
    SERVER_NAME: str = "mcpFilesystem"
    SERVER_VERSION: str = "1.0.0"

    # HTTP MCP transport
    MCP_HTTP_HOST: str = "127.0.0.1"
    MCP_HTTP_PORT: int = 8080
    MCP_HTTP_PATH: str = "/mcp"

    # Security: Bearer token and allowed origins
    MCP_HTTP_BEARER_TOKEN: str = "change-me"         # set in .env for prod
    MCP_HTTP_ALLOWED_ORIGINS: str = "http://localhost, http://127.0.0.1"
    MCP_HTTP_ALLOW_NO_ORIGIN: bool = True            # allow non-browser clients

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_PREVIEW_CHARS: int = 200  # long tool arguments are truncated in logs

    class Config:
        env_file = ".env"
