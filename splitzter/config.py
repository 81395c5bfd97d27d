"""
Configuration

Settings are read from environment variables (a local .env file is loaded
first if present):

    SPLITZTER_HOST       - API bind address (default: 127.0.0.1)
    SPLITZTER_PORT       - API port (default: 8000)
    SPLITZTER_LOG_LEVEL  - logging level name (default: INFO)
    SPLITZTER_RELOAD     - uvicorn auto-reload, true/false (default: false)
"""

import logging
import os

from dotenv import load_dotenv


load_dotenv()


class Settings:
    """
    Runtime settings for the API process.

    Attributes:
        host (str): Bind address.
        port (int): Bind port.
        log_level (str): Upper-case logging level name.
        reload (bool): Whether uvicorn reloads on code changes.
    """

    def __init__(
        self,
        host: str = "127.0.0.1",
        port: int = 8000,
        log_level: str = "INFO",
        reload: bool = False
    ):
        self.host = host
        self.port = port
        self.log_level = log_level
        self.reload = reload

    def __repr__(self) -> str:
        return f"Settings(host='{self.host}', port={self.port}, log_level='{self.log_level}')"


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def get_log_level() -> str:
    """
    Read SPLITZTER_LOG_LEVEL on its own, for use at import time.

    Raises:
        ValueError: If the value is not a known logging level.
    """
    log_level = os.getenv("SPLITZTER_LOG_LEVEL", "INFO").strip().upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(f"SPLITZTER_LOG_LEVEL is not a logging level: {log_level}")
    return log_level


def get_settings() -> Settings:
    """
    Build Settings from the environment.

    Raises:
        ValueError: If SPLITZTER_PORT is not a valid port or
            SPLITZTER_LOG_LEVEL is not a known logging level.
    """
    raw_port = os.getenv("SPLITZTER_PORT", "8000")
    try:
        port = int(raw_port)
    except ValueError:
        raise ValueError(f"SPLITZTER_PORT must be an integer, got: {raw_port}")
    if not 0 < port < 65536:
        raise ValueError(f"SPLITZTER_PORT must be between 1 and 65535, got: {port}")

    return Settings(
        host=os.getenv("SPLITZTER_HOST", "127.0.0.1"),
        port=port,
        log_level=get_log_level(),
        reload=_parse_bool(os.getenv("SPLITZTER_RELOAD", "false"))
    )
