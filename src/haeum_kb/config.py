"""Configuration module for haeum-kb.

Loads configuration from environment variables with sensible defaults.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from haeum_kb.search.manifest import DEFAULT_MANIFEST_URL


def _int_from_env(name: str, default: int, minimum: int) -> int:
    value_str = os.getenv(name, str(default))
    try:
        value = int(value_str)
        if value < minimum:
            raise ValueError(f"must be >= {minimum}, got {value}")
    except ValueError as e:
        raise ValueError(f"Invalid {name} value '{value_str}': {e}") from e
    return value


@dataclass
class Config:
    """Application configuration."""

    base_url: str
    manifest_url: str
    kb_root: Path
    port: int
    fetch_retries: int
    build_timeout: float | None
    search_limit: int

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        base_url = os.getenv("KB_BASE_URL", "http://localhost:5173")
        manifest_url = os.getenv("KB_MANIFEST_URL", DEFAULT_MANIFEST_URL)
        kb_root = Path(os.getenv("KB_ROOT", "public/kb")).expanduser()

        port_str = os.getenv("KB_PORT", "8080")
        try:
            port = int(port_str)
            if not 1 <= port <= 65535:
                raise ValueError(f"Port must be between 1 and 65535, got {port}")
        except ValueError as e:
            raise ValueError(f"Invalid KB_PORT value '{port_str}': {e}") from e

        fetch_retries = _int_from_env("KB_FETCH_RETRIES", 0, minimum=0)
        search_limit = _int_from_env("KB_SEARCH_LIMIT", 5, minimum=1)

        # 0 disables the timeout
        timeout_str = os.getenv("KB_BUILD_TIMEOUT", "30")
        try:
            timeout = float(timeout_str)
            if timeout < 0:
                raise ValueError(f"must be >= 0, got {timeout}")
        except ValueError as e:
            raise ValueError(f"Invalid KB_BUILD_TIMEOUT value '{timeout_str}': {e}") from e

        return cls(
            base_url=base_url,
            manifest_url=manifest_url,
            kb_root=kb_root,
            port=port,
            fetch_retries=fetch_retries,
            build_timeout=timeout or None,
            search_limit=search_limit,
        )


# Global config instance (lazy loaded)
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def reset_config() -> None:
    """Reset the global configuration (useful for testing)."""
    global _config
    _config = None
