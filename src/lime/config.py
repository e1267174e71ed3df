"""Configuration model for the page server runtime."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


class ServerConfigurationError(Exception):
    """Raised when server configuration is invalid."""


DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000
DEFAULT_PAGES_DIR = "./pages"
DEFAULT_STATIC_DIR = "./static"


@dataclass(frozen=True)
class ServerConfig:
    """Validated, immutable server settings shared read-only by all requests."""
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    pages_dir: Path = Path(DEFAULT_PAGES_DIR)
    static_dir: Path = Path(DEFAULT_STATIC_DIR)

    def __post_init__(self) -> None:
        if not self.host.strip():
            raise ServerConfigurationError("host cannot be empty")

        if not 0 <= self.port <= 65535:
            raise ServerConfigurationError(
                f"port must be in [0, 65535], got: {self.port}"
            )

        for name in ("pages_dir", "static_dir"):
            value = getattr(self, name)
            if not str(value).strip():
                raise ServerConfigurationError(f"{name} cannot be empty")
            # Accept plain strings for directory fields.
            if not isinstance(value, Path):
                object.__setattr__(self, name, Path(value))

    @classmethod
    def from_settings(cls, settings) -> "ServerConfig":
        return cls(
            host=settings.host,
            port=settings.port,
            pages_dir=Path(settings.pages_dir),
            static_dir=Path(settings.static_dir),
        )
