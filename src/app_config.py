from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

try:  # Python 3.11+
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for older runtimes
    import tomli as tomllib  # type: ignore


DEFAULT_CONFIG_FILE = "lime.toml"
CONFIG_FILE_ENV = "LIME_CONFIG_FILE"


class AppConfigurationError(Exception):
    """Raised when application configuration fails."""


@dataclass(frozen=True)
class ServerSettings:
    host: str = "127.0.0.1"
    port: int = 3000
    pages_dir: str = "./pages"
    static_dir: str = "./static"


@dataclass(frozen=True)
class AppConfig:
    server: ServerSettings
    source_file: Optional[str] = None

    @property
    def is_default(self) -> bool:
        """True when no config file was found and built-in defaults apply."""
        return self.source_file is None


def resolve_config_path(
    config_path: str | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> Path:
    env = environ if environ is not None else os.environ
    env_path = env.get(CONFIG_FILE_ENV, "").strip() or None
    raw = config_path or env_path or DEFAULT_CONFIG_FILE
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = (Path.cwd() / path).resolve()
    return path


def default_app_config(base_dir: Path | None = None) -> AppConfig:
    base = base_dir or Path.cwd()
    defaults = ServerSettings()
    return AppConfig(
        server=ServerSettings(
            host=defaults.host,
            port=defaults.port,
            pages_dir=_resolve_path(base, defaults.pages_dir),
            static_dir=_resolve_path(base, defaults.static_dir),
        ),
        source_file=None,
    )


def load_app_config(
    config_path: str | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> AppConfig:
    """Load ``lime.toml`` over the defaults.

    A missing file is not an error: the defaults are returned and
    ``AppConfig.is_default`` is set so the launcher can point at the file.
    """
    path = resolve_config_path(config_path, environ=environ)
    if not path.exists():
        return default_app_config()
    if not path.is_file():
        raise AppConfigurationError(f"Config path is not a file: {path}")

    try:
        with open(path, "rb") as fh:
            raw = tomllib.load(fh)
    except Exception as error:
        raise AppConfigurationError(f"Failed to parse config TOML: {error}") from error

    if not isinstance(raw, Mapping):
        raise AppConfigurationError("Root config TOML object must be a table.")

    return AppConfig(
        server=parse_server_settings(raw, base_dir=path.parent),
        source_file=str(path),
    )


def parse_server_settings(raw: Mapping[str, Any], *, base_dir: Path) -> ServerSettings:
    defaults = ServerSettings()
    host = _as_str(raw.get("host", defaults.host), "host") or defaults.host
    pages_dir = _as_str(raw.get("pages_dir", defaults.pages_dir), "pages_dir")
    static_dir = _as_str(raw.get("static_dir", defaults.static_dir), "static_dir")
    return ServerSettings(
        host=host,
        port=_as_int(raw.get("port", defaults.port), "port"),
        pages_dir=_resolve_path(base_dir, pages_dir or defaults.pages_dir),
        static_dir=_resolve_path(base_dir, static_dir or defaults.static_dir),
    )


def _as_str(value: Any, field: str) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    raise AppConfigurationError(f"{field} must be a string.")


def _as_int(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be an integer.")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be an integer.") from error
    raise AppConfigurationError(f"{field} must be an integer.")


def _resolve_path(base_dir: Path, raw: str) -> str:
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = (base_dir / path).resolve()
    return str(path)
