"""Local web server for previewing a folder of hand-written HTML pages."""

from .config import ServerConfig, ServerConfigurationError
from .content_types import classify
from .errors import (
    NotFoundError,
    ReadFailureError,
    ResolutionError,
    RootConfigurationError,
    TraversalError,
)
from .paths import ResolvedTarget, guard, resolve
from .responses import Outcome, PageResponse, build_response
from .service import PageServer

__version__ = "0.1.0"

__all__ = [
    "NotFoundError",
    "Outcome",
    "PageResponse",
    "PageServer",
    "ReadFailureError",
    "ResolutionError",
    "ResolvedTarget",
    "RootConfigurationError",
    "ServerConfig",
    "ServerConfigurationError",
    "TraversalError",
    "build_response",
    "classify",
    "guard",
    "resolve",
]
