"""Turn a request path into a complete page response or a fallback page."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from .config import ServerConfig
from .content_types import HTML_CONTENT_TYPE, classify
from .errors import (
    NotFoundError,
    ReadFailureError,
    ResolutionError,
    RootConfigurationError,
    TraversalError,
)
from .pages import (
    DEFAULT_INDEX_HTML,
    INTERNAL_ERROR_HTML,
    INTERNAL_ERROR_OVERRIDE_FILE,
    NOT_FOUND_HTML,
    NOT_FOUND_OVERRIDE_FILE,
)
from .paths import HTML_EXTENSION, ResolvedTarget, guard, request_segments, resolve

_LOGGER = logging.getLogger("lime.responses")


class Outcome(Enum):
    """Closed set of terminal states a request can end in."""
    OK = "ok"
    DEFAULT_INDEX = "default_index"
    NOT_FOUND = "not_found"
    INTERNAL_ERROR = "internal_error"


_STATUS_CODES: dict[Outcome, int] = {
    Outcome.OK: 200,
    Outcome.DEFAULT_INDEX: 200,
    Outcome.NOT_FOUND: 404,
    Outcome.INTERNAL_ERROR: 500,
}


@dataclass(frozen=True)
class PageResponse:
    """Terminal result of handling one request."""
    outcome: Outcome
    content_type: str
    body: bytes

    @property
    def status(self) -> int:
        return _STATUS_CODES[self.outcome]


def read_target(path: Path, is_text: bool) -> bytes:
    """Read a guarded file unchanged, requiring valid UTF-8 for text responses."""
    try:
        data = path.read_bytes()
        if is_text:
            data.decode("utf-8")
        return data
    except (OSError, UnicodeDecodeError) as error:
        raise ReadFailureError(f"Failed to read {path}: {error}") from error


def _read_guarded(target: ResolvedTarget) -> bytes:
    return read_target(guard(target), target.is_text)


async def build_response(
    request_path: str,
    config: ServerConfig,
    *,
    logger: Optional[logging.Logger] = None,
) -> PageResponse:
    """Resolve, guard, read and classify ``request_path`` against ``config``.

    Every failure is turned into a fallback page; this coroutine does not raise
    for filesystem problems. ``/`` is the only special case: a missing
    ``index.html`` yields the built-in landing page with status 200.
    """
    log = logger or _LOGGER
    log.info("Handling request: %s", request_path)

    is_index = not request_segments(request_path)
    target = resolve(request_path, config.pages_dir, config.static_dir)
    if target.is_text:
        log.debug("Serving HTML file: %s", target.absolute_path)
    else:
        log.debug(
            "Serving static asset: %s (extension=%s)",
            target.absolute_path,
            target.extension,
        )

    try:
        path = await asyncio.to_thread(guard, target)
    except TraversalError as error:
        log.warning("Path traversal attempt: %r (%s)", request_path, error)
        return await not_found_response(config, logger=log)
    except NotFoundError as error:
        if is_index:
            log.debug("No index page on disk, serving default landing page")
            return default_index_response()
        log.debug("Not found: %s", error)
        return await not_found_response(config, logger=log)
    except RootConfigurationError as error:
        if is_index:
            # A server started in an empty directory still greets with the landing page.
            log.warning("Pages directory unavailable: %s", error)
            return default_index_response()
        log.error("Root directory misconfigured: %s", error)
        return await internal_error_response(config, logger=log)

    try:
        body = await asyncio.to_thread(read_target, path, target.is_text)
    except ReadFailureError as error:
        log.error("%s", error)
        return await internal_error_response(config, logger=log)

    content_type = HTML_CONTENT_TYPE if target.is_text else classify(target.extension)
    return PageResponse(Outcome.OK, content_type, body)


def default_index_response() -> PageResponse:
    return PageResponse(Outcome.DEFAULT_INDEX, HTML_CONTENT_TYPE, DEFAULT_INDEX_HTML)


async def not_found_response(
    config: ServerConfig,
    *,
    logger: Optional[logging.Logger] = None,
) -> PageResponse:
    body = await _fallback_body(
        config,
        NOT_FOUND_OVERRIDE_FILE,
        NOT_FOUND_HTML,
        logger or _LOGGER,
    )
    return PageResponse(Outcome.NOT_FOUND, HTML_CONTENT_TYPE, body)


async def internal_error_response(
    config: ServerConfig,
    *,
    logger: Optional[logging.Logger] = None,
) -> PageResponse:
    body = await _fallback_body(
        config,
        INTERNAL_ERROR_OVERRIDE_FILE,
        INTERNAL_ERROR_HTML,
        logger or _LOGGER,
    )
    return PageResponse(Outcome.INTERNAL_ERROR, HTML_CONTENT_TYPE, body)


async def _fallback_body(
    config: ServerConfig,
    filename: str,
    builtin: bytes,
    log: logging.Logger,
) -> bytes:
    # Overrides live in the pages root and pass the same guard as pages.
    target = ResolvedTarget(
        absolute_path=config.pages_dir / filename,
        root_dir=config.pages_dir,
        is_text=True,
        extension=HTML_EXTENSION,
    )
    try:
        return await asyncio.to_thread(_read_guarded, target)
    except TraversalError as error:
        log.warning("Ignoring %s override outside the pages root: %s", filename, error)
    except NotFoundError:
        pass
    except ResolutionError as error:
        log.error("Failed to load %s override, using built-in page: %s", filename, error)
    return builtin
