"""Request path resolution and root sandboxing for pages and static assets."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from .content_types import normalize_extension
from .errors import NotFoundError, RootConfigurationError, TraversalError

HTML_EXTENSION = "html"
INDEX_FILE = "index.html"


@dataclass(frozen=True)
class ResolvedTarget:
    """Unverified filesystem candidate for a single request."""
    absolute_path: Path
    root_dir: Path
    is_text: bool
    extension: str


def request_segments(request_path: str) -> list[str]:
    """Split a decoded request path into segments that can only join under a root.

    Backslashes count as separators and empty or ``.`` segments are dropped, so
    no segment can be absolute. ``..`` is kept and left for :func:`guard`.
    """
    normalized = request_path.replace("\\", "/")
    return [segment for segment in normalized.split("/") if segment not in ("", ".")]


def request_extension(segments: list[str]) -> str:
    if not segments:
        return ""
    return normalize_extension(PurePosixPath(segments[-1]).suffix)


def resolve(request_path: str, pages_root: Path, static_root: Path) -> ResolvedTarget:
    """Map a request path to a candidate file under the pages or static root."""
    segments = request_segments(request_path)
    if not segments:
        return ResolvedTarget(
            absolute_path=Path(pages_root) / INDEX_FILE,
            root_dir=Path(pages_root),
            is_text=True,
            extension=HTML_EXTENSION,
        )

    extension = request_extension(segments)
    if extension and extension != HTML_EXTENSION:
        root = Path(static_root)
        return ResolvedTarget(
            absolute_path=root.joinpath(*segments),
            root_dir=root,
            is_text=False,
            extension=extension,
        )

    if not extension:
        segments = [*segments[:-1], f"{segments[-1]}.{HTML_EXTENSION}"]

    root = Path(pages_root)
    return ResolvedTarget(
        absolute_path=root.joinpath(*segments),
        root_dir=root,
        is_text=True,
        extension=HTML_EXTENSION,
    )


def canonical_root(root_dir: Path) -> Path:
    try:
        root = Path(root_dir).resolve(strict=True)
    except (OSError, RuntimeError, ValueError) as error:
        raise RootConfigurationError(
            f"Cannot canonicalize root directory {root_dir}: {error}"
        ) from error
    if not root.is_dir():
        raise RootConfigurationError(f"Root path is not a directory: {root_dir}")
    return root


def guard(target: ResolvedTarget) -> Path:
    """Return the canonical path of ``target`` once it is proven to stay in its root.

    Raises:
        RootConfigurationError: the root directory itself cannot be canonicalized.
        NotFoundError: the target does not exist or is not a regular file.
        TraversalError: the canonical target lies outside the canonical root.
    """
    root = canonical_root(target.root_dir)

    try:
        candidate = target.absolute_path.resolve(strict=True)
    except (OSError, RuntimeError, ValueError) as error:
        raise NotFoundError(f"Cannot canonicalize {target.absolute_path}: {error}") from error

    if root not in candidate.parents:
        raise TraversalError(
            f"Resolved path {candidate} is outside root {root}"
        )

    try:
        is_file = candidate.is_file()
    except (OSError, ValueError) as error:
        raise NotFoundError(f"Cannot stat {candidate}: {error}") from error
    if not is_file:
        raise NotFoundError(f"Not a regular file: {candidate}")

    return candidate
