"""Extension to MIME type lookup for static assets."""

from __future__ import annotations

import mimetypes

HTML_CONTENT_TYPE = "text/html; charset=utf-8"
DEFAULT_CONTENT_TYPE = "application/octet-stream"

CONTENT_TYPES: dict[str, str] = {
    # Images
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "svg": "image/svg+xml",
    "webp": "image/webp",
    "ico": "image/x-icon",
    "bmp": "image/bmp",
    "tif": "image/tiff",
    "tiff": "image/tiff",
    "avif": "image/avif",
    # Web assets
    "css": "text/css",
    "js": "text/javascript",
    "mjs": "text/javascript",
    "map": "application/json",
    "wasm": "application/wasm",
    "webmanifest": "application/manifest+json",
    # Fonts
    "ttf": "font/ttf",
    "otf": "font/otf",
    "woff": "font/woff",
    "woff2": "font/woff2",
    "eot": "application/vnd.ms-fontobject",
    # Audio
    "mp3": "audio/mpeg",
    "wav": "audio/wav",
    "ogg": "audio/ogg",
    "m4a": "audio/mp4",
    "flac": "audio/flac",
    # Video
    "mp4": "video/mp4",
    "webm": "video/webm",
    "mov": "video/quicktime",
    # Archives
    "zip": "application/zip",
    "tar": "application/x-tar",
    "gz": "application/gzip",
    # Documents and data
    "pdf": "application/pdf",
    "txt": "text/plain",
    "csv": "text/csv",
    "xml": "application/xml",
    "json": "application/json",
}


def normalize_extension(extension: str) -> str:
    return extension.strip().lstrip(".").lower()


def classify(extension: str) -> str:
    """Return the MIME type for a file extension.

    Known extensions come from ``CONTENT_TYPES``. Anything else is sniffed with
    :mod:`mimetypes` and finally falls back to ``application/octet-stream``.
    """
    ext = normalize_extension(extension)
    if not ext:
        return DEFAULT_CONTENT_TYPE

    known = CONTENT_TYPES.get(ext)
    if known is not None:
        return known

    mime_type, _ = mimetypes.guess_type(f"file.{ext}", strict=False)
    return mime_type or DEFAULT_CONTENT_TYPE
