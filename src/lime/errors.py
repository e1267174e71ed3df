class ResolutionError(Exception):
    """Base exception for request-to-file resolution failures."""


class NotFoundError(ResolutionError):
    """Raised when a request does not map to a readable regular file."""


class TraversalError(NotFoundError):
    """Raised when a resolved path escapes its configured root."""


class ReadFailureError(ResolutionError):
    """Raised when a validated file cannot be read."""


class RootConfigurationError(ResolutionError):
    """Raised when a configured root directory cannot be canonicalized."""
