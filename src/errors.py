"""Errors raised by the alias registry and the server launcher."""


class SsError(Exception):
    """Base exception for ss errors."""

    def __init__(self, message: str, alias: str | None = None, path: str | None = None) -> None:
        self.alias = alias
        self.path = path
        super().__init__(message)


class InvalidTargetError(SsError):
    """Raised when a target path is missing or not a directory."""


class InvalidAliasError(SsError):
    """Raised when an alias name is malformed."""


class AliasNotFoundError(SsError):
    """Raised when an alias does not exist, or cannot be resolved."""


class NoCurrentTargetError(SsError):
    """Raised when serving without a resolvable current target."""


class UnknownIOError(SsError):
    """Raised when the filesystem fails in an unexpected way."""


class ServerBindError(SsError):
    """Raised when the HTTP server cannot bind to its address."""
