"""codeshape exceptions.

Rendering itself never fails. These cover the layers around it: loading
configuration and documents.
"""

from __future__ import annotations


class CodeshapeError(Exception):
    """Base exception for codeshape operations."""

    def __init__(self, message: str, exit_code: int = 1) -> None:
        self.message = message
        self.exit_code = exit_code
        super().__init__(message)


class ConfigError(CodeshapeError):
    """Raised when a codeshape.yaml or format option is invalid."""

    pass


class DocumentError(CodeshapeError):
    """Raised when a fragment document cannot be loaded."""

    def __init__(self, message: str, path: str = "", exit_code: int = 1) -> None:
        self.path = path
        if path:
            message = f"{path}: {message}"
        super().__init__(message, exit_code)
