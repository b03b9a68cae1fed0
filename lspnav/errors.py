"""Error types for lspnav code navigation.

Protocol failures abort a query; file access failures are recovered per file.
Empty results and ambiguous symbol matches are not errors at all.
"""

from typing import Optional


class NavigationError(Exception):
    """Base class for navigation failures."""

    pass


class ProtocolError(NavigationError):
    """Raised when a request to the language server fails outright.

    The whole operation is aborted and the error reaches the caller.
    """

    def __init__(self, operation: str, cause: Optional[BaseException] = None):
        self.operation = operation
        self.message = f"{operation}: {cause}" if cause is not None else operation
        super().__init__(self.message)


class FileAccessError(NavigationError):
    """Raised when a single file cannot be opened, expanded or read."""

    def __init__(self, file_path: str, reason: str):
        self.file_path = file_path
        self.reason = reason
        super().__init__(f"{file_path}: {reason}")


class UnsupportedLanguageError(FileAccessError):
    """Raised when attempting to expand a definition in an unsupported language."""

    pass
