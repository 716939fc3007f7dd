"""Custom exceptions for the datapipe client."""

from typing import List, Optional


class DataPipeException(Exception):
    """Base exception for all datapipe errors."""

    pass


class ConfigValidationError(DataPipeException):
    """Configuration validation failed."""

    def __init__(self, message: str, file: Optional[str] = None, line: Optional[int] = None):
        self.message = message
        self.file = file
        self.line = line
        super().__init__(self._format_error())

    def _format_error(self) -> str:
        """Format error message with location info."""
        parts = ["Configuration validation error"]
        if self.file:
            parts.append(f"\n  File: {self.file}")
        if self.line:
            parts.append(f"\n  Line: {self.line}")
        parts.append(f"\n  Error: {self.message}")
        return "".join(parts)


class ServiceError(DataPipeException):
    """The service answered with a non-success status."""

    def __init__(
        self,
        operation: str,
        status_code: int,
        error_type: Optional[str] = None,
        message: Optional[str] = None,
    ):
        self.operation = operation
        self.status_code = status_code
        self.error_type = error_type
        self.message = message
        super().__init__(self._format_error())

    def _format_error(self) -> str:
        parts = [f"✗ {self.operation} failed with HTTP {self.status_code}"]
        if self.error_type:
            parts.append(f"\n  Type: {self.error_type}")
        if self.message:
            parts.append(f"\n  Message: {self.message}")
        return "".join(parts)


class OperationNotImplementedError(DataPipeException, NotImplementedError):
    """Operation is not available on the selected backend."""

    def __init__(self, backend: str, operation: str):
        self.backend = backend
        self.operation = operation
        super().__init__(f"✗ {operation} is not implemented by the '{backend}' backend")


class PaginationLimitError(DataPipeException):
    """The server still reported more results after the page bound was hit."""

    def __init__(self, max_pages: int, pages_fetched: int, ids_collected: int):
        self.max_pages = max_pages
        self.pages_fetched = pages_fetched
        self.ids_collected = ids_collected
        super().__init__(self._format_error())

    def _format_error(self) -> str:
        parts = [
            f"✗ Pagination stopped after {self.pages_fetched} page(s)",
            f" (max_pages={self.max_pages})",
            f"\n  Identifiers collected so far: {self.ids_collected}",
            "\n  The server still reports more results.",
            "\n\n  Suggestions:",
            "\n    1. Raise max_pages or leave it unset for an unbounded query",
            "\n    2. Narrow the query with selectors",
        ]
        return "".join(parts)


class BackendNotFoundError(DataPipeException):
    """No backend factory is registered under the requested name."""

    def __init__(self, backend: str, available: Optional[List[str]] = None):
        self.backend = backend
        self.available = sorted(available or [])
        super().__init__(self._format_error())

    def _format_error(self) -> str:
        parts = [f"✗ Unknown backend: {self.backend}"]
        if self.available:
            parts.append(f"\n  Available: {', '.join(self.available)}")
        return "".join(parts)
