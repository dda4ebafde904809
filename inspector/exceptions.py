"""Custom exceptions for Config Inspector."""

from typing import Optional


class InspectorError(Exception):
    """Base exception for all inspector errors."""
    pass


class ConfigError(InspectorError):
    """Raised when configuration loading or validation fails."""
    pass


class LoadError(InspectorError):
    """Raised when a local definition file cannot be read or parsed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not load {path}: {reason}")


class RemoteError(InspectorError):
    """Raised when the remote server cannot be reached or answers badly."""

    def __init__(self, url: str, message: str, status_code: Optional[int] = None):
        self.url = url
        self.status_code = status_code
        super().__init__(f"Remote request to {url} failed: {message}")


class ChecklistNotFoundError(InspectorError):
    """Raised when a checklist name is not registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Checklist not found: {name}")


class ValidationAbortedError(InspectorError):
    """Raised when validating one item fails and the whole run is aborted."""

    def __init__(self, item_name: str, original_error: Exception = None):
        self.item_name = item_name
        self.original_error = original_error
        super().__init__(f"Validation of '{item_name}' failed: {original_error}")


class ValidationCancelledError(InspectorError):
    """Raised inside a worker when its run was aborted before it finished."""

    def __init__(self, item_name: str):
        self.item_name = item_name
        super().__init__(f"Validation of '{item_name}' cancelled, the run was aborted")


class ValidationTimeoutError(ValidationAbortedError):
    """Raised when validating one item exceeds the configured timeout."""

    def __init__(self, item_name: str, timeout: float):
        self.timeout = timeout
        self.item_name = item_name
        self.original_error = None
        InspectorError.__init__(
            self, f"Validation of '{item_name}' timed out after {timeout}s"
        )
