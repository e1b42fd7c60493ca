"""Custom exceptions for style-usage."""

from __future__ import annotations


class StyleUsageError(Exception):
    """Base exception for all style-usage errors."""

    pass


class StoreError(StyleUsageError):
    """Raised when a read or query against the content store fails."""

    pass


class NotFoundError(StoreError):
    """Raised when a path does not exist in the store (404)."""

    def __init__(self, path: str, message: str | None = None) -> None:
        self.path = path
        super().__init__(message or f"Node not found: {path}")


class AuthenticationError(StoreError):
    """Raised when the store rejects our credentials (401/403)."""

    pass


class APIError(StoreError):
    """Raised for other store API errors."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        super().__init__(f"API error {status_code}: {message}")


class MissingPropertyError(StyleUsageError):
    """Raised when a node lacks a property the report requires."""

    def __init__(self, path: str, property_name: str) -> None:
        self.path = path
        self.property_name = property_name
        super().__init__(f"Missing required property '{property_name}' on {path}")


class ConfigurationError(StyleUsageError):
    """Raised when the run configuration is invalid."""

    pass


class MultiValuedPropertyError(StyleUsageError):
    """Raised when a property read as a single value holds several."""

    def __init__(self, path: str, property_name: str, count: int) -> None:
        self.path = path
        self.property_name = property_name
        super().__init__(
            f"Property '{property_name}' on {path} holds {count} values, expected one"
        )
