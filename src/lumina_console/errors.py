"""
Lumina console error types.
"""

from typing import Any, Optional


class LuminaError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details


class AuthError(LuminaError):
    def __init__(self, message: str, code: str = "auth_error"):
        super().__init__(code, message)


class FetchError(LuminaError):
    def __init__(self, message: str, code: str = "fetch_error", details: Optional[dict[str, Any]] = None):
        super().__init__(code, message, details)


class TransportError(LuminaError):
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("transport_error", message, details)
