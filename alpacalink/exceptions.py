"""
alpacalink Custom Exceptions

Provides the exception hierarchy for the Alpaca client. The protocol has
three error layers and each one keeps its own exception type, so callers
can tell a dead network from an HTTP error from a device refusing a command.

Exception Hierarchy:
    AlpacaError (base)
    ├── ConfigurationError
    ├── AlpacaTransportError
    │   └── MalformedResponseError
    ├── AlpacaRestError
    └── AlpacaDeviceError
"""

from enum import IntEnum
from typing import Any, Optional


class AscomErrorCode(IntEnum):
    """Device-level error numbers defined by the ASCOM Alpaca standard."""
    NOT_IMPLEMENTED = 0x400
    INVALID_VALUE = 0x401
    VALUE_NOT_SET = 0x402
    NOT_CONNECTED = 0x407
    INVALID_WHILE_PARKED = 0x408
    INVALID_WHILE_SLAVED = 0x409
    INVALID_OPERATION = 0x40B
    ACTION_NOT_IMPLEMENTED = 0x40C
    UNSPECIFIED = 0x4FF


class AlpacaError(Exception):
    """Base exception for all alpacalink errors.

    Attributes:
        message: Human-readable error description
        details: Optional dict with additional error context
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(AlpacaError):
    """Error in configuration file or settings.

    Raised when a config file is missing or unparsable, or when its values
    fail validation.
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_file: Optional[str] = None,
    ) -> None:
        details = {}
        if config_key:
            details["config_key"] = config_key
        if config_file:
            details["config_file"] = config_file
        super().__init__(message, details)
        self.config_key = config_key
        self.config_file = config_file


# =============================================================================
# Transport Errors
# =============================================================================

class AlpacaTransportError(AlpacaError):
    """The HTTP exchange itself failed.

    Raised for DNS failures, refused connections, timeouts and bodies that
    cannot be decoded. The client's error fields are left untouched.
    """

    def __init__(
        self,
        message: str,
        method: Optional[str] = None,
        url: Optional[str] = None,
    ) -> None:
        details = {}
        if method:
            details["method"] = method
        if url:
            details["url"] = url
        super().__init__(message, details)
        self.method = method
        self.url = url


class MalformedResponseError(AlpacaTransportError):
    """The server answered, but not with a usable Alpaca envelope."""
    pass


# =============================================================================
# Protocol Errors
# =============================================================================

class AlpacaRestError(AlpacaError):
    """HTTP status >= 400 returned by the Alpaca server.

    Only raised when the client was built with ``raise_on_error=True``;
    otherwise the status and body are exposed through
    ``AlpacaClient.error_number`` and ``AlpacaClient.error_message``.
    """

    def __init__(self, message: str, status_code: int, body: str = "") -> None:
        super().__init__(message, {"status_code": status_code})
        self.status_code = status_code
        self.body = body


class AlpacaDeviceError(AlpacaError):
    """Non-zero ErrorNumber reported inside the Alpaca response envelope.

    Only raised when the client was built with ``raise_on_error=True``.
    """

    def __init__(self, error_number: int, error_message: str = "") -> None:
        self.error_number = error_number
        self.error_message = error_message
        try:
            self.code: Optional[AscomErrorCode] = AscomErrorCode(error_number)
        except ValueError:
            self.code = None
        details: dict[str, Any] = {"error_number": f"0x{error_number:X}"}
        if self.code is not None:
            details["code"] = self.code.name
        super().__init__(error_message or "Alpaca device error", details)
