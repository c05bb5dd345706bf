"""
Error types for the Solana TUI explorer.

This module defines the exception hierarchy shared by the validator,
fetcher, decoder and navigator.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    """Error codes for the explorer."""

    # General errors
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # Solana RPC errors
    RPC_ERROR = "RPC_ERROR"
    RPC_TIMEOUT = "RPC_TIMEOUT"
    RPC_CONNECTION_ERROR = "RPC_CONNECTION_ERROR"

    # Data errors
    DATA_PARSING_ERROR = "DATA_PARSING_ERROR"


class DecodeErrorKind(str, Enum):
    """Reasons a raw RPC payload could not be turned into a view model."""

    MALFORMED_PAYLOAD = "MalformedPayload"
    UNSUPPORTED_ENCODING = "UnsupportedEncoding"
    EMPTY_RESULT = "EmptyResult"


class ExplorerError(Exception):
    """Base exception for all explorer errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize a new explorer error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
        """
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the error to a dictionary.

        Returns:
            Dictionary representation of the error
        """
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


class ValidationError(ExplorerError):
    """Exception for input that is neither a signature nor an address."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            code=ErrorCode.VALIDATION_ERROR,
            details=details
        )


class ConfigurationError(ExplorerError):
    """Exception for invalid configuration values."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            code=ErrorCode.CONFIGURATION_ERROR,
            details=details
        )


class TransportError(ExplorerError):
    """Exception for network or RPC failures."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.RPC_CONNECTION_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message=message, code=code, details=details)


class SolanaRpcError(TransportError):
    """Exception raised when the RPC node answers with an error object."""

    def __init__(self, message: str, error_data: Optional[Dict[str, Any]] = None):
        """Initialize the exception.

        Args:
            message: Error message
            error_data: Optional error data from the RPC response
        """
        super().__init__(
            message=message,
            code=ErrorCode.RPC_ERROR,
            details={"rpc_error": error_data or {}}
        )
        self.error_data = error_data or {}


class RpcTimeoutError(TransportError):
    """Exception for requests that exceeded the configured bound."""

    def __init__(self, message: str, timeout: float):
        super().__init__(
            message=message,
            code=ErrorCode.RPC_TIMEOUT,
            details={"timeout": timeout}
        )
        self.timeout = timeout


class DecodeError(ExplorerError):
    """Exception for raw payloads the decoder cannot normalize."""

    def __init__(self, kind: DecodeErrorKind, detail: str = ""):
        """Initialize the exception.

        Args:
            kind: Why decoding failed
            detail: Human readable description of the offending field
        """
        message = f"{kind.value}: {detail}" if detail else kind.value
        super().__init__(
            message=message,
            code=ErrorCode.DATA_PARSING_ERROR,
            details={"kind": kind.value, "detail": detail}
        )
        self.kind = kind
        self.detail = detail

    @classmethod
    def malformed(cls, detail: str) -> "DecodeError":
        return cls(DecodeErrorKind.MALFORMED_PAYLOAD, detail)

    @classmethod
    def unsupported_encoding(cls, detail: str = "") -> "DecodeError":
        return cls(DecodeErrorKind.UNSUPPORTED_ENCODING, detail)

    @classmethod
    def empty(cls, detail: str = "") -> "DecodeError":
        return cls(DecodeErrorKind.EMPTY_RESULT, detail)
