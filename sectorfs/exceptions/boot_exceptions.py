"""
Boot Exceptions

Exceptions related to system startup and configuration handling.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, Any


class BootException(Exception):
    """
    Base exception for startup and configuration errors.

    Attributes:
        message: Human-readable error description
        error_code: Numeric error code for programmatic handling
        recoverable: Whether the error can be recovered from
        context: Additional context about the error

    Example:
        >>> raise BootException("Startup failure", error_code=1000)
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[int] = None,
        recoverable: bool = False,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or 1000
        self.recoverable = recoverable
        self.context = context or {}

    def __str__(self) -> str:
        base = f"[Error {self.error_code}] {self.message}"
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base = f"{base} ({context_str})"
        return base

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code}, "
            f"recoverable={self.recoverable})"
        )


class BootFailureError(BootException):
    """
    Error during the boot sequence.

    Common causes:
    - Configuration file missing or unreadable
    - Configuration file is not valid JSON

    Example:
        >>> raise BootFailureError("Invalid JSON", stage="config")
    """

    def __init__(
        self,
        message: str,
        stage: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if stage:
            ctx["stage"] = stage
        super().__init__(
            message=message,
            error_code=1001,
            recoverable=True,
            context=ctx
        )
        self.stage = stage


class ConfigValidationError(BootException):
    """Raised when a configuration value is unknown or out of range."""

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if key:
            ctx["key"] = key
        super().__init__(
            message=message,
            error_code=1002,
            recoverable=False,
            context=ctx
        )
        self.key = key
