"""Base domain exceptions.

Every error raised by the monitor carries a human-readable message plus
keyword context (url, height, attempt, ...) that ends up in the logs.
"""

from typing import Any


class DomainException(Exception):
    """Base exception for all monitor errors.

    Example:
        >>> raise DomainException("Seed request failed", url="http://localhost:8088/v2")
    """

    def __init__(self, message: str, **context: Any) -> None:
        """Initialize domain exception.

        Args:
            message: Human-readable error message.
            **context: Additional context (url, height, etc).
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        """String representation with context.

        Returns:
            Error message with context if available.
        """
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message
