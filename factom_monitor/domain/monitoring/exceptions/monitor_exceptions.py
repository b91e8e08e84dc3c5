"""Monitor domain exceptions."""

from factom_monitor.domain.shared import DomainException


class MonitorError(DomainException):
    """Base exception for monitor errors."""

    pass


class MonitorConstructionError(MonitorError):
    """The seed request failed, so no monitor was created.

    The underlying exception is chained as ``__cause__``.
    """

    def __init__(self, url: str, reason: str) -> None:
        """Initialize exception.

        Args:
            url: Node URL the seed request was sent to.
            reason: Why the seed request failed.
        """
        super().__init__(f"Cannot start monitor: {reason}", url=url)
        self.url = url
        self.reason = reason
