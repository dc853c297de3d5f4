"""Exception hierarchy for the analytics core.

Two kinds of failure exist. Structural failures (a missing portfolio, a data
provider that raised or timed out) abort the whole request and surface as one of
the exceptions below. Missing or insufficient data never raises: the affected
metric degrades to zero and the result keeps its full shape.
"""

from typing import Any


class AnalyticsError(Exception):
    """Base class for all analytics core errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize the error.

        Args:
            message: Human-readable error message
            details: Optional structured context for logging and API layers
        """
        super().__init__(message)
        self.message = message
        self.details: dict[str, Any] = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable representation of the error."""
        return {
            'error': self.__class__.__name__,
            'message': self.message,
            'details': self.details,
        }


class ConfigurationError(AnalyticsError):
    """Raised when a configuration value cannot be used."""


class PortfolioNotFoundError(AnalyticsError):
    """Raised when the portfolio data provider has no such portfolio."""

    def __init__(self, portfolio_id: str) -> None:
        """Initialize with the missing portfolio identifier."""
        super().__init__(
            f"Portfolio not found: {portfolio_id}", {'portfolio_id': portfolio_id}
        )
        self.portfolio_id = portfolio_id


class DataProviderError(AnalyticsError):
    """Raised when a data provider call fails."""

    def __init__(
        self, message: str, provider: str, operation: str, details: dict[str, Any] | None = None
    ) -> None:
        """Initialize the provider error.

        Args:
            message: Human-readable error message
            provider: Name of the provider class that failed
            operation: Provider method that was being called
            details: Optional extra context
        """
        context = {'provider': provider, 'operation': operation}
        context.update(details or {})
        super().__init__(message, context)
        self.provider = provider
        self.operation = operation


class ProviderTimeoutError(DataProviderError):
    """Raised when a provider call exceeds the request timeout."""

    def __init__(self, provider: str, operation: str, timeout: float) -> None:
        """Initialize the timeout error."""
        super().__init__(
            f"{provider}.{operation} timed out after {timeout:.1f}s",
            provider,
            operation,
            {'timeout_seconds': timeout},
        )
        self.timeout = timeout
