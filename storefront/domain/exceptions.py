"""Domain exceptions.

All domain-level errors that represent catalog rule violations.
These exceptions are raised by the entity managers and the advert
generator; the HTTP layer maps each kind to a fixed status code.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the application layer.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Catalog Errors
# ============================================================================


class NotFoundError(DomainError):
    """Raised when a referenced row does not exist."""

    pass


class AlreadyExistsError(DomainError):
    """Raised when a unique name is already taken."""

    pass


class ConflictError(DomainError):
    """Raised when a deletion is blocked by rows that still reference the target."""

    pass


class BadRequestError(DomainError):
    """Raised when required fields are missing or invalid."""

    pass


# ============================================================================
# Advert Errors
# ============================================================================


class AdvertGenerationError(DomainError):
    """Raised when no advertisement could be produced."""

    pass


class ProviderUnavailableError(AdvertGenerationError):
    """Raised when the text-generation provider times out or keeps failing.

    Unlike a malformed request, this failure is transient and the call
    can be retried later.
    """

    def __init__(self, provider: str, attempts: int, reason: str) -> None:
        """Initialize provider unavailable error.

        Args:
            provider: Name of the provider binding.
            attempts: Number of attempts made.
            reason: Description of the last failure.
        """
        super().__init__(
            f"Text generation provider '{provider}' unavailable after {attempts} attempt(s): {reason}",
            details={"provider": provider, "attempts": attempts, "reason": reason},
        )
