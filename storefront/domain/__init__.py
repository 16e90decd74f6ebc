"""Domain layer for the storefront catalog.

Exports the typed errors raised by the entity managers and the
advertisement generator.
"""

from storefront.domain.exceptions import (
    AdvertGenerationError,
    AlreadyExistsError,
    BadRequestError,
    ConflictError,
    DomainError,
    NotFoundError,
    ProviderUnavailableError,
)

__all__ = [
    "AdvertGenerationError",
    "AlreadyExistsError",
    "BadRequestError",
    "ConflictError",
    "DomainError",
    "NotFoundError",
    "ProviderUnavailableError",
]
