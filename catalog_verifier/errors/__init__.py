"""
Error handling for catalog_verifier.

- Structured exception hierarchy for setup failures
- Logging decorator for command entry points
"""

from .exceptions import (
    CatalogVerifierError,
    ConfigurationError,
    TypeResolutionError,
    MissingLocaleDeclarationError,
    InvalidLocaleError,
    CatalogFormatError,
)

from .decorators import log_errors

__all__ = [
    # Exceptions
    "CatalogVerifierError",
    "ConfigurationError",
    "TypeResolutionError",
    "MissingLocaleDeclarationError",
    "InvalidLocaleError",
    "CatalogFormatError",

    # Decorators
    "log_errors",
]
