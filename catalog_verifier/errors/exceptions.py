"""
Error hierarchy for catalog_verifier.

Only setup problems are raised as exceptions. Verification findings are data
(see ``catalog_verifier.verifier.findings``) and never travel through here.
"""

from typing import Any, Dict, Optional
from datetime import datetime, timezone


class CatalogVerifierError(Exception):
    """
    Base exception for all catalog_verifier errors.

    Carries a stable error code and a context dict so callers can log the
    failure as a structured event.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        previous_error: Optional[Exception] = None,
    ):
        super().__init__(message)

        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}
        self.previous_error = previous_error
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "previous_error": str(self.previous_error) if self.previous_error else None,
        }


class ConfigurationError(CatalogVerifierError):
    """A message-key type or the tool itself is misconfigured."""

    def __init__(self, message: str, config_key: Optional[str] = None, **kwargs):
        kwargs.setdefault("context", {"config_key": config_key})
        super().__init__(message, **kwargs)


class TypeResolutionError(ConfigurationError):
    """A message-key type could not be resolved from its dotted name."""

    def __init__(self, message: str, type_name: Optional[str] = None, **kwargs):
        super().__init__(message, context={"type_name": type_name}, **kwargs)


class MissingLocaleDeclarationError(ConfigurationError):
    """A message-key type declares no locales to verify against."""

    def __init__(self, message: str, enum_type: Optional[str] = None, **kwargs):
        super().__init__(message, context={"enum_type": enum_type}, **kwargs)


class InvalidLocaleError(ConfigurationError):
    """A locale tag could not be parsed."""

    def __init__(self, message: str, locale: Optional[str] = None, **kwargs):
        super().__init__(message, context={"locale": locale}, **kwargs)


class CatalogFormatError(CatalogVerifierError):
    """A catalog file exists but cannot be parsed."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        line: Optional[int] = None,
        **kwargs
    ):
        super().__init__(message, context={"path": path, "line": line}, **kwargs)
