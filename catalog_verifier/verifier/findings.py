"""
Verification findings.

Each inconsistency between a message-key type and one locale's catalog is
reported as an immutable ErrorRecord. Records are rendered to text only when
asked for.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

from ..locale import Locale
from ..registry import qualified_name


class ErrorKind(str, Enum):
    """Closed set of verification failure classes."""
    MISSING_CATALOG_NAME_METADATA = "MISSING_CATALOG_NAME_METADATA"
    CATALOG_NOT_FOUND = "CATALOG_NOT_FOUND"
    EMPTY_CATALOG = "EMPTY_CATALOG"
    EMPTY_KEY_SET = "EMPTY_KEY_SET"
    KEY_ABSENT_FROM_CATALOG = "KEY_ABSENT_FROM_CATALOG"
    KEY_ABSENT_FROM_ENUM = "KEY_ABSENT_FROM_ENUM"


@dataclass(frozen=True)
class EnumTypeRef:
    """A message-key type together with its fully-qualified name."""
    handle: type
    name: str

    @classmethod
    def of(cls, handle: type) -> "EnumTypeRef":
        return cls(handle, qualified_name(handle))

    @property
    def display_name(self) -> str:
        return self.name


_TEMPLATES = {
    ErrorKind.MISSING_CATALOG_NAME_METADATA:
        "Missing catalog base name declaration in enum type [{enum_type}] (locale [{locale}])",
    ErrorKind.CATALOG_NOT_FOUND:
        "Failed to locate catalog [{catalog}] for locale [{locale}] "
        "required by enum type [{enum_type}]",
    ErrorKind.EMPTY_CATALOG:
        "Empty catalog [{catalog}] for locale [{locale}] required by enum type [{enum_type}]",
    ErrorKind.EMPTY_KEY_SET:
        "Enum type [{enum_type}] declares no message keys "
        "(catalog [{catalog}], locale [{locale}])",
    ErrorKind.KEY_ABSENT_FROM_CATALOG:
        "Key [{key}] present in enum type [{enum_type}] but absent "
        "in catalog [{catalog}] for locale [{locale}]",
    ErrorKind.KEY_ABSENT_FROM_ENUM:
        "Key [{key}] present in catalog [{catalog}] for locale [{locale}] "
        "but absent in enum type [{enum_type}]",
}


@dataclass(frozen=True)
class ErrorRecord:
    """One verification finding."""
    kind: ErrorKind
    key: str
    enum_type: EnumTypeRef
    locale: Locale
    catalog_name: str

    @property
    def message(self) -> str:
        return _TEMPLATES[self.kind].format(
            key=self.key,
            enum_type=self.enum_type.display_name,
            catalog=self.catalog_name,
            locale=self.locale,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert the finding to a JSON-ready dictionary."""
        return {
            "kind": self.kind.value,
            "key": self.key,
            "enum_type": self.enum_type.display_name,
            "locale": str(self.locale),
            "catalog_name": self.catalog_name,
            "message": self.message,
        }

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.message}"


@dataclass(frozen=True)
class ErrorBuilder:
    """Stamps the shared (type, locale, catalog) context onto new findings."""
    enum_type: EnumTypeRef
    locale: Locale
    catalog_name: str

    def build(self, kind: ErrorKind, key: str = "") -> ErrorRecord:
        return ErrorRecord(kind, key, self.enum_type, self.locale, self.catalog_name)
