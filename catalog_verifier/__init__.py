"""Verify that message-key types and their locale catalogs stay in sync."""

__version__ = "0.1.0"

from catalog_verifier.catalog import Catalog, CatalogLoader
from catalog_verifier.locale import Locale
from catalog_verifier.registry import (
    CatalogDescriptor,
    MetadataRegistry,
    default_registry,
    message_catalog,
)
from catalog_verifier.verifier import (
    EnumTypeRef,
    ErrorBuilder,
    ErrorKind,
    ErrorRecord,
    MessageKeyVerifier,
)

__all__ = [
    "Catalog",
    "CatalogDescriptor",
    "CatalogLoader",
    "EnumTypeRef",
    "ErrorBuilder",
    "ErrorKind",
    "ErrorRecord",
    "Locale",
    "MessageKeyVerifier",
    "MetadataRegistry",
    "default_registry",
    "message_catalog",
]
