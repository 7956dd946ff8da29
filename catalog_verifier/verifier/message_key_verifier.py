"""Verify that a message-key type and its locale catalogs contain the same keys."""

from typing import List, Optional, Union

import structlog

from ..catalog import CatalogLoader
from ..errors import MissingLocaleDeclarationError
from ..locale import Locale, as_locale
from ..registry import MetadataRegistry, default_registry, resolve_type
from .findings import EnumTypeRef, ErrorBuilder, ErrorKind, ErrorRecord

logger = structlog.get_logger(__name__)


class MessageKeyVerifier:
    """
    Given a message-key type, verify that the catalog of a given locale
    contains exactly the declared keys.

    Args:
        enum_type: the message-key type, or its dotted name
        registry: catalog metadata lookup (defaults to the process-wide registry)
        loader: catalog loader (defaults to one searching the working directory)

    Raises:
        TypeResolutionError: if ``enum_type`` is a name that cannot be resolved
    """

    def __init__(
        self,
        enum_type: Union[type, str],
        *,
        registry: Optional[MetadataRegistry] = None,
        loader: Optional[CatalogLoader] = None,
    ):
        if isinstance(enum_type, str):
            self._ref = EnumTypeRef(resolve_type(enum_type), enum_type)
        else:
            self._ref = EnumTypeRef.of(enum_type)
        self.registry = registry or default_registry
        self.loader = loader or CatalogLoader()

    @property
    def enum_type(self) -> type:
        return self._ref.handle

    @property
    def enum_type_name(self) -> str:
        return self._ref.name

    @property
    def enum_type_ref(self) -> EnumTypeRef:
        return self._ref

    def get_locale_names(self) -> List[str]:
        return self.registry.locale_names(self.enum_type)

    def get_resource_catalog_name(self) -> Optional[str]:
        return self.registry.resource_catalog_name(self.enum_type)

    def verify(self, locale: Union[Locale, str]) -> List[ErrorRecord]:
        """Compare the declared keys with the catalog of ``locale``.

        Structural problems (no catalog name, missing or empty catalog, no
        declared keys) are reported on their own; key-by-key comparison only
        runs against a sound catalog. An empty list means the catalog is
        consistent.
        """
        locale = as_locale(locale)
        log = logger.bind(enum_type=self.enum_type_name, locale=str(locale))
        errors: List[ErrorRecord] = []

        catalog_name = self.get_resource_catalog_name()
        if not catalog_name:
            log.debug("No catalog name declared")
            errors.append(ErrorRecord(
                ErrorKind.MISSING_CATALOG_NAME_METADATA, "", self._ref, locale, ""
            ))
            return self._report(log, errors, catalog=None)

        catalog = self.loader.load(catalog_name, locale)
        builder = ErrorBuilder(self._ref, locale, catalog_name)

        catalog_keys = set()
        if catalog is None:
            errors.append(builder.build(ErrorKind.CATALOG_NOT_FOUND))
        else:
            catalog_keys = catalog.keys()
            if not catalog_keys:
                errors.append(builder.build(ErrorKind.EMPTY_CATALOG))

        message_keys = self.registry.message_keys(self.enum_type)
        if not message_keys:
            errors.append(builder.build(ErrorKind.EMPTY_KEY_SET))

        if errors:
            log.debug("Structural check failed", kinds=[e.kind.value for e in errors])
            return self._report(log, errors, catalog=catalog_name)

        for key in message_keys:
            if key in catalog_keys:
                catalog_keys.remove(key)
            else:
                errors.append(builder.build(ErrorKind.KEY_ABSENT_FROM_CATALOG, key))

        for key in catalog_keys:
            errors.append(builder.build(ErrorKind.KEY_ABSENT_FROM_ENUM, key))

        return self._report(log, errors, catalog=catalog_name)

    def type_isolated_verify(self, locale: Union[Locale, str]) -> List[str]:
        """Same as verify() but with every finding rendered as text."""
        return [str(error) for error in self.verify(locale)]

    def verify_all_locales(self) -> List[ErrorRecord]:
        """Verify every declared locale, in declaration order.

        Raises:
            MissingLocaleDeclarationError: if the type declares no locales
            InvalidLocaleError: if a declared locale cannot be parsed
        """
        locale_names = self.get_locale_names()
        if not locale_names:
            raise MissingLocaleDeclarationError(
                f"Missing locale declaration in enum type [{self.enum_type_name}]",
                enum_type=self.enum_type_name,
            )

        errors: List[ErrorRecord] = []
        for locale_name in locale_names:
            errors.extend(self.verify(Locale.parse(locale_name)))
        return errors

    @staticmethod
    def _report(log, errors: List[ErrorRecord], catalog: Optional[str]) -> List[ErrorRecord]:
        log.info("Verified message keys", catalog=catalog, findings=len(errors))
        return errors
