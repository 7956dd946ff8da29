"""Catalog metadata for message-key types.

Message-key types declare which catalog they belong to and which locales they
must be verified against by registering a :class:`CatalogDescriptor`::

    @message_catalog("myapp.messages", locales=["en", "fr_CA"])
    class Messages(Enum):
        GREETING = auto()
        FAREWELL = auto()
"""

import enum
import importlib
import threading
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Tuple

import structlog

from .errors import ConfigurationError, TypeResolutionError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CatalogDescriptor:
    """Catalog base name and supported locales declared by a message-key type."""
    base_name: Optional[str] = None
    locale_names: Tuple[str, ...] = ()


class MetadataRegistry:
    """Maps message-key types to their catalog descriptors."""

    def __init__(self):
        self._descriptors: Dict[type, CatalogDescriptor] = {}
        self._lock = threading.Lock()

    def register(
        self,
        enum_type: type,
        base_name: Optional[str] = None,
        locales: Iterable[str] = (),
    ) -> CatalogDescriptor:
        """Register (or replace) the descriptor of ``enum_type``."""
        if not isinstance(enum_type, type):
            raise ConfigurationError(
                f"Only types can be registered, got [{enum_type!r}]",
                config_key="enum_type",
            )
        if isinstance(locales, str):
            locales = (locales,)

        descriptor = CatalogDescriptor(base_name or None, tuple(locales))
        with self._lock:
            self._descriptors[enum_type] = descriptor

        logger.debug(
            "Registered message-key type",
            enum_type=qualified_name(enum_type),
            base_name=descriptor.base_name,
            locales=list(descriptor.locale_names),
        )
        return descriptor

    def unregister(self, enum_type: type) -> None:
        with self._lock:
            self._descriptors.pop(enum_type, None)

    def descriptor(self, enum_type: type) -> Optional[CatalogDescriptor]:
        with self._lock:
            return self._descriptors.get(enum_type)

    def registered_types(self) -> List[type]:
        with self._lock:
            return list(self._descriptors)

    def resource_catalog_name(self, enum_type: type) -> Optional[str]:
        """Return the declared catalog base name, or None if there is none."""
        descriptor = self.descriptor(enum_type)
        return descriptor.base_name if descriptor else None

    def locale_names(self, enum_type: type) -> List[str]:
        """Return the declared locale tags (empty when none are declared)."""
        descriptor = self.descriptor(enum_type)
        return list(descriptor.locale_names) if descriptor else []

    def message_keys(self, enum_type: type) -> List[str]:
        """Return the message keys declared by ``enum_type``, in declaration order."""
        return message_keys(enum_type)


def message_keys(enum_type: type) -> List[str]:
    """Enumerate the message keys of an Enum or of a closed string set.

    Enum members contribute their names (aliases are skipped). Any other type
    must provide a ``message_keys()`` classmethod returning the key strings.
    """
    if isinstance(enum_type, type) and issubclass(enum_type, enum.Enum):
        return [member.name for member in enum_type]

    provider = getattr(enum_type, "message_keys", None)
    if callable(provider):
        return [str(key) for key in provider()]

    raise ConfigurationError(
        f"Type [{qualified_name(enum_type)}] is neither an Enum nor provides message_keys()",
        config_key="enum_type",
    )


def qualified_name(enum_type) -> str:
    module = getattr(enum_type, "__module__", None)
    name = getattr(enum_type, "__qualname__", None) or repr(enum_type)
    return f"{module}.{name}" if module else name


def resolve_type(type_name: str) -> type:
    """Import ``package.module.TypeName`` (or ``package.module:TypeName``).

    Raises:
        TypeResolutionError: if the module or the attribute cannot be found,
            or the attribute is not a type
    """
    err_msg = f"Failed to find message-key type [{type_name}]"

    if ":" in type_name:
        module_name, _, attr_path = type_name.partition(":")
        candidates = [(module_name, attr_path)]
    else:
        pieces = type_name.split(".")
        # Longest importable module prefix wins; the rest is the attribute path.
        candidates = [
            (".".join(pieces[:i]), ".".join(pieces[i:]))
            for i in range(len(pieces) - 1, 0, -1)
        ]

    if not candidates or not all(module and attr for module, attr in candidates):
        raise TypeResolutionError(err_msg, type_name=type_name)

    last_error: Optional[Exception] = None
    for module_name, attr_path in candidates:
        try:
            target = importlib.import_module(module_name)
        except ModuleNotFoundError as e:
            # Only a missing candidate (or parent package) means "try a shorter prefix".
            if e.name and (module_name == e.name or module_name.startswith(e.name + ".")):
                last_error = e
                continue
            raise TypeResolutionError(err_msg, type_name=type_name, previous_error=e) from e
        except Exception as e:
            raise TypeResolutionError(err_msg, type_name=type_name, previous_error=e) from e

        try:
            for attr in attr_path.split("."):
                target = getattr(target, attr)
        except AttributeError as e:
            raise TypeResolutionError(err_msg, type_name=type_name, previous_error=e) from e

        if not isinstance(target, type):
            raise TypeResolutionError(
                f"[{type_name}] does not name a type", type_name=type_name
            )
        return target

    raise TypeResolutionError(err_msg, type_name=type_name, previous_error=last_error) from last_error


default_registry = MetadataRegistry()


def message_catalog(
    base_name: Optional[str] = None,
    locales: Iterable[str] = (),
    registry: Optional[MetadataRegistry] = None,
) -> Callable[[type], type]:
    """Class decorator declaring the catalog and locales of a message-key type."""
    def decorator(enum_type: type) -> type:
        (registry or default_registry).register(enum_type, base_name, locales)
        return enum_type

    return decorator


def resource_catalog_name(enum_type: type) -> Optional[str]:
    return default_registry.resource_catalog_name(enum_type)


def locale_names(enum_type: type) -> List[str]:
    return default_registry.locale_names(enum_type)
