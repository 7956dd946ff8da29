"""Locating and reading locale-specific resource catalogs.

A catalog is identified by a base name and a locale. The base name maps to a
relative path the way a classpath bundle does: ``app.i18n.messages`` with
locale ``fr_CA`` is looked up as ``app/i18n/messages_fr_CA.<ext>`` under each
search path, then ``messages_fr`` as its parent.
"""

import json
import re
import string
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Set, Tuple, Union

import structlog
import yaml

from .errors import CatalogFormatError, ConfigurationError, InvalidLocaleError
from .locale import Locale, as_locale

logger = structlog.get_logger(__name__)

DEFAULT_FORMATS = ("properties", "json", "yaml", "yml")

_WHITESPACE = " \t\f"
_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


class Catalog:
    """Key to text mapping loaded for one (base name, locale) pair."""

    def __init__(
        self,
        base_name: str,
        locale: Locale,
        entries: Mapping[str, str],
        sources: Tuple[Path, ...] = (),
    ):
        self.base_name = base_name
        self.locale = locale
        self.sources = sources
        self._entries: Dict[str, str] = dict(entries)

    def keys(self) -> Set[str]:
        """Return a new set of the catalog keys; callers may mutate it freely."""
        return set(self._entries)

    def value(self, key: str) -> str:
        return self._entries[key]

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __repr__(self) -> str:
        return f"Catalog({self.base_name!r}, {str(self.locale)!r}, {len(self)} keys)"


def _has_continuation(line: str) -> bool:
    trailing = len(line) - len(line.rstrip("\\"))
    return trailing % 2 == 1


def _split_entry(line: str) -> Tuple[str, str]:
    idx = 0
    while idx < len(line):
        char = line[idx]
        if char == "\\":
            idx += 2
            continue
        if char in "=:" or char in _WHITESPACE:
            break
        idx += 1

    key, rest = line[:idx], line[idx:].lstrip(_WHITESPACE)
    if rest[:1] in ("=", ":"):
        rest = rest[1:].lstrip(_WHITESPACE)
    return key, rest


def _unescape(text: str, path: Optional[Path], line_no: int) -> str:
    out: List[str] = []
    idx = 0
    while idx < len(text):
        char = text[idx]
        if char != "\\":
            out.append(char)
            idx += 1
            continue

        idx += 1
        if idx >= len(text):
            break
        char = text[idx]
        if char == "u":
            digits = text[idx + 1:idx + 5]
            if len(digits) != 4 or not all(d in string.hexdigits for d in digits):
                raise CatalogFormatError(
                    "Malformed \\uxxxx escape",
                    path=str(path) if path else None,
                    line=line_no,
                )
            out.append(chr(int(digits, 16)))
            idx += 5
            continue
        out.append(_ESCAPES.get(char, char))
        idx += 1
    return "".join(out)


def parse_properties(text: str, path: Optional[Path] = None) -> Dict[str, str]:
    """Parse Java-style ``.properties`` content."""
    entries: Dict[str, str] = {}
    # Only CR, LF and CRLF end a line; form feed is whitespace.
    lines = _LINE_BREAK.split(text)
    idx = 0
    while idx < len(lines):
        line_no = idx + 1
        line = lines[idx].lstrip(_WHITESPACE)
        idx += 1
        if not line or line[0] in "#!":
            continue

        while _has_continuation(line):
            line = line[:-1]
            if idx >= len(lines):
                break
            line += lines[idx].lstrip(_WHITESPACE)
            idx += 1

        key, value = _split_entry(line)
        entries[_unescape(key, path, line_no)] = _unescape(value, path, line_no)
    return entries


def flatten(mapping: Mapping[str, Any], prefix: str = "") -> Dict[str, str]:
    """Flatten nested mappings into dot-notation keys."""
    entries: Dict[str, str] = {}
    for key, value in mapping.items():
        if not prefix and key == "_meta":
            continue
        current_path = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            entries.update(flatten(value, current_path))
        else:
            entries[current_path] = "" if value is None else str(value)
    return entries


def _structured(data: Any, path: Path) -> Dict[str, str]:
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise CatalogFormatError(
            f"Catalog root must be a mapping: {path}", path=str(path)
        )
    return flatten(data)


def _read_properties(text: str, path: Path) -> Dict[str, str]:
    return parse_properties(text, path)


def _read_json(text: str, path: Path) -> Dict[str, str]:
    if not text.strip():
        return {}
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise CatalogFormatError(
            f"Invalid JSON in {path}: {e.msg}", path=str(path), line=e.lineno, previous_error=e
        ) from e
    return _structured(data, path)


def _read_yaml(text: str, path: Path) -> Dict[str, str]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        raise CatalogFormatError(
            f"Invalid YAML in {path}",
            path=str(path),
            line=mark.line + 1 if mark else None,
            previous_error=e,
        ) from e
    return _structured(data, path)


_READERS: Dict[str, Callable[[str, Path], Dict[str, str]]] = {
    "properties": _read_properties,
    "json": _read_json,
    "yaml": _read_yaml,
    "yml": _read_yaml,
}


class CatalogLoader:
    """Finds catalog files under a list of search paths and reads them."""

    def __init__(
        self,
        search_paths: Iterable[Union[str, Path]] = (".",),
        formats: Iterable[str] = DEFAULT_FORMATS,
        encoding: str = "utf-8",
        parent_fallback: bool = True,
        root_fallback: bool = False,
    ):
        self.search_paths = [Path(p) for p in search_paths]
        self.formats = tuple(fmt.lower().lstrip(".") for fmt in formats)
        unknown = [fmt for fmt in self.formats if fmt not in _READERS]
        if unknown:
            raise ConfigurationError(
                f"Unsupported catalog formats: {', '.join(unknown)}",
                config_key="formats",
            )
        self.encoding = encoding
        self.parent_fallback = parent_fallback
        self.root_fallback = root_fallback

    @classmethod
    def from_settings(cls, settings) -> "CatalogLoader":
        return cls(
            search_paths=settings.search_paths,
            formats=settings.formats,
            encoding=settings.encoding,
            parent_fallback=settings.parent_fallback,
            root_fallback=settings.root_fallback,
        )

    def load(self, base_name: str, locale: Union[Locale, str]) -> Optional[Catalog]:
        """Load the catalog for ``(base_name, locale)``.

        Returns None when no file exists for the locale. A found catalog may
        still be empty; the two states never overlap.
        """
        locale = as_locale(locale)
        suffixes = locale.candidates() if self.parent_fallback else [str(locale)]

        found: List[Path] = []
        for suffix in suffixes:
            path = self._find_file(base_name, suffix)
            if path is not None:
                found.append(path)
        if self.root_fallback:
            root = self._find_file(base_name, None)
            if root is not None:
                found.append(root)

        if not found:
            logger.debug("Catalog not found", base_name=base_name, locale=str(locale))
            return None

        entries: Dict[str, str] = {}
        # Least specific first so that child entries override their parents.
        for path in reversed(found):
            entries.update(self._read(path))

        return Catalog(base_name, locale, entries, tuple(found))

    def available_locales(self, base_name: str) -> List[str]:
        """List locale suffixes that have a catalog file in any search path."""
        relative = self._relative(base_name)
        prefix = f"{relative.name}_"
        locales: Set[str] = set()
        for directory in self._directories(relative):
            for path in directory.iterdir():
                if not path.is_file() or path.suffix.lstrip(".").lower() not in self.formats:
                    continue
                if not path.stem.startswith(prefix):
                    continue
                suffix = path.stem[len(prefix):]
                try:
                    locale = str(Locale.parse(suffix))
                except InvalidLocaleError:
                    logger.debug("Ignoring catalog file with unparseable suffix", file=str(path))
                    continue
                # load() only looks up canonical suffixes, so messages_extra_en is not a locale.
                if locale != suffix:
                    logger.debug("Ignoring catalog file of another base name", file=str(path))
                    continue
                locales.add(locale)
        return sorted(locales)

    def _directories(self, relative: Path) -> Iterator[Path]:
        for root in self.search_paths:
            directory = root / relative.parent
            if directory.is_dir():
                yield directory

    @staticmethod
    def _relative(base_name: str) -> Path:
        return Path(*base_name.split("."))

    def _find_file(self, base_name: str, suffix: Optional[str]) -> Optional[Path]:
        relative = self._relative(base_name)
        stem = f"{relative.name}_{suffix}" if suffix else relative.name
        for directory in self._directories(relative):
            for fmt in self.formats:
                path = directory / f"{stem}.{fmt}"
                if path.is_file():
                    return path
        return None

    def _read(self, path: Path) -> Dict[str, str]:
        reader = _READERS[path.suffix.lstrip(".").lower()]
        try:
            text = path.read_text(encoding=self.encoding)
        except (UnicodeDecodeError, OSError) as e:
            raise CatalogFormatError(
                f"Cannot read catalog {path}: {e}", path=str(path), previous_error=e
            ) from e
        entries = reader(text, path)
        logger.debug("Loaded catalog file", file=str(path), keys=len(entries))
        return entries
