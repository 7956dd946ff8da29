"""
Pytest configuration and fixtures for catalog_verifier tests.
"""

import logging
from pathlib import Path
from typing import Callable, Generator

import pytest
import structlog

from catalog_verifier.catalog import CatalogLoader
from catalog_verifier.registry import MetadataRegistry
from catalog_verifier.verifier import MessageKeyVerifier
from samples.messages import Empty, Messages


@pytest.fixture(autouse=True)
def structured_logging() -> Generator[None, None, None]:
    """Route structlog through stdlib logging without logger caching.

    Also undoes handler changes made by the CLI's setup_logging.
    """
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.format_exc_info,
            structlog.processors.KeyValueRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
    structlog.reset_defaults()


@pytest.fixture
def catalog_dir(tmp_path: Path) -> Path:
    """Directory searched for catalogs."""
    directory = tmp_path / "catalogs"
    directory.mkdir()
    return directory


@pytest.fixture
def write_catalog(catalog_dir: Path) -> Callable[[str, str], Path]:
    """Helper to write a catalog file relative to ``catalog_dir``."""
    def _write(relative: str, content: str = "") -> Path:
        path = catalog_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def loader(catalog_dir: Path) -> CatalogLoader:
    return CatalogLoader([catalog_dir])


@pytest.fixture
def registry() -> MetadataRegistry:
    """Registry isolated from the process-wide one."""
    registry = MetadataRegistry()
    registry.register(Messages, "app.messages", ["en", "fr_CA", "de"])
    registry.register(Empty, "app.empty", ["en"])
    return registry


@pytest.fixture
def verifier(registry: MetadataRegistry, loader: CatalogLoader) -> MessageKeyVerifier:
    return MessageKeyVerifier(Messages, registry=registry, loader=loader)
