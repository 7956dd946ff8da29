"""Command line entry point for catalog-verifier."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import structlog

from catalog_verifier import __version__
from catalog_verifier.catalog import CatalogLoader
from catalog_verifier.config import Settings, load_config
from catalog_verifier.errors import CatalogVerifierError, log_errors
from catalog_verifier.verifier import ErrorRecord, MessageKeyVerifier

EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_SETUP_ERROR = 2


def setup_logging(debug: bool = False) -> None:
    """Configure structured logging."""
    level = logging.DEBUG if debug else logging.WARNING

    # Clear any existing handlers to prevent duplication
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Findings go to stdout; logs stay on stderr
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))

    logging.basicConfig(
        level=level,
        handlers=[handler],
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            (
                structlog.dev.ConsoleRenderer(colors=True)
                if debug
                else structlog.processors.JSONRenderer()
            ),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="catalog-verifier",
        description="Check that message-key types and their locale catalogs contain the same keys",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("enum_type", help="Dotted name of the message-key type, e.g. myapp.messages.Messages")
    common.add_argument("--config", type=Path, help="YAML configuration file")
    common.add_argument(
        "--search-path",
        dest="search_paths",
        action="append",
        type=Path,
        help="Directory to search for catalogs (repeatable)",
    )
    common.add_argument("--debug", action="store_true", default=None, help="Enable debug logging")

    commands = parser.add_subparsers(dest="command", required=True)

    verify = commands.add_parser("verify", parents=[common], help="Verify catalogs against a message-key type")
    verify.add_argument(
        "--locale",
        dest="locales",
        action="append",
        help="Locale to verify (repeatable); defaults to every declared locale",
    )
    verify.add_argument("--format", dest="output_format", choices=["text", "json"], help="Output format")

    commands.add_parser("locales", parents=[common], help="Show declared and available locales")

    return parser.parse_args(argv)


def render(records: List[ErrorRecord], enum_type: str, output_format: str) -> str:
    if output_format == "json":
        return json.dumps(
            {
                "enum_type": enum_type,
                "count": len(records),
                "findings": [record.to_dict() for record in records],
            },
            indent=2,
            ensure_ascii=False,
        )
    return "\n".join(str(record) for record in records)


@log_errors(operation_name="verify")
def run_verify(args: argparse.Namespace, settings: Settings) -> int:
    verifier = MessageKeyVerifier(args.enum_type, loader=CatalogLoader.from_settings(settings))

    if args.locales:
        records: List[ErrorRecord] = []
        for locale in args.locales:
            records.extend(verifier.verify(locale))
    else:
        records = verifier.verify_all_locales()

    output = render(records, verifier.enum_type_name, settings.output_format)
    if output:
        print(output)
    return EXIT_FINDINGS if records else EXIT_OK


@log_errors(operation_name="locales")
def run_locales(args: argparse.Namespace, settings: Settings) -> int:
    verifier = MessageKeyVerifier(args.enum_type, loader=CatalogLoader.from_settings(settings))
    catalog_name = verifier.get_resource_catalog_name()

    print(f"enum type: {verifier.enum_type_name}")
    print(f"catalog:   {catalog_name or '-'}")
    print(f"declared:  {', '.join(verifier.get_locale_names()) or '-'}")
    if catalog_name:
        available = verifier.loader.available_locales(catalog_name)
        print(f"available: {', '.join(available) or '-'}")
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    # Let TYPE name modules of the project being checked
    if "" not in sys.path and str(Path.cwd()) not in sys.path:
        sys.path.insert(0, str(Path.cwd()))

    try:
        settings = load_config(
            args.config,
            search_paths=args.search_paths,
            debug=args.debug,
            output_format=getattr(args, "output_format", None),
        )
    except CatalogVerifierError as e:
        print(f"catalog-verifier: {e.message}", file=sys.stderr)
        return EXIT_SETUP_ERROR

    setup_logging(settings.debug)

    command = run_verify if args.command == "verify" else run_locales
    try:
        return command(args, settings)
    except CatalogVerifierError as e:
        print(f"catalog-verifier: {e.message}", file=sys.stderr)
        return EXIT_SETUP_ERROR


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
