"""Command-line interface for sourcedocs."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from artifacts.write import clean_documentation, generate_documentation
from contract.validation import validate_documentation
from docindex.index import IndexStateError
from settings.config import (
    ConfigError,
    DocsConfig,
    apply_overrides,
    load_config,
    resolve_docs_path,
)
from symbols.loader import InputError
from verify.verify import verify_determinism

logger = logging.getLogger("sourcedocs")


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--root",
        default=".",
        help="Directory holding sourcedocs.toml; relative output paths "
        "resolve against it (default: .)",
    )
    parser.add_argument(
        "--output",
        default=None,
        help="Output directory (default: config output_dir)",
    )
    parser.add_argument(
        "--contents-filename",
        default=None,
        help="Contents file name (default: config contents_filename)",
    )
    parser.add_argument(
        "--module-name",
        default=None,
        help="Module name, used with --module-name-path",
    )
    parser.add_argument(
        "-m",
        "--module-name-path",
        action="store_true",
        default=None,
        help="Include the module name as part of the output folder path.",
    )


def _add_inputs(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "inputs",
        nargs="+",
        type=Path,
        help="Analyzer output JSON files (one module result per file)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sourcedocs")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate", help="Generate the Markdown documentation"
    )
    _add_inputs(generate_parser)
    _add_common_options(generate_parser)
    generate_parser.add_argument(
        "-c",
        "--clean",
        action="store_true",
        default=None,
        help="Delete output folder before generating documentation.",
    )
    generate_parser.add_argument(
        "-l",
        "--collapsible",
        action="store_true",
        default=None,
        help="Put methods, properties and enum cases inside collapsible blocks.",
    )
    generate_parser.add_argument(
        "-t",
        "--table-of-contents",
        action="store_true",
        default=None,
        help="Generate a table of contents with properties and methods for "
        "each type.",
    )
    generate_parser.add_argument(
        "--min-access-level",
        default=None,
        help="Only document declarations at least this visible "
        "(private, fileprivate, internal, public, open)",
    )

    clean_parser = subparsers.add_parser(
        "clean", help="Delete reference documentation directory"
    )
    _add_common_options(clean_parser)

    validate_parser = subparsers.add_parser(
        "validate", help="Check links in generated documentation"
    )
    _add_common_options(validate_parser)

    verify_parser = subparsers.add_parser(
        "verify", help="Verify documentation matches a fresh generation"
    )
    _add_inputs(verify_parser)
    _add_common_options(verify_parser)

    return parser


def _resolve_config(args: argparse.Namespace, root: Path) -> DocsConfig:
    config = load_config(root)
    return apply_overrides(
        config,
        output_dir=args.output,
        contents_filename=args.contents_filename,
        module_name=args.module_name,
        include_module_name_in_path=args.module_name_path,
        clean=getattr(args, "clean", None),
        collapsible_sections=getattr(args, "collapsible", None),
        table_of_contents=getattr(args, "table_of_contents", None),
        min_access_level=getattr(args, "min_access_level", None),
    )


def _resolve_inputs(inputs: list[Path]) -> list[Path]:
    return [path.expanduser().resolve() for path in inputs]


def _handle_generate(args: argparse.Namespace, config: DocsConfig, root: Path) -> int:
    docs_path = resolve_docs_path(root, config)
    try:
        summary = generate_documentation(
            inputs=_resolve_inputs(args.inputs), docs_path=docs_path, config=config
        )
    except (InputError, IndexStateError, OSError) as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 1
    counts = summary["entity_counts"]
    if isinstance(counts, dict):
        for bucket, count in counts.items():
            logger.info("%s: %d", bucket, count)
    return 0


def _handle_clean(config: DocsConfig, root: Path) -> int:
    docs_path = resolve_docs_path(root, config)
    try:
        removed = clean_documentation(docs_path, config.contents_filename)
    except OSError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 1
    for path in removed:
        logger.info("Removed %s", path)
    return 0


def _handle_validate(config: DocsConfig, root: Path) -> int:
    docs_path = resolve_docs_path(root, config)
    result = validate_documentation(docs_path, config.contents_filename)
    for warning in result.warnings:
        sys.stderr.write(f"{warning.location()}: warning: {warning.message}\n")
    if result.errors:
        for error in result.errors:
            sys.stderr.write(f"{error.location()}: {error.message}\n")
        return 1
    return 0


def _handle_verify(args: argparse.Namespace, config: DocsConfig, root: Path) -> int:
    docs_path = resolve_docs_path(root, config)
    try:
        result = verify_determinism(
            inputs=_resolve_inputs(args.inputs), docs_dir=docs_path, config=config
        )
    except (FileNotFoundError, NotADirectoryError) as exc:
        sys.stderr.write(f"docs-dir: {docs_path}\n")
        sys.stderr.write(f"error: {exc}\n")
        return 2
    except InputError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 1
    if not result.ok:
        for label, paths in (
            ("missing", result.missing),
            ("extra", result.extra),
            ("mismatches", result.mismatches),
        ):
            for path in paths:
                sys.stderr.write(f"{label}: {path}\n")
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    root = Path(args.root).expanduser().resolve()
    try:
        config = _resolve_config(args, root)

        if args.command == "generate":
            return _handle_generate(args, config, root)

        if args.command == "clean":
            return _handle_clean(config, root)

        if args.command == "validate":
            return _handle_validate(config, root)

        if args.command == "verify":
            return _handle_verify(args, config, root)
    except ConfigError as exc:
        sys.stderr.write(f"config error: {exc}\n")
        return 2

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
