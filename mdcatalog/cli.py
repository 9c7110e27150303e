"""CLI entrypoints for mdcatalog commands."""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from .catalog_builder import CatalogBuilder
from .config import (
    CONFIG_FILENAME,
    ConfigError,
    format_validation_errors,
    load_config,
    read_raw_config,
    resolve_config_path,
    validate_config,
)
from .logging import configure_logging
from .staleness import is_catalog_stale
from .stores import CatalogStore

CONFIG_TEMPLATE = """\
# mdcatalog configuration

# Directory containing your markdown files (relative to this file)
content_dir: "."

# File patterns to include
patterns:
  - "**/*.md"

# Directories to ignore
ignore:
  - node_modules
  - dist
  - .git

# Where the generated catalog is written (relative to this file)
output: catalog.json

# Category display overrides (optional)
# categories:
#   my-category:
#     label: My Category
#     emoji: "📁"
#     description: Description of this category

# Tag display settings (optional)
# tags:
#   important: {name: Important, bg: "#FFE5D9", text: "#9C6644"}

# Auto-tag detection rules (optional)
# tag_rules:
#   - tag: important
#     keywords: [urgent, critical, important]

# Tag detection settings (optional)
# tagging:
#   include_content: true
#   max_tags: 3
"""


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_path_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help=f"Directory holding {CONFIG_FILENAME} (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mdcatalog",
        description="Build a document catalog from a directory of markdown notes.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write timestamped log records to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser(
        "init",
        help=f"Write a starter {CONFIG_FILENAME}.",
    )
    _add_verbose_option(init_parser, suppress_default=True)
    _add_path_argument(init_parser)
    init_parser.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Overwrite an existing configuration file.",
    )

    build_parser = subparsers.add_parser(
        "build",
        help="Scan the content directory and write the catalog.",
    )
    _add_verbose_option(build_parser, suppress_default=True)
    _add_path_argument(build_parser)
    build_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Catalog output file (overrides the configured output).",
    )
    build_parser.add_argument(
        "--max-tags",
        type=int,
        default=None,
        help="Maximum number of tags kept per document.",
    )
    build_parser.add_argument(
        "--if-stale",
        action="store_true",
        help="Skip generation when the existing catalog is newer than every input.",
    )

    check_parser = subparsers.add_parser(
        "check",
        help="Exit with status 1 when the catalog needs regeneration.",
    )
    _add_verbose_option(check_parser, suppress_default=True)
    _add_path_argument(check_parser)

    validate_parser = subparsers.add_parser(
        "validate",
        help=f"Report problems in {CONFIG_FILENAME}.",
    )
    _add_verbose_option(validate_parser, suppress_default=True)
    _add_path_argument(validate_parser)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for mdcatalog commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = Path(args.log_file).expanduser() if args.log_file else None
    configure_logging(verbose=bool(args.verbose), log_file=log_file)

    if args.command == "init":
        _run_init(parser, Path(args.path), force=bool(args.force))
    elif args.command == "build":
        _run_build(parser, args)
    elif args.command == "check":
        _run_check(parser, Path(args.path))
    elif args.command == "validate":
        _run_validate(parser, Path(args.path))
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _run_init(parser: argparse.ArgumentParser, path: Path, *, force: bool) -> None:
    config_file = resolve_config_path(path)
    if config_file.exists() and not force:
        parser.exit(1, f"{config_file} already exists. Use --force to overwrite.\n")
    config_file.parent.mkdir(parents=True, exist_ok=True)
    config_file.write_text(CONFIG_TEMPLATE, encoding="utf-8")
    print(f"Created {_relativize(config_file)}")


def _run_build(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    try:
        config = load_config(Path(args.path))
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    if args.output:
        config = config.with_overrides(output=Path(args.output).expanduser().resolve())
    if args.max_tags is not None:
        if args.max_tags < 0:
            parser.exit(1, "--max-tags must not be negative\n")
        config = config.with_overrides(
            tagging=replace(config.tagging, max_tags=args.max_tags)
        )

    builder = CatalogBuilder(config)
    config_file = resolve_config_path(Path(args.path))
    try:
        if args.if_stale and not is_catalog_stale(
            config.output, config_file, builder.discover()
        ):
            print("Catalog already up to date")
            return
        catalog = builder.generate()
    except (FileNotFoundError, NotADirectoryError) as exc:
        parser.exit(1, f"{exc}\n")

    CatalogStore(config.output).write(catalog)
    print(
        f"Catalog written to {_relativize(config.output)} "
        f"({len(catalog.document_records)} documents, {len(catalog.category_groups)} categories)"
    )


def _run_check(parser: argparse.ArgumentParser, path: Path) -> None:
    try:
        config = load_config(path)
        content_files = CatalogBuilder(config).discover()
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")
    except (FileNotFoundError, NotADirectoryError) as exc:
        parser.exit(1, f"{exc}\n")

    if is_catalog_stale(config.output, resolve_config_path(path), content_files):
        parser.exit(1, "Catalog is stale\n")
    print("Catalog is up to date")


def _run_validate(parser: argparse.ArgumentParser, path: Path) -> None:
    config_file = resolve_config_path(path)
    try:
        data = read_raw_config(config_file)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")
    result = validate_config(data, config_file)
    print(format_validation_errors(result))
    if not result.valid:
        parser.exit(1)


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
