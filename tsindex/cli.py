"""
tsindex Command Line

Thin host around TypeIndex: resolves the source root, runs one query, and
prints the result as JSON.

Exit codes:
    0  success
    1  lookup found nothing (search, hierarchy, file)
    2  configuration error or invalid kind
"""

import argparse
import json
import sys
from typing import Any, Optional

from tsindex.ast.models import DECLARATION_KINDS
from tsindex.configs.logging import get_logger, setup_logging
from tsindex.configs.settings import load_config, resolve_source_root
from tsindex.configs.yaml_config import create_default_config, get_config_path
from tsindex.exceptions import ConfigurationError, IngestFileNotFoundError, InvalidKindError
from tsindex.query.engine import TypeIndex
from tsindex.query.lookup import filter_by_module

logger = get_logger("cli")

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_USAGE = 2


def _emit(payload: Any) -> None:
    print(json.dumps(payload, indent=2))


def _emit_declarations(declarations) -> None:
    _emit([d.to_dict() for d in declarations])


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tsindex",
        description="Query the exported declarations of a TypeScript source tree",
    )
    parser.add_argument("--root", help="Source root (default: TSINDEX_SOURCE_ROOT or config)")
    parser.add_argument("--config", help="Path to config.yaml")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("init", help="Write a default config.yaml to the data directory")

    extract = commands.add_parser("extract", help="List declarations")
    extract.add_argument("--module", help="Only declarations of this module")
    extract.add_argument("--kind", help=f"Only this kind ({', '.join(DECLARATION_KINDS)})")

    file_cmd = commands.add_parser("file", help="Declarations of a single file")
    file_cmd.add_argument("path", help="Path relative to the source root")

    search = commands.add_parser("search", help="Look up a declaration by name")
    search.add_argument("name")

    fuzzy = commands.add_parser("fuzzy", help="Relevance-ranked search")
    fuzzy.add_argument("query")
    fuzzy.add_argument("--limit", type=int, default=None, help="Maximum results")

    hierarchy = commands.add_parser("hierarchy", help="Parents and children of a declaration")
    hierarchy.add_argument("name")

    commands.add_parser("stats", help="Declaration counts by kind and module")
    commands.add_parser("deps", help="Exports and re-export sources per module")

    return parser


def run_command(index: TypeIndex, args: argparse.Namespace) -> int:
    """Run one parsed command against an index and print its result."""
    if args.command == "extract":
        if args.kind:
            declarations = index.extract_by_kind(args.kind)
        else:
            declarations = list(index.extract_all())
        if args.module:
            declarations = filter_by_module(declarations, args.module)
        _emit_declarations(declarations)
        return EXIT_OK

    if args.command == "file":
        declarations = index.extract_from_file(args.path)
        _emit_declarations(declarations)
        return EXIT_OK

    if args.command == "search":
        found = index.search(args.name)
        if found is None:
            _emit(None)
            return EXIT_NOT_FOUND
        _emit(found.to_dict())
        return EXIT_OK

    if args.command == "fuzzy":
        _emit_declarations(index.fuzzy_search(args.query, args.limit))
        return EXIT_OK

    if args.command == "hierarchy":
        result = index.hierarchy(args.name)
        if result is None:
            _emit(None)
            return EXIT_NOT_FOUND
        _emit(result.to_dict())
        return EXIT_OK

    if args.command == "stats":
        _emit(index.statistics().to_dict())
        return EXIT_OK

    if args.command == "deps":
        _emit([d.to_dict() for d in index.dependencies()])
        return EXIT_OK

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the tsindex command."""
    args = build_arg_parser().parse_args(argv)
    setup_logging(debug=True if args.debug else None, log_file="")

    if args.command == "init":
        created = create_default_config()
        _emit({"config": str(get_config_path()), "created": created})
        return EXIT_OK

    try:
        config = load_config(args.config)
        root = resolve_source_root(args.root or config.source_root)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return EXIT_USAGE

    index = TypeIndex(root, config)
    try:
        return run_command(index, args)
    except IngestFileNotFoundError as e:
        logger.error(str(e))
        _emit(None)
        return EXIT_NOT_FOUND
    except InvalidKindError as e:
        logger.error(str(e))
        return EXIT_USAGE


if __name__ == "__main__":
    sys.exit(main())
