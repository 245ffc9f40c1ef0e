"""CLI entrypoints for resprune commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import PrunerConfig, load_config
from .errors import ConfigError
from .logging import configure_logging
from .pruner import ResourcePruner
from .report import render_analysis, render_prune


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    default: object = argparse.SUPPRESS if suppress_default else False
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=default,
        help="Increase log verbosity for troubleshooting.",
    )
    group.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=default,
        help="Only log warnings and errors; the report is still printed.",
    )


def _add_project_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the module root or its .resprune.yml (defaults to current directory).",
    )
    parser.add_argument(
        "--exclude-pattern",
        action="append",
        default=[],
        metavar="REGEX",
        help="Keep resources whose whole name matches REGEX (repeatable).",
    )
    parser.add_argument(
        "--target-type",
        action="append",
        default=[],
        metavar="TYPE",
        help="Only consider resources of TYPE for removal (repeatable).",
    )
    parser.add_argument(
        "--exclude-type",
        action="append",
        default=[],
        metavar="TYPE",
        help="Never remove resources of TYPE (repeatable).",
    )
    parser.add_argument(
        "--res-dir",
        action="append",
        default=[],
        metavar="DIR",
        help="Resource directory to scan; replaces configured declaration roots (repeatable).",
    )
    parser.add_argument(
        "--source-dir",
        action="append",
        default=[],
        metavar="DIR",
        help="Source directory or file to scan; replaces configured source roots (repeatable).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="resprune",
        description="Find and remove unused Android resources.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write detailed logs to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Report unused resources without modifying anything.",
    )
    _add_verbose_option(analyze_parser, suppress_default=True)
    _add_project_options(analyze_parser)

    prune_parser = subparsers.add_parser(
        "prune",
        help="Delete unused resource files and value elements.",
    )
    _add_verbose_option(prune_parser, suppress_default=True)
    _add_project_options(prune_parser)
    prune_parser.add_argument(
        "--cascade",
        action="store_true",
        help="Repeat pruning while removals expose newly unused resources.",
    )

    return parser


def _resolve_config(args: argparse.Namespace) -> PrunerConfig:
    config = load_config(Path(args.path))
    if args.res_dir:
        config.declaration_roots = [Path(entry).expanduser().resolve() for entry in args.res_dir]
    if args.source_dir:
        config.source_roots = [Path(entry).expanduser().resolve() for entry in args.source_dir]
    config.exclude_name_patterns.extend(args.exclude_pattern)
    config.target_resource_types.extend(args.target_type)
    config.exclude_resource_types.extend(args.exclude_type)
    config.validate()
    return config


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for resprune commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose), quiet=bool(args.quiet), log_file=args.log_file
    )

    try:
        config = _resolve_config(args)
    except ConfigError as exc:
        parser.exit(1, f"resprune: {exc}\n")

    pruner = ResourcePruner(config)

    if args.command == "analyze":
        print(render_analysis(pruner.analyze()))
    elif args.command == "prune":
        cascade = bool(args.cascade) or config.cascade_prune
        summary = pruner.prune(cascade=cascade)
        print(render_prune(summary, cascade=cascade))
        if not summary.report.is_success:
            parser.exit(1)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


if __name__ == "__main__":
    main(sys.argv[1:])
