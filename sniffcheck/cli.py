"""Command-line entry point for the sniff toolkit."""

from __future__ import annotations

import argparse
from collections.abc import Sequence

from sniffcheck import perf_report, types_check
from sniffcheck.config import Config, command_config, init_config, show_config, validate_config
from sniffcheck.errors import report_error

_VERSION = "0.1.10"


def build_parser() -> argparse.ArgumentParser:
    """The argument parser with global options and all subcommands."""
    parser = argparse.ArgumentParser(
        prog="sniff", description="Opinionated TypeScript/Next.js Development Toolkit"
    )
    parser.add_argument("--version", action="version", version=f"sniff {_VERSION}")
    parser.add_argument("--config", help="Use custom configuration file")
    parser.add_argument("--json", action="store_true", help="Output in JSON format")
    parser.add_argument("--quiet", action="store_true", help="Quiet mode (minimal output)")

    commands = parser.add_subparsers(dest="command")
    commands.add_parser("types", help="Check TypeScript type coverage and quality")
    commands.add_parser("perf", help="Run Lighthouse performance audits")

    config = commands.add_parser("config", help="Configuration management")
    actions = config.add_subparsers(dest="action", required=True)
    actions.add_parser("init", help="Initialize default configuration file")
    actions.add_parser("show", help="Show current configuration")
    actions.add_parser("validate", help="Validate configuration file")
    get = actions.add_parser("get", help="Show configuration for specific command")
    get.add_argument("name", metavar="command", help="Command name (large, types, imports, etc.)")
    return parser


def _handle_config(args: argparse.Namespace) -> None:
    if args.action == "init":
        init_config()
    elif args.action == "show":
        show_config()
    elif args.action == "validate":
        validate_config(Config.load())
        print("✅ Configuration is valid")
    elif args.action == "get":
        section = command_config(args.name)
        print(f"Configuration for '{args.name}':")
        print(section)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the sniff command line; returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.command is None:
            parser.print_help()
        elif args.command == "types":
            types_check.run(args.json, args.quiet)
        elif args.command == "perf":
            perf_report.run(args.json, args.quiet)
        elif args.command == "config":
            _handle_config(args)
    except Exception as error:  # noqa: BLE001 - every failure is reported the same way
        report_error(error)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())