"""CLI entrypoints for tsnd commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .api import detect_with_config
from .config import CONFIG_FILENAME, DEFAULT_CONFIG_TEMPLATE, ConfigError
from .formatters import FORMATS, format_report
from .logging import configure_logging, get_logger


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
        help="Path to the project root (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tsnd",
        description="Detect TypeScript declarations duplicated across files.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser(
        "check",
        help="Scan a project and report duplicate declarations.",
    )
    _add_verbose_option(check_parser, suppress_default=True)
    _add_path_argument(check_parser)
    check_parser.add_argument(
        "-c",
        "--config",
        default=None,
        help=f"Configuration file to load (defaults to {CONFIG_FILENAME} in the project root).",
    )
    check_parser.add_argument(
        "-f",
        "--format",
        choices=FORMATS,
        default="console",
        help="Report format.",
    )
    check_parser.add_argument(
        "--output",
        default=None,
        help="Write the report to this file instead of stdout.",
    )

    init_parser = subparsers.add_parser(
        "init",
        help=f"Create a default {CONFIG_FILENAME} configuration file.",
    )
    _add_verbose_option(init_parser, suppress_default=True)
    _add_path_argument(init_parser)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for tsnd commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "check":
        _run_check(parser, args)
    elif args.command == "init":
        configure_logging(verbose=bool(args.verbose))
        _run_init(Path(args.path))
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _run_check(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    # JSON on stdout must stay parseable, so only warnings reach the console.
    json_mode = args.format == "json"
    configure_logging(verbose=bool(args.verbose) and not json_mode, quiet=json_mode)

    try:
        report = detect_with_config(args.path, args.config)
    except (FileNotFoundError, NotADirectoryError) as exc:
        parser.exit(1, f"{exc}\n")
    except ConfigError as exc:
        parser.exit(1, f"Invalid configuration: {exc}\n")
    except Exception as exc:  # pragma: no cover - defensive guard
        parser.exit(1, f"tsnd check failed: {exc}\nRun with --verbose for more details.\n")

    rendered = format_report(report, args.format)
    if args.output:
        output_path = Path(args.output)
        output_path.write_text(rendered, encoding="utf-8")
        get_logger("cli").info("Report saved to %s", _relativize(output_path))
    else:
        sys.stdout.write(rendered)

    if report.has_duplicates:
        parser.exit(1)


def _run_init(path: Path) -> None:
    logger = get_logger("cli")
    target = path.expanduser() / CONFIG_FILENAME
    if target.exists():
        logger.warning("Configuration file %s already exists", _relativize(target))
        return
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(DEFAULT_CONFIG_TEMPLATE, encoding="utf-8")
    print(f"Configuration created at {_relativize(target)}")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
