"""Command line application entry point for nmr-splitting."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Callable, NoReturn, Optional, Sequence

from nmr_splitting.cli.errors import CliError, log_cli_error
from nmr_splitting.cli.io import load_cli_config
from nmr_splitting.cli.parser import build_parser
from nmr_splitting.logging.config import setup_logging

__all__ = ["run_cli", "main"]

CommandHandler = Callable[..., str]


def _preliminary_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument("--config", dest="config_path", type=Path, default=None)
    parser.add_argument("--log-level", dest="log_level", default=None)
    parser.add_argument("--log-output", dest="log_output", default=None)
    parser.add_argument("--log-format", dest="log_format", choices=("json", "text"), default=None)
    return parser


def _exit_with(exc: CliError) -> NoReturn:
    if not exc.logged:
        log_cli_error(exc.payload, exc_info=exc)
        exc.logged = True
    message = exc.payload.message
    if message:
        sys.stdout.write(message)
        if not message.endswith("\n"):
            sys.stdout.write("\n")
    raise SystemExit(exc.status_code) from exc


def run_cli(args: Optional[Sequence[str]] = None) -> str:
    """Execute the nmr-splitting command line interface."""

    preliminary, _ = _preliminary_parser().parse_known_args(args)

    try:
        config = load_cli_config(preliminary.config_path)
    except CliError as exc:
        setup_logging({"logging": {"level": "info", "output": "stderr", "format": "json"}})
        _exit_with(exc)

    logging_config = dict(config.get("logging", {}) or {})
    if preliminary.log_level is not None:
        logging_config["level"] = preliminary.log_level
    if preliminary.log_output is not None:
        logging_config["output"] = preliminary.log_output
    if preliminary.log_format is not None:
        logging_config["format"] = preliminary.log_format
    logging_config.setdefault("level", "info")
    logging_config.setdefault("output", "stderr")
    logging_config.setdefault("format", "json")
    config["logging"] = logging_config
    try:
        setup_logging(config)
    except ValueError as exc:
        setup_logging({"logging": {**logging_config, "level": "info"}})
        _exit_with(
            CliError(
                str(exc),
                category="usage",
                context={"log_level": logging_config.get("level")},
            )
        )

    parser = build_parser(config)
    namespace = parser.parse_args(args)
    handler: CommandHandler | None = getattr(namespace, "handler", None)
    if handler is None:  # pragma: no cover - argparse enforces a command
        _exit_with(
            CliError(
                f"Unknown command '{getattr(namespace, 'command', None)}'.",
                category="usage",
                context={"command": getattr(namespace, "command", None)},
            )
        )

    try:
        result = handler(namespace, config=config)
    except CliError as exc:
        _exit_with(exc)
    if result:
        sys.stdout.write(result)
        if not result.endswith("\n"):
            sys.stdout.write("\n")
    return result


def main() -> None:  # pragma: no cover - thin wrapper
    run_cli()


if __name__ == "__main__":  # pragma: no cover - CLI invocation guard
    main()
