"""
Console entry points.

``dispatch-cli <command> [args...]`` runs a single command and exits 0 on
success or 1 on failure. Successful output goes to stdout, failures to
stderr. With no arguments the ``help`` command runs.

``dispatch-cli-shell`` starts an interactive prompt that dispatches one
line at a time until ``exit``, ``quit`` or end of input.

The YAML configuration file can be supplied through ``DISPATCH_CLI_CONFIG``;
the single-shot entry point forwards every argument to the dispatcher.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import shlex
import sys
from collections.abc import Sequence

from dispatch_cli.core.app.bootstrap import CliApplication, bootstrap
from dispatch_cli.core.common.exceptions import DispatchError
from dispatch_cli.core.common.logging_utils import configure_logging
from dispatch_cli.core.config.app_config import AppConfig, LogLevel, load_config
from dispatch_cli.core.domain.command_results import CommandResult
from dispatch_cli.core.interfaces.io_handler_interface import IIOHandler
from dispatch_cli.core.services.error_handler import ErrorHandler
from dispatch_cli.core.services.io_handler import ConsoleIOHandler

CONFIG_PATH_ENV = "DISPATCH_CLI_CONFIG"
DEFAULT_COMMAND = "help"
EXIT_COMMANDS = frozenset({"exit", "quit"})
SHELL_PROMPT = "dispatch> "


def _write_result(io_handler: IIOHandler, result: CommandResult, rendered: str) -> None:
    if result.success:
        io_handler.write_output(rendered)
    else:
        io_handler.write_error(rendered)


async def _start(config: AppConfig, io_handler: IIOHandler) -> CliApplication | None:
    """Bootstrap the engine, reporting setup failures on the error stream."""
    try:
        return await bootstrap(config)
    except DispatchError as e:
        logging.error(f"Failed to start CLI engine: {e}")
        io_handler.write_error(ErrorHandler().format(e))
        return None
    except Exception as e:
        logging.error(f"Unexpected error during CLI engine startup: {e}", exc_info=True)
        io_handler.write_error(ErrorHandler().format(e))
        return None


async def main(
    argv: Sequence[str] | None = None,
    *,
    config: AppConfig | None = None,
    io_handler: IIOHandler | None = None,
) -> int:
    """
    Run a single command.

    Args:
        argv: Command tokens, defaults to ``sys.argv[1:]``
        config: Preloaded configuration, skips file/env loading when given
        io_handler: Output sink, defaults to the console

    Returns:
        Process exit code
    """
    tokens = list(sys.argv[1:] if argv is None else argv)
    io_handler = io_handler or ConsoleIOHandler()

    if config is None:
        try:
            config = load_config(os.environ.get(CONFIG_PATH_ENV))
        except DispatchError as e:
            io_handler.write_error(ErrorHandler().format(e))
            return 1
        configure_logging(config)

    app = await _start(config, io_handler)
    if app is None:
        return 1

    try:
        result, rendered = await app.run(tokens or [DEFAULT_COMMAND])
    finally:
        await app.shutdown()

    _write_result(io_handler, result, rendered)
    return 0 if result.success else 1


async def shell(app: CliApplication, io_handler: IIOHandler) -> int:
    """Read-dispatch-print loop over an already bootstrapped application."""
    config = app.config
    io_handler.write_output(
        f"{config.app_name} v{config.version}. "
        "Type 'help' for commands, 'exit' to quit."
    )

    while True:
        try:
            line = await io_handler.read_input(SHELL_PROMPT)
        except EOFError:
            break

        line = line.strip()
        if line.lower() in EXIT_COMMANDS:
            break
        if not app.input_parser.validate(line).valid:
            continue

        try:
            tokens = shlex.split(line)
        except ValueError as e:
            io_handler.write_error(f"❌ Error: {e}")
            continue

        result, rendered = await app.run(tokens)
        _write_result(io_handler, result, rendered)

    return 0


def build_shell_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Interactive dispatch CLI shell")
    parser.add_argument(
        "--config",
        dest="config_file",
        default=os.environ.get(CONFIG_PATH_ENV),
        help="Path to a YAML configuration file",
    )
    parser.add_argument(
        "--env-file",
        dest="env_file",
        default=None,
        help="Path to a dotenv file (defaults to .env, then .env.local)",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Override the configured log level",
    )
    return parser


async def main_shell(
    argv: Sequence[str] | None = None,
    *,
    io_handler: IIOHandler | None = None,
) -> int:
    args = build_shell_parser().parse_args(argv)
    io_handler = io_handler or ConsoleIOHandler()

    try:
        config = load_config(args.config_file, env_file=args.env_file)
    except DispatchError as e:
        io_handler.write_error(ErrorHandler().format(e))
        return 1
    if args.log_level:
        config = config.model_copy(
            update={
                "logging": config.logging.model_copy(
                    update={"level": LogLevel(args.log_level)}
                )
            }
        )
    configure_logging(config)

    app = await _start(config, io_handler)
    if app is None:
        return 1

    try:
        return await shell(app, io_handler)
    finally:
        await app.shutdown()


def run() -> None:
    sys.exit(asyncio.run(main()))


def run_shell() -> None:
    try:
        code = asyncio.run(main_shell())
    except KeyboardInterrupt:
        code = 130
    sys.exit(code)


if __name__ == "__main__":
    run()
