"""
Command-line interface for relver.

This module provides the main CLI entry point and handles global options,
configuration loading, and command registration.
"""

from __future__ import annotations

import os
import sys
import logging
from pathlib import Path
from typing import Optional

import click

from relver.config import load_config
from relver.__version__ import __version__
from relver.context import RelverContext
from relver.exceptions import ConfigError, RelverError
from relver.utils.logger import get_logger, setup_logging
from relver.utils.console import print_error, print_warning, reconfigure_console

logger = get_logger("cli")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file.",
    envvar="RELVER_CONFIG",
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (can be repeated: -v, -vv).",
)
@click.option(
    "--color/--no-color",
    default=True,
    help="Enable or disable colored output.",
    envvar="RELVER_COLOR",
)
@click.version_option(
    version=__version__,
    prog_name="relver",
    message="%(prog)s %(version)s",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    verbose: int,
    color: bool,
) -> None:
    """Resolve the latest released version of a Maven artifact.

    \b
    Available commands:
      relver resolve GROUP:ARTIFACT   Publish released-version properties

    \b
    Examples:
      relver resolve org.example:demo-core
      relver resolve org.example:demo-core -f table
      relver -v resolve org.example:demo-core -o released.properties

    Use ``relver COMMAND --help`` for command-specific options.
    """
    # Respect NO_COLOR for downstream libraries
    if color:
        os.environ.pop("NO_COLOR", None)
    else:
        os.environ["NO_COLOR"] = "1"
    reconfigure_console()

    _configure_logging(verbose, color)

    try:
        loaded_config = load_config(config)
    except ConfigError as exc:
        print_error(str(exc))
        raise SystemExit(1) from exc

    relver_ctx = RelverContext()
    relver_ctx.config_path = config or loaded_config.source_path
    relver_ctx.color = color
    relver_ctx.verbose = verbose
    relver_ctx.config = loaded_config
    ctx.obj = relver_ctx

    logger.debug("relver v%s", __version__)
    logger.debug("Config path: %s", relver_ctx.config_path)
    logger.debug("Effective configuration: %s", loaded_config.to_log_dict())
    logger.debug("Verbosity: %s | Color: %s", verbose, color)


def _configure_logging(verbose: int, color: bool = True) -> None:
    """Configure logging level based on verbosity flags."""
    if verbose <= 0:
        level = logging.WARNING
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    setup_logging(level=level, verbose=verbose >= 2, color=color)
    logger.debug("Logging initialized at %s level", logging.getLevelName(level))


# Register CLI subcommands
from relver.commands.resolve import resolve  # noqa: E402

cli.add_command(resolve)


def main() -> int:
    """Main entry point for the relver CLI.

    Returns:
        Exit code:
            0   Success (including "no released version found")
            1   Unhandled or application error
            2   Usage error (Click)
            130 Interrupted by user (Ctrl+C)
    """
    try:
        result = cli(standalone_mode=False)
        # standalone_mode=False returns the exit code of --help/--version
        return result if isinstance(result, int) else 0

    except click.ClickException as exc:
        exc.show()
        return exc.exit_code

    except click.exceptions.Abort:
        print_warning("\nOperation cancelled by user")
        return 130

    except RelverError as exc:
        print_error(str(exc))
        logger.debug(
            "RelverError details: %s",
            exc.details or "<none>",
            exc_info=True,
        )
        return 1

    except KeyboardInterrupt:
        print_warning("\nOperation cancelled by user")
        return 130

    except Exception as exc:
        print_error(f"Unexpected error: {exc}")
        logger.exception("Unhandled exception in CLI")
        return 1


if __name__ == "__main__":
    sys.exit(main())
