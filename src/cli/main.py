"""Main CLI entry point for the article-push command.

This module provides the Typer application that serves as the entry point
for the article-push command-line tool. Like a single-verb tool it uses
options on the main command rather than subcommands.
"""

import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import typer

from src.cli.config import ConfigLoader
from src.cli.errors import InitError
from src.cli.init_command import InitCommand
from src.cli.models import ExitCode
from src.cli.output import OutputHandler
from src.cli.push_command import PushCommand

__version__ = "0.1.0"

app = typer.Typer(
    name="article-push",
    help="""Publish local Markdown articles to Confluence.

QUICK START:
  article-push --init --channel <SPACE> --content <folder>   # Initialize
  article-push guides/intro                                  # Push one article
  article-push --all                                         # Push everything
  article-push --all --dry-run                               # Preview""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=False,
)

logger = logging.getLogger(__name__)

GETTING_STARTED_MESSAGE = """article-push <content-id> [<content-id> ...]       # Push articles

--init --channel <SPACE> [--content <folder>]        # Initialize
--all                                               # Push every article
--dry-run                                           # Preview changes
--help                                              # Show all options

Example:
  article-push --init --channel TEAM --content ./docs
  article-push guides/intro

Required environment variables:
  CONFLUENCE_URL, CONFLUENCE_USER, CONFLUENCE_API_TOKEN"""


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'src' namespace logger to avoid affecting third-party
    libraries. The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)

    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter("%(asctime)s [%(levelname)8s] %(message)s", datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"article-push_{timestamp}.log"

        file_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt=date_format,
        )
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _run_init(channel: str, content_dir: str, verbosity: int, no_color: bool) -> None:
    _configure_logging(verbosity)
    output = OutputHandler(verbosity=verbosity, no_color=no_color)

    try:
        output.info("Initializing push configuration...")
        output.info(f"  Channel: {channel}")
        output.info(f"  Content folder: {content_dir}")

        init_cmd = InitCommand()
        init_cmd.run(channel=channel, content_dir=content_dir)

        output.success("Configuration initialized successfully")
        output.info(f"  Config file: {init_cmd.config_path}")
        output.info("")
        output.info("Next steps:")
        output.info(f"  1. Review {init_cmd.config_path}")
        output.info("  2. Run 'article-push <content-id>' to publish an article")

        raise typer.Exit(ExitCode.SUCCESS)

    except InitError as e:
        logger.error(f"Initialization failed: {e}")
        output.error(f"Initialization failed: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    except typer.Exit:
        raise

    except Exception as e:
        logger.exception("Unexpected error during initialization")
        output.error(f"Unexpected error: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)


def _run_push(
    content_ids: List[str],
    push_all: bool,
    dry_run: bool,
    logdir: Optional[str],
    verbosity: int,
    no_color: bool,
) -> None:
    _configure_logging(verbosity, logdir)
    output = OutputHandler(verbosity=verbosity, no_color=no_color)

    push_cmd = PushCommand(output_handler=output)
    exit_code = push_cmd.run(content_ids=content_ids, push_all=push_all, dry_run=dry_run)

    raise typer.Exit(exit_code)


@app.command()
def main_command(
    content_ids: Optional[List[str]] = typer.Argument(
        None,
        help="Content IDs to push (path relative to the content folder, without .md)",
        metavar="CONTENT_ID...",
    ),
    init: bool = typer.Option(
        False,
        "--init",
        help="Initialize push configuration (requires --channel)",
    ),
    channel: Optional[str] = typer.Option(
        None,
        "--channel",
        help="Confluence space key new articles are created in (used with --init)",
        metavar="SPACE",
    ),
    content_dir: str = typer.Option(
        ".",
        "--content",
        help="Folder holding the Markdown articles (used with --init)",
        metavar="FOLDER",
    ),
    push_all: bool = typer.Option(
        False,
        "--all",
        help="Push every article in the content folder",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "--dryrun",
        help="Preview which articles would be pushed without pushing them",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
    ),
) -> None:
    """Publish local Markdown articles to Confluence.

    \b
    QUICK START:
      article-push --init --channel <SPACE> --content <folder>   # Initialize
      article-push guides/intro                                  # Push one article
      article-push --all                                         # Push everything
      article-push --all --dry-run                               # Preview
    """
    if version:
        typer.echo(f"article-push version {__version__}")
        raise typer.Exit()

    if init or channel is not None:
        missing = []
        if not init:
            missing.append("--init")
        if channel is None:
            missing.append("--channel")

        if missing:
            typer.echo(f"Error: Missing required option(s): {', '.join(missing)}", err=True)
            typer.echo("")
            typer.echo("Example:")
            typer.echo("  article-push --init --channel TEAM --content ./docs")
            raise typer.Exit(ExitCode.GENERAL_ERROR)

        _run_init(channel, content_dir, verbosity, no_color)
        return

    if not content_ids and not push_all:
        if not os.path.exists(ConfigLoader.DEFAULT_CONFIG_PATH):
            typer.echo(GETTING_STARTED_MESSAGE)
            raise typer.Exit()
        typer.echo("Error: Pass one or more content IDs, or --all", err=True)
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    _run_push(content_ids or [], push_all, dry_run, logdir, verbosity, no_color)


def main() -> None:
    """Entry point for the article-push console script."""
    app()


if __name__ == "__main__":
    main()
