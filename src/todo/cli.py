"""CLI entry point for the todo TUI. Uses Click for argument parsing."""

from __future__ import annotations

import logging
import sys

import click

from todo.app import App
from todo.config import LOG_LEVELS, load_config
from todo.errors import TodoError
from todo.keybindings import KeybindingsManager, set_keybindings
from todo.lists import TaskManager
from todo.storage import load_state, save_items
from todo.terminal import ProcessTerminal

logger = logging.getLogger(__name__)


def _setup_logging(log_file: str | None, log_level: str) -> None:
    # stderr belongs to the UI, so logs only go to a file when asked for
    if not log_file:
        return
    logging.basicConfig(
        filename=log_file,
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


@click.command()
@click.argument("file_path", metavar="FILE", type=click.Path(dir_okay=False))
@click.option(
    "--log-file",
    envvar="TODO_LOG_FILE",
    default=None,
    help="Write logs to this file",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS),
    default=None,
    help="Log level for --log-file (default: from config, else warning)",
)
def main(file_path, log_file, log_level):
    """Manage a TODO/DONE list stored in FILE."""
    config = load_config()
    config.log_file = log_file or config.log_file
    config.log_level = log_level or config.log_level
    _setup_logging(config.log_file, config.log_level)

    if config.keybindings:
        set_keybindings(KeybindingsManager(config.keybindings))

    try:
        todos, dones, notification = load_state(file_path)
    except TodoError as e:
        click.echo(str(e), err=True)
        sys.exit(1)
    except OSError as e:
        click.echo(f"{file_path}: ERROR: could not read file: {e}", err=True)
        sys.exit(1)

    logger.info("Starting UI for %s", file_path)
    tasks = TaskManager.from_items(todos, dones)
    App(ProcessTerminal(), tasks, notification=notification, config=config).run()

    save_items(file_path, tasks.todos.items, tasks.dones.items)
    click.echo(f"Saved state to {file_path}")
