"""CLI entry point for pi-line. Uses Click for argument parsing."""

from __future__ import annotations

import logging
import sys

import click

from pi.line.engine import EditEngine, EngineOptions
from pi.line.history import HISTORY_SIZE
from pi.line.repl import LineEditor, ProcessTerminal, StreamIO


def _setup_logging(log_file: str | None) -> None:
    # Never log to the terminal being edited
    logger = logging.getLogger("pi.line")
    if not log_file:
        logger.addHandler(logging.NullHandler())
        return
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)


@click.command()
@click.option("--prompt", default="> ", show_default=True, help="Prompt shown before the line")
@click.option(
    "--history-size",
    type=click.IntRange(min=1),
    default=HISTORY_SIZE,
    show_default=True,
    help="Number of lines kept in history",
)
@click.option(
    "--log-file",
    envvar="PI_LINE_LOG",
    default=None,
    type=click.Path(dir_okay=False),
    help="Write debug logs to this file",
)
def main(prompt, history_size, log_file):
    """Edit lines interactively; each submitted line is echoed back. Type 'exit' to quit."""
    _setup_logging(log_file)
    engine = EditEngine(EngineOptions(history_size=history_size))

    if not sys.stdin.isatty():
        LineEditor(StreamIO(sys.stdin, sys.stdout), prompt, engine).run()
        return

    with ProcessTerminal() as terminal:
        LineEditor(terminal, prompt, engine).run()


if __name__ == "__main__":
    main()
