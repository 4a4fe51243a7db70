#!/usr/bin/env python3
"""
Main CLI Entry Point for Ledger Builder

Opens a ledger file, indexes it for completion and runs the interactive
session that appends balanced transactions to it.
"""

import logging
import os
import sys
from collections.abc import Callable
from pathlib import Path

import click
from prompt_toolkit import PromptSession
from prompt_toolkit.auto_suggest import AutoSuggestFromHistory
from prompt_toolkit.history import FileHistory, InMemoryHistory
from prompt_toolkit.styles import Style

from .. import __version__
from ..core.config import Config, get_config
from ..core.currency import AmountStyle
from ..core.errors import IOFailure
from ..ledger.datastore import LedgerFile
from ..ledger.index import LedgerIndex
from .completion import LedgerCompleter
from .session import Session

logger = logging.getLogger(__name__)

PROMPT_STYLE = Style.from_dict({"prompt": "ansigreen bold"})


def create_prompt_reader(session: Session, index: LedgerIndex, config: Config) -> Callable[[str], str]:
    """Line reader for interactive terminals: completion, history, hints."""
    history_file = config.session.history_file
    history = FileHistory(str(history_file)) if history_file is not None else InMemoryHistory()

    prompt_session: PromptSession = PromptSession(
        completer=LedgerCompleter(index, active=session.completion_active),
        history=history,
        auto_suggest=AutoSuggestFromHistory(),
        complete_while_typing=False,
        style=PROMPT_STYLE,
    )

    def read_line(message: str) -> str:
        return prompt_session.prompt([("class:prompt", message)])

    return read_line


def create_stream_reader() -> Callable[[str], str]:
    """Line reader for piped input; prompts are not echoed."""
    stream = click.get_text_stream("stdin")

    def read_line(message: str) -> str:
        line = stream.readline()
        if not line:
            raise EOFError
        return line.rstrip("\r\n")

    return read_line


@click.command()
@click.argument(
    "ledger_file",
    type=click.Path(exists=True, dir_okay=False, readable=True, writable=True, path_type=Path),
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option(
    "--merge-postings/--no-merge-postings",
    default=None,
    help="Combine postings with the same account and currency before saving",
)
@click.version_option(__version__, prog_name="ledgerbuilder")
def main(ledger_file: Path, verbose: bool, debug: bool, merge_postings: bool | None) -> None:
    """
    Interactively build balanced transactions and insert them into LEDGER_FILE.

    \b
    Enter a header first:
      2020-01-10 Groceries
    then postings:
      a <account> <currency><amount>             add a posting
      s <account1> <account2> <currency><amount> split in half
      f <account>                                balance into account and save
      d                                          discard the transaction
    An empty line saves a transaction that already balances.
    """
    # Configure debug logging if requested
    if debug:
        os.environ["LOG_LEVEL"] = "DEBUG"

    try:
        config = get_config()
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    if debug:
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("ledgerbuilder").setLevel(logging.DEBUG)
        click.echo("Debug logging enabled")

    ledger = LedgerFile(ledger_file, default_indent=" " * config.format.indent_width)
    try:
        content = ledger.load()
    except IOFailure as e:
        raise click.ClickException(str(e)) from e

    index = LedgerIndex.from_content(content, default_style=AmountStyle(precision=config.format.precision))

    if verbose:
        click.echo(f"Environment: {config.environment.value}")
        click.echo(f"Ledger file: {ledger_file}")
        click.echo(f"Known accounts: {len(index.accounts)}")
        click.echo(f"Known currencies: {', '.join(sorted(index.currencies)) or 'none'}")
        if index.warnings:
            click.echo(f"Skipped lines: {len(index.warnings)}")

    if merge_postings is None:
        merge_postings = config.session.merge_postings

    session = Session(ledger, index, merge_postings=merge_postings)
    if sys.stdin.isatty() and sys.stdout.isatty():
        read_line = create_prompt_reader(session, index, config)
    else:
        read_line = create_stream_reader()

    saved = session.run(read_line)
    click.echo(f"Saved {saved} transaction(s) to {ledger_file}")


if __name__ == "__main__":
    main()
