#!/usr/bin/env python3
"""
Interactive Session Loop

Reads one line at a time, feeds it to the TransactionBuilder and saves each
finalized transaction to the ledger file.

Prompts:
- header>  waiting for "<date> <description>"
- change>  accumulating postings (a / s / f / d, or empty line to save)
- retry>   a finalized transaction could not be saved; Enter retries, d discards

Command-level errors are reported and never change the in-progress state.
"""

import logging
from collections.abc import Callable

import click

from ..core.errors import IOFailure, LedgerBuilderError
from ..ledger.datastore import LedgerFile
from ..ledger.index import LedgerIndex
from ..ledger.writer import serialize_transaction
from ..transaction.builder import BuilderState, TransactionBuilder
from ..transaction.commands import parse_command, parse_header
from ..transaction.models import Transaction

logger = logging.getLogger(__name__)

HEADER_PROMPT = "header> "
CHANGE_PROMPT = "change> "
RETRY_PROMPT = "retry> "


class Session:
    """One interactive run against a single ledger file."""

    def __init__(
        self,
        ledger_file: LedgerFile,
        index: LedgerIndex,
        echo: Callable[[str], None] = click.echo,
        merge_postings: bool = False,
    ) -> None:
        self.ledger_file = ledger_file
        self.index = index
        self.echo = echo
        self.merge_postings = merge_postings
        self.builder = TransactionBuilder()
        self.pending: Transaction | None = None
        self.saved: list[Transaction] = []

    @property
    def prompt(self) -> str:
        if self.pending is not None:
            return RETRY_PROMPT
        if self.builder.state == BuilderState.AWAITING_HEADER:
            return HEADER_PROMPT
        return CHANGE_PROMPT

    def completion_active(self) -> bool:
        """Completion only makes sense while entering postings."""
        return self.pending is None and self.builder.state == BuilderState.ACCUMULATING

    def run(self, read_line: Callable[[str], str]) -> int:
        """
        Process lines until end of input.

        Args:
            read_line: Called with the prompt; raises EOFError or
                KeyboardInterrupt to end the session

        Returns:
            Number of transactions saved
        """
        while True:
            try:
                line = read_line(self.prompt)
            except (EOFError, KeyboardInterrupt):
                break
            self.handle_line(line)

        if self.pending is not None:
            self.echo(f"⚠️  Unsaved transaction '{self.pending.header}' discarded")
        elif self.builder.state == BuilderState.ACCUMULATING:
            self.echo(f"⚠️  Incomplete transaction '{self.builder.header}' discarded")
        return len(self.saved)

    def handle_line(self, line: str) -> None:
        """Process a single input line in the current state."""
        text = line.strip()

        if self.pending is not None:
            self._handle_retry(text)
            return

        try:
            if self.builder.state == BuilderState.AWAITING_HEADER:
                if not text:
                    return
                header = parse_header(text)
                self.builder.start_header(header.date_text, header.description)
            elif not text:
                self._complete(self.builder.apply_finalize(None))
            else:
                transaction = self.builder.apply(parse_command(text))
                if transaction is not None:
                    self._complete(transaction)
                elif self.builder.state == BuilderState.ACCUMULATING:
                    self.echo(f"Balance: {self._format_balance()}")
        except LedgerBuilderError as e:
            logger.debug("Command %r rejected: %s", text, e)
            self.echo(f"❌ {e}")

    def _handle_retry(self, text: str) -> None:
        if not text:
            self._save()
        elif text == "d":
            assert self.pending is not None
            self.echo(f"Discarded '{self.pending.header}'")
            self.pending = None
            self.builder.reset()
        else:
            self.echo("Press Enter to retry saving, or 'd' to discard the transaction")

    def _format_balance(self) -> str:
        outstanding = [m for m in self.builder.balance() if not m.is_zero()]
        if not outstanding:
            return "balanced"
        return ", ".join(m.format(self.index.style_for(m.currency)) for m in outstanding)

    def _complete(self, transaction: Transaction) -> None:
        if self.merge_postings:
            transaction = transaction.merged()
        self.echo(serialize_transaction(transaction, self.index).rstrip("\n"))
        self.pending = transaction
        self._save()

    def _save(self) -> None:
        assert self.pending is not None
        try:
            self.ledger_file.append_transaction(self.pending, self.index)
        except IOFailure as e:
            logger.error("Save failed: %s", e)
            self.echo(f"❌ {e}")
            self.echo("Transaction kept in memory. Press Enter to retry, or 'd' to discard.")
            return
        except LedgerBuilderError as e:
            logger.error("Cannot save %s: %s", self.pending.header, e)
            self.echo(f"❌ {e}")
            self.echo(f"Discarded '{self.pending.header}'")
            self.pending = None
            self.builder.reset()
            return

        self.index.add_transaction(self.pending)
        self.saved.append(self.pending)
        self.echo(f"✅ Saved '{self.pending.header}' to {self.ledger_file.path}")
        self.pending = None
        self.builder.reset()
