#!/usr/bin/env python3
"""
Ledger Index

Best-effort, read-once scan of an existing ledger file. Collects the account
names and currency symbols that drive completion, plus the way each currency
is written so new entries look like the hand-written ones.

Malformed lines are skipped, never reported as errors.
"""

import logging
from dataclasses import dataclass, field

from ..core.currency import DEFAULT_STYLE, AmountStyle, split_amount_token
from ..transaction.models import Transaction

logger = logging.getLogger(__name__)

# Comment characters at column 0
COMMENT_CHARS = (";", "#", "%", "|", "*")

# Inside a transaction only ";" starts a comment; "*" and "!" mark a
# posting cleared or pending
POSTING_COMMENT_CHAR = ";"
_POSTING_STATE_MARKS = ("*", "!")

# Amount text ends where a comment, price or balance assertion starts
_AMOUNT_TERMINATORS = (";", "@", "=")


@dataclass(frozen=True)
class ParseWarning:
    """A line the index could not make sense of. Kept for diagnostics only."""

    line_number: int
    line: str


def is_transaction_header(line: str) -> bool:
    """A transaction header starts with a date at column 0."""
    return bool(line) and line[0].isdigit()


def is_indented(line: str) -> bool:
    return bool(line) and line[0] in " \t"


def _strip_virtual(account: str) -> str:
    if len(account) > 2 and (account[0], account[-1]) in (("(", ")"), ("[", "]")):
        return account[1:-1]
    return account


def _amount_text(text: str) -> str:
    end = len(text)
    for terminator in _AMOUNT_TERMINATORS:
        position = text.find(terminator)
        if position != -1:
            end = min(end, position)
    return text[:end].strip()


@dataclass
class LedgerIndex:
    """Known accounts and currencies of a ledger file."""

    accounts: set[str] = field(default_factory=set)
    currencies: set[str] = field(default_factory=set)
    styles: dict[str, AmountStyle] = field(default_factory=dict)
    default_style: AmountStyle = DEFAULT_STYLE
    warnings: list[ParseWarning] = field(default_factory=list)

    @classmethod
    def from_content(cls, content: str, default_style: AmountStyle = DEFAULT_STYLE) -> "LedgerIndex":
        """
        Build an index from ledger file content in a single pass.

        Args:
            content: Full text of the ledger file
            default_style: Style for currencies the file never writes

        Returns:
            LedgerIndex with accounts, currencies and per-currency styles
        """
        index = cls(default_style=default_style)
        in_transaction = False

        for line_number, raw_line in enumerate(content.splitlines(), start=1):
            line = raw_line.rstrip()
            if not line:
                in_transaction = False
                continue

            if is_transaction_header(line):
                in_transaction = True
                continue

            if not is_indented(line):
                in_transaction = False
                index._scan_directive(line)
                continue

            if not in_transaction:
                continue

            if not index._scan_posting(line.strip()):
                index.warnings.append(ParseWarning(line_number, line))
                logger.debug("Skipping unparseable posting on line %d: %r", line_number, line)

        logger.info(
            "Indexed %d accounts and %d currencies (%d lines skipped)",
            len(index.accounts),
            len(index.currencies),
            len(index.warnings),
        )
        return index

    def _scan_directive(self, line: str) -> None:
        parts = line.split(maxsplit=1)
        if len(parts) != 2:
            return
        keyword, argument = parts[0], _amount_text(parts[1])
        if not argument:
            return
        if keyword == "account":
            self.accounts.add(argument.split()[0])
        elif keyword == "commodity":
            parsed = split_amount_token(argument)
            if parsed is not None and parsed.currency:
                self._record_currency(parsed.currency, parsed.style)
            elif not any(ch.isdigit() for ch in argument):
                self.currencies.add(argument)

    def _scan_posting(self, text: str) -> bool:
        if text.startswith(POSTING_COMMENT_CHAR):
            return True
        if text.startswith(_POSTING_STATE_MARKS):
            text = text[1:].lstrip()
            if not text:
                return False

        parts = text.split(maxsplit=1)
        account = _strip_virtual(parts[0])
        if not account or not account[0].isalpha():
            return False
        self.accounts.add(account)

        if len(parts) == 1:
            return True
        amount = _amount_text(parts[1])
        if not amount:
            return True

        parsed = split_amount_token(amount)
        if parsed is None:
            return False
        if parsed.currency:
            self._record_currency(parsed.currency, parsed.style)
        return True

    def _record_currency(self, currency: str, style: AmountStyle) -> None:
        self.currencies.add(currency)
        known = self.styles.get(currency)
        if known is None:
            self.styles[currency] = style
        elif style.precision > known.precision:
            self.styles[currency] = known.with_precision(style.precision)

    def style_for(self, currency: str) -> AmountStyle:
        """How `currency` should be written; the default style if never seen."""
        return self.styles.get(currency, self.default_style)

    def suggest_accounts(self, prefix: str) -> list[str]:
        """
        Accounts matching a typed prefix, sorted.

        Matches the full name first, then any colon segment, so "Food" finds
        "Expenses:Food".
        """
        lowered = prefix.lower()
        matches = set()
        for account in self.accounts:
            name = account.lower()
            if name.startswith(lowered):
                matches.add(account)
            elif any(segment.startswith(lowered) for segment in name.split(":")[1:]):
                matches.add(account)
        return sorted(matches)

    def suggest_currencies(self, prefix: str) -> list[str]:
        """Currency symbols starting with `prefix`, sorted."""
        return sorted(c for c in self.currencies if c.startswith(prefix))

    def add_transaction(self, transaction: Transaction) -> None:
        """Record the accounts and currencies of a newly written transaction."""
        for posting in transaction.postings:
            self.accounts.add(posting.account)
            if posting.amount is not None:
                self.currencies.add(posting.amount.currency)
