#!/usr/bin/env python3
"""
Ledger Writer

Pure functions that place a finished Transaction into ledger file content.
Nothing here touches the filesystem: the result is a new string, and the
datastore layer is responsible for replacing the file atomically.

Placement rules:
- Insert immediately before the first transaction dated strictly later
- Same-day entries keep their order; the new one goes after them
- Otherwise append at end of file
- The original text is untouched outside the one inserted block

Formatting conventions (indentation, newline style, blank lines between
blocks) are detected from the existing content, with fallbacks for empty
files.
"""

import logging
from collections import Counter
from dataclasses import dataclass

from ..core.dates import LedgerDate
from ..core.errors import InvalidDate, UnbalancedTransaction
from ..transaction.models import Transaction
from .index import COMMENT_CHARS, LedgerIndex, is_indented, is_transaction_header

logger = logging.getLogger(__name__)

DEFAULT_INDENT = "    "
DEFAULT_SEPARATOR = 1


@dataclass(frozen=True)
class TransactionBlock:
    """Location of an existing transaction in the file content."""

    date: LedgerDate
    start: int  # offset of the header line (or of comments attached above it)
    end: int  # offset just past the block's last line


@dataclass(frozen=True)
class Insertion:
    """A pure insertion: `text` placed at `offset` of the original content."""

    offset: int
    text: str

    def apply(self, content: str) -> str:
        return content[: self.offset] + self.text + content[self.offset :]


@dataclass(frozen=True)
class FileConventions:
    """Formatting habits of the ledger file."""

    indent: str = DEFAULT_INDENT
    newline: str = "\n"
    separator: int = DEFAULT_SEPARATOR


def _header_date(line: str) -> LedgerDate | None:
    token = line.split(maxsplit=1)[0]
    # "2020-01-10=2020-01-12" carries an auxiliary date
    token = token.split("=", 1)[0]
    try:
        return LedgerDate.from_string(token)
    except InvalidDate:
        return None


def _is_blank(line: str) -> bool:
    return not line.strip()


def scan_blocks(content: str) -> list[TransactionBlock]:
    """Find every dated transaction block, in file order."""
    lines = content.splitlines(keepends=True)
    offsets = []
    position = 0
    for line in lines:
        offsets.append(position)
        position += len(line)

    blocks = []
    i = 0
    while i < len(lines):
        line = lines[i]
        date = _header_date(line) if is_transaction_header(line) else None
        if date is None:
            i += 1
            continue

        first = i
        while first > 0 and not _is_blank(lines[first - 1]) and lines[first - 1].startswith(COMMENT_CHARS):
            first -= 1

        j = i + 1
        while j < len(lines) and is_indented(lines[j]) and not _is_blank(lines[j]):
            j += 1

        end = offsets[j] if j < len(lines) else len(content)
        blocks.append(TransactionBlock(date=date, start=offsets[first], end=end))
        i = j

    return blocks


def detect_newline(content: str) -> str:
    return "\r\n" if "\r\n" in content else "\n"


def detect_indent(content: str, default: str = DEFAULT_INDENT) -> str:
    """Leading whitespace of the first posting line in the file."""
    in_transaction = False
    for line in content.splitlines():
        if is_transaction_header(line):
            in_transaction = True
        elif in_transaction and is_indented(line) and line.strip():
            return line[: len(line) - len(line.lstrip())]
        elif not is_indented(line):
            in_transaction = False
    return default


def detect_separator(content: str, blocks: list[TransactionBlock]) -> int:
    """Most common number of blank lines between consecutive blocks."""
    gaps: Counter = Counter()
    for previous, following in zip(blocks, blocks[1:]):
        between = content[previous.end : following.start].splitlines()
        if all(_is_blank(line) for line in between):
            gaps[len(between)] += 1
    if not gaps:
        return DEFAULT_SEPARATOR
    return gaps.most_common(1)[0][0]


def detect_conventions(
    content: str,
    blocks: list[TransactionBlock] | None = None,
    default_indent: str = DEFAULT_INDENT,
) -> FileConventions:
    if blocks is None:
        blocks = scan_blocks(content)
    return FileConventions(
        indent=detect_indent(content, default_indent),
        newline=detect_newline(content),
        separator=detect_separator(content, blocks),
    )


def serialize_transaction(
    transaction: Transaction,
    index: LedgerIndex | None = None,
    conventions: FileConventions = FileConventions(),
) -> str:
    """
    Render a transaction as a ledger block, ending with a newline.

    Amounts are aligned two spaces past the longest account name; an
    open-slot posting is written as the account alone.
    """
    width = max((len(p.account) for p in transaction.postings if p.amount is not None), default=0)
    lines = [str(transaction.header)]
    for posting in transaction.postings:
        if posting.amount is None:
            lines.append(f"{conventions.indent}{posting.account}")
            continue
        if index is not None:
            amount = posting.amount.format(index.style_for(posting.amount.currency))
        else:
            amount = str(posting.amount)
        lines.append(f"{conventions.indent}{posting.account.ljust(width)}  {amount}")
    return conventions.newline.join(lines) + conventions.newline


def plan_insertion(
    content: str,
    transaction: Transaction,
    index: LedgerIndex | None = None,
    default_indent: str = DEFAULT_INDENT,
) -> Insertion:
    """
    Decide where and what to insert for `transaction`.

    Raises:
        UnbalancedTransaction: If the transaction does not sum to zero and has
            no open slot to absorb the difference
    """
    if not transaction.has_open_slot() and not transaction.is_balanced():
        raise UnbalancedTransaction(f"Refusing to write unbalanced transaction '{transaction.header}'")

    blocks = scan_blocks(content)
    conventions = detect_conventions(content, blocks, default_indent)
    block_text = serialize_transaction(transaction, index, conventions)
    blank_lines = conventions.newline * conventions.separator

    later = next((b for b in blocks if b.date > transaction.date), None)
    if later is not None:
        logger.info("Inserting %s before existing entry dated %s", transaction.header, later.date)
        return Insertion(offset=later.start, text=block_text + blank_lines)

    prefix = ""
    if content and not content.endswith("\n"):
        prefix = conventions.newline
    if content.strip():
        trailing_blank = 0
        for line in reversed((content + prefix).splitlines()):
            if not _is_blank(line):
                break
            trailing_blank += 1
        prefix += conventions.newline * max(conventions.separator - trailing_blank, 0)

    logger.info("Appending %s at end of file", transaction.header)
    return Insertion(offset=len(content), text=prefix + block_text)


def insert_transaction(
    content: str,
    transaction: Transaction,
    index: LedgerIndex | None = None,
    default_indent: str = DEFAULT_INDENT,
) -> str:
    """Return new file content with `transaction` inserted in date order."""
    return plan_insertion(content, transaction, index, default_indent).apply(content)
