#!/usr/bin/env python3
"""
Ledger File DataStore

Owns the ledger file on disk: reads it once at startup and replaces it
atomically each time a transaction is saved.

Save protocol:
1. Write the complete new content to a temporary file in the same directory
2. Flush and fsync it, copy the original permission bits
3. os.replace() it over the original

If any step fails the temporary file is removed and the original is left
byte-for-byte intact.
"""

import logging
import os
import shutil
import tempfile
from pathlib import Path

from ..core.errors import IOFailure
from ..transaction.models import Transaction
from .index import LedgerIndex
from .writer import DEFAULT_INDENT, Insertion, plan_insertion

logger = logging.getLogger(__name__)


class LedgerFile:
    """
    A ledger file plus the content last read from or written to it.

    Examples:
        ledger = LedgerFile(Path("~/finances.ledger").expanduser())
        content = ledger.load()
        index = LedgerIndex.from_content(content)
        ledger.append_transaction(transaction, index)
    """

    def __init__(self, path: Path, default_indent: str = DEFAULT_INDENT) -> None:
        self.path = Path(path)
        self.default_indent = default_indent
        self.content: str | None = None
        self._loaded_mtime: float | None = None

    def load(self) -> str:
        """
        Read the whole file as UTF-8.

        Raises:
            IOFailure: If the file is missing, unreadable or not UTF-8
        """
        try:
            # newline="" keeps "\r\n" files byte-for-byte
            with open(self.path, encoding="utf-8", newline="") as f:
                content = f.read()
            mtime = self.path.stat().st_mtime
        except (OSError, UnicodeDecodeError) as e:
            raise IOFailure(f"Cannot read ledger file {self.path}: {e}") from e

        self.content = content
        self._loaded_mtime = mtime
        logger.info("Loaded %s (%d bytes)", self.path, len(content.encode("utf-8")))
        return content

    def changed_on_disk(self) -> bool:
        """True if the file was modified since it was last loaded or saved."""
        try:
            return self.path.stat().st_mtime != self._loaded_mtime
        except OSError:
            return True

    def save(self, content: str) -> None:
        """
        Atomically replace the file with `content`.

        Raises:
            IOFailure: If the new content cannot be written; the original file
                is unchanged
        """
        directory = self.path.parent
        tmp_name = None
        try:
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                newline="",
                dir=directory,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_name = f.name
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            if self.path.exists():
                shutil.copymode(self.path, tmp_name)
            os.replace(tmp_name, self.path)
        except (OSError, UnicodeEncodeError) as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise IOFailure(f"Cannot write ledger file {self.path}: {e}") from e

        self.content = content
        self._loaded_mtime = self.path.stat().st_mtime
        logger.info("Saved %s (%d bytes)", self.path, len(content.encode("utf-8")))

    def append_transaction(self, transaction: Transaction, index: LedgerIndex | None = None) -> Insertion:
        """
        Insert `transaction` in date order and save.

        Reloads first if the file changed on disk since it was last read, so
        edits made in another program are not overwritten.

        Returns:
            The Insertion that was applied

        Raises:
            IOFailure: If the file cannot be read or written
            UnbalancedTransaction: If the transaction does not balance
        """
        if self.content is None:
            self.load()
        elif self.changed_on_disk():
            logger.warning("%s changed on disk since it was loaded; reloading", self.path)
            self.load()

        assert self.content is not None
        insertion = plan_insertion(self.content, transaction, index, self.default_indent)
        self.save(insertion.apply(self.content))
        return insertion
