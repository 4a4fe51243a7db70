"""Tab completion for the interactive session (prompt_toolkit-based).

The completer only decides *what kind* of token is being typed, using the
same grammar as the command parser, and asks the LedgerIndex for candidates.
Suggestions are advisory: anything may be typed.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from prompt_toolkit.completion import CompleteEvent, Completer, Completion
from prompt_toolkit.document import Document

from ..ledger.index import LedgerIndex
from ..transaction.commands import VERBS, TokenType, expected_token

_VERB_HELP = {
    "a": "add <account> <amount>",
    "s": "split <account1> <account2> <amount>",
    "f": "finalize into <account>",
    "d": "discard transaction",
}


class LedgerCompleter(Completer):
    """Completes verbs, account names and currency symbols."""

    def __init__(self, index: LedgerIndex, active: Callable[[], bool] | None = None) -> None:
        self.index = index
        # Header lines get no completion; the session flips this
        self._active = active or (lambda: True)

    def get_completions(self, document: Document, complete_event: CompleteEvent) -> Iterable[Completion]:
        if not self._active():
            return

        text = document.text_before_cursor
        word = document.get_word_before_cursor(WORD=True)
        kind = expected_token(text)

        if kind == TokenType.VERB:
            for verb in VERBS:
                if verb.startswith(word):
                    yield Completion(verb, start_position=-len(word), display_meta=_VERB_HELP[verb])
        elif kind == TokenType.ACCOUNT:
            for account in self.index.suggest_accounts(word):
                yield Completion(account, start_position=-len(word))
        elif kind == TokenType.AMOUNT:
            if any(ch.isdigit() for ch in word):
                return
            sign = "-" if word.startswith("-") else ""
            typed = word[len(sign) :]
            for currency in self.index.suggest_currencies(typed):
                yield Completion(sign + currency, start_position=-len(word))
