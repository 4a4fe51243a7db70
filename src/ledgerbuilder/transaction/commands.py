#!/usr/bin/env python3
"""
Command Line Parsing

Turns interactive input lines into operations for the TransactionBuilder.

Grammar (tokens separated by whitespace, account names contain no spaces):
    <date> <description...>              header line
    a <account> <currency><amount>       add a posting
    s <account1> <account2> <currency><amount>
                                         split an amount in half
    f <account>                          finalize, balancing into <account>
    d                                    discard the in-progress transaction

The currency and amount may also be given as two tokens ("€ 5.00",
"5.00 EUR").
"""

from dataclasses import dataclass
from enum import Enum

from ..core.errors import MalformedCommand
from ..core.money import Money

ADD = "a"
SPLIT = "s"
FINALIZE = "f"
DISCARD = "d"

VERBS = (ADD, SPLIT, FINALIZE, DISCARD)

# Number of account tokens each verb takes before its amount
_ACCOUNT_COUNTS = {ADD: 1, SPLIT: 2, FINALIZE: 1, DISCARD: 0}
_TAKES_AMOUNT = {ADD: True, SPLIT: True, FINALIZE: False, DISCARD: False}


class TokenType(Enum):
    """What the next token of a command line should be."""

    VERB = "verb"
    ACCOUNT = "account"
    AMOUNT = "amount"
    END = "end"


@dataclass(frozen=True)
class AddOperation:
    account: str
    money: Money


@dataclass(frozen=True)
class SplitOperation:
    account_a: str
    account_b: str
    money: Money


@dataclass(frozen=True)
class FinalizeOperation:
    account: str


@dataclass(frozen=True)
class DiscardOperation:
    pass


Operation = AddOperation | SplitOperation | FinalizeOperation | DiscardOperation


@dataclass(frozen=True)
class HeaderLine:
    """Raw pieces of a header line; the builder parses the date."""

    date_text: str
    description: str


def parse_header(line: str) -> HeaderLine:
    """
    Split a header line into its date token and description.

    Raises:
        MalformedCommand: If the line is empty
    """
    parts = line.strip().split(maxsplit=1)
    if not parts:
        raise MalformedCommand("Expected a header: <date> <description>")
    description = parts[1].strip() if len(parts) > 1 else ""
    return HeaderLine(date_text=parts[0], description=description)


def _validate_account(token: str) -> str:
    if not token[0].isalpha():
        raise MalformedCommand(f"Account name must start with a letter: {token!r}")
    return token


def _parse_money(tokens: list[str]) -> Money:
    if len(tokens) == 2 and any(ch.isdigit() for ch in tokens[0]) == any(ch.isdigit() for ch in tokens[1]):
        raise MalformedCommand(f"Invalid amount: {' '.join(tokens)!r}")
    return Money.parse(" ".join(tokens))


def parse_command(line: str) -> Operation:
    """
    Parse a command line into an operation.

    Raises:
        MalformedCommand: On an unknown verb, wrong token count, missing
            currency or non-numeric amount
    """
    tokens = line.split()
    if not tokens:
        raise MalformedCommand("Empty command")

    verb = tokens[0]
    if verb not in VERBS:
        raise MalformedCommand(f"Unknown command {verb!r}; expected one of: {', '.join(VERBS)}")

    account_count = _ACCOUNT_COUNTS[verb]
    accounts = [_validate_account(t) for t in tokens[1 : 1 + account_count]]
    rest = tokens[1 + account_count :]

    if len(accounts) != account_count:
        raise MalformedCommand(_usage(verb))

    if not _TAKES_AMOUNT[verb]:
        if rest:
            raise MalformedCommand(_usage(verb))
        if verb == FINALIZE:
            return FinalizeOperation(account=accounts[0])
        return DiscardOperation()

    if len(rest) not in (1, 2):
        raise MalformedCommand(_usage(verb))
    money = _parse_money(rest)

    if verb == ADD:
        return AddOperation(account=accounts[0], money=money)
    return SplitOperation(account_a=accounts[0], account_b=accounts[1], money=money)


def _usage(verb: str) -> str:
    usages = {
        ADD: "a <account> <currency><amount>",
        SPLIT: "s <account1> <account2> <currency><amount>",
        FINALIZE: "f <account>",
        DISCARD: "d",
    }
    return f"Usage: {usages[verb]}"


def expected_token(text_before_cursor: str) -> TokenType | None:
    """
    Work out which kind of token is being typed at the end of the text.

    Used by completion. Returns None when the text cannot be a valid command.
    """
    tokens = text_before_cursor.split()
    if not text_before_cursor or text_before_cursor[-1].isspace():
        position = len(tokens)
    else:
        position = len(tokens) - 1

    if position == 0:
        return TokenType.VERB

    verb = tokens[0]
    if verb not in VERBS:
        return None

    account_count = _ACCOUNT_COUNTS[verb]
    if position <= account_count:
        return TokenType.ACCOUNT
    if not _TAKES_AMOUNT[verb]:
        return TokenType.END

    amount_position = account_count + 1
    if position == amount_position:
        return TokenType.AMOUNT
    if position == amount_position + 1 and not any(ch.isdigit() for ch in tokens[amount_position]):
        # Currency was typed as its own token; the number follows
        return TokenType.AMOUNT
    return TokenType.END
