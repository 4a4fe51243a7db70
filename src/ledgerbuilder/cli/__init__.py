"""
Command Line Interface Package

- main: `ledgerbuilder LEDGER_FILE` entry point
- session: the header/change prompt loop
- completion: prompt_toolkit completer backed by the ledger index
"""
