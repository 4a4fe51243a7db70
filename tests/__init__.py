"""
Test Suite for Ledger Builder

Test Structure:
- unit/: Unit tests mirroring src/ package structure
- integration/: CLI runs through click's CliRunner
- e2e/: CLI runs in a subprocess

Test Data:
All ledgers are small synthetic files written to temporary directories.
"""
