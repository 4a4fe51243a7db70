#!/usr/bin/env python3
"""
End-to-end tests for the ledgerbuilder command.

These tests run the installed CLI via subprocess against temporary ledger
files, never against a real ledger.
"""
