"""Membership domain: packages (reference data) and the payment ledger."""
