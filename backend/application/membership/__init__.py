"""Membership application layer: packages, payment intents and the ledger."""
