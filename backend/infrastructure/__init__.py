"""Infrastructure adapters: persistence, identity, payments, events."""
