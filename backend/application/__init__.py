"""Application layer: commands, queries and event handlers (CQRS)."""
