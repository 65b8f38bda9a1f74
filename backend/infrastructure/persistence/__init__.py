"""Persistence adapters (MongoDB and in-memory)."""
