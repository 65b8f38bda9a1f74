"""Meal request application layer."""
