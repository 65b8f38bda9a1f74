"""Upcoming meal application layer: submissions, voting and promotion."""
