"""CQRS Queries for reviews."""

from .list_reviews import ListReviewsQuery

__all__ = ["ListReviewsQuery"]
