"""CQRS Commands for reviews."""

from .create_review import CreateReviewCommand, CreateReviewCommandHandler
from .update_review import UpdateReviewCommand, UpdateReviewCommandHandler
from .delete_review import DeleteReviewCommand, DeleteReviewCommandHandler

__all__ = [
    "CreateReviewCommand",
    "CreateReviewCommandHandler",
    "UpdateReviewCommand",
    "UpdateReviewCommandHandler",
    "DeleteReviewCommand",
    "DeleteReviewCommandHandler",
]
