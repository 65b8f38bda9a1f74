"""Value objects for meal domain."""

from .catalog_query import CatalogQuery, PriceRange, SortOrder
from .rating import Rating, RatingChange

__all__ = ["CatalogQuery", "PriceRange", "SortOrder", "Rating", "RatingChange"]
