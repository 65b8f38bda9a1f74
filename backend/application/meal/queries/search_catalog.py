"""Search catalog query - filter, sort, paginate and full-text search."""

import logging

from domain.meal.core.entities.meal import Meal
from domain.meal.core.ports.meal_repository import IMealRepository
from domain.meal.core.value_objects.catalog_query import CatalogQuery
from domain.shared.pagination import Page

logger = logging.getLogger(__name__)


class SearchCatalogQueryHandler:
    """Handler for CatalogQuery.

    Example:
        >>> handler = SearchCatalogQueryHandler(repository)
        >>> query = CatalogQuery.from_params(page=2, price_range="5-15")
        >>> page = await handler.handle(query)
        >>> len(page.items) <= 10
        True
    """

    def __init__(self, repository: IMealRepository):
        self._repository = repository

    async def handle(self, query: CatalogQuery) -> Page[Meal]:
        page = await self._repository.search(query)

        logger.debug(
            "catalog.searched",
            extra={
                "page": query.page,
                "search": query.search,
                "category": query.category,
                "total": page.total,
            },
        )
        return page
