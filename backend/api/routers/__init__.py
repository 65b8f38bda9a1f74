"""REST routers, one per resource."""

from .meal_requests import router as meal_requests_router
from .meals import router as meals_router
from .memberships import router as memberships_router
from .payments import router as payments_router
from .reviews import router as reviews_router
from .upcoming_meals import router as upcoming_meals_router
from .users import router as users_router

ALL_ROUTERS = [
    users_router,
    meals_router,
    reviews_router,
    upcoming_meals_router,
    meal_requests_router,
    memberships_router,
    payments_router,
]

__all__ = ["ALL_ROUTERS"]
