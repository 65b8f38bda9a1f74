"""Update meal command and handler.

Only descriptive fields can be edited; counters, ownership and identifiers
are maintained by the system.
"""

from dataclasses import dataclass, field
import logging
from typing import Any, Dict

from domain.meal.core.entities.meal import Meal, validate_changes
from domain.meal.core.exceptions.meal_errors import MealNotFoundError, MealOwnershipError
from domain.meal.core.ports.meal_repository import IMealRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpdateMealCommand:
    """
    Command: Edit a catalog meal.

    Attributes:
        meal_id: Meal to update
        requester_email: Verified caller
        requester_is_admin: Whether the caller holds the admin role
        changes: Field name -> new value (editable fields only)
    """

    meal_id: str
    requester_email: str
    requester_is_admin: bool = False
    changes: Dict[str, Any] = field(default_factory=dict)


class UpdateMealCommandHandler:
    """Handler for UpdateMealCommand."""

    def __init__(self, repository: IMealRepository):
        self._repository = repository

    async def handle(self, command: UpdateMealCommand) -> Meal:
        """
        Execute update command.

        Flow:
        1. Validate the change set
        2. Verify the meal exists
        3. Verify the caller is the distributor or an admin
        4. Apply the field update

        Raises:
            InvalidMealError: If changes touch non-editable fields
            MealNotFoundError: If meal doesn't exist
            MealOwnershipError: If caller may not edit the meal
        """
        changes = validate_changes(dict(command.changes))

        meal = await self._repository.find_by_id(command.meal_id)
        if meal is None:
            raise MealNotFoundError(command.meal_id)

        if not meal.is_managed_by(command.requester_email, command.requester_is_admin):
            raise MealOwnershipError(command.meal_id)

        updated = await self._repository.update_fields(command.meal_id, changes)
        if updated is None:
            # Deleted between the lookup and the update
            raise MealNotFoundError(command.meal_id)

        logger.info(
            "meal.updated",
            extra={"meal_id": command.meal_id, "fields": sorted(changes)},
        )
        return updated
