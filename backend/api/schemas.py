"""Request bodies.

Responses are built from entity to_dict() so field names match the stored
documents (camelCase with a few legacy snake_case keys).
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class RequestModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class RegisterUserRequest(RequestModel):
    email: str
    name: Optional[str] = None
    photo: Optional[str] = None


class MealDetailsRequest(RequestModel):
    """Fields shared by catalog and upcoming meal submissions."""

    title: str
    category: str
    price: float = Field(..., ge=0)
    description: str = ""
    ingredients: List[str] = Field(default_factory=list)
    image: Optional[str] = None
    distributor_name: Optional[str] = Field(default=None, alias="distributorName")


class UpdateMealRequest(RequestModel):
    title: Optional[str] = None
    category: Optional[str] = None
    price: Optional[float] = None
    description: Optional[str] = None
    ingredients: Optional[List[str]] = None
    image: Optional[str] = None

    def changes(self) -> dict:
        """Only the fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


class IdentityRequest(RequestModel):
    """Body carrying the caller-asserted email (checked against the token)."""

    email: Optional[str] = None


class RateMealRequest(IdentityRequest):
    rating: Any = None


class CreateReviewRequest(IdentityRequest):
    text: Optional[str] = None
    username: Optional[str] = None
    photo_url: Optional[str] = Field(default=None, alias="photoURL")


class UpdateReviewRequest(RequestModel):
    text: Optional[str] = None


class PaymentIntentRequest(RequestModel):
    amount: Any = None


class RecordPaymentRequest(IdentityRequest):
    amount: float
    transaction_id: str = Field(..., alias="transactionId")
    membership_id: str = Field(..., alias="membershipId")
    payment_method: str = Field(default="card", alias="paymentMethod")
