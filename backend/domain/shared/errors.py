"""Error taxonomy shared by every bounded context.

Each base class maps to exactly one HTTP status in the API layer:

- ValidationError      -> 400
- AuthenticationError  -> 401
- AuthorizationError   -> 403
- NotFoundError        -> 404
- ConflictError        -> 409
- StoreError           -> 500
- GatewayError         -> 500

Context-specific errors subclass one of these so handlers never need to know
about individual contexts.
"""

from typing import Optional


class BiteLogError(Exception):
    """Base exception for all domain and collaborator errors."""

    code = "error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(BiteLogError):
    """Input is malformed or missing."""

    code = "validation_error"


class AuthenticationError(BiteLogError):
    """Credential is missing or could not be verified."""

    code = "unauthorized"

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class AuthorizationError(BiteLogError):
    """Verified identity is not allowed to perform the operation."""

    code = "forbidden"

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message)


class NotFoundError(BiteLogError):
    """Target entity does not exist."""

    code = "not_found"

    def __init__(self, entity: str, identifier: Optional[str] = None):
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} not found")


class ConflictError(BiteLogError):
    """Operation conflicts with the current state of the entity."""

    code = "conflict"


class StoreError(BiteLogError):
    """Unexpected document-store failure."""

    code = "internal_error"


class GatewayError(BiteLogError):
    """Unexpected failure of an external collaborator."""

    code = "internal_error"
