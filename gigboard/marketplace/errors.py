"""
Marketplace error taxonomy.

Every failure surfaced by the marketplace core is a ``MarketplaceError``
carrying a stable ``kind`` string and a human readable message. The HTTP
layer maps ``kind`` to a status code; library callers can catch the
specific subclasses.
"""


class MarketplaceError(Exception):
    """Base class for marketplace failures."""

    kind = "marketplace_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        """Structured form (kind + message) for API responses."""
        return {"error": self.kind, "detail": self.message}


class ValidationError(MarketplaceError, ValueError):
    """Malformed input: non-positive amounts, empty required fields."""

    kind = "validation_error"


class AuthorizationError(MarketplaceError):
    """Caller lacks the role or ownership required for the action."""

    kind = "authorization_error"


class InvalidTransitionError(MarketplaceError):
    """A lifecycle state machine rule was violated."""

    kind = "invalid_transition"


class DuplicateApplicationError(MarketplaceError):
    """A freelancer already holds an application for this job."""

    kind = "duplicate_application"

    def __init__(self, job_id: str, freelancer_id: str):
        super().__init__(f"Freelancer {freelancer_id} has already applied to job {job_id}")
        self.job_id = job_id
        self.freelancer_id = freelancer_id


class NotFoundError(MarketplaceError):
    """A referenced Job, Application or Profile does not exist."""

    kind = "not_found"

    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity} not found: {entity_id}")
        self.entity = entity
        self.entity_id = entity_id


class StoreUnavailableError(MarketplaceError):
    """The external data API failed for infrastructure reasons."""

    kind = "store_unavailable"


__all__ = [
    "MarketplaceError",
    "ValidationError",
    "AuthorizationError",
    "InvalidTransitionError",
    "DuplicateApplicationError",
    "NotFoundError",
    "StoreUnavailableError",
]
