"""Application error taxonomy.

Services raise these; the API layer maps them to HTTP responses.
"""


class NutritionImpactError(Exception):
    """Base class for expected application failures."""

    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UnauthenticatedError(NutritionImpactError):
    """Raised when the caller identity is missing or invalid."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class NotFoundError(NutritionImpactError):
    """Raised when a referenced resource does not exist."""

    status_code = 404

    def __init__(self, resource: str, identifier: object | None = None) -> None:
        self.resource = resource
        self.identifier = identifier
        if identifier is None:
            message = f"{resource} not found"
        else:
            message = f"{resource} '{identifier}' not found"
        super().__init__(message)


class PreconditionFailedError(NutritionImpactError):
    """Raised when an operation needs state the user has not set up yet."""

    status_code = 400


class ExternalServiceError(NutritionImpactError):
    """Raised when a required external call fails or returns bad output."""

    status_code = 502
