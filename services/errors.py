"""
Service Errors

Every failure a service reports to its caller. The HTTP layer maps
status_code straight onto the response.
"""


class PlannerError(Exception):
    """Base class for errors surfaced to API callers."""
    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class NotFound(PlannerError):
    """A recipe, suggestion, history entry or tag does not exist."""
    status_code = 404


class InvalidInput(PlannerError):
    """A required field is missing or a value is out of range."""
    status_code = 400


class NoRecipesAvailable(PlannerError):
    """The candidate pool is empty after exclusions."""
    status_code = 400


class UpstreamUnavailable(PlannerError):
    """The weather provider or a recipe site could not be reached."""
    status_code = 500
