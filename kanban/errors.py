"""Error taxonomy shared by the services and the HTTP layer."""
from fastapi import status


class KanbanError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(KanbanError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class AuthenticationError(KanbanError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"


class AuthorizationError(KanbanError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You don't have access to this resource"


class NotFoundError(KanbanError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class ConflictError(KanbanError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource conflict"
