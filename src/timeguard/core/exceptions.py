class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when there is no authenticated user for an action."""


class InvalidCredentials(AuthenticationError):
    """Raised when login credentials are invalid."""

    def __init__(self, message: str = "Invalid username or password."):
        super().__init__(message)


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class DuplicateUsername(ValidationError):
    def __init__(self, username: str):
        super().__init__("Username already exists.")
        self.username = username


class DuplicateUserId(ValidationError):
    def __init__(self, user_id: str):
        super().__init__("User id already exists.")
        self.user_id = user_id


class UserNotFound(DomainError):
    def __init__(self, user_id: str):
        super().__init__("User not found.")
        self.user_id = user_id


class CollaboratorUnavailable(DomainError):
    """An external data source (IP lookup, geolocation, camera) failed.

    Non-fatal for attendance: callers degrade to a sentinel or omit the data.
    """


class OperationInProgress(DomainError):
    def __init__(self, message: str = "Another operation is in progress."):
        super().__init__(message)


class DataLoadFailure(DomainError):
    """Raised when stored collections cannot be read."""

    def __init__(self, message: str = "Could not load application data. Please refresh."):
        super().__init__(message)
