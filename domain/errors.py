class CrmError(Exception):
    """Base class for errors surfaced to the user as a message string."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BackendError(CrmError):
    """A remote auth or table call failed."""


class ValidationError(CrmError, ValueError):
    """Form input rejected before any remote call was made."""


class NotAuthenticatedError(CrmError):
    pass
