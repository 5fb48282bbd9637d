"""
Domain errors.

Services raise these; the API layer rolls back the session and lets
them propagate to the application's exception handlers, which render
``{"error": message}`` with the matching status code.
"""


class PondLedgerError(Exception):
    """Base class for errors that map to a client-facing HTTP status."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(PondLedgerError):
    """A required field is missing or a referenced record is unusable."""

    status_code = 400


class AuthenticationError(PondLedgerError):
    status_code = 401


class AuthorizationError(PondLedgerError):
    """The caller is known but their role does not allow the operation."""

    status_code = 403


class NotFoundError(PondLedgerError):
    status_code = 404
