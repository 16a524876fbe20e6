"""
Error taxonomy for the record service.

Every error carries the HTTP status it maps to so the centralized exception
handlers can build the failure envelope without knowing each subclass.
"""

MISSING_FIELDS = "All fields are required"


class RecordServiceError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(RecordServiceError):
    """Missing/empty required field or out-of-range value."""
    status_code = 400


class ConflictError(RecordServiceError):
    """A unique field (user email) is already taken."""
    status_code = 400


class NotFoundError(RecordServiceError):
    """Delete target absent, or the identifier could not be parsed."""
    status_code = 404


class StoreError(RecordServiceError):
    """Connectivity or operation failure against the document store."""
    status_code = 500
