"""
Exceptions raised by the storage and service layers.

Controllers never catch these: they propagate to the Flask error
handlers registered in ``app.py`` and are rendered as a generic
server error page.
"""


class AdminError(Exception):
    """Base exception for back-office errors."""
    pass


class StorageError(AdminError):
    """
    Raised when a query or connection to the database fails.

    Attributes:
        message: Short description of the failed operation
        original_error: The underlying SQLAlchemy exception
    """

    def __init__(self, message: str, original_error: Exception = None):
        self.message = message
        self.original_error = original_error
        super().__init__(message)


class NotFoundError(AdminError):
    """Raised when a mutation or detail view targets a missing row."""

    def __init__(self, entity: str, entity_id=None):
        self.entity = entity
        self.entity_id = entity_id
        if entity_id is None:
            message = f"{entity} not found"
        else:
            message = f"{entity} '{entity_id}' not found"
        self.message = message
        super().__init__(message)


class ValidationFailed(AdminError):
    """
    Raised when mutation input is well-formed but rejected by a data rule
    (duplicate name, unknown category). ``notice`` is shown to the operator
    on the next listing render.
    """

    def __init__(self, notice: str):
        self.notice = notice
        self.message = notice
        super().__init__(notice)
