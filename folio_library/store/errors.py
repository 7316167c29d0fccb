"""Errors raised by content store collaborators."""


class StoreError(Exception):
    """A store operation failed.

    Attributes:
        operation: Store method that failed (e.g. "list_pages")
        status_code: HTTP status when the failure came from the admin API
    """

    def __init__(self, message: str, *, operation: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message)
        self.operation = operation
        self.status_code = status_code


class StoreNotFoundError(StoreError):
    """The requested resource does not exist in the store."""


class StoreUnavailableError(StoreError):
    """The store could not be reached (connection failure or timeout)."""
