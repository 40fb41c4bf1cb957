"""Custom exceptions for the records context."""

from typing import Optional


class StoreError(Exception):
    """
    Exception raised when the record store fails to carry out an operation.

    Callers treat it as "the operation did not happen"; no partial writes are assumed.

    Attributes:
        message: Error description
        collection: Collection the operation targeted (e.g., 'skills')
        operation: Operation name (e.g., 'list', 'insert', 'update', 'delete')
        original_error: The underlying driver error, if any
    """

    def __init__(
        self,
        message: str,
        collection: Optional[str] = None,
        operation: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.collection = collection
        self.operation = operation
        self.original_error = original_error

        parts = [message]

        if collection and operation:
            parts.append(f"Operation: {operation} on {collection}")

        if original_error:
            parts.append(f"Original error: {str(original_error)}")

        super().__init__("\n".join(parts))


class NotAuthenticatedError(PermissionError):
    """Raised when a core operation is invoked without an authenticated user id."""

    pass


class UnknownCollectionError(KeyError):
    """Raised when a collection name doesn't match any record collection."""

    pass
