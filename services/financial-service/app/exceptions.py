"""
Custom exceptions for the financial service.

Raised by the document repository and the financial store, translated
to HTTP responses by the API layer.
"""

from typing import Any, Dict, Optional


class FinancialServiceException(Exception):
    """Base exception for all financial service errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class DatabaseNotConfiguredException(FinancialServiceException):
    """Raised when the Supabase credentials are missing."""

    def __init__(self, missing: Optional[list[str]] = None):
        missing = missing or []
        message = "Supabase not configured"
        if missing:
            message += f". Set {' and '.join(missing)}"
        super().__init__(message=message, details={"missing": missing})


class RemoteOperationException(FinancialServiceException):
    """Raised when a call to the remote document database fails."""

    def __init__(self, operation: str, collection: str, reason: Optional[str] = None):
        self.operation = operation
        self.collection = collection
        message = f"Remote {operation} on '{collection}' failed"
        if reason:
            message += f": {reason}"
        super().__init__(
            message=message,
            details={"operation": operation, "collection": collection, "reason": reason},
        )


class DocumentNotFoundException(FinancialServiceException):
    """Raised when a document targeted by an update does not exist."""

    def __init__(self, collection: str, document_id: str):
        self.collection = collection
        self.document_id = document_id
        super().__init__(
            message=f"Document '{document_id}' not found in '{collection}'",
            details={"collection": collection, "document_id": document_id},
        )
