"""
Document repository for the financial collections.

Thin wrappers around Supabase table calls. Ordering, filtering and
uniqueness are left to the database.
"""

from typing import Any, Callable, Optional

import httpx
import structlog
from postgrest.exceptions import APIError
from supabase import Client

from app.config import settings
from app.exceptions import DocumentNotFoundException, RemoteOperationException
from app.models import (FinancialSummary, PaymentRecord, Transaction,
                        TransactionStatus, TransactionType)

logger = structlog.get_logger(__name__)


class FinancialRepository:
    """
    Access to the transactions, payments and summary collections.

    Every method issues exactly one remote call.
    """

    def __init__(self, client: Client):
        """
        Initialize the repository.

        Args:
            client: Supabase client used for all table calls
        """
        self.client = client
        self.transactions_table = settings.TRANSACTIONS_TABLE
        self.payments_table = settings.PAYMENTS_TABLE
        self.summary_table = settings.SUMMARY_TABLE

    def _execute(self, operation: str, collection: str, call: Callable[[], Any]) -> Any:
        try:
            return call().execute()
        except APIError as e:
            logger.error(
                "Document store call failed",
                operation=operation,
                collection=collection,
                error=e.message,
            )
            raise RemoteOperationException(operation, collection, e.message) from e
        except httpx.HTTPError as e:
            logger.error(
                "Document store unreachable",
                operation=operation,
                collection=collection,
                error=str(e),
            )
            raise RemoteOperationException(operation, collection, str(e) or type(e).__name__) from e

    async def list_transactions(
        self,
        type: Optional[TransactionType] = None,
        status: Optional[TransactionStatus] = None,
    ) -> list[Transaction]:
        """
        List transactions, newest due date first.

        Args:
            type: Only return payables or receivables
            status: Only return transactions with this status

        Returns:
            Transactions as returned by the database
        """

        def query():
            q = self.client.table(self.transactions_table).select("*")
            if type is not None:
                q = q.eq("type", TransactionType(type).value)
            if status is not None:
                q = q.eq("status", TransactionStatus(status).value)
            return q.order("due_date", desc=True)

        response = self._execute("query", self.transactions_table, query)
        return [Transaction.model_validate(row) for row in response.data]

    async def list_payments(self, transaction_id: Optional[str] = None) -> list[PaymentRecord]:
        """
        List payments, newest payment date first.

        Args:
            transaction_id: Only return payments applied to this transaction

        Returns:
            Payment records as returned by the database
        """

        def query():
            q = self.client.table(self.payments_table).select("*")
            if transaction_id:
                q = q.eq("transaction_id", transaction_id)
            return q.order("payment_date", desc=True)

        response = self._execute("query", self.payments_table, query)
        return [PaymentRecord.model_validate(row) for row in response.data]

    async def get_summary(self) -> Optional[FinancialSummary]:
        """Return the first summary document, or None if none is stored."""
        response = self._execute(
            "query",
            self.summary_table,
            lambda: self.client.table(self.summary_table).select("*").limit(1),
        )
        if not response.data:
            return None
        return FinancialSummary.model_validate(response.data[0])

    async def add(self, collection: str, document: dict[str, Any]) -> str:
        """
        Insert a document.

        Returns:
            Id generated by the database
        """
        response = self._execute(
            "add",
            collection,
            lambda: self.client.table(collection).insert(document),
        )
        if not response.data:
            raise RemoteOperationException("add", collection, "no document returned")

        document_id = str(response.data[0]["id"])
        logger.debug("Document added", collection=collection, document_id=document_id)
        return document_id

    async def update(self, collection: str, document_id: str, data: dict[str, Any]) -> None:
        """
        Apply a partial update to one document.

        Raises:
            DocumentNotFoundException: If no document has this id
        """
        response = self._execute(
            "update",
            collection,
            lambda: self.client.table(collection).update(data).eq("id", document_id),
        )
        if not response.data:
            raise DocumentNotFoundException(collection, document_id)

        logger.debug("Document updated", collection=collection, document_id=document_id)

    async def delete(self, collection: str, document_id: str) -> None:
        """Delete one document. Missing documents are ignored."""
        self._execute(
            "delete",
            collection,
            lambda: self.client.table(collection).delete().eq("id", document_id),
        )
        logger.debug("Document deleted", collection=collection, document_id=document_id)
