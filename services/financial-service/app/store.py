"""
Financial store.

State container over the financial document collections. Reads replace
local state with the query result; writes go to the database and then
re-read the affected collection.
"""

import time
from datetime import datetime, timezone
from typing import Any, Optional

import structlog

from app.metrics import track_documents_fetched, track_store_operation
from app.models import (FinancialSummary, PaymentCreate, PaymentRecord,
                        PaymentUpdate, Transaction, TransactionCreate,
                        TransactionStatus, TransactionType, TransactionUpdate,
                        to_document)
from app.repository import FinancialRepository

logger = structlog.get_logger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class FinancialStore:
    """
    Local view of transactions, payments and the financial summary.

    Attributes:
        transactions: Last fetched transactions, newest due date first
        payments: Last fetched payments, newest payment date first
        summary: Last fetched summary document, None until one is read
        loading: True while a remote operation is in flight
        error: Message of the last failed operation, None after a success
    """

    def __init__(self, repository: FinancialRepository):
        self.repository = repository
        self.transactions: list[Transaction] = []
        self.payments: list[PaymentRecord] = []
        self.summary: Optional[FinancialSummary] = None
        self.loading: bool = False
        self.error: Optional[str] = None

    def _set(self, **changes: Any) -> None:
        for key, value in changes.items():
            setattr(self, key, value)

    def _fail(self, operation: str, error: Exception, started: float) -> None:
        logger.error(f"Error {operation}", error=str(error), exc_info=error)
        track_store_operation(operation, False, time.perf_counter() - started)
        self._set(error=str(error), loading=False)

    async def fetch_transactions(
        self,
        type: Optional[TransactionType] = None,
        status: Optional[TransactionStatus] = None,
    ) -> None:
        """Replace local transactions with the remote collection."""
        started = time.perf_counter()
        try:
            self._set(loading=True, error=None)
            transactions = await self.repository.list_transactions(type=type, status=status)
            self._set(transactions=transactions, loading=False)
        except Exception as e:
            self._fail("fetching transactions", e, started)
            return

        track_documents_fetched(self.repository.transactions_table, len(transactions))
        track_store_operation("fetching transactions", True, time.perf_counter() - started)
        logger.info("Transactions fetched", count=len(transactions))

    async def fetch_payments(self, transaction_id: Optional[str] = None) -> None:
        """
        Replace local payments with the remote collection.

        Args:
            transaction_id: Restrict to payments applied to this transaction
        """
        started = time.perf_counter()
        try:
            self._set(loading=True, error=None)
            payments = await self.repository.list_payments(transaction_id=transaction_id)
            self._set(payments=payments, loading=False)
        except Exception as e:
            self._fail("fetching payments", e, started)
            return

        track_documents_fetched(self.repository.payments_table, len(payments))
        track_store_operation("fetching payments", True, time.perf_counter() - started)
        logger.info("Payments fetched", count=len(payments), transaction_id=transaction_id)

    async def fetch_summary(self) -> None:
        """Read the precomputed summary document. An empty collection keeps the current summary."""
        started = time.perf_counter()
        try:
            self._set(loading=True, error=None)
            summary = await self.repository.get_summary()
            if summary is not None:
                self._set(summary=summary)
            self._set(loading=False)
        except Exception as e:
            self._fail("fetching financial summary", e, started)
            return

        track_store_operation("fetching financial summary", True, time.perf_counter() - started)
        logger.info("Financial summary fetched", found=summary is not None)

    async def _write(self, operation: str, call, refetch) -> Any:
        started = time.perf_counter()
        try:
            self._set(loading=True, error=None)
            result = await call()
            await refetch()
            track_store_operation(operation, True, time.perf_counter() - started)
            return result
        except Exception as e:
            logger.error(f"Error {operation}", error=str(e), exc_info=e)
            track_store_operation(operation, False, time.perf_counter() - started)
            self._set(error=str(e))
            raise
        finally:
            self._set(loading=False)

    async def add_transaction(self, transaction: TransactionCreate) -> str:
        """
        Create a transaction and refresh the transaction list.

        Returns:
            Id of the new transaction
        """
        now = _now()
        document = {**to_document(transaction), "created_at": now, "updated_at": now}
        transaction_id = await self._write(
            "adding transaction",
            lambda: self.repository.add(self.repository.transactions_table, document),
            self.fetch_transactions,
        )
        logger.info("Transaction added", transaction_id=transaction_id)
        return transaction_id

    async def update_transaction(self, id: str, data: TransactionUpdate) -> None:
        """Apply a partial update, stamp updated_at and refresh the transaction list."""
        document = {**to_document(data, partial=True), "updated_at": _now()}
        await self._write(
            "updating transaction",
            lambda: self.repository.update(self.repository.transactions_table, id, document),
            self.fetch_transactions,
        )
        logger.info("Transaction updated", transaction_id=id)

    async def delete_transaction(self, id: str) -> None:
        """Delete a transaction and refresh the transaction list."""
        await self._write(
            "deleting transaction",
            lambda: self.repository.delete(self.repository.transactions_table, id),
            self.fetch_transactions,
        )
        logger.info("Transaction deleted", transaction_id=id)

    async def add_payment(self, payment: PaymentCreate) -> str:
        """
        Record a payment and refresh the payment list.

        Returns:
            Id of the new payment record
        """
        document = {**to_document(payment), "created_at": _now()}
        payment_id = await self._write(
            "adding payment",
            lambda: self.repository.add(self.repository.payments_table, document),
            self.fetch_payments,
        )
        logger.info("Payment added", payment_id=payment_id, transaction_id=payment.transaction_id)
        return payment_id

    async def update_payment(self, id: str, data: PaymentUpdate) -> None:
        """Apply a partial update and refresh the payment list."""
        await self._write(
            "updating payment",
            lambda: self.repository.update(
                self.repository.payments_table, id, to_document(data, partial=True)
            ),
            self.fetch_payments,
        )
        logger.info("Payment updated", payment_id=id)

    async def delete_payment(self, id: str) -> None:
        """Delete a payment record and refresh the payment list."""
        await self._write(
            "deleting payment",
            lambda: self.repository.delete(self.repository.payments_table, id),
            self.fetch_payments,
        )
        logger.info("Payment deleted", payment_id=id)
