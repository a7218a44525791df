"""
Test doubles and document builders for the financial service tests.

FakeSupabase mimics the subset of the Supabase table API the repository
uses: select/insert/update/delete with eq, order and limit.
"""

import os
import uuid
from copy import deepcopy
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import jwt
from postgrest.exceptions import APIError


class FakeQuery:
    """Chainable query over one in-memory table, mimicking the PostgREST builder."""

    def __init__(self, backend: "FakeSupabase", table: str):
        self.backend = backend
        self.table = table
        self.action = "select"
        self.payload: Optional[Dict[str, Any]] = None
        self.filters: List[tuple] = []
        self.order_by: Optional[tuple] = None
        self.row_limit: Optional[int] = None

    def select(self, *columns):
        self.action = "select"
        return self

    def insert(self, document):
        self.action = "insert"
        self.payload = document
        return self

    def update(self, data):
        self.action = "update"
        self.payload = data
        return self

    def delete(self):
        self.action = "delete"
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def limit(self, size):
        self.row_limit = size
        return self

    def _matches(self, row):
        return all(row.get(column) == value for column, value in self.filters)

    def execute(self):
        self.backend.calls.append((self.table, self.action, list(self.filters)))
        failure = self.backend.failures.get((self.table, self.action))
        if isinstance(failure, Exception):
            raise failure
        if failure:
            raise APIError({"message": failure, "code": "500"})

        rows = self.backend.tables.setdefault(self.table, [])

        if self.action == "insert":
            row = {**deepcopy(self.payload), "id": str(uuid.uuid4())}
            rows.append(row)
            return SimpleNamespace(data=[deepcopy(row)])

        if self.action == "update":
            updated = []
            for row in rows:
                if self._matches(row):
                    row.update(deepcopy(self.payload))
                    updated.append(deepcopy(row))
            return SimpleNamespace(data=updated)

        if self.action == "delete":
            removed = [row for row in rows if self._matches(row)]
            self.backend.tables[self.table] = [row for row in rows if not self._matches(row)]
            return SimpleNamespace(data=removed)

        result = [deepcopy(row) for row in rows if self._matches(row)]
        if self.order_by:
            column, desc = self.order_by
            result.sort(key=lambda row: str(row.get(column)), reverse=desc)
        if self.row_limit is not None:
            result = result[: self.row_limit]
        return SimpleNamespace(data=result)


class FakeSupabase:
    """In-memory replacement for the Supabase client's table API."""

    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {}
        self.failures: Dict[tuple, Any] = {}
        self.calls: List[tuple] = []

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def fail(
        self,
        table: str,
        action: str,
        message: str = "connection reset",
        error: Optional[Exception] = None,
    ) -> None:
        """Make every subsequent call of this action on this table raise.

        Raises APIError with the message, or the given error when one is passed.
        """
        self.failures[(table, action)] = error if error is not None else message


def make_transaction_row(**overrides: Any) -> Dict[str, Any]:
    """Transaction document as stored in the transactions table."""
    row = {
        "id": str(uuid.uuid4()),
        "type": "receivable",
        "status": "pending",
        "reference_number": "INV-2024-001",
        "description": "Freight forwarding Santos - Rotterdam",
        "amount": 12500.0,
        "currency": "USD",
        "due_date": "2024-03-15",
        "issue_date": "2024-02-15",
        "entity": {"id": "cust-1", "type": "customer", "name": "Acme Imports"},
        "created_by": {"id": "user-1", "name": "Maria Silva"},
        "created_at": "2024-02-15T10:00:00+00:00",
        "updated_at": "2024-02-15T10:00:00+00:00",
    }
    row.update(overrides)
    return row


def make_payment_row(**overrides: Any) -> Dict[str, Any]:
    """Payment document as stored in the payments table."""
    row = {
        "id": str(uuid.uuid4()),
        "transaction_id": "txn-1",
        "amount": 5000.0,
        "currency": "USD",
        "payment_date": "2024-03-01",
        "payment_method": "bank_transfer",
        "reference_number": "PAY-001",
        "created_by": {"id": "user-1", "name": "Maria Silva"},
        "created_at": "2024-03-01T09:30:00+00:00",
    }
    row.update(overrides)
    return row


def make_summary_row(**overrides: Any) -> Dict[str, Any]:
    """Summary document as materialized in the financial_summary table."""
    row = {
        "id": "current",
        "total_receivables": 152340.5,
        "total_payables": 98120.0,
        "overdue_receivables": 12000.0,
        "overdue_payables": 0.0,
        "cashflow": [
            {"date": "2024-03-01", "receivables": 5000.0, "payables": 2500.0, "balance": 2500.0},
            {"date": "2024-03-02", "receivables": 0.0, "payables": 4000.0, "balance": -1500.0},
        ],
        "top_debtors": [
            {"entity_id": "cust-1", "entity_name": "Acme Imports", "amount": 45000.0, "currency": "USD"},
        ],
        "top_creditors": [
            {"entity_id": "vend-1", "entity_name": "Ocean Lines", "amount": 30000.0, "currency": "EUR"},
        ],
    }
    row.update(overrides)
    return row


def create_test_jwt(
    user_id: str = "123e4567-e89b-12d3-a456-426614174000",
    email: str = "manager@example.com",
    role: Optional[str] = "manager",
    expires_in: timedelta = timedelta(hours=1),
) -> str:
    """Create a signed test token carrying the role in app_metadata."""
    now = datetime.now(timezone.utc)
    payload: Dict[str, Any] = {
        "sub": user_id,
        "email": email,
        "role": "authenticated",
        "iat": now,
        "exp": now + expires_in,
    }
    if role:
        payload["app_metadata"] = {"role": role}
    return jwt.encode(
        payload, os.environ["JWT_SECRET_KEY"], algorithm=os.environ["JWT_ALGORITHM"]
    )


