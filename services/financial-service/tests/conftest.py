"""
Financial Service Tests - Test Configuration.

Sets the test environment before app modules are imported and provides
fixtures over an in-memory stand-in for the Supabase table API.
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict

# Add parent directory (financial-service) to sys.path so 'app' can be imported
service_dir = Path(__file__).parent.parent
sys.path.insert(0, str(service_dir))

# Set test environment variables BEFORE importing app modules
os.environ["DEBUG"] = "true"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-for-testing-only-32chars"
os.environ["JWT_ALGORITHM"] = "HS256"
os.environ["SUPABASE_URL"] = ""
os.environ["SUPABASE_SERVICE_KEY"] = ""
os.environ["MANAGER_ROLES"] = "manager"
os.environ["DEFAULT_CURRENCY"] = "USD"

import pytest  # noqa: E402

from app.repository import FinancialRepository  # noqa: E402
from app.store import FinancialStore  # noqa: E402
from factories import FakeSupabase, create_test_jwt  # noqa: E402


@pytest.fixture
def fake_supabase() -> FakeSupabase:
    """Empty in-memory Supabase tables."""
    return FakeSupabase()


@pytest.fixture
def repository(fake_supabase: FakeSupabase) -> FinancialRepository:
    """Repository over the in-memory tables."""
    return FinancialRepository(fake_supabase)


@pytest.fixture
def store(repository: FinancialRepository) -> FinancialStore:
    """Fresh financial store over the in-memory tables."""
    return FinancialStore(repository)


@pytest.fixture
def transaction_payload() -> Dict[str, Any]:
    """Request body for creating a transaction."""
    return {
        "type": "payable",
        "status": "pending",
        "reference_number": "BILL-778",
        "description": "Customs brokerage",
        "amount": 870.25,
        "currency": "EUR",
        "exchange_rate": 1.08,
        "due_date": "2024-04-30",
        "issue_date": "2024-04-01",
        "entity": {"id": "vend-9", "type": "vendor", "name": "Port Services Ltd"},
        "related_documents": [{"type": "invoice", "id": "inv-9", "number": "PS-9912"}],
        "created_by": {"id": "user-1", "name": "Maria Silva"},
    }


@pytest.fixture
def payment_payload() -> Dict[str, Any]:
    """Request body for recording a payment."""
    return {
        "transaction_id": "txn-1",
        "amount": 250.0,
        "currency": "USD",
        "payment_date": "2024-04-10",
        "payment_method": "check",
        "reference_number": "CHK-1001",
        "created_by": {"id": "user-1", "name": "Maria Silva"},
    }


@pytest.fixture
def manager_headers() -> Dict[str, str]:
    """Authorization header for a manager."""
    return {"Authorization": f"Bearer {create_test_jwt()}"}
