"""
Financial management endpoints.

One group of endpoints per tab of the management page: dashboard,
transactions and payments. Restricted to manager roles.
"""

from typing import Awaitable, Optional, TypeVar

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.auth import User, require_manager
from app.dashboard import build_dashboard
from app.database import get_supabase_client
from app.exceptions import DocumentNotFoundException, FinancialServiceException
from app.models import (DashboardResponse, ErrorResponse, FinancialSummary,
                        PaymentCreate, PaymentCreatedResponse,
                        PaymentListResponse, PaymentUpdate,
                        TransactionCreate, TransactionCreatedResponse,
                        TransactionListResponse, TransactionStatus,
                        TransactionType, TransactionUpdate)
from app.repository import FinancialRepository
from app.store import FinancialStore

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/financial", tags=["Financial"])

T = TypeVar("T")

COMMON_RESPONSES = {
    401: {"description": "Unauthorized", "model": ErrorResponse},
    403: {"description": "Manager role required", "model": ErrorResponse},
    502: {"description": "Document store failure", "model": ErrorResponse},
}


def get_store() -> FinancialStore:
    """Build a store over the shared Supabase client for one request."""
    return FinancialStore(FinancialRepository(get_supabase_client()))


def _raise_on_read_error(store: FinancialStore) -> None:
    if store.error:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=store.error,
        )


async def _run_write(operation: Awaitable[T]) -> T:
    try:
        return await operation
    except DocumentNotFoundException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except FinancialServiceException as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)
    except Exception as e:
        logger.exception("Unexpected error during write", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred",
        )


def _transactions_response(store: FinancialStore) -> TransactionListResponse:
    return TransactionListResponse(
        transactions=store.transactions,
        total=len(store.transactions),
        error=store.error,
    )


def _payments_response(store: FinancialStore) -> PaymentListResponse:
    return PaymentListResponse(
        payments=store.payments,
        total=len(store.payments),
        error=store.error,
    )


# Dashboard


@router.get(
    "/dashboard",
    response_model=DashboardResponse,
    responses={
        **COMMON_RESPONSES,
        404: {"description": "No summary document", "model": ErrorResponse},
    },
    summary="Get financial dashboard",
)
async def get_dashboard(
    user: User = Depends(require_manager),
    store: FinancialStore = Depends(get_store),
):
    """
    Headline figures, top debtors and creditors and cash flow.

    Figures come from the precomputed summary document.
    """
    await store.fetch_summary()
    _raise_on_read_error(store)

    if store.summary is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Financial summary not available",
        )

    logger.info("Dashboard rendered", user_id=user.id)
    return build_dashboard(store.summary)


@router.get(
    "/summary",
    response_model=FinancialSummary,
    responses={
        **COMMON_RESPONSES,
        404: {"description": "No summary document", "model": ErrorResponse},
    },
    summary="Get raw financial summary",
)
async def get_summary(
    user: User = Depends(require_manager),
    store: FinancialStore = Depends(get_store),
):
    """Return the summary document as stored."""
    await store.fetch_summary()
    _raise_on_read_error(store)

    if store.summary is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Financial summary not available",
        )
    return store.summary


# Transactions


@router.get(
    "/transactions",
    response_model=TransactionListResponse,
    responses=COMMON_RESPONSES,
    summary="List transactions",
)
async def list_transactions(
    type: Optional[TransactionType] = Query(None, description="payable or receivable"),
    status_filter: Optional[TransactionStatus] = Query(None, alias="status"),
    user: User = Depends(require_manager),
    store: FinancialStore = Depends(get_store),
):
    """List transactions ordered by due date, newest first."""
    await store.fetch_transactions(type=type, status=status_filter)
    _raise_on_read_error(store)
    return _transactions_response(store)


@router.post(
    "/transactions",
    response_model=TransactionCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses=COMMON_RESPONSES,
    summary="Create transaction",
)
async def create_transaction(
    transaction: TransactionCreate,
    user: User = Depends(require_manager),
    store: FinancialStore = Depends(get_store),
):
    """Create a receivable or payable and return the refreshed list."""
    transaction_id = await _run_write(store.add_transaction(transaction))
    logger.info("Transaction created", user_id=user.id, transaction_id=transaction_id)

    return TransactionCreatedResponse(
        id=transaction_id,
        transactions=store.transactions,
        total=len(store.transactions),
        error=store.error,
    )


@router.patch(
    "/transactions/{transaction_id}",
    response_model=TransactionListResponse,
    responses={
        **COMMON_RESPONSES,
        400: {"description": "No fields to update", "model": ErrorResponse},
        404: {"description": "Transaction not found", "model": ErrorResponse},
    },
    summary="Update transaction",
)
async def update_transaction(
    transaction_id: str,
    updates: TransactionUpdate,
    user: User = Depends(require_manager),
    store: FinancialStore = Depends(get_store),
):
    """Only updates fields that are provided in the request."""
    if not updates.model_fields_set:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No fields to update",
        )

    await _run_write(store.update_transaction(transaction_id, updates))
    return _transactions_response(store)


@router.delete(
    "/transactions/{transaction_id}",
    response_model=TransactionListResponse,
    responses=COMMON_RESPONSES,
    summary="Delete transaction",
)
async def delete_transaction(
    transaction_id: str,
    user: User = Depends(require_manager),
    store: FinancialStore = Depends(get_store),
):
    """Delete a transaction and return the refreshed list."""
    await _run_write(store.delete_transaction(transaction_id))
    logger.info("Transaction removed", user_id=user.id, transaction_id=transaction_id)
    return _transactions_response(store)


# Payments


@router.get(
    "/payments",
    response_model=PaymentListResponse,
    responses=COMMON_RESPONSES,
    summary="List payments",
)
async def list_payments(
    transaction_id: Optional[str] = Query(None, description="Only payments for this transaction"),
    user: User = Depends(require_manager),
    store: FinancialStore = Depends(get_store),
):
    """List payments ordered by payment date, newest first."""
    await store.fetch_payments(transaction_id=transaction_id)
    _raise_on_read_error(store)
    return _payments_response(store)


@router.post(
    "/payments",
    response_model=PaymentCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses=COMMON_RESPONSES,
    summary="Record payment",
)
async def create_payment(
    payment: PaymentCreate,
    user: User = Depends(require_manager),
    store: FinancialStore = Depends(get_store),
):
    """Record a payment against a transaction and return the refreshed list."""
    payment_id = await _run_write(store.add_payment(payment))
    logger.info("Payment recorded", user_id=user.id, payment_id=payment_id)

    return PaymentCreatedResponse(
        id=payment_id,
        payments=store.payments,
        total=len(store.payments),
        error=store.error,
    )


@router.patch(
    "/payments/{payment_id}",
    response_model=PaymentListResponse,
    responses={
        **COMMON_RESPONSES,
        400: {"description": "No fields to update", "model": ErrorResponse},
        404: {"description": "Payment not found", "model": ErrorResponse},
    },
    summary="Update payment",
)
async def update_payment(
    payment_id: str,
    updates: PaymentUpdate,
    user: User = Depends(require_manager),
    store: FinancialStore = Depends(get_store),
):
    """Only updates fields that are provided in the request."""
    if not updates.model_fields_set:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No fields to update",
        )

    await _run_write(store.update_payment(payment_id, updates))
    return _payments_response(store)


@router.delete(
    "/payments/{payment_id}",
    response_model=PaymentListResponse,
    responses=COMMON_RESPONSES,
    summary="Delete payment",
)
async def delete_payment(
    payment_id: str,
    user: User = Depends(require_manager),
    store: FinancialStore = Depends(get_store),
):
    """Delete a payment record and return the refreshed list."""
    await _run_write(store.delete_payment(payment_id))
    logger.info("Payment removed", user_id=user.id, payment_id=payment_id)
    return _payments_response(store)
