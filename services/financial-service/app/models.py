"""Pydantic models for financial documents and request/response validation."""

from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


class TransactionType(str, Enum):
    """Direction of a financial obligation."""

    PAYABLE = "payable"
    RECEIVABLE = "receivable"


class TransactionStatus(str, Enum):
    """Lifecycle status of a transaction."""

    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class PaymentMethod(str, Enum):
    """How a payment was made."""

    BANK_TRANSFER = "bank_transfer"
    CREDIT_CARD = "credit_card"
    CHECK = "check"
    CASH = "cash"
    OTHER = "other"


class EntityType(str, Enum):
    """Kind of counterparty."""

    CUSTOMER = "customer"
    VENDOR = "vendor"
    AGENT = "agent"


class RelatedDocumentType(str, Enum):
    """Kind of business document a transaction refers to."""

    INVOICE = "invoice"
    QUOTE = "quote"
    SHIPMENT = "shipment"
    OTHER = "other"


class EntityRef(BaseModel):
    """Customer, vendor or agent associated with a transaction."""

    id: str
    type: EntityType
    name: str
    document: Optional[str] = Field(None, description="Tax or registration number")


class RelatedDocument(BaseModel):
    """Reference to an invoice, quote or shipment."""

    type: RelatedDocumentType
    id: str
    number: str


class Attachment(BaseModel):
    """File attached to a transaction or payment."""

    name: str
    url: str
    type: str
    uploaded_at: datetime


class CreatedBy(BaseModel):
    """User who created a document."""

    id: str
    name: str


class TransactionCreate(BaseModel):
    """Request model for creating a transaction."""

    type: TransactionType
    status: TransactionStatus = TransactionStatus.PENDING
    reference_number: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., max_length=1000)
    amount: float
    currency: str = Field(..., min_length=3, max_length=3, description="ISO 4217 code")
    exchange_rate: Optional[float] = Field(None, gt=0)
    due_date: date
    issue_date: date
    payment_date: Optional[date] = None
    payment_method: Optional[PaymentMethod] = None
    entity: EntityRef
    related_documents: Optional[list[RelatedDocument]] = None
    notes: Optional[str] = Field(None, max_length=2000)
    attachments: Optional[list[Attachment]] = None
    created_by: CreatedBy


class Transaction(TransactionCreate):
    """Receivable or payable obligation as stored in the transactions collection."""

    id: str
    created_at: datetime
    updated_at: datetime


class TransactionUpdate(BaseModel):
    """Request model for a partial transaction update."""

    type: Optional[TransactionType] = None
    status: Optional[TransactionStatus] = None
    reference_number: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=1000)
    amount: Optional[float] = None
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    exchange_rate: Optional[float] = Field(None, gt=0)
    due_date: Optional[date] = None
    issue_date: Optional[date] = None
    payment_date: Optional[date] = None
    payment_method: Optional[PaymentMethod] = None
    entity: Optional[EntityRef] = None
    related_documents: Optional[list[RelatedDocument]] = None
    notes: Optional[str] = Field(None, max_length=2000)
    attachments: Optional[list[Attachment]] = None

    @field_validator(
        "type",
        "status",
        "reference_number",
        "description",
        "amount",
        "currency",
        "due_date",
        "issue_date",
        "entity",
    )
    @classmethod
    def reject_null(cls, value, info):
        """Fields required on a stored transaction may be omitted but not cleared."""
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value


class PaymentCreate(BaseModel):
    """Request model for recording a payment."""

    transaction_id: str
    amount: float
    currency: str = Field(..., min_length=3, max_length=3, description="ISO 4217 code")
    exchange_rate: Optional[float] = Field(None, gt=0)
    payment_date: date
    payment_method: PaymentMethod
    reference_number: str = Field(..., min_length=1, max_length=100)
    notes: Optional[str] = Field(None, max_length=2000)
    attachments: Optional[list[Attachment]] = None
    created_by: CreatedBy


class PaymentRecord(PaymentCreate):
    """Payment applied against a transaction."""

    id: str
    created_at: datetime


class PaymentUpdate(BaseModel):
    """Request model for a partial payment update."""

    transaction_id: Optional[str] = None
    amount: Optional[float] = None
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    exchange_rate: Optional[float] = Field(None, gt=0)
    payment_date: Optional[date] = None
    payment_method: Optional[PaymentMethod] = None
    reference_number: Optional[str] = Field(None, min_length=1, max_length=100)
    notes: Optional[str] = Field(None, max_length=2000)
    attachments: Optional[list[Attachment]] = None

    @field_validator(
        "transaction_id",
        "amount",
        "currency",
        "payment_date",
        "payment_method",
        "reference_number",
    )
    @classmethod
    def reject_null(cls, value, info):
        """Fields required on a stored payment may be omitted but not cleared."""
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value


class CashflowEntry(BaseModel):
    """Dated net balance combining receivables and payables."""

    date: date
    receivables: float
    payables: float
    balance: float


class EntityBalance(BaseModel):
    """Outstanding amount for one debtor or creditor."""

    entity_id: str
    entity_name: str
    amount: float
    currency: str


class FinancialSummary(BaseModel):
    """Precomputed aggregate materialized outside this service."""

    id: Optional[str] = None
    total_receivables: float = 0.0
    total_payables: float = 0.0
    overdue_receivables: float = 0.0
    overdue_payables: float = 0.0
    cashflow: list[CashflowEntry] = Field(default_factory=list)
    top_debtors: list[EntityBalance] = Field(default_factory=list)
    top_creditors: list[EntityBalance] = Field(default_factory=list)


def to_document(model: BaseModel, partial: bool = False) -> dict[str, Any]:
    """
    Serialize a model into a JSON-compatible document.

    Args:
        model: Model to serialize
        partial: Only include fields explicitly set by the caller

    Returns:
        Dictionary ready to be written to the document store
    """
    if partial:
        return model.model_dump(mode="json", exclude_unset=True)
    return model.model_dump(mode="json", exclude_none=True)


# Dashboard view models


class SummaryCard(BaseModel):
    """One headline figure on the dashboard."""

    title: str
    amount: float
    formatted: str
    alert: bool = False


class EntityBalanceRow(BaseModel):
    """Top debtor or creditor line."""

    entity_id: str
    entity_name: str
    formatted_amount: str


class CashflowRow(BaseModel):
    """Cash flow line with signed, formatted figures."""

    date: date
    receivables: str
    payables: str
    balance: str


class DashboardResponse(BaseModel):
    """Financial dashboard view."""

    cards: list[SummaryCard]
    top_debtors: list[EntityBalanceRow]
    top_creditors: list[EntityBalanceRow]
    cashflow: list[CashflowRow]


# API envelopes


class TransactionListResponse(BaseModel):
    """Response model for the transactions tab."""

    transactions: list[Transaction]
    total: int
    error: Optional[str] = Field(None, description="Set when the refresh after a write failed")


class PaymentListResponse(BaseModel):
    """Response model for the payments tab."""

    payments: list[PaymentRecord]
    total: int
    error: Optional[str] = Field(None, description="Set when the refresh after a write failed")


class TransactionCreatedResponse(TransactionListResponse):
    """Response model for a created transaction."""

    id: str


class PaymentCreatedResponse(PaymentListResponse):
    """Response model for a recorded payment."""

    id: str


class ErrorResponse(BaseModel):
    """Error response model."""

    detail: str
    error_code: Optional[str] = None
