"""
Financial dashboard view.

Renders the precomputed summary document into headline cards, top
debtor/creditor lists and a cash flow table. No figures are derived here.
"""

from app.formatting import format_currency
from app.models import (CashflowRow, DashboardResponse, EntityBalance,
                        EntityBalanceRow, FinancialSummary, SummaryCard)


def _entity_rows(balances: list[EntityBalance]) -> list[EntityBalanceRow]:
    return [
        EntityBalanceRow(
            entity_id=balance.entity_id,
            entity_name=balance.entity_name,
            formatted_amount=format_currency(balance.amount, balance.currency),
        )
        for balance in balances
    ]


def build_dashboard(summary: FinancialSummary) -> DashboardResponse:
    """
    Build the dashboard view for a summary document.

    Args:
        summary: Summary read from the financial summary collection

    Returns:
        Dashboard with formatted figures in the order they are displayed

    Cash flow receivables and payables are shown by magnitude with a fixed
    "+" or "-" sign; only the balance keeps its own sign.
    """
    cards = [
        SummaryCard(
            title="Total Receivables",
            amount=summary.total_receivables,
            formatted=format_currency(summary.total_receivables),
        ),
        SummaryCard(
            title="Total Payables",
            amount=summary.total_payables,
            formatted=format_currency(summary.total_payables),
        ),
        SummaryCard(
            title="Overdue Receivables",
            amount=summary.overdue_receivables,
            formatted=format_currency(summary.overdue_receivables),
            alert=True,
        ),
        SummaryCard(
            title="Overdue Payables",
            amount=summary.overdue_payables,
            formatted=format_currency(summary.overdue_payables),
            alert=True,
        ),
    ]

    cashflow = [
        CashflowRow(
            date=entry.date,
            receivables=f"+{format_currency(abs(entry.receivables))}",
            payables=f"-{format_currency(abs(entry.payables))}",
            balance=format_currency(entry.balance),
        )
        for entry in summary.cashflow
    ]

    return DashboardResponse(
        cards=cards,
        top_debtors=_entity_rows(summary.top_debtors),
        top_creditors=_entity_rows(summary.top_creditors),
        cashflow=cashflow,
    )
