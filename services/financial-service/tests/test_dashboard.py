"""Tests for the dashboard view builder."""

from datetime import date

from app.dashboard import build_dashboard
from app.models import FinancialSummary
from factories import make_summary_row


def test_cards_in_display_order() -> None:
    """Four headline cards, overdue ones flagged."""
    dashboard = build_dashboard(FinancialSummary.model_validate(make_summary_row()))

    assert [card.title for card in dashboard.cards] == [
        "Total Receivables",
        "Total Payables",
        "Overdue Receivables",
        "Overdue Payables",
    ]
    assert [card.alert for card in dashboard.cards] == [False, False, True, True]
    assert dashboard.cards[0].formatted == "$152,340.50"
    assert dashboard.cards[0].amount == 152340.5


def test_entity_rows_use_their_own_currency() -> None:
    """Top debtors and creditors keep their currency."""
    dashboard = build_dashboard(FinancialSummary.model_validate(make_summary_row()))

    assert dashboard.top_debtors[0].entity_name == "Acme Imports"
    assert dashboard.top_debtors[0].formatted_amount == "$45,000.00"
    assert dashboard.top_creditors[0].formatted_amount == "€30,000.00"


def test_cashflow_rows_are_signed() -> None:
    """Receivables are shown positive, payables negative."""
    dashboard = build_dashboard(FinancialSummary.model_validate(make_summary_row()))

    first, second = dashboard.cashflow
    assert first.date == date(2024, 3, 1)
    assert first.receivables == "+$5,000.00"
    assert first.payables == "-$2,500.00"
    assert first.balance == "$2,500.00"
    assert second.balance == "-$1,500.00"


def test_cashflow_payables_stored_negative_keep_single_sign() -> None:
    """Payables stored as negative numbers are not double-signed."""
    summary = FinancialSummary.model_validate(
        {
            "cashflow": [
                {"date": "2024-03-03", "receivables": 0.0, "payables": -5.0, "balance": -5.0},
            ]
        }
    )

    row = build_dashboard(summary).cashflow[0]

    assert row.payables == "-$5.00"
    assert row.receivables == "+$0.00"
    assert row.balance == "-$5.00"


def test_empty_summary() -> None:
    """A summary with only defaults still renders the cards."""
    dashboard = build_dashboard(FinancialSummary())

    assert len(dashboard.cards) == 4
    assert all(card.formatted == "$0.00" for card in dashboard.cards)
    assert dashboard.top_debtors == []
    assert dashboard.cashflow == []
