"""
Financial Service Package.

Accounts receivable and payable tracking, payment records and the
financial summary dashboard, backed by Supabase tables.
"""

__version__ = "1.0.0"
