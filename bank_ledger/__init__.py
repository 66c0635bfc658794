"""
Bank Ledger

An in-memory ledger for a small set of bank accounts with interest accrual,
account-to-account transfers and multi-account payments between users.
"""

__version__ = "1.0.0"
