"""Demonstration accounts for the bank ledger

Run with: python -m bank_ledger.seed
"""

from typing import Optional

from .config import LedgerConfig
from .ledger import Ledger


DEFAULT_ACCOUNTS = {
    1: {"owner": "Ben123", "kind": "Checking", "balance": 110},
    2: {"owner": "Ben123", "kind": "Savings", "balance": 20},
    3: {"owner": "Ben123", "kind": "Checking", "balance": 200},
    4: {"owner": "Amy456", "kind": "Savings", "balance": 1000},
}


def build_demo_ledger(config: Optional[LedgerConfig] = None) -> Ledger:
    """Create a ledger holding the demonstration accounts"""
    return Ledger(DEFAULT_ACCOUNTS, config=config)


def main():
    ledger = build_demo_ledger()
    for account_id in ledger.account_ids():
        account = ledger.get_account(account_id)
        print(f"{account_id:>4}  {account.owner:<10} {account.kind.value:<9} {account.get_balance():>10,.2f}")
    print(f"Total: {ledger.get_total_bank_balance():,.2f}")


if __name__ == "__main__":
    main()
