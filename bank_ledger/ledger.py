"""
Ledger Module

The Ledger owns every account it holds, keyed by a ledger-assigned id, and
implements the operations that must preserve system-wide invariants:

- no account ever holds a negative balance
- transfers and payments conserve the total money held by the bank
- no two live accounts ever share an id, including after deletions

Invalid requests (unknown accounts, negative or non-numeric amounts,
insufficient funds) are silently rejected: nothing is mutated and the
mutator returns False. Accounts are only ever handed out as detached copies.
"""

import threading
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .accounts import Account, AccountKind, AccountSpec, is_valid_amount
from .config import LedgerConfig, get_config
from .logging_config import get_logger, log_action


class Ledger:
    """
    In-memory ledger of customer accounts
    """

    def __init__(
        self,
        accounts: Optional[Mapping[Any, Any]] = None,
        config: Optional[LedgerConfig] = None
    ):
        """
        Args:
            accounts: Initial mapping of account id to account specification
                (AccountSpec, Account, or a mapping with owner/kind/balance)
            config: Ledger configuration (defaults to the global config)
        """
        self.config = config or get_config()
        self.logger = get_logger("bank_ledger.ledger")
        self._lock = threading.RLock()
        self._accounts: Dict[str, Account] = {}

        highest_id = 0
        for account_id, value in (accounts or {}).items():
            key = str(account_id)
            if key in self._accounts:
                raise ValueError(f"Duplicate account id {key}")
            self._accounts[key] = Account.from_spec(AccountSpec.from_value(value))
            if key.isdigit():
                highest_id = max(highest_id, int(key))

        # Ids are never reused, so the counter only moves forward
        self._next_id = highest_id + 1

    # ------------------------------------------------------------------
    # Account lifecycle
    # ------------------------------------------------------------------

    def add_account(self, spec: Any) -> str:
        """
        Open a new account and assign it a fresh id

        Args:
            spec: AccountSpec, Account, or mapping with owner/kind/balance

        Returns:
            Id of the newly created account

        Raises:
            ValueError: If the specification is malformed
        """
        account = Account.from_spec(AccountSpec.from_value(spec))

        with self._lock:
            account_id = self._generate_account_id()
            self._accounts[account_id] = account

        log_action(
            self.logger, "info", "Account created",
            user_id=account.owner, action="add_account", resource=f"account:{account_id}",
            extra={"kind": account.kind.value, "balance": account.get_balance()}
        )
        return account_id

    def delete_account(self, account_id: Any) -> bool:
        """
        Delete account by id; unknown ids are ignored

        Returns:
            True if an account was removed
        """
        with self._lock:
            account = self._accounts.pop(str(account_id), None)

        if account is None:
            return False

        log_action(
            self.logger, "info", "Account deleted",
            user_id=account.owner, action="delete_account", resource=f"account:{account_id}"
        )
        return True

    def get_account(self, account_id: Any) -> Optional[Account]:
        """Get a copy of the account with this id, or None"""
        with self._lock:
            account = self._accounts.get(str(account_id))
            return account.copy() if account else None

    def get_user_accounts(self, user_id: str) -> Dict[str, Account]:
        """Get copies of all accounts owned by a user, in insertion order"""
        with self._lock:
            return {
                account_id: account.copy()
                for account_id, account in self._accounts.items()
                if account.owner == user_id
            }

    def account_ids(self) -> List[str]:
        """Get all live account ids in insertion order"""
        with self._lock:
            return list(self._accounts)

    def __len__(self) -> int:
        with self._lock:
            return len(self._accounts)

    def __contains__(self, account_id: Any) -> bool:
        with self._lock:
            return str(account_id) in self._accounts

    def _generate_account_id(self) -> str:
        account_id = str(self._next_id)
        while account_id in self._accounts:
            self._next_id += 1
            account_id = str(self._next_id)
        self._next_id += 1
        return account_id

    # ------------------------------------------------------------------
    # Interest
    # ------------------------------------------------------------------

    def interest_rate_for(self, kind: AccountKind) -> float:
        """Interest rate paid to accounts of the given kind"""
        if kind == AccountKind.SAVINGS:
            return self.config.savings_interest_rate
        return self.config.default_interest_rate

    def generate_interest(self) -> float:
        """
        Pay interest to all accounts

        Savings accounts earn the savings rate; every other account earns
        the default rate.

        Returns:
            Total amount of interest paid
        """
        total_interest_paid = 0.0

        with self._lock:
            for account in self._accounts.values():
                rate = self.interest_rate_for(account.kind)
                balance = account.get_balance()
                interest = balance * rate

                if account.set_balance(balance + interest):
                    total_interest_paid += interest

        log_action(
            self.logger, "info", "Interest paid",
            action="generate_interest",
            extra={"total_interest_paid": total_interest_paid, "accounts": len(self)}
        )
        return total_interest_paid

    # ------------------------------------------------------------------
    # Transfers
    # ------------------------------------------------------------------

    def transfer(self, source_account_id: Any, dest_account_id: Any, amount: float) -> bool:
        """
        Transfer money between two accounts

        The transfer happens in full or not at all: it is rejected when either
        account is unknown, the amount is not a non-negative number, the
        source cannot cover the amount, or the destination balance would
        overflow.

        Returns:
            True if the money was moved
        """
        with self._lock:
            source = self._accounts.get(str(source_account_id))
            dest = self._accounts.get(str(dest_account_id))

            reason = None
            if source is None or dest is None:
                reason = "unknown account"
            elif not is_valid_amount(amount):
                reason = "invalid amount"
            elif source.get_balance() < amount:
                reason = "insufficient funds"
            elif not self._move(source, dest, amount):
                reason = "destination overflow"

            if reason:
                self._log_rejection(
                    "transfer", reason, amount,
                    resource=f"account:{source_account_id}->account:{dest_account_id}"
                )
                return False

        log_action(
            self.logger, "info", "Transfer completed",
            action="transfer", resource=f"account:{source_account_id}->account:{dest_account_id}",
            extra={"amount": amount}
        )
        return True

    def make_payment_between_users(self, source_user_id: str, dest_user_id: str, amount: float) -> bool:
        """
        Transfer money between two users

        Money is drawn from the source user's accounts in order, taking the
        whole remaining amount from the first account that covers it and
        draining accounts that do not. It is deposited in the first account
        owned by the destination user.

        The payment is rejected when the amount is not a non-negative number,
        the destination user has no account, the source user's combined
        balance cannot cover it, or the destination balance would overflow.
        A payment from a user to themselves is also rejected, since the
        source user's total could not decrease by the amount.

        Balances are floats, so when every source account has to be drained
        the amount delivered equals the sum of the drained balances, which
        can differ from amount by rounding error. Money is still conserved.

        Returns:
            True if the payment was made
        """
        with self._lock:
            source_accounts = []
            available_balance = 0
            dest = None

            for account in self._accounts.values():
                if account.owner == source_user_id:
                    source_accounts.append(account)
                    available_balance += account.get_balance()
                if dest is None and account.owner == dest_user_id:
                    dest = account

            reason = None
            draws = []
            if not is_valid_amount(amount):
                reason = "invalid amount"
            elif source_user_id == dest_user_id:
                reason = "source and destination user are the same"
            elif dest is None:
                reason = "destination user has no account"
            elif available_balance < amount:
                reason = "insufficient funds"
            else:
                draws = self._plan_draws(source_accounts, amount)
                if not is_valid_amount(dest.get_balance() + sum(draw for _, draw in draws)):
                    reason = "destination overflow"
                elif not self._apply_draws(draws, dest):
                    reason = "destination overflow"

            if reason:
                self._log_rejection(
                    "make_payment_between_users", reason, amount,
                    user_id=source_user_id, resource=f"user:{dest_user_id}"
                )
                return False

        log_action(
            self.logger, "info", "Payment between users completed",
            user_id=source_user_id, action="make_payment_between_users",
            resource=f"user:{dest_user_id}", extra={"amount": amount}
        )
        return True

    def _plan_draws(self, source_accounts: List[Account], amount: float) -> List[Tuple[Account, float]]:
        draws = []
        remaining = amount
        for account in source_accounts:
            if remaining <= 0:
                break

            balance = account.get_balance()
            if balance >= remaining:
                draws.append((account, remaining))
                remaining = 0
            elif balance > 0:
                draws.append((account, balance))
                remaining -= balance
        return draws

    def _apply_draws(self, draws: List[Tuple[Account, float]], dest: Account) -> bool:
        snapshot = [(account, account.get_balance()) for account, _ in draws]
        snapshot.append((dest, dest.get_balance()))

        for account, draw in draws:
            if not self._move(account, dest, draw):
                for touched, balance in snapshot:
                    touched.set_balance(balance)
                return False
        return True

    def _move(self, source: Account, dest: Account, amount: float) -> bool:
        # Callers hold the lock and have checked that source covers amount
        if source is dest:
            return True

        new_source_balance = source.get_balance() - amount
        new_dest_balance = dest.get_balance() + amount
        if not (is_valid_amount(new_source_balance) and is_valid_amount(new_dest_balance)):
            return False

        source.set_balance(new_source_balance)
        dest.set_balance(new_dest_balance)
        return True

    def _log_rejection(self, action: str, reason: str, amount: Any,
                       user_id: Optional[str] = None, resource: Optional[str] = None) -> None:
        log_action(
            self.logger, "warning", f"Rejected {action}: {reason}",
            user_id=user_id, action=action, resource=resource,
            extra={"amount": amount, "reason": reason}
        )

    # ------------------------------------------------------------------
    # Balances
    # ------------------------------------------------------------------

    def get_total_user_balance(self, user_id: str) -> float:
        """Get total balance from all accounts belonging to a user"""
        with self._lock:
            return sum(
                account.get_balance()
                for account in self._accounts.values()
                if account.owner == user_id
            )

    def get_total_bank_balance(self) -> float:
        """Get total balance of all customer accounts"""
        with self._lock:
            return sum(account.get_balance() for account in self._accounts.values())
