"""
Account Module

Defines account kinds, the account specification used to open accounts, and
the Account record itself. An account never holds a negative balance: every
balance mutation goes through Account.set_balance, which rejects negative
amounts and leaves the account unchanged.
"""

import math
from dataclasses import dataclass
from enum import Enum
from numbers import Real
from typing import Any, Dict, Mapping, Union


class AccountKind(Enum):
    """Account categories; the kind selects the interest rate"""
    CHECKING = "Checking"
    SAVINGS = "Savings"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.strip().lower():
                    return member
        return None


def is_valid_amount(value: Any) -> bool:
    """Check that value is a finite, non-negative real number"""
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    try:
        finite = math.isfinite(value)
    except OverflowError:
        # ints beyond the float range
        return False
    return finite and value >= 0


@dataclass(frozen=True)
class AccountSpec:
    """
    Specification for opening an account
    """
    owner: str
    kind: AccountKind
    balance: float = 0

    def __post_init__(self):
        if not isinstance(self.owner, str) or not self.owner:
            raise ValueError("Account owner must be a non-empty string")

        object.__setattr__(self, 'kind', AccountKind(self.kind))

        if not is_valid_amount(self.balance):
            raise ValueError(f"Initial balance must be a non-negative number, got {self.balance!r}")

    @classmethod
    def from_value(cls, value: Union['AccountSpec', 'Account', Mapping[str, Any]]) -> 'AccountSpec':
        """
        Build a spec from another spec, an existing Account, or a mapping

        Mappings use the keys owner/kind/balance; userId and type are
        accepted as aliases for owner and kind.
        """
        if isinstance(value, AccountSpec):
            return value
        if isinstance(value, Account):
            return cls(owner=value.owner, kind=value.kind, balance=value.get_balance())
        if isinstance(value, Mapping):
            owner = value.get('owner', value.get('userId'))
            kind = value.get('kind', value.get('type'))
            return cls(owner=owner, kind=kind, balance=value.get('balance', 0))
        raise ValueError(f"Cannot build an account specification from {type(value).__name__}")


class Account:
    """
    Bank account owned by one user, of one kind

    Owner and kind are fixed at creation. The balance can only change via
    set_balance.
    """

    def __init__(self, owner: str, kind: Union[AccountKind, str], balance: float = 0):
        spec = AccountSpec(owner=owner, kind=kind, balance=balance)
        self._owner = spec.owner
        self._kind = spec.kind
        self._balance = spec.balance

    @classmethod
    def from_spec(cls, spec: AccountSpec) -> 'Account':
        return cls(spec.owner, spec.kind, spec.balance)

    @property
    def owner(self) -> str:
        return self._owner

    @property
    def kind(self) -> AccountKind:
        return self._kind

    @property
    def is_savings(self) -> bool:
        """Check if this is a savings account"""
        return self._kind == AccountKind.SAVINGS

    def get_balance(self) -> float:
        """Get the current balance"""
        return self._balance

    def set_balance(self, balance: float) -> bool:
        """
        Set the balance of the account

        Negative (or non-numeric) balances are rejected and the account is
        left unchanged.

        Returns:
            True if the balance was updated
        """
        if not is_valid_amount(balance):
            return False
        self._balance = balance
        return True

    def copy(self) -> 'Account':
        """Return a detached copy of this account"""
        return Account(self._owner, self._kind, self._balance)

    def to_dict(self) -> Dict[str, Any]:
        """Convert Account to dictionary for serialization"""
        return {
            "owner": self._owner,
            "kind": self._kind.value,
            "balance": self._balance
        }

    def __eq__(self, other) -> bool:
        if not isinstance(other, Account):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"Account(owner={self._owner!r}, kind={self._kind.value!r}, balance={self._balance!r})"
