"""
Balance query endpoints
"""

from fastapi import APIRouter, Depends

from .dependencies import get_ledger
from ..ledger import Ledger


router = APIRouter()


@router.get("/users/{user_id}/balance")
async def get_user_balance(user_id: str, ledger: Ledger = Depends(get_ledger)):
    """Get total balance across a user's accounts"""
    return {
        "user_id": user_id,
        "balance": ledger.get_total_user_balance(user_id),
        "account_ids": list(ledger.get_user_accounts(user_id))
    }


@router.get("/bank/balance")
async def get_bank_balance(ledger: Ledger = Depends(get_ledger)):
    """Get total balance of all customer accounts"""
    return {
        "balance": ledger.get_total_bank_balance(),
        "account_count": len(ledger)
    }
