"""
Money movement endpoints: transfers, payments between users, interest
"""

from fastapi import APIRouter, HTTPException, Depends

from .dependencies import get_ledger
from .schemas import TransferRequest, PaymentRequest
from ..ledger import Ledger


router = APIRouter()


@router.post("/transfers")
async def transfer(request: TransferRequest, ledger: Ledger = Depends(get_ledger)):
    """Transfer money between two accounts"""
    if not ledger.transfer(request.from_account_id, request.to_account_id, request.amount):
        raise HTTPException(status_code=400, detail="Transfer rejected")

    return {
        "status": "completed",
        "from_account": ledger.get_account(request.from_account_id).to_dict(),
        "to_account": ledger.get_account(request.to_account_id).to_dict()
    }


@router.post("/payments")
async def make_payment(request: PaymentRequest, ledger: Ledger = Depends(get_ledger)):
    """Pay another user from any of the source user's accounts"""
    if not ledger.make_payment_between_users(request.from_user_id, request.to_user_id, request.amount):
        raise HTTPException(status_code=400, detail="Payment rejected")

    return {
        "status": "completed",
        "from_user_balance": ledger.get_total_user_balance(request.from_user_id),
        "to_user_balance": ledger.get_total_user_balance(request.to_user_id)
    }


@router.post("/interest")
async def generate_interest(ledger: Ledger = Depends(get_ledger)):
    """Pay interest to all accounts"""
    return {"total_interest_paid": ledger.generate_interest()}
