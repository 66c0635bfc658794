"""
Account management endpoints
"""

from fastapi import APIRouter, HTTPException, Depends, status

from .dependencies import get_ledger
from .schemas import CreateAccountRequest
from ..ledger import Ledger


router = APIRouter()


@router.get("")
async def list_accounts(ledger: Ledger = Depends(get_ledger)):
    """List all accounts"""
    result = []
    for account_id in ledger.account_ids():
        account = ledger.get_account(account_id)
        if account:
            result.append({"id": account_id, **account.to_dict()})
    return {"accounts": result}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_account(
    request: CreateAccountRequest,
    ledger: Ledger = Depends(get_ledger)
):
    """Open a new account"""
    try:
        account_id = ledger.add_account({
            "owner": request.owner,
            "kind": request.kind,
            "balance": request.balance
        })
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "account_id": account_id,
        "message": "Account created successfully"
    }


@router.get("/{account_id}")
async def get_account(account_id: str, ledger: Ledger = Depends(get_ledger)):
    """Get account details"""
    account = ledger.get_account(account_id)
    if not account:
        raise HTTPException(status_code=404, detail="Account not found")

    return {"id": account_id, **account.to_dict()}


@router.delete("/{account_id}")
async def delete_account(account_id: str, ledger: Ledger = Depends(get_ledger)):
    """Delete an account; unknown ids are ignored"""
    return {"deleted": ledger.delete_account(account_id)}
