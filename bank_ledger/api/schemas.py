"""
Pydantic schemas for API requests
"""

from pydantic import BaseModel, Field


class CreateAccountRequest(BaseModel):
    owner: str
    kind: str = Field(..., description="Account kind (Checking, Savings)")
    balance: float = Field(0, description="Initial balance")


class TransferRequest(BaseModel):
    from_account_id: str
    to_account_id: str
    amount: float


class PaymentRequest(BaseModel):
    from_user_id: str
    to_user_id: str
    amount: float
