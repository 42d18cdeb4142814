from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, Field

class AccountCreate(BaseModel):
    holder_name: str = Field(..., min_length=1, description="Name of the account holder")
    initial_balance: Decimal = Field(default=Decimal("0"), description="Opening balance, must not be negative")

class AccountResponse(BaseModel):
    id: str
    holder_name: str
    created_at: datetime
    balance: Decimal = Field(..., ge=0)

class HistoryEntryResponse(BaseModel):
    timestamp: datetime
    kind: Literal["OPENED", "DEPOSIT", "WITHDRAWAL", "TRANSFER"]
    amount: Decimal
    note: Optional[str] = Field(default=None, description="Destination holder for transfers")

class MoneyMovementRequest(BaseModel):
    amount: Decimal = Field(..., description="Amount to move, must be greater than zero")

class TransferRequest(BaseModel):
    source_account_id: str
    target_account_id: str
    amount: Decimal

class TransferResponse(BaseModel):
    source: AccountResponse
    target: AccountResponse

class HistoryResponse(BaseModel):
    account_id: str
    items: list[HistoryEntryResponse]
