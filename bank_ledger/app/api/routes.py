from fastapi import APIRouter, Depends, status

from ..core.dependencies import get_ledger
from ..models import (
    AccountCreate,
    AccountResponse,
    HistoryEntryResponse,
    HistoryResponse,
    MoneyMovementRequest,
    TransferRequest,
    TransferResponse,
)
from ..services import Account, Ledger


router = APIRouter(prefix="/accounts", tags=["accounts"])

def _account_to_response(account: Account) -> AccountResponse:
    return AccountResponse(
        id=account.id,
        holder_name=account.holder_name,
        created_at=account.created_at,
        balance=account.balance_snapshot(),
    )

@router.post("", response_model=AccountResponse, status_code=status.HTTP_201_CREATED)
def create_account(
    payload: AccountCreate,
    ledger: Ledger = Depends(get_ledger),
) -> AccountResponse:
    account_id = ledger.create_account(payload.holder_name, payload.initial_balance)
    return _account_to_response(ledger.lookup(account_id))

@router.get("", response_model=list[AccountResponse])
def list_accounts(ledger: Ledger = Depends(get_ledger)) -> list[AccountResponse]:
    return [_account_to_response(account) for account in ledger.accounts()]

@router.get("/{account_id}", response_model=AccountResponse)
def get_account(
    account_id: str,
    ledger: Ledger = Depends(get_ledger),
) -> AccountResponse:
    return _account_to_response(ledger.lookup(account_id))

@router.post("/{account_id}/deposit", response_model=AccountResponse)
def deposit(
    account_id: str,
    payload: MoneyMovementRequest,
    ledger: Ledger = Depends(get_ledger),
) -> AccountResponse:
    ledger.deposit(account_id, payload.amount)
    return _account_to_response(ledger.lookup(account_id))

@router.post("/{account_id}/withdraw", response_model=AccountResponse)
def withdraw(
    account_id: str,
    payload: MoneyMovementRequest,
    ledger: Ledger = Depends(get_ledger),
) -> AccountResponse:
    ledger.withdraw(account_id, payload.amount)
    return _account_to_response(ledger.lookup(account_id))

@router.get("/{account_id}/history", response_model=HistoryResponse)
def get_history(
    account_id: str,
    ledger: Ledger = Depends(get_ledger),
) -> HistoryResponse:
    account = ledger.lookup(account_id)
    items = [
        HistoryEntryResponse(
            timestamp=entry.timestamp,
            kind=entry.kind.value,
            amount=entry.amount,
            note=entry.note,
        )
        for entry in account.history_snapshot()
    ]
    return HistoryResponse(account_id=account.id, items=items)

transfer_router = APIRouter(prefix="/transfers", tags=["transfers"])

@transfer_router.post("", response_model=TransferResponse)
def create_transfer(
    payload: TransferRequest,
    ledger: Ledger = Depends(get_ledger),
) -> TransferResponse:
    ledger.transfer(payload.source_account_id, payload.target_account_id, payload.amount)
    return TransferResponse(
        source=_account_to_response(ledger.lookup(payload.source_account_id)),
        target=_account_to_response(ledger.lookup(payload.target_account_id)),
    )

__all__ = ["router", "transfer_router"]
