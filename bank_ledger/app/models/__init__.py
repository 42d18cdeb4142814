from .schemas import (
    AccountCreate,
    AccountResponse,
    HistoryEntryResponse,
    HistoryResponse,
    MoneyMovementRequest,
    TransferRequest,
    TransferResponse,
)

__all__ = [
    "AccountCreate",
    "AccountResponse",
    "HistoryEntryResponse",
    "HistoryResponse",
    "MoneyMovementRequest",
    "TransferRequest",
    "TransferResponse",
]
