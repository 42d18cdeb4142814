from .account import Account, EntryKind, HistoryEntry, to_amount
from .ledger import Ledger

__all__ = ["Account", "EntryKind", "HistoryEntry", "Ledger", "to_amount"]
