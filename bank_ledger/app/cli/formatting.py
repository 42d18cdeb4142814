from __future__ import annotations

from decimal import Decimal

from ..services import Account, EntryKind, HistoryEntry

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_money(amount: Decimal, symbol: str = "$") -> str:
    return f"{symbol}{amount:,.2f}"


def describe_entry(entry: HistoryEntry, symbol: str = "$") -> str:
    money = format_money(entry.amount, symbol)
    if entry.kind is EntryKind.OPENED:
        return f"Account created with initial balance: {money}"
    if entry.kind is EntryKind.DEPOSIT:
        return f"Deposited: {money}"
    if entry.kind is EntryKind.WITHDRAWAL:
        return f"Withdrew: {money}"
    return f"Transferred: {money} to {entry.note}"


def format_entry(entry: HistoryEntry, symbol: str = "$") -> str:
    local_time = entry.timestamp.astimezone()
    return f"[{local_time.strftime(TIMESTAMP_FORMAT)}] {describe_entry(entry, symbol)}"


def format_balance(account: Account, symbol: str = "$") -> str:
    return (
        f"Account Holder: {account.holder_name}, "
        f"Account Number: {account.id}, "
        f"Balance: {format_money(account.balance_snapshot(), symbol)}"
    )


def format_history(account: Account, symbol: str = "$") -> list[str]:
    lines = [f"Transaction History for {account.holder_name} ({account.id}):"]
    lines.extend(format_entry(entry, symbol) for entry in account.history_snapshot())
    return lines
