from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal, Inexact, InvalidOperation, localcontext
from enum import Enum
from typing import List, Optional, Tuple, Union

from ..core.errors import (
    InsufficientFundsError,
    InvalidAmountError,
    InvalidTargetError,
)

AmountLike = Union[Decimal, int, float, str]

ZERO = Decimal("0")


class EntryKind(str, Enum):
    OPENED = "OPENED"
    DEPOSIT = "DEPOSIT"
    WITHDRAWAL = "WITHDRAWAL"
    TRANSFER = "TRANSFER"


@dataclass(frozen=True)
class HistoryEntry:
    timestamp: datetime
    kind: EntryKind
    amount: Decimal
    note: Optional[str] = None


def to_amount(value: AmountLike) -> Decimal:
    """Coerce ``value`` to a finite Decimal.

    Floats go through ``str`` so ``0.1`` becomes ``Decimal("0.1")`` rather than
    its binary expansion.
    """
    if isinstance(value, bool):
        raise InvalidAmountError(f"Invalid amount: {value!r}")
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value))
        except InvalidOperation as exc:
            raise InvalidAmountError(f"Invalid amount: {value!r}") from exc
    if not amount.is_finite():
        raise InvalidAmountError(f"Invalid amount: {value!r}")
    return amount


def _exact_sum(balance: Decimal, delta: Decimal) -> Decimal:
    """Add ``delta`` to ``balance`` or refuse if the result would be rounded."""
    with localcontext() as ctx:
        ctx.traps[Inexact] = True
        try:
            return balance + delta
        except Inexact as exc:
            raise InvalidAmountError(
                "Amount exceeds the precision the ledger can hold."
            ) from exc


class Account:
    """A single holder's funds plus the audit trail of every change to them.

    All reads and writes go through ``lock``. The lock is re-entrant because
    ``transfer`` calls ``withdraw`` while already holding it.
    """

    def __init__(
        self,
        account_id: str,
        holder_name: str,
        initial_balance: AmountLike = ZERO,
    ) -> None:
        opening = to_amount(initial_balance)
        if opening < ZERO:
            raise InvalidAmountError("Initial balance cannot be negative.")
        if opening == ZERO:
            opening = opening.copy_abs()

        self._id = account_id
        self._holder_name = holder_name
        self._balance = opening
        self._history: List[HistoryEntry] = []
        self.created_at = datetime.now(UTC)
        self.lock = threading.RLock()
        self._append(EntryKind.OPENED, opening)

    @property
    def id(self) -> str:
        return self._id

    @property
    def holder_name(self) -> str:
        return self._holder_name

    def __repr__(self) -> str:
        return f"Account(id={self._id!r}, holder_name={self._holder_name!r})"

    def _append(
        self,
        kind: EntryKind,
        amount: Decimal,
        note: Optional[str] = None,
    ) -> HistoryEntry:
        entry = HistoryEntry(
            timestamp=datetime.now(UTC),
            kind=kind,
            amount=amount,
            note=note,
        )
        self._history.append(entry)
        return entry

    @staticmethod
    def _positive(value: AmountLike, operation: str) -> Decimal:
        amount = to_amount(value)
        if amount <= ZERO:
            raise InvalidAmountError(f"{operation} amount must be greater than zero.")
        return amount

    def deposit(self, amount: AmountLike) -> Decimal:
        value = self._positive(amount, "Deposit")
        with self.lock:
            self._balance = _exact_sum(self._balance, value)
            self._append(EntryKind.DEPOSIT, value)
            return self._balance

    def withdraw(self, amount: AmountLike) -> Decimal:
        value = self._positive(amount, "Withdrawal")
        with self.lock:
            if value > self._balance:
                raise InsufficientFundsError("Insufficient funds.")
            self._balance = _exact_sum(self._balance, -value)
            self._append(EntryKind.WITHDRAWAL, value)
            return self._balance

    def transfer(self, target: Optional[Account], amount: AmountLike) -> Decimal:
        """Move ``amount`` from this account to ``target``.

        The source ends up with a WITHDRAWAL and a TRANSFER entry, the target
        with a DEPOSIT entry. Transferring to the same account leaves the
        balance as it was and still records all three entries. Both locks are
        taken in id order.
        """
        if target is None:
            raise InvalidTargetError("Target account is invalid.")
        value = self._positive(amount, "Transfer")

        first, second = sorted((self, target), key=lambda account: (account.id, id(account)))
        with first.lock, second.lock:
            if value > self._balance:
                raise InsufficientFundsError("Insufficient funds for transfer.")
            # both legs must be exact before either is applied
            _exact_sum(self._balance, -value)
            _exact_sum(target._balance, value)
            self.withdraw(value)
            target.deposit(value)
            self._append(EntryKind.TRANSFER, value, note=target.holder_name)
            return self._balance

    def balance_snapshot(self) -> Decimal:
        with self.lock:
            return self._balance

    def history_snapshot(self) -> Tuple[HistoryEntry, ...]:
        with self.lock:
            return tuple(self._history)
