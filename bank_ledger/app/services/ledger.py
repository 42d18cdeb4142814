from __future__ import annotations

import itertools
import logging
import threading
from decimal import Decimal
from typing import Dict, List

from ..core.errors import AccountNotFoundError, LedgerError
from .account import ZERO, Account, AmountLike


logger = logging.getLogger(__name__)


class Ledger:
    """Directory of accounts keyed by id.

    Ids come from a per-ledger counter, so two accounts never share one.
    """

    def __init__(self, id_prefix: str = "AC") -> None:
        self._id_prefix = id_prefix
        self._accounts: Dict[str, Account] = {}
        self._counter = itertools.count(1)
        self._lock = threading.Lock()

    def _next_id(self) -> str:
        return f"{self._id_prefix}{next(self._counter):08d}"

    # ------------------------------------------------------------------
    # Directory
    # ------------------------------------------------------------------
    def create_account(
        self,
        holder_name: str,
        initial_balance: AmountLike = ZERO,
    ) -> str:
        with self._lock:
            account_id = self._next_id()
            try:
                account = Account(account_id, holder_name, initial_balance)
            except LedgerError as exc:
                logger.warning(
                    "account.create.rejected",
                    extra={"holder_name": holder_name, "reason": str(exc)},
                )
                raise
            self._accounts[account_id] = account

        logger.info(
            "account.created",
            extra={"account_id": account_id, "holder_name": holder_name},
        )
        return account_id

    def lookup(self, account_id: str) -> Account:
        try:
            return self._accounts[account_id]
        except KeyError as exc:
            raise AccountNotFoundError(f"Account {account_id} not found") from exc

    def account_count(self) -> int:
        return len(self._accounts)

    def accounts(self) -> List[Account]:
        with self._lock:
            return list(self._accounts.values())

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------
    def deposit(self, account_id: str, amount: AmountLike) -> Decimal:
        account = self.lookup(account_id)
        try:
            balance = account.deposit(amount)
        except LedgerError as exc:
            logger.warning(
                "account.deposit.rejected",
                extra={"account_id": account_id, "reason": str(exc)},
            )
            raise
        logger.info(
            "account.deposit",
            extra={"account_id": account_id, "amount": str(amount), "balance": str(balance)},
        )
        return balance

    def withdraw(self, account_id: str, amount: AmountLike) -> Decimal:
        account = self.lookup(account_id)
        try:
            balance = account.withdraw(amount)
        except LedgerError as exc:
            logger.warning(
                "account.withdraw.rejected",
                extra={"account_id": account_id, "reason": str(exc)},
            )
            raise
        logger.info(
            "account.withdraw",
            extra={"account_id": account_id, "amount": str(amount), "balance": str(balance)},
        )
        return balance

    def transfer(
        self,
        source_account_id: str,
        target_account_id: str,
        amount: AmountLike,
    ) -> Decimal:
        source = self.lookup(source_account_id)
        target = self.lookup(target_account_id)
        try:
            balance = source.transfer(target, amount)
        except LedgerError as exc:
            logger.warning(
                "account.transfer.rejected",
                extra={
                    "source_account_id": source_account_id,
                    "target_account_id": target_account_id,
                    "reason": str(exc),
                },
            )
            raise
        logger.info(
            "account.transfer",
            extra={
                "source_account_id": source_account_id,
                "target_account_id": target_account_id,
                "amount": str(amount),
            },
        )
        return balance
