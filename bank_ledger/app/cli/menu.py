from __future__ import annotations

import argparse
import logging
import sys
from decimal import Decimal
from typing import Callable, Dict, Optional, TextIO

from ..core.config import get_settings
from ..core.errors import AccountNotFoundError, LedgerError
from ..services import Account, Ledger
from .formatting import format_balance, format_history, format_money
from .parsing import AmountParseError, parse_amount


logger = logging.getLogger(__name__)

MENU = """
=== Banking System ===
1. Create Account
2. Deposit
3. Withdraw
4. Transfer
5. Display Account Balance
6. View Transaction History
7. Exit"""


class Menu:
    """Numbered text menu driving a ``Ledger``.

    Input and output are plain text streams so a scripted session can be fed
    through ``io.StringIO``. End of input behaves like choosing Exit.
    """

    def __init__(
        self,
        ledger: Ledger,
        stdin: TextIO,
        stdout: TextIO,
        currency_symbol: str = "$",
    ) -> None:
        self.ledger = ledger
        self._stdin = stdin
        self._stdout = stdout
        self._symbol = currency_symbol
        self._actions: Dict[str, Callable[[], None]] = {
            "1": self.create_account,
            "2": self.deposit,
            "3": self.withdraw,
            "4": self.transfer,
            "5": self.display_balance,
            "6": self.view_history,
        }

    # ------------------------------------------------------------------
    # I/O helpers
    # ------------------------------------------------------------------
    def _say(self, message: str) -> None:
        print(message, file=self._stdout)

    def _ask(self, prompt: str) -> str:
        self._stdout.write(prompt)
        self._stdout.flush()
        line = self._stdin.readline()
        if line == "":
            raise EOFError
        return line.strip()

    def _money(self, amount: Decimal) -> str:
        return format_money(amount, self._symbol)

    def _ask_amount(self, prompt: str, error: str = "Invalid amount.") -> Optional[Decimal]:
        try:
            return parse_amount(self._ask(prompt))
        except AmountParseError:
            self._say(error)
            return None

    def _select_account(self, prompt: str = "Enter Account Number: ") -> Optional[Account]:
        try:
            return self.ledger.lookup(self._ask(prompt))
        except AccountNotFoundError:
            self._say("Account not found.")
            return None

    # ------------------------------------------------------------------
    # Loop
    # ------------------------------------------------------------------
    def run(self) -> None:
        while True:
            self._say(MENU)
            try:
                choice = self._ask("Select an option: ")
                if choice == "7":
                    return
                action = self._actions.get(choice)
                if action is None:
                    self._say("Invalid option. Please try again.")
                    continue
                action()
            except EOFError:
                self._say("")
                return
            except LedgerError as exc:
                self._say(str(exc))

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------
    def create_account(self) -> None:
        name = self._ask("Enter Account Holder Name: ")
        initial_balance = self._ask_amount("Enter Initial Balance: ", "Invalid balance amount.")
        if initial_balance is None:
            return
        account_id = self.ledger.create_account(name, initial_balance)
        self._say(f"Account created successfully. Account Number: {account_id}")

    def deposit(self) -> None:
        account = self._select_account()
        if account is None:
            return
        amount = self._ask_amount("Enter deposit amount: ")
        if amount is None:
            return
        self.ledger.deposit(account.id, amount)
        self._say(f"Deposited {self._money(amount)} successfully.")

    def withdraw(self) -> None:
        account = self._select_account()
        if account is None:
            return
        amount = self._ask_amount("Enter withdrawal amount: ")
        if amount is None:
            return
        self.ledger.withdraw(account.id, amount)
        self._say(f"Withdrew {self._money(amount)} successfully.")

    def transfer(self) -> None:
        source = self._select_account("Enter your account number: ")
        if source is None:
            return
        target = self._select_account("Enter target account number: ")
        if target is None:
            return
        amount = self._ask_amount("Enter transfer amount: ")
        if amount is None:
            return
        self.ledger.transfer(source.id, target.id, amount)
        self._say(f"Transferred {self._money(amount)} to {target.holder_name} successfully.")

    def display_balance(self) -> None:
        account = self._select_account()
        if account is not None:
            self._say(format_balance(account, self._symbol))

    def view_history(self) -> None:
        account = self._select_account()
        if account is not None:
            for line in format_history(account, self._symbol):
                self._say(line)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bank-ledger",
        description="Interactive in-memory bank ledger.",
    )
    parser.add_argument(
        "--log-level",
        default="ERROR",
        help="Logging level written to stderr (default: ERROR)",
    )
    parser.add_argument(
        "--currency-symbol",
        default=None,
        help="Symbol printed in front of amounts (default: LEDGER_CURRENCY_SYMBOL or $)",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.ERROR),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    ledger = Ledger(id_prefix=settings.account_id_prefix)
    symbol = args.currency_symbol or settings.currency_symbol
    logger.info("menu.started", extra={"currency_symbol": symbol})
    Menu(ledger, sys.stdin, sys.stdout, currency_symbol=symbol).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
