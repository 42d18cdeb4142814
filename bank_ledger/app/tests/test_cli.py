import io
from datetime import UTC, datetime
from decimal import Decimal

import pytest

from ..cli import AmountParseError, Menu, format_money, main, parse_amount
from ..cli.menu import build_parser
from ..cli.formatting import describe_entry, format_balance, format_entry
from ..core.config import get_settings
from ..services import Account, EntryKind, HistoryEntry, Ledger


def run_menu(ledger: Ledger, *lines: str) -> str:
    stdin = io.StringIO("".join(f"{line}\n" for line in lines))
    stdout = io.StringIO()
    Menu(ledger, stdin, stdout).run()
    return stdout.getvalue()


@pytest.mark.parametrize(
    ("text", "expected"),
    [("50", Decimal("50")), (" 12.75 ", Decimal("12.75")), ("1,000.50", Decimal("1000.50")), ("-5", Decimal("-5"))],
)
def test_parse_amount(text: str, expected: Decimal) -> None:
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "ten", "1.2.3", "nan", "Infinity"])
def test_parse_amount_rejects(text: str) -> None:
    with pytest.raises(AmountParseError):
        parse_amount(text)


def test_format_money() -> None:
    assert format_money(Decimal("1234.5")) == "$1,234.50"
    assert format_money(Decimal("0"), "€") == "€0.00"


def test_describe_entries() -> None:
    ts = datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)
    transfer = HistoryEntry(ts, EntryKind.TRANSFER, Decimal("40"), note="Bob")

    assert describe_entry(transfer) == "Transferred: $40.00 to Bob"
    assert describe_entry(HistoryEntry(ts, EntryKind.WITHDRAWAL, Decimal("1"))) == "Withdrew: $1.00"
    local_stamp = ts.astimezone().strftime("%Y-%m-%d %H:%M:%S")
    assert format_entry(HistoryEntry(ts, EntryKind.DEPOSIT, Decimal("2"))) == (
        f"[{local_stamp}] Deposited: $2.00"
    )


def test_history_lines_use_local_time() -> None:
    ts = datetime(2024, 6, 30, 23, 59, 59, tzinfo=UTC)
    line = format_entry(HistoryEntry(ts, EntryKind.DEPOSIT, Decimal("2")))

    assert line.startswith(f"[{ts.astimezone().strftime('%Y-%m-%d %H:%M:%S')}]")


def test_format_balance() -> None:
    account = Account("AC00000001", "Alice", Decimal("99.5"))
    assert format_balance(account) == (
        "Account Holder: Alice, Account Number: AC00000001, Balance: $99.50"
    )


def test_menu_create_and_deposit() -> None:
    ledger = Ledger()

    output = run_menu(ledger, "1", "Alice", "100", "2", "AC00000001", "50", "7")

    assert "Account created successfully. Account Number: AC00000001" in output
    assert "Deposited $50.00 successfully." in output
    assert ledger.lookup("AC00000001").balance_snapshot() == Decimal("150")


def test_menu_reports_core_errors() -> None:
    ledger = Ledger()
    ledger.create_account("Bob")

    output = run_menu(ledger, "3", "AC00000001", "10", "2", "AC00000001", "-5", "7")

    assert "Insufficient funds." in output
    assert "Deposit amount must be greater than zero." in output
    assert ledger.lookup("AC00000001").balance_snapshot() == Decimal("0")


def test_menu_invalid_amount_and_unknown_account() -> None:
    ledger = Ledger()
    ledger.create_account("Bob")

    output = run_menu(ledger, "2", "AC00000001", "lots", "3", "missing", "9", "7")

    assert "Invalid amount." in output
    assert "Account not found." in output
    assert "Invalid option. Please try again." in output
    assert len(ledger.lookup("AC00000001").history_snapshot()) == 1


def test_menu_transfer_and_history() -> None:
    ledger = Ledger()
    a = ledger.create_account("Alice", Decimal("100"))
    b = ledger.create_account("Bob")

    output = run_menu(ledger, "4", a, b, "40", "6", a, "5", b, "7")

    assert "Transferred $40.00 to Bob successfully." in output
    assert f"Transaction History for Alice ({a}):" in output
    assert "Account created with initial balance: $100.00" in output
    assert "Withdrew: $40.00" in output
    assert "Transferred: $40.00 to Bob" in output
    assert f"Account Holder: Bob, Account Number: {b}, Balance: $40.00" in output


def test_menu_stops_at_end_of_input() -> None:
    ledger = Ledger()

    run_menu(ledger, "1", "Alice")

    assert ledger.account_count() == 0


def test_menu_rejects_unparseable_opening_balance() -> None:
    ledger = Ledger()

    output = run_menu(ledger, "1", "Alice", "a lot", "7")

    assert "Invalid balance amount." in output
    assert ledger.account_count() == 0


def test_build_parser_defaults() -> None:
    args = build_parser().parse_args([])

    assert args.log_level == "ERROR"
    assert args.currency_symbol is None


@pytest.fixture
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_main_uses_currency_symbol_option(monkeypatch, fresh_settings) -> None:
    stdout = io.StringIO()
    monkeypatch.delenv("LEDGER_CURRENCY_SYMBOL", raising=False)
    monkeypatch.delenv("LEDGER_ACCOUNT_ID_PREFIX", raising=False)
    monkeypatch.setattr("sys.stdin", io.StringIO("1\nAlice\n1234.5\n5\nAC00000001\n7\n"))
    monkeypatch.setattr("sys.stdout", stdout)

    assert main(["--currency-symbol", "€"]) == 0

    assert "Account created successfully. Account Number: AC00000001" in stdout.getvalue()
    assert "Balance: €1,234.50" in stdout.getvalue()


def test_main_reads_settings_from_environment(monkeypatch, fresh_settings) -> None:
    stdout = io.StringIO()
    monkeypatch.setenv("LEDGER_CURRENCY_SYMBOL", "£")
    monkeypatch.setenv("LEDGER_ACCOUNT_ID_PREFIX", "ZZ")
    monkeypatch.setattr("sys.stdin", io.StringIO("1\nAlice\n10\n5\nZZ00000001\n7\n"))
    monkeypatch.setattr("sys.stdout", stdout)

    assert main([]) == 0

    output = stdout.getvalue()
    assert "Account Number: ZZ00000001" in output
    assert "Account Holder: Alice, Account Number: ZZ00000001, Balance: £10.00" in output
