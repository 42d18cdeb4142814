from __future__ import annotations

from decimal import Decimal, InvalidOperation


class AmountParseError(ValueError):
    """Raised when user input is not a finite decimal number."""


def parse_amount(text: str) -> Decimal:
    """Parse a typed amount such as ``"50"``, ``" 12.75 "`` or ``"1,000.50"``.

    Only the syntax is checked. Whether the amount is acceptable for an
    operation (positive, covered by the balance) is the ledger's decision.
    """
    cleaned = text.strip().replace(",", "")
    if not cleaned:
        raise AmountParseError("Amount is empty")
    try:
        amount = Decimal(cleaned)
    except InvalidOperation as exc:
        raise AmountParseError(f"Not a number: {text!r}") from exc
    if not amount.is_finite():
        raise AmountParseError(f"Not a finite number: {text!r}")
    return amount
