from .formatting import format_money
from .menu import Menu, main
from .parsing import AmountParseError, parse_amount

__all__ = ["AmountParseError", "Menu", "format_money", "main", "parse_amount"]
