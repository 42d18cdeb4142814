class LedgerError(Exception):
    """Base class for every failure the ledger core signals."""

class InvalidAmountError(LedgerError):
    """Raised when a monetary amount is zero, negative or not a finite number."""

class InsufficientFundsError(LedgerError):
    """Raised when a withdrawal/transfer would drop balance below zero."""

class InvalidTargetError(LedgerError):
    """Raised when a transfer has no usable destination account."""

class AccountNotFoundError(LedgerError):
    """Raised when an account id is missing from the ledger."""
