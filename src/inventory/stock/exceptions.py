"""Stock ledger failures.

`ProductNotFound` and `StockWriteFailure` abort an adjustment and are raised
to the caller. `LogWriteFailure` is never raised by the ledger: it is attached
to the adjustment result after the stock write has already succeeded.
"""


class StockLedgerError(Exception):
    """Base class for stock ledger failures."""

    def __init__(self, message, product_id=None, cause=None):
        super().__init__(message)
        self.message = message
        self.product_id = product_id
        self.cause = cause

    @property
    def detail(self) -> str | None:
        """Backend error text, kept for diagnostics."""
        return str(self.cause) if self.cause is not None else None


class ProductNotFound(StockLedgerError):
    pass


class StockWriteFailure(StockLedgerError):
    pass


class LogWriteFailure(StockLedgerError):
    pass
