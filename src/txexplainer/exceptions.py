"""Errors raised for violated internal invariants.

Heterogeneous on-chain data never raises: unknown tokens, unknown contracts and
short call-data all degrade to a best-effort explanation. These exceptions are
for programming errors made by a caller or by this package itself.
"""


class TxExplainerError(Exception):
    """Base class for all txexplainer errors."""


class InvalidDecimalsError(TxExplainerError, ValueError):
    """A negative decimal count was supplied for amount scaling."""

    def __init__(self, decimals: int) -> None:
        super().__init__(f"Decimal count must be >= 0, got {decimals}")
        self.decimals = decimals


class ExplainerRegistryError(TxExplainerError):
    """The explainer registry does not cover every TransactionType member."""

    def __init__(self, missing: list[str]) -> None:
        super().__init__(f"No explainer registered for: {', '.join(sorted(missing))}")
        self.missing = missing


class UnknownTransactionTypeError(TxExplainerError, KeyError):
    """Lookup of a transaction type that has no registered explainer."""
