"""Reusable token-leg helpers shared by the explainers.

A leg is one side of a movement as it is shown to a reader: symbol, formatted
amount, and the raw figures needed for rates.
"""

from pydantic import BaseModel, ConfigDict

from txexplainer.parser.utils.format import format_native_amount, format_token_amount
from txexplainer.parser.utils.types import TokenTransfer
from txexplainer.registry.tokens import NATIVE, TokenRegistry

UNKNOWN_AMOUNT = "?"


class TokenLeg(BaseModel):
    model_config = ConfigDict(frozen=True)

    address: str
    symbol: str
    amount: str
    raw: int = 0
    decimals: int = 18
    logo: str | None = None

    @property
    def is_known(self) -> bool:
        return self.amount != UNKNOWN_AMOUNT

    def describe(self) -> str:
        return f"{self.amount} {self.symbol}"


def transfer_leg(transfer: TokenTransfer) -> TokenLeg:
    return TokenLeg(
        address=transfer.token_address,
        symbol=transfer.symbol,
        amount=format_token_amount(transfer.value, transfer.decimals),
        raw=transfer.value,
        decimals=transfer.decimals,
        logo=transfer.logo,
    )


def native_leg(value: int, tokens: TokenRegistry) -> TokenLeg:
    native = tokens.native
    return TokenLeg(
        address=NATIVE,
        symbol=native.symbol,
        amount=format_native_amount(value, native.decimals),
        raw=value,
        decimals=native.decimals,
        logo=native.image,
    )


def unknown_leg(label: str = "tokens") -> TokenLeg:
    """Placeholder when no matching transfer exists: amount "?" rather than a failure."""
    return TokenLeg(address="", symbol=label, amount=UNKNOWN_AMOUNT)


def join_legs(legs: list[TokenLeg], separator: str = ", ", empty: str = "tokens") -> str:
    if not legs:
        return empty
    return separator.join(leg.describe() for leg in legs)
