"""Display formatting for addresses and raw integer amounts.

All amount formatting goes through Decimal so that wei-scale integers never pass
through a float.
"""

import re
from datetime import UTC, datetime
from decimal import ROUND_HALF_UP, Decimal, localcontext

from txexplainer.exceptions import InvalidDecimalsError

DEFAULT_DECIMALS = 18
GWEI_DECIMALS = 9

_ADDRESS_RE = re.compile(r"^0x[a-fA-F0-9]{40}$")
_TX_HASH_RE = re.compile(r"^0x[a-fA-F0-9]{64}$")

_THOUSAND = Decimal(1000)
_MILLION = Decimal(1_000_000)
_DUST = Decimal("0.0001")


def shorten_address(address: str | None, chars: int = 4) -> str:
    """`0x1234...abcd` form. Strings already within the target width come back unchanged."""
    if not address:
        return "Unknown"
    if len(address) <= chars * 2 + 2:
        return address
    return f"{address[:chars + 2]}...{address[-chars:]}"


def scale_amount(amount: int, decimals: int = DEFAULT_DECIMALS) -> Decimal:
    """Raw integer amount -> Decimal in whole units."""
    if decimals < 0:
        raise InvalidDecimalsError(decimals)
    with localcontext() as ctx:
        ctx.prec = 100
        return Decimal(int(amount)).scaleb(-decimals)


def _fixed(value: Decimal, places: int, divisor: Decimal = Decimal(1)) -> str:
    with localcontext() as ctx:
        ctx.prec = 100
        value = value / divisor
        quantum = Decimal(1).scaleb(-places)
        return format(value.quantize(quantum, rounding=ROUND_HALF_UP), "f")


def _format_scaled(value: Decimal, small_places: int) -> str:
    if value == 0:
        return "0"
    magnitude = abs(value)
    if magnitude < _DUST:
        return "< 0.0001" if value > 0 else "> -0.0001"
    if magnitude < 1:
        return _fixed(value, 4)
    if magnitude < _THOUSAND:
        return _fixed(value, small_places)
    if magnitude < _MILLION:
        return f"{_fixed(value, 2, _THOUSAND)}K"
    return f"{_fixed(value, 2, _MILLION)}M"


def format_token_amount(amount: int, decimals: int = DEFAULT_DECIMALS) -> str:
    """Signed token amount: 4 places below 1, 2 places below 1000, then K/M suffixes."""
    return _format_scaled(scale_amount(amount, decimals), small_places=2)


def format_native_amount(amount: int, decimals: int = DEFAULT_DECIMALS) -> str:
    """Signed native-asset amount. Keeps 4 places up to 1000 so gas-sized values stay visible."""
    return _format_scaled(scale_amount(amount, decimals), small_places=4)


def format_rate(received: Decimal, sent: Decimal) -> str:
    """Exchange rate `received / sent` to 6 places."""
    return _fixed(received, 6, sent)


def format_gas_price(wei: int) -> str:
    """Gas price in gwei with 2 places."""
    return _fixed(scale_amount(wei, GWEI_DECIMALS), 2)


def format_gwei(wei: int) -> str:
    gwei = scale_amount(wei, GWEI_DECIMALS)
    if gwei < Decimal("0.001"):
        return "< 0.001"
    if gwei < 1:
        return _fixed(gwei, 3)
    return _fixed(gwei, 1)


def format_timestamp(timestamp: int | str | None) -> str:
    """Block timestamp (seconds since epoch) as a UTC string."""
    if not timestamp:
        return "Unknown"
    seconds = int(timestamp)
    return datetime.fromtimestamp(seconds, tz=UTC).strftime("%Y-%m-%d %H:%M:%S UTC")


def get_initials(address: str | None) -> str:
    if not address or address == "Unknown":
        return "?"
    return address[2:4].upper()


def extract_type_name(object_type: str | None) -> str:
    if not object_type:
        return "Unknown"
    if len(object_type) <= 20:
        return object_type
    return shorten_address(object_type, 8)


def is_valid_address(address: str) -> bool:
    return bool(_ADDRESS_RE.match(address))


def is_valid_transaction_hash(tx_hash: str) -> bool:
    return bool(_TX_HASH_RE.match(tx_hash))
