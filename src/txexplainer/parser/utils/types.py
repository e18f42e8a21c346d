"""Core data types for the explanation engine.

Inputs mirror the EVM JSON-RPC shapes (camelCase aliases accepted). Every
record is frozen: built once per call and never mutated afterwards.
"""

import re
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer

from txexplainer.domain.enums import ParticipantRole, TransactionType, TransferShape, TxStatus
from txexplainer.parser.utils.actions import Action


def parse_quantity(value: Any) -> Any:
    """Accept ints, decimal strings and 0x-prefixed hex strings."""
    if isinstance(value, str):
        s = value.strip()
        if s[:2].lower() == "0x":
            return int(s, 16) if len(s) > 2 else 0
        return int(s)
    return value


_HEX_RE = re.compile(r"^0x[0-9a-f]*$")


def parse_hex_data(value: Any) -> Any:
    if value is None:
        return "0x"
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    if isinstance(value, str):
        s = value.strip().lower()
        if not s.startswith("0x"):
            s = "0x" + s
        if not _HEX_RE.match(s):
            raise ValueError(f"not a hex string: {value!r}")
        return s
    return value


def parse_status(value: Any) -> Any:
    if isinstance(value, TxStatus):
        return value
    if isinstance(value, bool):
        return TxStatus.SUCCESS if value else TxStatus.FAILURE
    if isinstance(value, int):
        return TxStatus.SUCCESS if value == 1 else TxStatus.FAILURE
    if isinstance(value, str):
        s = value.strip().lower()
        if s in ("success", "0x1", "1"):
            return TxStatus.SUCCESS
        if s in ("failure", "reverted", "0x0", "0", "failed"):
            return TxStatus.FAILURE
    return value


# Wei-scale integers: serialized as decimal strings in JSON, never as numbers.
Quantity = Annotated[
    int,
    BeforeValidator(parse_quantity),
    PlainSerializer(lambda v: str(v), return_type=str, when_used="json"),
]
Address = Annotated[str, AfterValidator(str.lower)]
HexData = Annotated[str, BeforeValidator(parse_hex_data)]


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


# --- Inputs ---


class LogEntry(_Frozen):
    """One receipt log: emitting contract, up to 4 topics, opaque data."""

    address: Address
    topics: tuple[HexData, ...] = Field(default=(), max_length=4)
    data: HexData = "0x"
    log_index: Quantity = Field(default=0, alias="logIndex")


class RawTransaction(_Frozen):
    hash: str
    from_address: Address = Field(alias="from")
    to_address: Address | None = Field(default=None, alias="to")  # None = contract creation
    value: Quantity = 0
    input: HexData = "0x"
    gas_price: Quantity | None = Field(default=None, alias="gasPrice")
    gas: Quantity = 0  # gas limit


class RawReceipt(_Frozen):
    status: Annotated[TxStatus, BeforeValidator(parse_status)]
    gas_used: Quantity = Field(alias="gasUsed")
    effective_gas_price: Quantity | None = Field(default=None, alias="effectiveGasPrice")
    contract_address: Address | None = Field(default=None, alias="contractAddress")
    logs: tuple[LogEntry, ...] = ()
    block_number: Quantity | None = Field(default=None, alias="blockNumber")
    revert_data: HexData | None = Field(default=None, alias="revertData")  # from a debug trace, if the caller has one


class RawBlock(_Frozen):
    number: Quantity
    timestamp: Quantity | None = None  # seconds since epoch


# --- Decoded intermediate ---


class TokenTransfer(_Frozen):
    """A `Transfer` log decoded against the token registry."""

    token_address: str
    from_address: str
    to_address: str
    value: int  # smallest unit; 1 for an indexed (NFT) transfer
    shape: TransferShape
    token_id: int | None = None
    decimals: int = 18
    symbol: str
    logo: str | None = None
    log_index: int = 0


# --- Outputs ---


class Participant(_Frozen):
    address: str
    role: ParticipantRole


class ExplanationResult(_Frozen):
    summary: str = Field(min_length=1)
    details: tuple[str, ...] = ()
    type: TransactionType
    participants: tuple[Participant, ...] = ()
    actions: tuple[Action, ...] = Field(min_length=1)
    is_sponsored: bool = False
    sponsor: str | None = None
    metadata: dict[str, Any] = {}


class GasInfo(_Frozen):
    total_gas: str
    computation_cost: str
    storage_cost: str = "0"
    storage_rebate: str = "0"
    gas_payer: str
    gas_price: str  # gwei
    is_sponsored: bool = False


class BalanceChangeInfo(_Frozen):
    owner: str
    coin_type: str  # token address or "native"
    amount: str  # signed, formatted
    coin_name: str
    is_positive: bool


class ParsedTransaction(_Frozen):
    digest: str
    timestamp: str | None  # milliseconds since epoch
    sender: str
    status: TxStatus
    error: str | None = None
    explanation: ExplanationResult
    gas_info: GasInfo
    object_changes: tuple[dict[str, Any], ...] = ()  # not populated for EVM
    balance_changes: tuple[BalanceChangeInfo, ...] = ()
    contract_calls: tuple[dict[str, Any], ...] = ()  # not populated for EVM
    raw_transaction: dict[str, Any] = {}
    block_number: str | None = None

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")
