"""Human-readable hints for reverted transactions."""

import logging

from txexplainer.domain.enums import TxStatus
from txexplainer.parser.utils.abi import (
    APPROVE_SELECTOR,
    SWAP_ETH_FOR_EXACT_TOKENS,
    SWAP_EXACT_ETH_FOR_TOKENS,
    SWAP_EXACT_TOKENS_FOR_ETH,
    SWAP_EXACT_TOKENS_FOR_TOKENS,
    TRANSFER_SELECTOR,
    WORD_SIZE,
    CalldataReader,
    strip_hex_prefix,
)
from txexplainer.parser.utils.types import RawReceipt, RawTransaction

logger = logging.getLogger(__name__)

ERROR_STRING_SELECTOR = "0x08c379a0"  # Error(string)
PANIC_SELECTOR = "0x4e487b71"         # Panic(uint256)

PANIC_CODES: dict[int, str] = {
    0x00: "Generic panic",
    0x01: "Assertion failed",
    0x11: "Arithmetic overflow/underflow",
    0x12: "Division by zero",
    0x21: "Invalid enum value",
    0x22: "Storage byte array encoding error",
    0x31: "pop() on empty array",
    0x32: "Array out of bounds",
    0x41: "Too much memory allocated",
    0x51: "Called zero-initialized function",
}

APPROVAL_HINT = "Token approval may have failed - check allowance"
TRANSFER_HINT = "Transfer failed - insufficient balance or not approved"
SWAP_HINT = "Swap failed - possibly due to slippage, insufficient liquidity, or expired deadline"
GENERIC_HINT = "Transaction reverted - check contract requirements"

_SWAP_HINT_SELECTORS = (
    SWAP_EXACT_TOKENS_FOR_TOKENS,
    SWAP_EXACT_ETH_FOR_TOKENS,
    SWAP_EXACT_TOKENS_FOR_ETH,
    SWAP_ETH_FOR_EXACT_TOKENS,
)


def decode_revert_data(data: str | None) -> str | None:
    """Decode `Error(string)` or `Panic(uint256)` return data. None for anything else."""
    reader = CalldataReader(data)
    if reader.selector == ERROR_STRING_SELECTOR:
        offset = 4 + reader.read_uint(4)
        length = reader.read_uint(offset)
        raw = reader.tail(offset + WORD_SIZE)[:length]
        message = raw.decode("utf-8", errors="replace").strip()
        return message or None
    if reader.selector == PANIC_SELECTOR:
        code = reader.read_uint(4)
        return f"Panic: {PANIC_CODES.get(code, f'Unknown panic code 0x{code:02x}')}"
    return None


def parse_revert_reason(tx: RawTransaction, receipt: RawReceipt) -> str | None:
    """Best-effort reason for a failed receipt; None for a successful one.

    Decoded revert data wins. Otherwise the hint is picked by looking for known
    selectors anywhere in the call-data.
    """
    if receipt.status is TxStatus.SUCCESS:
        return None

    if receipt.revert_data:
        decoded = decode_revert_data(receipt.revert_data)
        if decoded:
            return decoded
        logger.debug("Undecodable revert data for %s", tx.hash)

    calldata = strip_hex_prefix(tx.input).lower()
    if strip_hex_prefix(APPROVE_SELECTOR) in calldata:
        return APPROVAL_HINT
    if strip_hex_prefix(TRANSFER_SELECTOR) in calldata:
        return TRANSFER_HINT
    if any(strip_hex_prefix(s) in calldata for s in _SWAP_HINT_SELECTORS):
        return SWAP_HINT
    return GENERIC_HINT
