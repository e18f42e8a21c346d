"""Balance-delta extraction from native value, gas and ERC-20 Transfer logs."""

from txexplainer.domain.enums import TransferShape
from txexplainer.parser.utils.abi import CalldataReader, topic_to_address, transfer_shape
from txexplainer.parser.utils.format import format_native_amount, format_token_amount
from txexplainer.parser.utils.gas import calculate_gas_fee_wei
from txexplainer.parser.utils.types import BalanceChangeInfo, RawReceipt, RawTransaction
from txexplainer.registry.tokens import NATIVE, TokenRegistry


def extract_native_changes(tx: RawTransaction, receipt: RawReceipt, tokens: TokenRegistry) -> list[BalanceChangeInfo]:
    """Sender pays value + gas; the recipient receives value."""
    changes: list[BalanceChangeInfo] = []
    native = tokens.native
    total_sent = tx.value + calculate_gas_fee_wei(tx, receipt)

    if total_sent > 0:
        changes.append(BalanceChangeInfo(
            owner=tx.from_address,
            coin_type=NATIVE,
            amount=format_native_amount(-total_sent, native.decimals),
            coin_name=native.symbol,
            is_positive=False,
        ))

    if tx.value > 0 and tx.to_address:
        changes.append(BalanceChangeInfo(
            owner=tx.to_address,
            coin_type=NATIVE,
            amount=format_native_amount(tx.value, native.decimals),
            coin_name=native.symbol,
            is_positive=True,
        ))

    return changes


def extract_token_changes(receipt: RawReceipt, subject: str, tokens: TokenRegistry) -> list[BalanceChangeInfo]:
    """One entry per VALUE Transfer log touching `subject`.

    A self-transfer yields both a negative and a positive entry; movements are
    never netted.
    """
    changes: list[BalanceChangeInfo] = []
    subject = subject.lower()

    for log in receipt.logs:
        if transfer_shape(log.topics) is not TransferShape.VALUE:
            continue

        from_addr = topic_to_address(log.topics[1])
        to_addr = topic_to_address(log.topics[2])
        amount = CalldataReader(log.data).read_uint(0)
        decimals = tokens.decimals(log.address)
        symbol = tokens.symbol(log.address)

        if from_addr == subject:
            changes.append(BalanceChangeInfo(
                owner=subject,
                coin_type=log.address,
                amount=format_token_amount(-amount, decimals),
                coin_name=symbol,
                is_positive=False,
            ))
        if to_addr == subject:
            changes.append(BalanceChangeInfo(
                owner=subject,
                coin_type=log.address,
                amount=format_token_amount(amount, decimals),
                coin_name=symbol,
                is_positive=True,
            ))

    return changes


def extract_balance_changes(
    tx: RawTransaction,
    receipt: RawReceipt,
    subject: str,
    tokens: TokenRegistry,
) -> list[BalanceChangeInfo]:
    """Signed per-asset balance deltas as seen from `subject` (normally the sender)."""
    return extract_native_changes(tx, receipt, tokens) + extract_token_changes(receipt, subject, tokens)
