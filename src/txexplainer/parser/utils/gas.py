"""Gas fee calculation utilities."""

from txexplainer.parser.utils.format import format_gas_price, format_native_amount
from txexplainer.parser.utils.types import GasInfo, RawReceipt, RawTransaction

def effective_gas_price(tx: RawTransaction, receipt: RawReceipt) -> int:
    """Price actually charged per gas unit.

    Receipts from blocks without fee-market pricing may omit it; the price the
    sender offered is used then.
    """
    if receipt.effective_gas_price is not None:
        return receipt.effective_gas_price
    if tx.gas_price is not None:
        return tx.gas_price
    return 0


def calculate_gas_fee_wei(tx: RawTransaction, receipt: RawReceipt) -> int:
    """gasUsed × effective gas price, in wei."""
    return receipt.gas_used * effective_gas_price(tx, receipt)


def extract_gas_info(tx: RawTransaction, receipt: RawReceipt, native_decimals: int = 18) -> GasInfo:
    total = format_native_amount(calculate_gas_fee_wei(tx, receipt), native_decimals)
    # EVM receipts carry no separate fee payer: the sender always pays.
    payer = tx.from_address
    return GasInfo(
        total_gas=total,
        computation_cost=total,
        storage_cost="0",
        storage_rebate="0",
        gas_payer=payer,
        gas_price=format_gas_price(effective_gas_price(tx, receipt)),
        is_sponsored=False,
    )
