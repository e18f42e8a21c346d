"""SwapExplainer: token A -> token B through a DEX router or aggregator.

Works for any DEX without knowing the protocol: the sold leg is the first
ERC-20 transfer out of the sender, the bought leg the last transfer into it.
"""

from txexplainer.domain.enums import ParticipantRole, TransactionType, TransferShape
from txexplainer.parser.generic.base import BaseExplainer
from txexplainer.parser.handlers.common import TokenLeg, native_leg, transfer_leg
from txexplainer.parser.utils.actions import SwapAction
from txexplainer.parser.utils.context import TransactionContext
from txexplainer.parser.utils.format import format_rate, scale_amount, shorten_address
from txexplainer.parser.utils.types import ExplanationResult, Participant, RawReceipt, RawTransaction


class SwapExplainer(BaseExplainer):
    EXPLAINER_NAME = "SwapExplainer"
    TX_TYPE = TransactionType.SWAP

    def explain(self, tx: RawTransaction, receipt: RawReceipt) -> ExplanationResult:
        ctx = self._context(tx, receipt)
        trader = tx.from_address
        dex = self._protocol(ctx.to)
        dex_name = dex.name if dex else None
        dex_logo = dex.logo if dex else None

        sold = self._sold_leg(ctx)
        bought = self._bought_leg(ctx)
        hops = ctx.swap_event_count()
        is_multi_hop = hops > 1

        sold_name = sold.symbol if sold else "?"
        sold_amount = sold.amount if sold else "?"
        bought_name = bought.symbol if bought else "?"
        bought_amount = bought.amount if bought else "?"

        details = [
            f"Sold: {sold_amount} {sold_name}",
            f"Received: {bought_amount} {bought_name}",
        ]
        rate = self._rate(sold, bought)
        if rate is not None:
            details.append(f"Rate: 1 {sold_name} = {rate} {bought_name}")
        details.append(f"Trader: {shorten_address(trader)}")
        if dex_name:
            details.append(f"DEX: {dex_name}")
        if is_multi_hop:
            details.append(f"Route: {hops} hops")

        dex_suffix = f" on {dex_name}" if dex_name else ""
        hop_suffix = " (multi-hop)" if is_multi_hop else ""

        return self._make_result(
            summary=(
                f"{shorten_address(trader)} swapped {sold_amount} {sold_name} "
                f"for {bought_amount} {bought_name}{dex_suffix}{hop_suffix}."
            ),
            details=details,
            actions=[SwapAction(
                trader=trader,
                from_token=sold_name,
                from_amount=sold_amount,
                from_logo=sold.logo if sold else None,
                to_token=bought_name,
                to_amount=bought_amount,
                to_logo=bought.logo if bought else None,
                dex=dex_name,
                dex_logo=dex_logo,
                is_multi_hop=is_multi_hop,
                hops=hops,
            )],
            participants=[Participant(address=trader, role=ParticipantRole.TRADER)],
            metadata={
                "dex_logo": dex_logo,
                "from_token_logo": sold.logo if sold else None,
                "to_token_logo": bought.logo if bought else None,
                "is_multi_hop": is_multi_hop,
            },
        )

    def _sold_leg(self, ctx: TransactionContext) -> TokenLeg | None:
        out = ctx.first_transfer(from_address=ctx.sender, shape=TransferShape.VALUE)
        if out is not None:
            return transfer_leg(out)
        if ctx.tx.value > 0:
            return native_leg(ctx.tx.value, self._tokens)
        return None

    def _bought_leg(self, ctx: TransactionContext) -> TokenLeg | None:
        got = ctx.last_transfer(to_address=ctx.sender, shape=TransferShape.VALUE)
        return transfer_leg(got) if got is not None else None

    @staticmethod
    def _rate(sold: TokenLeg | None, bought: TokenLeg | None) -> str | None:
        """Decimals-adjusted `received / sent`. None when either leg is missing or zero."""
        if sold is None or bought is None or sold.raw <= 0 or bought.raw <= 0:
            return None
        return format_rate(scale_amount(bought.raw, bought.decimals), scale_amount(sold.raw, sold.decimals))

