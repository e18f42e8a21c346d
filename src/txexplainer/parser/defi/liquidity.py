"""Liquidity add/remove on constant-product pools (PancakeSwap V2 style)."""

from txexplainer.domain.enums import ParticipantRole, TransactionType, TransferShape
from txexplainer.parser.generic.base import BaseExplainer
from txexplainer.parser.handlers.common import TokenLeg, native_leg, transfer_leg
from txexplainer.parser.utils.abi import BURN_V2_TOPIC, MINT_V2_TOPIC
from txexplainer.parser.utils.actions import LiquidityAction
from txexplainer.parser.utils.context import TransactionContext
from txexplainer.parser.utils.format import shorten_address
from txexplainer.parser.utils.types import ExplanationResult, Participant, RawReceipt, RawTransaction

MAX_POOLED_ASSETS = 2


class LiquidityExplainer(BaseExplainer):
    """Add: up to two assets leave the sender, native value first. Remove: up to two arrive."""

    EXPLAINER_NAME = "LiquidityExplainer"
    TX_TYPE = TransactionType.LIQUIDITY_ADD
    IS_ADD = True

    def explain(self, tx: RawTransaction, receipt: RawReceipt) -> ExplanationResult:
        ctx = self._context(tx, receipt)
        provider = tx.from_address
        dex = self._protocol(ctx.to)
        dex_name = dex.name if dex else None
        dex_logo = dex.logo if dex else None

        legs = self._pooled_legs(ctx)
        first = legs[0] if legs else None
        second = legs[1] if len(legs) > 1 else None

        if legs:
            token_desc = " + ".join(leg.describe() for leg in legs)
        else:
            token_desc = "tokens"
        verb = "added liquidity" if self.IS_ADD else "removed liquidity"
        dex_suffix = f" on {dex_name}" if dex_name else ""

        details = [
            f"Provider: {shorten_address(provider)}",
            f"Action: {'Add Liquidity' if self.IS_ADD else 'Remove Liquidity'}",
        ]
        details.extend(f"{leg.symbol}: {leg.amount}" for leg in legs)
        if dex_name:
            details.append(f"Protocol: {dex_name}")

        return self._make_result(
            summary=f"{shorten_address(provider)} {verb}: {token_desc}{dex_suffix}.",
            details=details,
            actions=[LiquidityAction(
                type=self.TX_TYPE.value,
                provider=provider,
                token_a=first.symbol if first else "",
                amount_a=first.amount if first else "",
                token_a_logo=first.logo if first else None,
                token_b=second.symbol if second else "",
                amount_b=second.amount if second else "",
                token_b_logo=second.logo if second else None,
                pool=self._pool(ctx),
                dex=dex_name,
                dex_logo=dex_logo,
            )],
            participants=[Participant(address=provider, role=ParticipantRole.PROVIDER)],
            metadata={"dex_logo": dex_logo},
        )

    def _pooled_legs(self, ctx: TransactionContext) -> list[TokenLeg]:
        if self.IS_ADD:
            moved = ctx.peek_transfers(from_address=ctx.sender, shape=TransferShape.VALUE)
        else:
            moved = ctx.peek_transfers(to_address=ctx.sender, shape=TransferShape.VALUE)
        legs = [transfer_leg(t) for t in moved]
        if self.IS_ADD and ctx.tx.value > 0:
            legs.insert(0, native_leg(ctx.tx.value, self._tokens))
        return legs[:MAX_POOLED_ASSETS]

    def _pool(self, ctx: TransactionContext) -> str | None:
        """Pair contract: emitter of the Mint/Burn event."""
        events = ctx.filter_logs(MINT_V2_TOPIC if self.IS_ADD else BURN_V2_TOPIC)
        return events[0].address if events else None


class LiquidityAddExplainer(LiquidityExplainer):
    EXPLAINER_NAME = "LiquidityAddExplainer"
    TX_TYPE = TransactionType.LIQUIDITY_ADD
    IS_ADD = True


class LiquidityRemoveExplainer(LiquidityExplainer):
    EXPLAINER_NAME = "LiquidityRemoveExplainer"
    TX_TYPE = TransactionType.LIQUIDITY_REMOVE
    IS_ADD = False
