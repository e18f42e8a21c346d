"""NftPurchaseExplainer: buys through a known NFT marketplace."""

from txexplainer.domain.enums import ParticipantRole, TransactionType, TransferShape
from txexplainer.parser.generic.base import BaseExplainer
from txexplainer.parser.handlers.common import TokenLeg, native_leg, transfer_leg
from txexplainer.parser.utils.actions import NftPurchaseAction
from txexplainer.parser.utils.context import TransactionContext
from txexplainer.parser.utils.format import shorten_address
from txexplainer.parser.utils.types import ExplanationResult, Participant, RawReceipt, RawTransaction


class NftPurchaseExplainer(BaseExplainer):
    """Price is the native value sent, or the first ERC-20 payment when no value was attached.

    The bought item is the first indexed Transfer into the buyer, if one was emitted.
    """

    EXPLAINER_NAME = "NftPurchaseExplainer"
    TX_TYPE = TransactionType.NFT_PURCHASE

    def explain(self, tx: RawTransaction, receipt: RawReceipt) -> ExplanationResult:
        ctx = self._context(tx, receipt)
        buyer = tx.from_address
        market = self._protocol(ctx.to)
        market_name = market.name if market else None
        market_logo = market.logo if market else None

        price = self._price(ctx)
        item = ctx.first_transfer(to_address=ctx.sender, shape=TransferShape.INDEXED)

        details = [f"Buyer: {shorten_address(buyer)}", f"Price: {price.describe()}"]
        if item is not None:
            details.append(f"NFT: #{item.token_id}")
            details.append(f"Collection: {shorten_address(item.token_address)}")
            details.append(f"Seller: {shorten_address(item.from_address)}")
        if market_name:
            details.append(f"Marketplace: {market_name}")

        participants = [Participant(address=buyer, role=ParticipantRole.BUYER)]
        if item is not None:
            participants.append(Participant(address=item.from_address, role=ParticipantRole.SELLER))

        market_suffix = f" on {market_name}" if market_name else ""
        return self._make_result(
            summary=f"{shorten_address(buyer)} purchased an NFT for {price.describe()}{market_suffix}.",
            details=details,
            actions=[NftPurchaseAction(
                buyer=buyer,
                seller=item.from_address if item else "",
                object_id=str(item.token_id) if item else "",
                object_type=item.token_address if item else "",
                price=price.describe(),
                marketplace=market_name,
                marketplace_logo=market_logo,
            )],
            participants=participants,
            metadata={"marketplace_logo": market_logo},
        )

    def _price(self, ctx: TransactionContext) -> TokenLeg:
        if ctx.tx.value > 0:
            return native_leg(ctx.tx.value, self._tokens)
        paid = ctx.first_transfer(from_address=ctx.sender, shape=TransferShape.VALUE)
        if paid is not None:
            return transfer_leg(paid)
        return native_leg(0, self._tokens)
