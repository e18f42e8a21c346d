"""TransferExplainer: native value or ERC-20 token movement."""

from txexplainer.domain.enums import ParticipantRole, TransactionType, TransferShape
from txexplainer.parser.generic.base import BaseExplainer
from txexplainer.parser.handlers.common import TokenLeg, native_leg, transfer_leg
from txexplainer.parser.utils.abi import TRANSFER_FROM_SELECTOR, TRANSFER_SELECTOR, arg_offset
from txexplainer.parser.utils.actions import TransferAction
from txexplainer.parser.utils.context import TransactionContext
from txexplainer.parser.utils.format import format_token_amount, shorten_address
from txexplainer.parser.utils.types import ExplanationResult, Participant, RawReceipt, RawTransaction
from txexplainer.registry.tokens import NATIVE


class TransferExplainer(BaseExplainer):
    """Explains a single transfer, most certain source first:

    1. the first ERC-20 `Transfer` log,
    2. `transfer` / `transferFrom` call-data (reverted calls emit no log),
    3. the native value field.
    """

    EXPLAINER_NAME = "TransferExplainer"
    TX_TYPE = TransactionType.TRANSFER

    def explain(self, tx: RawTransaction, receipt: RawReceipt) -> ExplanationResult:
        ctx = self._context(tx, receipt)

        logged = ctx.first_transfer(shape=TransferShape.VALUE)
        if logged is not None:
            return self._token_result(tx.from_address, logged.to_address, transfer_leg(logged))

        decoded = self._decode_calldata(ctx)
        if decoded is not None:
            recipient, leg = decoded
            return self._token_result(tx.from_address, recipient, leg)

        return self._native_result(tx)

    def _decode_calldata(self, ctx: TransactionContext) -> tuple[str, TokenLeg] | None:
        if ctx.to is None:
            return None
        if ctx.selector == TRANSFER_SELECTOR:
            recipient = ctx.calldata.read_address(arg_offset(0))
            raw = ctx.calldata.read_uint(arg_offset(1))
        elif ctx.selector == TRANSFER_FROM_SELECTOR:
            recipient = ctx.calldata.read_address(arg_offset(1))
            raw = ctx.calldata.read_uint(arg_offset(2))
        else:
            return None

        decimals = self._tokens.decimals(ctx.to)
        leg = TokenLeg(
            address=ctx.to,
            symbol=self._tokens.symbol(ctx.to),
            amount=format_token_amount(raw, decimals),
            raw=raw,
            decimals=decimals,
            logo=self._tokens.image(ctx.to),
        )
        return recipient, leg

    def _token_result(self, sender: str, recipient: str, leg: TokenLeg) -> ExplanationResult:
        return self._make_result(
            summary=f"{shorten_address(sender)} transferred {leg.describe()} to {shorten_address(recipient)}.",
            details=[
                f"Amount: {leg.describe()}",
                f"From: {shorten_address(sender)}",
                f"To: {shorten_address(recipient)}",
                f"Token: {leg.address}",
            ],
            actions=[TransferAction(
                from_address=sender,
                to_address=recipient,
                amount=leg.amount,
                token=leg.symbol,
                coin_type=leg.address,
                token_logo=leg.logo,
            )],
            participants=[
                Participant(address=sender, role=ParticipantRole.SENDER),
                Participant(address=recipient, role=ParticipantRole.RECIPIENT),
            ],
            metadata={"token_logo": leg.logo},
        )

    def _native_result(self, tx: RawTransaction) -> ExplanationResult:
        sender = tx.from_address
        recipient = tx.to_address or "Unknown"
        leg = native_leg(tx.value, self._tokens)
        return self._make_result(
            summary=f"{shorten_address(sender)} transferred {leg.describe()} to {shorten_address(recipient)}.",
            details=[
                f"Amount: {leg.describe()}",
                f"From: {shorten_address(sender)}",
                f"To: {shorten_address(recipient)}",
            ],
            actions=[TransferAction(
                from_address=sender,
                to_address=recipient,
                amount=leg.amount,
                token=leg.symbol,
                coin_type=NATIVE,
                token_logo=leg.logo,
            )],
            participants=[
                Participant(address=sender, role=ParticipantRole.SENDER),
                Participant(address=recipient, role=ParticipantRole.RECIPIENT),
            ],
        )
