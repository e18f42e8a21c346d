"""ApprovalExplainer: ERC-20 `approve(spender, amount)`."""

from txexplainer.domain.enums import ParticipantRole, TransactionType
from txexplainer.parser.generic.base import BaseExplainer
from txexplainer.parser.utils.abi import arg_offset
from txexplainer.parser.utils.actions import ApprovalAction
from txexplainer.parser.utils.format import format_token_amount, shorten_address
from txexplainer.parser.utils.types import ExplanationResult, Participant, RawReceipt, RawTransaction

# Amounts at or above 2^128 - 1 are treated as "infinite" allowances.
UNLIMITED_THRESHOLD = 2**128 - 1
UNLIMITED_WARNING = "⚠️ This is an unlimited approval - the spender can use any amount of your tokens"


class ApprovalExplainer(BaseExplainer):
    EXPLAINER_NAME = "ApprovalExplainer"
    TX_TYPE = TransactionType.APPROVAL

    def explain(self, tx: RawTransaction, receipt: RawReceipt) -> ExplanationResult:
        ctx = self._context(tx, receipt)
        owner = tx.from_address
        token_address = ctx.to or ""

        # Short call-data reads as zeros: zero-address spender, amount 0.
        spender = ctx.calldata.read_address(arg_offset(0))
        raw_amount = ctx.calldata.read_uint(arg_offset(1))

        symbol = self._tokens.symbol(token_address)
        is_unlimited = raw_amount >= UNLIMITED_THRESHOLD
        amount = "Unlimited" if is_unlimited else format_token_amount(raw_amount, self._tokens.decimals(token_address))

        spender_info = self._protocol(spender)
        spender_name = spender_info.name if spender_info else shorten_address(spender)
        spender_logo = spender_info.logo if spender_info else None

        details = [
            f"Token: {symbol}",
            f"Amount: {amount}",
            f"Spender: {spender_name}",
            f"Spender Address: {shorten_address(spender)}",
        ]
        if is_unlimited:
            details.append(UNLIMITED_WARNING)

        return self._make_result(
            summary=f"{shorten_address(owner)} approved {amount} {symbol} for {spender_name}.",
            details=details,
            actions=[ApprovalAction(
                owner=owner,
                spender=spender,
                token=symbol,
                token_address=token_address,
                amount=amount,
                is_unlimited=is_unlimited,
                spender_protocol=spender_name,
                spender_logo=spender_logo,
            )],
            participants=[
                Participant(address=owner, role=ParticipantRole.OWNER),
                Participant(address=spender, role=ParticipantRole.SPENDER),
            ],
            metadata={"is_unlimited_approval": is_unlimited, "spender_logo": spender_logo},
        )
