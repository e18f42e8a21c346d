"""Lending pool explainers: Borrow, Repay, Supply, Withdraw.

Venus/Compound-style vTokens and Aave-style pools look the same from the
sender's side: one token leg in (borrow, withdraw) or out (repay, supply).
"""

from txexplainer.domain.enums import ParticipantRole, TransactionType
from txexplainer.parser.generic.base import TokenFlowExplainer
from txexplainer.parser.handlers.common import TokenLeg
from txexplainer.parser.utils.actions import BorrowAction, RepayAction, SupplyAction, WithdrawAction
from txexplainer.registry.protocols import ProtocolEntry


class BorrowExplainer(TokenFlowExplainer):
    EXPLAINER_NAME = "BorrowExplainer"
    TX_TYPE = TransactionType.BORROW
    VERB = "borrowed"
    PREPOSITION = "from"
    ACTOR_LABEL = "Borrower"
    ROLE = ParticipantRole.BORROWER
    INCOMING = True

    def _make_action(self, sender: str, leg: TokenLeg, protocol: ProtocolEntry | None) -> BorrowAction:
        return BorrowAction(
            borrower=sender,
            token=leg.symbol,
            amount=leg.amount,
            protocol=protocol.name if protocol else None,
            protocol_logo=protocol.logo if protocol else None,
        )


class RepayExplainer(TokenFlowExplainer):
    EXPLAINER_NAME = "RepayExplainer"
    TX_TYPE = TransactionType.REPAY
    VERB = "repaid"
    PREPOSITION = "on"
    ACTOR_LABEL = "Borrower"
    ROLE = ParticipantRole.BORROWER

    def _make_action(self, sender: str, leg: TokenLeg, protocol: ProtocolEntry | None) -> RepayAction:
        return RepayAction(
            borrower=sender,
            token=leg.symbol,
            amount=leg.amount,
            protocol=protocol.name if protocol else None,
            protocol_logo=protocol.logo if protocol else None,
        )


class SupplyExplainer(TokenFlowExplainer):
    EXPLAINER_NAME = "SupplyExplainer"
    TX_TYPE = TransactionType.SUPPLY
    VERB = "supplied"
    PREPOSITION = "to"
    ACTOR_LABEL = "Supplier"
    ROLE = ParticipantRole.LENDER

    def _make_action(self, sender: str, leg: TokenLeg, protocol: ProtocolEntry | None) -> SupplyAction:
        return SupplyAction(
            supplier=sender,
            token=leg.symbol,
            amount=leg.amount,
            protocol=protocol.name if protocol else None,
            protocol_logo=protocol.logo if protocol else None,
        )


class WithdrawExplainer(TokenFlowExplainer):
    EXPLAINER_NAME = "WithdrawExplainer"
    TX_TYPE = TransactionType.WITHDRAW
    VERB = "withdrew"
    PREPOSITION = "from"
    ACTOR_LABEL = "Withdrawer"
    ROLE = ParticipantRole.LENDER
    INCOMING = True

    def _make_action(self, sender: str, leg: TokenLeg, protocol: ProtocolEntry | None) -> WithdrawAction:
        return WithdrawAction(
            withdrawer=sender,
            token=leg.symbol,
            amount=leg.amount,
            protocol=protocol.name if protocol else None,
            protocol_logo=protocol.logo if protocol else None,
        )
