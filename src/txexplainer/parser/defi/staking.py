"""Staking pools, farms and liquid-staking contracts: stake, unstake, claim."""

from txexplainer.domain.enums import ParticipantRole, TransactionType, TransferShape
from txexplainer.parser.generic.base import BaseExplainer, TokenFlowExplainer
from txexplainer.parser.handlers.common import TokenLeg, join_legs, transfer_leg
from txexplainer.parser.utils.actions import ClaimRewardsAction, RewardAmount, StakeAction
from txexplainer.parser.utils.format import shorten_address
from txexplainer.parser.utils.types import ExplanationResult, Participant, RawReceipt, RawTransaction
from txexplainer.registry.protocols import ProtocolEntry


class StakeExplainer(TokenFlowExplainer):
    EXPLAINER_NAME = "StakeExplainer"
    TX_TYPE = TransactionType.STAKE
    VERB = "staked"
    PREPOSITION = "on"
    ACTOR_LABEL = "Staker"
    ROLE = ParticipantRole.STAKER
    NATIVE_FALLBACK = True

    def _make_action(self, sender: str, leg: TokenLeg, protocol: ProtocolEntry | None) -> StakeAction:
        return StakeAction(
            type=self.TX_TYPE.value,
            staker=sender,
            amount=leg.amount,
            token=leg.symbol,
            protocol=protocol.name if protocol else None,
            protocol_logo=protocol.logo if protocol else None,
        )


class UnstakeExplainer(StakeExplainer):
    EXPLAINER_NAME = "UnstakeExplainer"
    TX_TYPE = TransactionType.UNSTAKE
    VERB = "unstaked"
    PREPOSITION = "from"
    INCOMING = True
    NATIVE_FALLBACK = False


class ClaimRewardsExplainer(BaseExplainer):
    """Every ERC-20 transfer into the claimer counts as a reward."""

    EXPLAINER_NAME = "ClaimRewardsExplainer"
    TX_TYPE = TransactionType.CLAIM_REWARDS

    def explain(self, tx: RawTransaction, receipt: RawReceipt) -> ExplanationResult:
        ctx = self._context(tx, receipt)
        claimer = tx.from_address
        protocol = self._protocol(ctx.to)

        rewards = [
            transfer_leg(t)
            for t in ctx.peek_transfers(to_address=ctx.sender, shape=TransferShape.VALUE)
        ]
        suffix = f" from {protocol.name}" if protocol else ""

        details = [f"Claimer: {shorten_address(claimer)}"]
        details.extend(f"Reward: {leg.describe()}" for leg in rewards)
        if protocol:
            details.append(f"Protocol: {protocol.name}")

        return self._make_result(
            summary=f"{shorten_address(claimer)} claimed {join_legs(rewards, empty='rewards')}{suffix}.",
            details=details,
            actions=[ClaimRewardsAction(
                claimer=claimer,
                rewards=tuple(RewardAmount(token=leg.symbol, amount=leg.amount) for leg in rewards),
                protocol=protocol.name if protocol else None,
                protocol_logo=protocol.logo if protocol else None,
            )],
            participants=[Participant(address=claimer, role=ParticipantRole.CLAIMER)],
            metadata={"protocol_logo": protocol.logo if protocol else None},
        )
