"""Base explainer interfaces."""

from abc import ABC, abstractmethod
from typing import Any

from txexplainer.domain.enums import ParticipantRole, TransactionType, TransferShape
from txexplainer.parser.handlers.common import TokenLeg, native_leg, transfer_leg, unknown_leg
from txexplainer.parser.utils.actions import Action
from txexplainer.parser.utils.context import TransactionContext
from txexplainer.parser.utils.format import shorten_address
from txexplainer.parser.utils.types import ExplanationResult, Participant, RawReceipt, RawTransaction
from txexplainer.registry.protocols import ProtocolEntry, ProtocolRegistry
from txexplainer.registry.tokens import TokenRegistry


class BaseExplainer(ABC):
    """Minimal interface all explainers must implement."""

    EXPLAINER_NAME: str = "BaseExplainer"
    TX_TYPE: TransactionType = TransactionType.GENERIC

    def __init__(self, tokens: TokenRegistry, protocols: ProtocolRegistry) -> None:
        self._tokens = tokens
        self._protocols = protocols

    @abstractmethod
    def explain(self, tx: RawTransaction, receipt: RawReceipt) -> ExplanationResult:
        """Re-derive actors and amounts from (tx, receipt). Must never raise on odd data."""

    def _context(self, tx: RawTransaction, receipt: RawReceipt) -> TransactionContext:
        return TransactionContext(tx, receipt, self._tokens)

    def _protocol(self, address: str | None) -> ProtocolEntry | None:
        return self._protocols.get(address)

    def _make_result(
        self,
        summary: str,
        details: list[str],
        actions: list[Action],
        participants: list[Participant],
        metadata: dict[str, Any] | None = None,
        tx_type: TransactionType | None = None,
    ) -> ExplanationResult:
        """Helper to build ExplanationResult with an optional type override."""
        return ExplanationResult(
            summary=summary,
            details=tuple(details),
            type=tx_type or self.TX_TYPE,
            participants=tuple(participants),
            actions=tuple(actions),
            metadata=metadata or {},
        )


class TokenFlowExplainer(BaseExplainer):
    """Declarative single-leg explainer: one token movement into or out of the sender.

    Subclasses define:
        VERB: past-tense verb for the summary ("staked")
        PREPOSITION: joins the protocol name ("on", "from", "to", "via")
        ACTOR_LABEL / PROTOCOL_LABEL: detail-line labels
        ROLE: participant role of the sender
        INCOMING: look for a transfer *to* the sender instead of *from* it
        NATIVE_FALLBACK: report the native value when no token transfer matches

    and implement _make_action(sender, leg, protocol).
    """

    VERB: str = ""
    PREPOSITION: str = "on"
    ACTOR_LABEL: str = "Sender"
    PROTOCOL_LABEL: str = "Protocol"
    ROLE: ParticipantRole = ParticipantRole.SENDER
    INCOMING: bool = False
    NATIVE_FALLBACK: bool = False

    def explain(self, tx: RawTransaction, receipt: RawReceipt) -> ExplanationResult:
        ctx = self._context(tx, receipt)
        protocol = self._protocol(ctx.to)
        leg = self._find_leg(ctx)
        sender = shorten_address(tx.from_address)

        suffix = f" {self.PREPOSITION} {protocol.name}" if protocol else ""
        details = [
            f"{self.ACTOR_LABEL}: {sender}",
            f"Amount: {leg.describe()}",
        ]
        if protocol:
            details.append(f"{self.PROTOCOL_LABEL}: {protocol.name}")

        return self._make_result(
            summary=f"{sender} {self.VERB} {leg.describe()}{suffix}.",
            details=details,
            actions=[self._make_action(tx.from_address, leg, protocol)],
            participants=[Participant(address=tx.from_address, role=self.ROLE)],
            metadata={"protocol_logo": protocol.logo if protocol else None},
        )

    def _find_leg(self, ctx: TransactionContext) -> TokenLeg:
        if self.INCOMING:
            found = ctx.first_transfer(to_address=ctx.sender, shape=TransferShape.VALUE)
        else:
            found = ctx.first_transfer(from_address=ctx.sender, shape=TransferShape.VALUE)
        if found is not None:
            return transfer_leg(found)
        if self.NATIVE_FALLBACK:
            return native_leg(ctx.tx.value, self._tokens)
        return unknown_leg()

    @abstractmethod
    def _make_action(self, sender: str, leg: TokenLeg, protocol: ProtocolEntry | None) -> Action:
        """Typed action record for this category."""
