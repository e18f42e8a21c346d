"""BridgeExplainer: assets sent into a cross-chain bridge."""

from txexplainer.domain.enums import ParticipantRole, TransactionType
from txexplainer.parser.generic.base import TokenFlowExplainer
from txexplainer.parser.handlers.common import TokenLeg
from txexplainer.parser.utils.actions import BridgeAction
from txexplainer.registry.protocols import ProtocolEntry, ProtocolRegistry
from txexplainer.registry.tokens import TokenRegistry


class BridgeExplainer(TokenFlowExplainer):
    EXPLAINER_NAME = "BridgeExplainer"
    TX_TYPE = TransactionType.BRIDGE
    VERB = "bridged"
    PREPOSITION = "via"
    ACTOR_LABEL = "Sender"
    PROTOCOL_LABEL = "Bridge"
    ROLE = ParticipantRole.SENDER
    NATIVE_FALLBACK = True

    def __init__(self, tokens: TokenRegistry, protocols: ProtocolRegistry, source_chain: str | None = None) -> None:
        super().__init__(tokens, protocols)
        self._source_chain = source_chain

    def _make_action(self, sender: str, leg: TokenLeg, protocol: ProtocolEntry | None) -> BridgeAction:
        # The destination chain is encoded per bridge and is not decoded here.
        return BridgeAction(
            sender=sender,
            token=leg.symbol,
            amount=leg.amount,
            source_chain=self._source_chain,
            bridge=protocol.name if protocol else None,
            bridge_logo=protocol.logo if protocol else None,
        )
