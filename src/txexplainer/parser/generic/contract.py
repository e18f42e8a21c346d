"""Contract-level explainers: deployments and the always-available generic fallback."""

from txexplainer.domain.enums import ParticipantRole, TransactionType
from txexplainer.parser.generic.base import BaseExplainer
from txexplainer.parser.handlers.common import native_leg
from txexplainer.parser.utils.abi import selector_of
from txexplainer.parser.utils.actions import ContractCallAction, PublishAction
from txexplainer.parser.utils.format import shorten_address
from txexplainer.parser.utils.types import ExplanationResult, Participant, RawReceipt, RawTransaction

CONTRACT_CREATION = "Contract Creation"


class ContractDeployExplainer(BaseExplainer):
    EXPLAINER_NAME = "ContractDeployExplainer"
    TX_TYPE = TransactionType.PUBLISH

    def explain(self, tx: RawTransaction, receipt: RawReceipt) -> ExplanationResult:
        deployer = tx.from_address
        contract = receipt.contract_address or "Unknown"
        return self._make_result(
            summary=f"{shorten_address(deployer)} deployed a new smart contract.",
            details=[f"Deployer: {shorten_address(deployer)}", f"Contract: {contract}"],
            actions=[PublishAction(publisher=deployer, contract_address=contract)],
            participants=[Participant(address=deployer, role=ParticipantRole.CREATOR)],
        )


class GenericExplainer(BaseExplainer):
    """Always-fallback explainer. Reports sender, destination, native value and the raw selector."""

    EXPLAINER_NAME = "GenericExplainer"
    TX_TYPE = TransactionType.GENERIC

    def explain(self, tx: RawTransaction, receipt: RawReceipt) -> ExplanationResult:
        sender = tx.from_address
        to = tx.to_address or CONTRACT_CREATION
        selector = selector_of(tx.input)
        protocol = self._protocol(tx.to_address)

        details: list[str] = []
        if tx.value > 0:
            details.append(f"Value: {native_leg(tx.value, self._tokens).describe()}")
        details.append(f"Sender: {shorten_address(sender)}")
        details.append(f"To: {shorten_address(to)}")
        if selector:
            details.append(f"Method: {selector}")
        if protocol:
            details.append(f"Protocol: {protocol.name}")

        if protocol:
            summary = f"{shorten_address(sender)} interacted with {protocol.name}."
        else:
            summary = f"{shorten_address(sender)} called {shorten_address(to)}."

        return self._make_result(
            summary=summary,
            details=details,
            actions=[ContractCallAction(
                caller=sender,
                contract=to,
                method=selector,
                protocol=protocol.name if protocol else None,
                protocol_logo=protocol.logo if protocol else None,
            )],
            participants=[Participant(address=sender, role=ParticipantRole.SENDER)],
            metadata={"protocol_logo": protocol.logo if protocol else None},
        )
