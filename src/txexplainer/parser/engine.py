"""TransactionEngine: classify, explain and account for one EVM transaction."""

import logging
from typing import Any, TypeVar

from pydantic import BaseModel

from txexplainer.domain.enums import TransactionType
from txexplainer.parser.classifier import TransactionClassifier
from txexplainer.parser.registry import ExplainerRegistry, build_default_registry
from txexplainer.parser.utils.balances import extract_balance_changes
from txexplainer.parser.utils.gas import extract_gas_info
from txexplainer.parser.utils.revert import parse_revert_reason
from txexplainer.parser.utils.types import (
    BalanceChangeInfo,
    ExplanationResult,
    GasInfo,
    ParsedTransaction,
    RawBlock,
    RawReceipt,
    RawTransaction,
)
from txexplainer.registry.protocols import ProtocolRegistry
from txexplainer.registry.tokens import TokenRegistry

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def _coerce(model: type[M], value: M | dict[str, Any]) -> M:
    """Accept either a parsed model or a raw JSON-RPC dict."""
    if isinstance(value, model):
        return value
    return model.model_validate(value)


class TransactionEngine:
    """Stateless orchestrator. One instance can serve any number of concurrent callers."""

    def __init__(
        self,
        tokens: TokenRegistry,
        protocols: ProtocolRegistry,
        explainers: ExplainerRegistry | None = None,
        chain: str | None = None,
    ) -> None:
        self._tokens = tokens
        self._protocols = protocols
        self._classifier = TransactionClassifier(protocols)
        if explainers is None:
            explainers = build_default_registry(tokens, protocols, chain=chain)
        self._explainers = explainers

    def classify(self, tx: RawTransaction | dict, receipt: RawReceipt | dict) -> TransactionType:
        return self._classifier.classify(_coerce(RawTransaction, tx), _coerce(RawReceipt, receipt))

    def explain(self, tx: RawTransaction | dict, receipt: RawReceipt | dict) -> ExplanationResult:
        tx = _coerce(RawTransaction, tx)
        receipt = _coerce(RawReceipt, receipt)
        tx_type = self._classifier.classify(tx, receipt)
        explainer = self._explainers.get(tx_type)
        logger.debug("Explaining %s with %s", tx.hash, explainer.EXPLAINER_NAME)
        return explainer.explain(tx, receipt)

    def extract_gas_info(self, tx: RawTransaction | dict, receipt: RawReceipt | dict) -> GasInfo:
        return extract_gas_info(_coerce(RawTransaction, tx), _coerce(RawReceipt, receipt), self._tokens.native.decimals)

    def extract_balance_changes(
        self,
        tx: RawTransaction | dict,
        receipt: RawReceipt | dict,
        subject: str | None = None,
    ) -> list[BalanceChangeInfo]:
        """Balance deltas seen from `subject`, the sender by default."""
        tx = _coerce(RawTransaction, tx)
        return extract_balance_changes(tx, _coerce(RawReceipt, receipt), subject or tx.from_address, self._tokens)

    def parse_transaction(
        self,
        tx: RawTransaction | dict,
        receipt: RawReceipt | dict,
        block: RawBlock | dict,
    ) -> ParsedTransaction:
        tx = _coerce(RawTransaction, tx)
        receipt = _coerce(RawReceipt, receipt)
        block = _coerce(RawBlock, block)

        block_number = receipt.block_number if receipt.block_number is not None else block.number
        return ParsedTransaction(
            digest=tx.hash,
            timestamp=str(block.timestamp * 1000) if block.timestamp else None,
            sender=tx.from_address,
            status=receipt.status,
            error=parse_revert_reason(tx, receipt),
            explanation=self.explain(tx, receipt),
            gas_info=self.extract_gas_info(tx, receipt),
            balance_changes=tuple(self.extract_balance_changes(tx, receipt)),
            raw_transaction={
                "tx": tx.model_dump(mode="json", by_alias=True),
                "receipt": receipt.model_dump(mode="json", by_alias=True),
            },
            block_number=str(block_number),
        )
