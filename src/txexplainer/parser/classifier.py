"""TransactionClassifier: picks exactly one TransactionType per transaction.

Checks are layered from most to least certain: contract creation, empty
call-data, approve selector, emitted swap/liquidity events, the selector table,
destination-address reputation, NFT transfer events, then `generic`.
"""

import logging

from txexplainer.domain.enums import TransactionType, TransferShape
from txexplainer.parser.utils.abi import (
    ADD_LIQUIDITY_ETH_SELECTOR,
    ADD_LIQUIDITY_SELECTOR,
    APPROVE_SELECTOR,
    BURN_V2_TOPIC,
    CLAIM_REWARDS_SELECTOR,
    DEPOSIT_SELECTOR,
    LENDING_METHOD_NAMES,
    MINT_V2_TOPIC,
    MULTI_TOKEN_TOPICS,
    MULTICALL_SELECTORS,
    REMOVE_LIQUIDITY_ETH_SELECTOR,
    REMOVE_LIQUIDITY_SELECTOR,
    SEND_FROM_SELECTOR,
    STAKE_SELECTOR,
    SWAP_BRIDGE_SELECTOR,
    SWAP_TOPICS,
    TRANSFER_FROM_SELECTOR,
    TRANSFER_SELECTOR,
    UNSTAKE_SELECTOR,
    V2_SWAP_SELECTORS,
    WITHDRAW_SELECTOR,
    is_empty_calldata,
    selector_of,
    transfer_shape,
)
from txexplainer.parser.utils.types import RawReceipt, RawTransaction
from txexplainer.registry.protocols import ProtocolRegistry

logger = logging.getLogger(__name__)

# Checked in order: "repayBorrow" must resolve to repay, not borrow.
LENDING_VERBS: tuple[tuple[TransactionType, tuple[str, ...]], ...] = (
    (TransactionType.REPAY, ("repay",)),
    (TransactionType.BORROW, ("borrow",)),
    (TransactionType.SUPPLY, ("supply", "deposit", "mint")),
    (TransactionType.WITHDRAW, ("withdraw", "redeem")),
)


class TransactionClassifier:
    """Total, side-effect-free classification over (tx, receipt)."""

    def __init__(self, protocols: ProtocolRegistry) -> None:
        self._protocols = protocols

    def classify(self, tx: RawTransaction, receipt: RawReceipt) -> TransactionType:
        tx_type = self._classify(tx, receipt)
        logger.debug("Classified %s as %s", tx.hash, tx_type.value)
        return tx_type

    def _classify(self, tx: RawTransaction, receipt: RawReceipt) -> TransactionType:
        if tx.to_address is None and receipt.contract_address:
            return TransactionType.PUBLISH

        if is_empty_calldata(tx.input):
            return TransactionType.TRANSFER

        selector = selector_of(tx.input)
        if selector == APPROVE_SELECTOR:
            return TransactionType.APPROVAL

        by_events = self._by_events(receipt)
        if by_events is not None:
            return by_events

        by_selector = self._by_selector(selector, tx, receipt)
        if by_selector is not None:
            return by_selector

        by_address = self._by_address(selector, tx)
        if by_address is not None:
            return by_address

        if self._has_nft_events(receipt):
            return TransactionType.NFT_TRANSFER

        return TransactionType.GENERIC

    # --- Layers ---

    @staticmethod
    def _topic_heads(receipt: RawReceipt) -> set[str]:
        return {log.topics[0] for log in receipt.logs if log.topics}

    def _by_events(self, receipt: RawReceipt) -> TransactionType | None:
        heads = self._topic_heads(receipt)
        if heads & SWAP_TOPICS:
            return TransactionType.SWAP
        if MINT_V2_TOPIC in heads:
            return TransactionType.LIQUIDITY_ADD
        if BURN_V2_TOPIC in heads:
            return TransactionType.LIQUIDITY_REMOVE
        return None

    def _by_selector(self, selector: str, tx: RawTransaction, receipt: RawReceipt) -> TransactionType | None:
        if selector in (TRANSFER_SELECTOR, TRANSFER_FROM_SELECTOR):
            if self._has_indexed_transfer(receipt):
                return TransactionType.NFT_TRANSFER
            return TransactionType.TRANSFER

        if selector in V2_SWAP_SELECTORS:
            return TransactionType.SWAP

        if selector in MULTICALL_SELECTORS:
            if self._topic_heads(receipt) & SWAP_TOPICS:
                return TransactionType.SWAP
            return TransactionType.GENERIC

        if selector in (ADD_LIQUIDITY_SELECTOR, ADD_LIQUIDITY_ETH_SELECTOR):
            return TransactionType.LIQUIDITY_ADD
        if selector in (REMOVE_LIQUIDITY_SELECTOR, REMOVE_LIQUIDITY_ETH_SELECTOR):
            return TransactionType.LIQUIDITY_REMOVE

        if selector in (STAKE_SELECTOR, DEPOSIT_SELECTOR):
            return TransactionType.STAKE
        if selector in (UNSTAKE_SELECTOR, WITHDRAW_SELECTOR):
            if self._protocols.identify_lending(tx.to_address):
                return TransactionType.WITHDRAW
            return TransactionType.UNSTAKE

        if selector == CLAIM_REWARDS_SELECTOR:
            return TransactionType.CLAIM_REWARDS

        if selector in (SWAP_BRIDGE_SELECTOR, SEND_FROM_SELECTOR):
            return TransactionType.BRIDGE

        return None

    def _by_address(self, selector: str, tx: RawTransaction) -> TransactionType | None:
        to = tx.to_address
        if not to:
            return None

        if self._protocols.identify_bridge(to):
            return TransactionType.BRIDGE
        if self._protocols.identify_staking(to):
            return TransactionType.STAKE
        if self._protocols.identify_dex(to):
            return TransactionType.SWAP

        if self._protocols.identify_lending(to):
            verb = lending_verb(selector, tx.input)
            if verb is not None:
                return verb

        if self._protocols.identify_nft_marketplace(to):
            return TransactionType.NFT_PURCHASE

        return None

    # --- Event checks ---

    @staticmethod
    def _has_indexed_transfer(receipt: RawReceipt) -> bool:
        return any(transfer_shape(log.topics) is TransferShape.INDEXED for log in receipt.logs)

    def _has_nft_events(self, receipt: RawReceipt) -> bool:
        if self._has_indexed_transfer(receipt):
            return True
        return bool(self._topic_heads(receipt) & MULTI_TOKEN_TOPICS)


def lending_verb(selector: str, calldata: str) -> TransactionType | None:
    """Lending action named by the call: known method name first, then raw substrings."""
    haystack = f"{LENDING_METHOD_NAMES.get(selector, '')} {calldata}".lower()
    for tx_type, needles in LENDING_VERBS:
        if any(n in haystack for n in needles):
            return tx_type
    return None
