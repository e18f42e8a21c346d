"""ExplainerRegistry: TransactionType -> explainer, covering every member."""

import logging
from collections.abc import Iterable

from txexplainer.domain.enums import TransactionType
from txexplainer.exceptions import ExplainerRegistryError, UnknownTransactionTypeError
from txexplainer.parser.generic.base import BaseExplainer
from txexplainer.registry.protocols import ProtocolRegistry
from txexplainer.registry.tokens import TokenRegistry

logger = logging.getLogger(__name__)

# Tags kept for parity with richer chain models. The classifier never emits
# them; if one is requested anyway it gets the generic explanation.
RESERVED_TYPES: frozenset[TransactionType] = frozenset({
    TransactionType.NFT_MINT,
    TransactionType.NFT_BURN,
    TransactionType.NFT_LIST,
    TransactionType.NFT_CANCEL_LISTING,
    TransactionType.NFT_MAKE_OFFER,
    TransactionType.NFT_ACCEPT_OFFER,
    TransactionType.MINT,
    TransactionType.BURN,
    TransactionType.MERGE_COINS,
    TransactionType.SPLIT_COINS,
    TransactionType.LIQUIDATE,
    TransactionType.OPEN_POSITION,
    TransactionType.CLOSE_POSITION,
    TransactionType.PERP_TRADE,
    TransactionType.FLASH_LOAN_ARBITRAGE,
    TransactionType.BRIDGE_IN,
    TransactionType.BRIDGE_OUT,
    TransactionType.REGISTER_NAME,
    TransactionType.RENEW_NAME,
    TransactionType.VOTE,
    TransactionType.PROPOSE,
    TransactionType.UPGRADE,
    TransactionType.AIRDROP_CLAIM,
    TransactionType.MULTISIG,
    TransactionType.SPONSORED,
    TransactionType.SYSTEM_CONSENSUS,
    TransactionType.SYSTEM_EPOCH_CHANGE,
    TransactionType.SYSTEM_GENESIS,
    TransactionType.SYSTEM_CHECKPOINT,
    TransactionType.SYSTEM_AUTHENTICATOR,
    TransactionType.SYSTEM_RANDOMNESS,
})


class ExplainerRegistry:
    """Registry mapping each TransactionType to exactly one explainer.

    `validate()` fails when any member is left unmapped, so adding a type
    without an explainer is caught at build time rather than silently
    falling through to `generic`.
    """

    def __init__(self) -> None:
        self._explainers: dict[TransactionType, BaseExplainer] = {}

    def register(self, tx_type: TransactionType, explainer: BaseExplainer) -> None:
        self._explainers[tx_type] = explainer

    def register_many(self, tx_types: Iterable[TransactionType], explainer: BaseExplainer) -> None:
        for tx_type in tx_types:
            self.register(tx_type, explainer)

    def get(self, tx_type: TransactionType) -> BaseExplainer:
        try:
            return self._explainers[tx_type]
        except KeyError:
            raise UnknownTransactionTypeError(tx_type) from None

    def missing(self) -> list[TransactionType]:
        return [t for t in TransactionType if t not in self._explainers]

    def validate(self) -> "ExplainerRegistry":
        missing = self.missing()
        if missing:
            raise ExplainerRegistryError([t.value for t in missing])
        return self

    def __contains__(self, tx_type: object) -> bool:
        return tx_type in self._explainers

    def __len__(self) -> int:
        return len(self._explainers)


def build_default_registry(
    tokens: TokenRegistry,
    protocols: ProtocolRegistry,
    chain: str | None = None,
) -> ExplainerRegistry:
    """Create an ExplainerRegistry with every transaction type covered."""
    from txexplainer.parser.defi.bridge import BridgeExplainer
    from txexplainer.parser.defi.lending import BorrowExplainer, RepayExplainer, SupplyExplainer, WithdrawExplainer
    from txexplainer.parser.defi.liquidity import LiquidityAddExplainer, LiquidityRemoveExplainer
    from txexplainer.parser.defi.staking import ClaimRewardsExplainer, StakeExplainer, UnstakeExplainer
    from txexplainer.parser.defi.swap import SwapExplainer
    from txexplainer.parser.generic.approval import ApprovalExplainer
    from txexplainer.parser.generic.contract import ContractDeployExplainer, GenericExplainer
    from txexplainer.parser.generic.transfer import TransferExplainer
    from txexplainer.parser.nft.marketplace import NftPurchaseExplainer
    from txexplainer.parser.nft.transfer import NftTransferExplainer

    registry = ExplainerRegistry()

    # Generic
    registry.register(TransactionType.TRANSFER, TransferExplainer(tokens, protocols))
    registry.register(TransactionType.APPROVAL, ApprovalExplainer(tokens, protocols))
    registry.register(TransactionType.PUBLISH, ContractDeployExplainer(tokens, protocols))

    # DeFi
    registry.register(TransactionType.SWAP, SwapExplainer(tokens, protocols))
    registry.register(TransactionType.LIQUIDITY_ADD, LiquidityAddExplainer(tokens, protocols))
    registry.register(TransactionType.LIQUIDITY_REMOVE, LiquidityRemoveExplainer(tokens, protocols))
    registry.register(TransactionType.STAKE, StakeExplainer(tokens, protocols))
    registry.register(TransactionType.UNSTAKE, UnstakeExplainer(tokens, protocols))
    registry.register(TransactionType.CLAIM_REWARDS, ClaimRewardsExplainer(tokens, protocols))
    registry.register(TransactionType.BORROW, BorrowExplainer(tokens, protocols))
    registry.register(TransactionType.REPAY, RepayExplainer(tokens, protocols))
    registry.register(TransactionType.SUPPLY, SupplyExplainer(tokens, protocols))
    registry.register(TransactionType.WITHDRAW, WithdrawExplainer(tokens, protocols))
    registry.register(TransactionType.BRIDGE, BridgeExplainer(tokens, protocols, source_chain=chain))

    # NFT
    registry.register(TransactionType.NFT_TRANSFER, NftTransferExplainer(tokens, protocols))
    registry.register(TransactionType.NFT_PURCHASE, NftPurchaseExplainer(tokens, protocols))

    # Fallback, shared by every reserved tag
    generic = GenericExplainer(tokens, protocols)
    registry.register(TransactionType.GENERIC, generic)
    registry.register_many(RESERVED_TYPES, generic)

    logger.debug("Built explainer registry with %d entries", len(registry))
    return registry.validate()
