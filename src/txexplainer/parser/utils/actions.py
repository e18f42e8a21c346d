"""Typed action records, one variant per explained transaction category."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class _Action(BaseModel):
    model_config = ConfigDict(frozen=True)


class TransferAction(_Action):
    type: Literal["transfer"] = "transfer"
    from_address: str
    to_address: str
    amount: str
    token: str
    coin_type: str  # token address or "native"
    token_logo: str | None = None


class ApprovalAction(_Action):
    type: Literal["approval"] = "approval"
    owner: str
    spender: str
    token: str
    token_address: str
    amount: str
    is_unlimited: bool
    spender_protocol: str | None = None
    spender_logo: str | None = None


class NftTransferAction(_Action):
    type: Literal["nft_transfer"] = "nft_transfer"
    from_address: str
    to_address: str
    object_id: str
    object_type: str  # collection contract


class NftPurchaseAction(_Action):
    type: Literal["nft_purchase"] = "nft_purchase"
    buyer: str
    seller: str = ""
    object_id: str = ""
    object_type: str = ""
    price: str
    marketplace: str | None = None
    marketplace_logo: str | None = None


class SwapAction(_Action):
    type: Literal["swap"] = "swap"
    trader: str
    from_token: str
    from_amount: str
    from_logo: str | None = None
    to_token: str
    to_amount: str
    to_logo: str | None = None
    dex: str | None = None
    dex_logo: str | None = None
    is_multi_hop: bool = False
    hops: int = 0


class LiquidityAction(_Action):
    type: Literal["liquidity_add", "liquidity_remove"]
    provider: str
    token_a: str = ""
    amount_a: str = ""
    token_a_logo: str | None = None
    token_b: str = ""
    amount_b: str = ""
    token_b_logo: str | None = None
    pool: str | None = None
    dex: str | None = None
    dex_logo: str | None = None


class StakeAction(_Action):
    type: Literal["stake", "unstake"]
    staker: str
    amount: str
    token: str | None = None
    protocol: str | None = None
    protocol_logo: str | None = None


class RewardAmount(BaseModel):
    model_config = ConfigDict(frozen=True)

    token: str
    amount: str


class ClaimRewardsAction(_Action):
    type: Literal["claim_rewards"] = "claim_rewards"
    claimer: str
    rewards: tuple[RewardAmount, ...] = ()
    protocol: str | None = None
    protocol_logo: str | None = None


class BorrowAction(_Action):
    type: Literal["borrow"] = "borrow"
    borrower: str
    token: str
    amount: str
    protocol: str | None = None
    protocol_logo: str | None = None


class RepayAction(_Action):
    type: Literal["repay"] = "repay"
    borrower: str
    token: str
    amount: str
    protocol: str | None = None
    protocol_logo: str | None = None


class SupplyAction(_Action):
    type: Literal["supply"] = "supply"
    supplier: str
    token: str
    amount: str
    protocol: str | None = None
    protocol_logo: str | None = None


class WithdrawAction(_Action):
    type: Literal["withdraw"] = "withdraw"
    withdrawer: str
    token: str
    amount: str
    protocol: str | None = None
    protocol_logo: str | None = None


class BridgeAction(_Action):
    type: Literal["bridge", "bridge_in", "bridge_out"] = "bridge"
    sender: str
    token: str
    amount: str
    source_chain: str | None = None
    destination_chain: str | None = None
    bridge: str | None = None
    bridge_logo: str | None = None


class PublishAction(_Action):
    type: Literal["publish"] = "publish"
    publisher: str
    contract_address: str
    modules: tuple[str, ...] = ()


class ContractCallAction(_Action):
    type: Literal["contract_call"] = "contract_call"
    caller: str
    contract: str
    method: str
    protocol: str | None = None
    protocol_logo: str | None = None


Action = Annotated[
    Union[
        TransferAction,
        ApprovalAction,
        NftTransferAction,
        NftPurchaseAction,
        SwapAction,
        LiquidityAction,
        StakeAction,
        ClaimRewardsAction,
        BorrowAction,
        RepayAction,
        SupplyAction,
        WithdrawAction,
        BridgeAction,
        PublishAction,
        ContractCallAction,
    ],
    Field(discriminator="type"),
]
