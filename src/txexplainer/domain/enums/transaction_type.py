from enum import Enum


class TransactionType(str, Enum):
    """Closed set of transaction categories. Exactly one is assigned per transaction."""

    TRANSFER = "transfer"
    APPROVAL = "approval"
    NFT_TRANSFER = "nft_transfer"
    NFT_MINT = "nft_mint"
    NFT_BURN = "nft_burn"
    NFT_LIST = "nft_list"
    NFT_PURCHASE = "nft_purchase"
    NFT_CANCEL_LISTING = "nft_cancel_listing"
    NFT_MAKE_OFFER = "nft_make_offer"
    NFT_ACCEPT_OFFER = "nft_accept_offer"
    SWAP = "swap"
    LIQUIDITY_ADD = "liquidity_add"
    LIQUIDITY_REMOVE = "liquidity_remove"
    MINT = "mint"
    BURN = "burn"
    MERGE_COINS = "merge_coins"
    SPLIT_COINS = "split_coins"
    STAKE = "stake"
    UNSTAKE = "unstake"
    CLAIM_REWARDS = "claim_rewards"
    BORROW = "borrow"
    REPAY = "repay"
    SUPPLY = "supply"
    WITHDRAW = "withdraw"
    LIQUIDATE = "liquidate"
    OPEN_POSITION = "open_position"
    CLOSE_POSITION = "close_position"
    PERP_TRADE = "perp_trade"
    FLASH_LOAN_ARBITRAGE = "flash_loan_arbitrage"
    BRIDGE = "bridge"
    BRIDGE_IN = "bridge_in"
    BRIDGE_OUT = "bridge_out"
    REGISTER_NAME = "register_name"
    RENEW_NAME = "renew_name"
    VOTE = "vote"
    PROPOSE = "propose"
    PUBLISH = "publish"
    UPGRADE = "upgrade"
    AIRDROP_CLAIM = "airdrop_claim"
    MULTISIG = "multisig"
    SPONSORED = "sponsored"
    # Reserved for non-EVM parity, never produced by the classifier
    SYSTEM_CONSENSUS = "system_consensus"
    SYSTEM_EPOCH_CHANGE = "system_epoch_change"
    SYSTEM_GENESIS = "system_genesis"
    SYSTEM_CHECKPOINT = "system_checkpoint"
    SYSTEM_AUTHENTICATOR = "system_authenticator"
    SYSTEM_RANDOMNESS = "system_randomness"
    GENERIC = "generic"
