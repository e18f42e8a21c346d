from enum import Enum


class ProtocolCategory(str, Enum):
    """Partition of the protocol registry."""

    DEX = "dex"
    LENDING = "lending"
    NFT_MARKETPLACE = "nft_marketplace"
    STAKING = "staking"
    BRIDGE = "bridge"
