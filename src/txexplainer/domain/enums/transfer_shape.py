from enum import Enum


class TransferShape(str, Enum):
    """Shape of a `Transfer(address,address,uint256)` log, decided by topic count.

    VALUE: 3 topics, amount in the data field (ERC-20).
    INDEXED: 4 topics, token id as the last topic (ERC-721).
    """

    VALUE = "value"
    INDEXED = "indexed"
