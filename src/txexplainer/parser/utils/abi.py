"""Event topics, function selectors and fixed-width decoding of ABI-encoded data."""

from txexplainer.domain.enums import TransferShape

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
WORD_SIZE = 32
SELECTOR_SIZE = 4

# Event topics (keccak256 of the event signature)
TRANSFER_TOPIC = "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"  # Transfer(address,address,uint256)
SWAP_V2_TOPIC = "0xd78ad95fa46c994b6551d0da85fc275fe613ce37657fb8d5e3d130840159d822"   # Swap(address,uint256,uint256,uint256,uint256,address)
SWAP_V3_TOPIC = "0xc42079f94a6350d7e6235f29174924f928cc2ac818eb64fed8004e115fbcca67"   # Swap(address,address,int256,int256,uint160,uint128,int24)
MINT_V2_TOPIC = "0x4c209b5fc8ad50758f13e2e1088ba56a560dff690a1c6fef26394f4c03821c4f"   # Mint(address,uint256,uint256)
BURN_V2_TOPIC = "0xdccd412f0b1252819cb1fd330b93224ca42612892bb3f4f789976e6d81936496"   # Burn(address,uint256,uint256,address)
TRANSFER_SINGLE_TOPIC = "0xc3d58168c5ae7397731d063d5bbf3d657854427343f4c083240f7aacaa2d0f62"  # ERC-1155 TransferSingle
TRANSFER_BATCH_TOPIC = "0x4a39dc06d4c0dbc64b70af90fd698a233a518aa5d07e595d983b8c0526c8f7fb"   # ERC-1155 TransferBatch

SWAP_TOPICS = frozenset({SWAP_V2_TOPIC, SWAP_V3_TOPIC})
MULTI_TOKEN_TOPICS = frozenset({TRANSFER_SINGLE_TOPIC, TRANSFER_BATCH_TOPIC})

# Function selectors (first 4 bytes of keccak256 of the function signature)
TRANSFER_SELECTOR = "0xa9059cbb"                  # transfer(address,uint256)
APPROVE_SELECTOR = "0x095ea7b3"                   # approve(address,uint256)
TRANSFER_FROM_SELECTOR = "0x23b872dd"             # transferFrom(address,address,uint256)

SWAP_EXACT_TOKENS_FOR_TOKENS = "0x38ed1739"
SWAP_TOKENS_FOR_EXACT_TOKENS = "0x8803dbee"
SWAP_EXACT_ETH_FOR_TOKENS = "0x7ff36ab5"
SWAP_EXACT_TOKENS_FOR_ETH = "0x18cbafe5"
SWAP_ETH_FOR_EXACT_TOKENS = "0xfb3bdb41"

MULTICALL_DEADLINE_SELECTOR = "0x5ae401dc"        # multicall(uint256,bytes[])
MULTICALL_SELECTOR = "0xac9650d8"                 # multicall(bytes[])
EXECUTE_SELECTOR = "0x3593564c"                   # execute(bytes,bytes[],uint256)

ADD_LIQUIDITY_SELECTOR = "0xe8e33700"
ADD_LIQUIDITY_ETH_SELECTOR = "0xf305d719"
REMOVE_LIQUIDITY_SELECTOR = "0xbaa2abde"
REMOVE_LIQUIDITY_ETH_SELECTOR = "0x02751cec"

STAKE_SELECTOR = "0xa694fc3a"                     # stake(uint256)
DEPOSIT_SELECTOR = "0xb6b55f25"                   # deposit(uint256)
UNSTAKE_SELECTOR = "0x2e17de78"                   # unstake(uint256)
WITHDRAW_SELECTOR = "0x2e1a7d4d"                  # withdraw(uint256)
CLAIM_REWARDS_SELECTOR = "0x372500ab"             # claimRewards()

SWAP_BRIDGE_SELECTOR = "0x9fbf10fc"               # Stargate swap(...)
SEND_FROM_SELECTOR = "0xc19d93fb"                 # OFT sendFrom(...)

V2_SWAP_SELECTORS = frozenset({
    SWAP_EXACT_TOKENS_FOR_TOKENS,
    SWAP_TOKENS_FOR_EXACT_TOKENS,
    SWAP_EXACT_ETH_FOR_TOKENS,
    SWAP_EXACT_TOKENS_FOR_ETH,
    SWAP_ETH_FOR_EXACT_TOKENS,
})
MULTICALL_SELECTORS = frozenset({MULTICALL_DEADLINE_SELECTOR, MULTICALL_SELECTOR, EXECUTE_SELECTOR})

# Lending pool methods, by selector. Aave-style pools and Compound-style vTokens.
LENDING_METHOD_NAMES: dict[str, str] = {
    "0x617ba037": "supply",             # supply(address,uint256,address,uint16)
    "0xe8eda9df": "deposit",            # deposit(address,uint256,address,uint16)
    "0x69328dec": "withdraw",           # withdraw(address,uint256,address)
    "0xa415bcad": "borrow",             # borrow(address,uint256,uint256,uint16,address)
    "0x573ade81": "repay",              # repay(address,uint256,uint256,address)
    "0xa0712d68": "mint",               # mint(uint256)
    "0x1249c58b": "mint",               # mint() payable
    "0xdb006a75": "redeem",             # redeem(uint256)
    "0x852a12e3": "redeemUnderlying",   # redeemUnderlying(uint256)
    "0xc5ebeaec": "borrow",             # borrow(uint256)
    "0x0e752702": "repayBorrow",        # repayBorrow(uint256)
    "0x4e4d9fea": "repayBorrow",        # repayBorrow() payable
}

def strip_hex_prefix(value: str) -> str:
    return value[2:] if value[:2].lower() == "0x" else value


def is_empty_calldata(data: str | None) -> bool:
    return not data or len(data) <= 2


def selector_of(data: str | None) -> str:
    """Lower-cased `0x`-prefixed 4-byte selector, or "" when the call-data is shorter."""
    if not data or len(data) < 10:
        return ""
    return data[:10].lower()


def topic_to_address(topic: str | None) -> str:
    """Last 20 bytes of a 32-byte topic."""
    if not topic:
        return ZERO_ADDRESS
    raw = strip_hex_prefix(topic).rjust(40, "0")
    return "0x" + raw[-40:].lower()


def topic_to_int(topic: str | None) -> int:
    if not topic:
        return 0
    raw = strip_hex_prefix(topic)
    return int(raw, 16) if raw else 0


def transfer_shape(topics: tuple[str, ...] | list[str]) -> TransferShape | None:
    """Classify a log by its `Transfer` topic layout. None if it is not a `Transfer` log."""
    if not topics or topics[0].lower() != TRANSFER_TOPIC:
        return None
    if len(topics) == 3:
        return TransferShape.VALUE
    if len(topics) == 4:
        return TransferShape.INDEXED
    return None


class CalldataReader:
    """Fixed-width reader over hex-encoded call-data or log data.

    Reads that run past the end of the buffer never fail: the bytes that are
    present are left-padded with zeros to the requested width, and a read that
    starts past the end yields all zeros.
    """

    def __init__(self, data: str | bytes | None) -> None:
        if data is None:
            self._buf = b""
        elif isinstance(data, bytes):
            self._buf = data
        else:
            raw = strip_hex_prefix(data)
            if len(raw) % 2:
                raw = raw[:-1]
            self._buf = bytes.fromhex(raw)

    def __len__(self) -> int:
        return len(self._buf)

    @property
    def selector(self) -> str:
        if len(self._buf) < SELECTOR_SIZE:
            return ""
        return "0x" + self._buf[:SELECTOR_SIZE].hex()

    def read(self, offset: int, size: int) -> bytes:
        if offset < 0 or size < 0:
            raise ValueError(f"Negative read: offset={offset} size={size}")
        chunk = self._buf[offset:offset + size]
        return chunk.rjust(size, b"\x00")

    def read_word(self, offset: int) -> bytes:
        return self.read(offset, WORD_SIZE)

    def read_uint(self, offset: int) -> int:
        return int.from_bytes(self.read_word(offset), "big")

    def read_address(self, offset: int) -> str:
        return "0x" + self.read_word(offset)[WORD_SIZE - 20:].hex()

    def tail(self, offset: int) -> bytes:
        return self._buf[offset:]


def arg_offset(index: int) -> int:
    """Byte offset of the index-th static argument in call-data (after the selector)."""
    return SELECTOR_SIZE + WORD_SIZE * index
