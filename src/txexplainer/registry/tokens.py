"""Token Registry: token contract address -> symbol/name/decimals/logo.

Keys are lower-cased hex addresses; lookups accept any case. The chain's gas
token lives under the sentinel key "native" (the zero address aliases it).
"""

from collections.abc import Mapping
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field

from txexplainer.parser.utils.format import shorten_address

NATIVE = "native"
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


class TokenEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    symbol: str
    name: str
    decimals: int = Field(ge=0)
    image: str | None = None


_CG = "https://assets.coingecko.com/coins/images"

# BNB Smart Chain tokens (all lowercase)
BSC_TOKENS: dict[str, TokenEntry] = {
    "0xbb4cdb9cbd36b01bd1cbaebf2de08d9173bc095c": TokenEntry(symbol="WBNB", name="Wrapped BNB", decimals=18, image=f"{_CG}/825/small/bnb-icon2_2x.png"),
    # Stablecoins (18 decimals on BSC, unlike Ethereum)
    "0x55d398326f99059ff775485246999027b3197955": TokenEntry(symbol="USDT", name="Tether USD", decimals=18, image=f"{_CG}/325/small/Tether.png"),
    "0x8ac76a51cc950d9822d68b83fe1ad97b32cd580d": TokenEntry(symbol="USDC", name="USD Coin", decimals=18, image=f"{_CG}/6319/small/usdc.png"),
    "0xe9e7cea3dedca5984780bafc599bd69add087d56": TokenEntry(symbol="BUSD", name="Binance USD", decimals=18, image=f"{_CG}/9576/small/BUSD.png"),
    "0x1af3f329e8be154074d8769d1ffa4ee058b1dbc3": TokenEntry(symbol="DAI", name="Dai Stablecoin", decimals=18, image=f"{_CG}/9956/small/dai-multi-collateral-mcd.png"),
    "0x14016e85a25aeb13065688cafb43044c2ef86784": TokenEntry(symbol="TUSD", name="TrueUSD", decimals=18, image=f"{_CG}/3449/small/tusd.png"),
    # Majors
    "0x2170ed0880ac9a755fd29b2688956bd959f933f8": TokenEntry(symbol="ETH", name="Ethereum Token", decimals=18, image=f"{_CG}/279/small/ethereum.png"),
    "0x7130d2a12b9bcbfae4f2634d864a1ee1ce3ead9c": TokenEntry(symbol="BTCB", name="Bitcoin BEP20", decimals=18, image=f"{_CG}/14108/small/Binance-bitcoin.png"),
    "0x0e09fabb73bd3ade0a17ecc321fd13a19e81ce82": TokenEntry(symbol="CAKE", name="PancakeSwap", decimals=18, image=f"{_CG}/12632/small/pancakeswap-cake-logo.png"),
    # DeFi
    "0xcf6bb5389c92bdda8a3747ddb454cb7a64626c63": TokenEntry(symbol="XVS", name="Venus", decimals=18, image=f"{_CG}/13161/small/venus.png"),
    "0x8f0528ce5ef7b51152a59745befdd91d97091d2f": TokenEntry(symbol="ALPACA", name="Alpaca Finance", decimals=18, image=f"{_CG}/14165/small/alpaca.png"),
    "0x965f527d9159dce6288a2219db51fc6eef120dd1": TokenEntry(symbol="BSW", name="BiSwap", decimals=18, image=f"{_CG}/16845/small/biswap.png"),
    "0x603c7f932ed1fc6575303d8fb018fdcbb0f39a95": TokenEntry(symbol="BANANA", name="ApeSwap", decimals=18, image=f"{_CG}/14870/small/banana.png"),
    # Meme
    "0xba2ae424d960c26247dd6c32edc70b295c744c43": TokenEntry(symbol="DOGE", name="Dogecoin", decimals=8, image=f"{_CG}/5/small/dogecoin.png"),
    "0x2859e4544c4bb03966803b044a93563bd2d0dd4d": TokenEntry(symbol="SHIB", name="Shiba Inu", decimals=18, image=f"{_CG}/11939/small/shiba.png"),
    "0x4a2c860cecb1bf77348a6ed5ebd81d7c2b1a9533": TokenEntry(symbol="FLOKI", name="Floki Inu", decimals=9, image=f"{_CG}/16746/small/floki.png"),
    # Liquid staking
    "0xb0b84d294e0c75a6abe60171b70edeb2efd14a1b": TokenEntry(symbol="stkBNB", name="Staked BNB", decimals=18, image=f"{_CG}/26727/small/stkBNB.png"),
    "0x1bdd3cf7f79cfb8edbb955f20ad99211551ba275": TokenEntry(symbol="BNBx", name="Stader BNBx", decimals=18, image=f"{_CG}/26758/small/BNBx.png"),
    # Bridged L1 tokens
    "0x3ee2200efb3400fabb9aacf31297cbdd1d435d47": TokenEntry(symbol="ADA", name="Cardano Token", decimals=18, image=f"{_CG}/975/small/cardano.png"),
    "0x7083609fce4d1d8dc0c979aab8c869ea2c873402": TokenEntry(symbol="DOT", name="Polkadot Token", decimals=18, image=f"{_CG}/12171/small/polkadot.png"),
    "0x1d2f0da169ceb9fc7b3144628db156f3f6c60dbe": TokenEntry(symbol="XRP", name="XRP Token", decimals=18, image=f"{_CG}/44/small/xrp-symbol-white-128.png"),
    "0xf8a0bf9cf54bb92f17374d9e9a321e6a111a51bd": TokenEntry(symbol="LINK", name="Chainlink", decimals=18, image=f"{_CG}/877/small/chainlink-new-logo.png"),
    "0x4338665cbb7b2485a8855a139b75d5e34ab0db94": TokenEntry(symbol="LTC", name="Litecoin Token", decimals=18, image=f"{_CG}/2/small/litecoin.png"),
    "0xcc42724c6683b7e57334c4e856f4c9965ed682bd": TokenEntry(symbol="MATIC", name="Polygon", decimals=18, image=f"{_CG}/4713/small/polygon.png"),
    "0x1ce0c2827e2ef14d5c4f29a091d735a204794041": TokenEntry(symbol="AVAX", name="Avalanche", decimals=18, image=f"{_CG}/12559/small/Avalanche_Circle_RedWhite_Trans.png"),
}

BSC_NATIVE = TokenEntry(symbol="BNB", name="BNB", decimals=18, image=f"{_CG}/825/small/bnb-icon2_2x.png")


class TokenRegistry:
    """Read-only token lookup. Safe to share across threads."""

    def __init__(self, tokens: Mapping[str, TokenEntry], native: TokenEntry) -> None:
        self._tokens: Mapping[str, TokenEntry] = MappingProxyType({k.lower(): v for k, v in tokens.items()})
        self._native = native

    @property
    def native(self) -> TokenEntry:
        return self._native

    @property
    def default_decimals(self) -> int:
        """Decimal count assumed for unregistered tokens: the native scale."""
        return self._native.decimals

    def get(self, address: str | None) -> TokenEntry | None:
        if not address:
            return None
        key = address.lower()
        if key in (NATIVE, ZERO_ADDRESS):
            return self._native
        return self._tokens.get(key)

    def symbol(self, address: str) -> str:
        entry = self.get(address)
        return entry.symbol if entry else shorten_address(address)

    def decimals(self, address: str) -> int:
        entry = self.get(address)
        return entry.decimals if entry else self.default_decimals

    def image(self, address: str) -> str | None:
        entry = self.get(address)
        return entry.image if entry else None

    def __contains__(self, address: object) -> bool:
        return isinstance(address, str) and self.get(address) is not None

    def __len__(self) -> int:
        return len(self._tokens)


def build_token_registry(
    native_symbol: str = BSC_NATIVE.symbol,
    native_name: str = BSC_NATIVE.name,
    native_decimals: int = BSC_NATIVE.decimals,
    native_logo: str | None = BSC_NATIVE.image,
    tokens: Mapping[str, TokenEntry] | None = None,
) -> TokenRegistry:
    """Registry for one chain. Defaults to BNB Smart Chain."""
    native = TokenEntry(symbol=native_symbol, name=native_name, decimals=native_decimals, image=native_logo)
    return TokenRegistry(BSC_TOKENS if tokens is None else tokens, native)
