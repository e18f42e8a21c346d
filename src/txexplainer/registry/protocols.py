"""Protocol Registry: known contract address -> protocol metadata.

One static table per category, merged into a single read-only lookup. Keys are
lower-cased hex addresses; lookups accept any case.
"""

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict

from txexplainer.domain.enums import ProtocolCategory

_CMC = "https://s2.coinmarketcap.com/static/img/coins/64x64"


class ProtocolEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    category: ProtocolCategory
    description: str = ""
    website: str | None = None
    logo: str | None = None


def _dex(name: str, description: str, website: str, logo: str | None) -> ProtocolEntry:
    return ProtocolEntry(name=name, category=ProtocolCategory.DEX, description=description, website=website, logo=logo)


def _lending(name: str, description: str, website: str, logo: str | None) -> ProtocolEntry:
    return ProtocolEntry(name=name, category=ProtocolCategory.LENDING, description=description, website=website, logo=logo)


def _nft(name: str, description: str, website: str, logo: str | None) -> ProtocolEntry:
    return ProtocolEntry(name=name, category=ProtocolCategory.NFT_MARKETPLACE, description=description, website=website, logo=logo)


def _staking(name: str, description: str, website: str, logo: str | None) -> ProtocolEntry:
    return ProtocolEntry(name=name, category=ProtocolCategory.STAKING, description=description, website=website, logo=logo)


def _bridge(name: str, description: str, website: str, logo: str | None) -> ProtocolEntry:
    return ProtocolEntry(name=name, category=ProtocolCategory.BRIDGE, description=description, website=website, logo=logo)


_PANCAKE_LOGO = f"{_CMC}/7186.png"
_OPENSEA_LOGO = "https://storage.googleapis.com/opensea-static/Logomark/Logomark-Blue.png"

# BNB Smart Chain (all lowercase)
KNOWN_DEXES: dict[str, ProtocolEntry] = {
    "0x10ed43c718714eb63d5aa57b78b54704e256024e": _dex("PancakeSwap", "PancakeSwap V2 Router", "https://pancakeswap.finance", _PANCAKE_LOGO),
    "0x13f4ea83d0bd40e75c8222255bc855a974568dd4": _dex("PancakeSwap V3", "PancakeSwap V3 Router", "https://pancakeswap.finance", _PANCAKE_LOGO),
    "0x556b9306565093c855aea9ae92a594704c2cd59e": _dex("PancakeSwap Smart Router", "PancakeSwap Smart Router", "https://pancakeswap.finance", _PANCAKE_LOGO),
    "0x3a6d8ca21d1cf76f653a67577fa0d27453350dd8": _dex("BiSwap", "BiSwap Router", "https://biswap.org", f"{_CMC}/10746.png"),
    "0xcf0febd3f17cef5b47b0cd257acf6025c5bff3b7": _dex("ApeSwap", "ApeSwap Router", "https://apeswap.finance", f"{_CMC}/8497.png"),
    "0x325e343f1de602396e256b67efd1f61c3a6b38bd": _dex("BabySwap", "BabySwap Router", "https://babyswap.finance", f"{_CMC}/10334.png"),
    "0x7dae51bd3e3376b8c7c4900e9107f12be3af1ba8": _dex("MDEX", "MDEX Router", "https://mdex.com", f"{_CMC}/8335.png"),
    "0x8f8dd7db1bda5ed3da8c9daf3bfa471c12d58486": _dex("DODO", "DODO Proxy", "https://dodoex.io", f"{_CMC}/7224.png"),
    "0x1111111254eeb25477b68fb85ed929f73a960582": _dex("1inch", "1inch Aggregation Router", "https://1inch.io", f"{_CMC}/8104.png"),
    "0xb971ef87ede563556b2ed4b1c0b0019111dd85d2": _dex("Uniswap V3", "Uniswap V3 Router", "https://uniswap.org", f"{_CMC}/7083.png"),
}

KNOWN_LENDING: dict[str, ProtocolEntry] = {
    "0xfd36e2c2a6789db23113685031d7f16329158384": _lending("Venus", "Venus Comptroller", "https://venus.io", f"{_CMC}/7288.png"),
    "0xecf44e2c4eaccddb7c5b9e6c4e3c7a6e8e2e7c6d": _lending("Venus", "Venus vToken", "https://venus.io", f"{_CMC}/7288.png"),
    "0xa625ab01b08ce023b2a342dbb12a16f2c8489a8f": _lending("Alpaca Finance", "Alpaca Finance Vault", "https://alpacafinance.org", f"{_CMC}/8707.png"),
    "0x589de0f0ccf905477646599bb3e5c622c84cc0ba": _lending("Cream Finance", "Cream Finance Comptroller", "https://cream.finance", f"{_CMC}/6193.png"),
    "0xd50cf00b6e600dd036ba8ef475677d816d6c4281": _lending("Radiant Capital", "Radiant Lending Pool", "https://radiant.capital", f"{_CMC}/21106.png"),
}

KNOWN_NFT_MARKETPLACES: dict[str, ProtocolEntry] = {
    "0x00000000006c3852cbef3e08e8df289169ede581": _nft("OpenSea", "OpenSea Seaport", "https://opensea.io", _OPENSEA_LOGO),
    "0x00000000000000adc04c56bf30ac9d3c0aaf14dc": _nft("OpenSea", "OpenSea Seaport 1.5", "https://opensea.io", _OPENSEA_LOGO),
    "0x8c07326a6e0a13a1d8e5e8fb1e8fa4a8e1f8e4c1": _nft("NFTKey", "NFTKey Marketplace", "https://nftkey.app", None),
    "0x20f780a973856b93f63670377900c1d2a50a77c4": _nft("Element", "Element Marketplace", "https://element.market", None),
    "0x7bc8b1b5aba4df3be9f9a32dae501214dc0e0f3a": _nft("TofuNFT", "TofuNFT Marketplace", "https://tofunft.com", None),
}

KNOWN_STAKING: dict[str, ProtocolEntry] = {
    "0x45c54210128a065de780c4b0df3d16664f7f859e": _staking("PancakeSwap", "PancakeSwap CAKE Pool", "https://pancakeswap.finance", _PANCAKE_LOGO),
    "0xa5f8c5dbd5f286960b9d90548680ae5ebff07652": _staking("PancakeSwap Farms", "PancakeSwap MasterChef V2", "https://pancakeswap.finance", _PANCAKE_LOGO),
    "0x0000000000000000000000000000000000001000": _staking("BNB Staking", "BNB Chain Validator Staking", "https://www.bnbchain.org", f"{_CMC}/1839.png"),
    "0x1adb950d8bb3da4be104211d5ab038628e477fe6": _staking("Lista DAO", "Lista DAO Liquid Staking", "https://lista.org", f"{_CMC}/30407.png"),
    "0x52f24a5e03aee338da5fd9df68d2b6fae1178827": _staking("Ankr Staking", "Ankr Liquid Staking", "https://www.ankr.com", f"{_CMC}/3783.png"),
    "0x7276241a669489e4bbb76f63d2a43bfe63080f2f": _staking("Stader", "Stader BNBx Staking", "https://www.staderlabs.com", f"{_CMC}/21200.png"),
}

KNOWN_BRIDGES: dict[str, ProtocolEntry] = {
    "0xf9736ec3926703e85c843fc972bd89a7f8e827c0": _bridge("Multichain", "Multichain Router", "https://multichain.org", None),
    "0xdd90e5e87a2081dcf0391920868ebc2ffb81a1af": _bridge("Celer cBridge", "Celer cBridge", "https://cbridge.celer.network", f"{_CMC}/3814.png"),
    "0x4a364f8c717cad9a558c0a1e78c30a3c2c1e18e0": _bridge("Stargate", "Stargate Router", "https://stargate.finance", f"{_CMC}/18934.png"),
    "0x98f3c9e6e3face36baad05fe09d375ef1464288b": _bridge("Wormhole", "Wormhole Token Bridge", "https://wormhole.com", f"{_CMC}/21638.png"),
}

ALL_PROTOCOL_TABLES: tuple[Mapping[str, ProtocolEntry], ...] = (
    KNOWN_DEXES,
    KNOWN_LENDING,
    KNOWN_NFT_MARKETPLACES,
    KNOWN_STAKING,
    KNOWN_BRIDGES,
)


class ProtocolRegistry:
    """Read-only address -> ProtocolEntry lookup. Safe to share across threads."""

    def __init__(self, entries: Mapping[str, ProtocolEntry]) -> None:
        self._entries: Mapping[str, ProtocolEntry] = MappingProxyType({k.lower(): v for k, v in entries.items()})

    def get(self, address: str | None) -> ProtocolEntry | None:
        if not address:
            return None
        return self._entries.get(address.lower())

    def identify(self, address: str | None, category: ProtocolCategory) -> ProtocolEntry | None:
        """Entry for `address` only if it belongs to `category`."""
        entry = self.get(address)
        if entry is None or entry.category != category:
            return None
        return entry

    def identify_dex(self, address: str | None) -> ProtocolEntry | None:
        return self.identify(address, ProtocolCategory.DEX)

    def identify_lending(self, address: str | None) -> ProtocolEntry | None:
        return self.identify(address, ProtocolCategory.LENDING)

    def identify_nft_marketplace(self, address: str | None) -> ProtocolEntry | None:
        return self.identify(address, ProtocolCategory.NFT_MARKETPLACE)

    def identify_staking(self, address: str | None) -> ProtocolEntry | None:
        return self.identify(address, ProtocolCategory.STAKING)

    def identify_bridge(self, address: str | None) -> ProtocolEntry | None:
        return self.identify(address, ProtocolCategory.BRIDGE)

    def name(self, address: str | None) -> str | None:
        entry = self.get(address)
        return entry.name if entry else None

    def logo(self, address: str | None) -> str | None:
        entry = self.get(address)
        return entry.logo if entry else None

    def by_category(self, category: ProtocolCategory) -> dict[str, ProtocolEntry]:
        return {addr: e for addr, e in self._entries.items() if e.category == category}

    def __contains__(self, address: object) -> bool:
        return isinstance(address, str) and address.lower() in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def build_protocol_registry(extra: Iterable[Mapping[str, ProtocolEntry]] | None = None) -> ProtocolRegistry:
    """Merge the static BSC tables (plus any chain-specific `extra` tables) into one registry."""
    merged: dict[str, ProtocolEntry] = {}
    for table in (*ALL_PROTOCOL_TABLES, *(extra or ())):
        for address, entry in table.items():
            merged[address.lower()] = entry
    return ProtocolRegistry(merged)
