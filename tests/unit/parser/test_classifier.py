import pytest

from txexplainer.domain.enums import TransactionType
from txexplainer.parser.classifier import TransactionClassifier, lending_verb
from txexplainer.parser.utils.abi import (
    APPROVE_SELECTOR,
    BURN_V2_TOPIC,
    CLAIM_REWARDS_SELECTOR,
    MINT_V2_TOPIC,
    MULTICALL_SELECTOR,
    SWAP_EXACT_TOKENS_FOR_TOKENS,
    SWAP_V2_TOPIC,
    SWAP_V3_TOPIC,
    TRANSFER_BATCH_TOPIC,
    TRANSFER_SELECTOR,
    TRANSFER_TOPIC,
    UNSTAKE_SELECTOR,
    WITHDRAW_SELECTOR,
)
from txexplainer.parser.utils.types import RawReceipt, RawTransaction

WALLET = "0x1111111111111111111111111111111111111111"
OTHER = "0x2222222222222222222222222222222222222222"
NFT = "0x3333333333333333333333333333333333333333"
PANCAKE_ROUTER = "0x10ed43c718714eb63d5aa57b78b54704e256024e"
VENUS = "0xfd36e2c2a6789db23113685031d7f16329158384"
CAKE_POOL = "0x45c54210128a065de780c4b0df3d16664f7f859e"
STARGATE = "0x4a364f8c717cad9a558c0a1e78c30a3c2c1e18e0"
OPENSEA = "0x00000000006c3852cbef3e08e8df289169ede581"
UNKNOWN_SELECTOR = "0xdeadbeef"


def _addr_topic(address: str) -> str:
    return "0x" + address[2:].rjust(64, "0")


def _word(value: int) -> str:
    return "0x" + format(value, "064x")


def _event(topic: str, address: str = OTHER) -> dict:
    return {"address": address, "topics": [topic], "data": "0x"}


def _nft_log() -> dict:
    return {"address": NFT, "topics": [TRANSFER_TOPIC, _addr_topic(OTHER), _addr_topic(WALLET), _word(1)], "data": "0x"}


def _make_tx(to: str | None = OTHER, input_data: str = "0x", value: int = 0) -> RawTransaction:
    return RawTransaction.model_validate({"hash": "0xabc", "from": WALLET, "to": to, "input": input_data, "value": value})


def _make_receipt(logs: list[dict] | None = None, contract_address: str | None = None) -> RawReceipt:
    return RawReceipt.model_validate({
        "status": "success",
        "gasUsed": 21000,
        "logs": logs or [],
        "contractAddress": contract_address,
    })


def _call(selector: str) -> str:
    return selector + "00" * 64


@pytest.fixture
def classifier(protocols):
    return TransactionClassifier(protocols)


class TestClassifierBasics:
    def test_contract_creation(self, classifier):
        tx = _make_tx(to=None, input_data="0x6080604052")
        assert classifier.classify(tx, _make_receipt(contract_address=NFT)) is TransactionType.PUBLISH

    def test_empty_calldata_is_transfer(self, classifier):
        assert classifier.classify(_make_tx(value=10**18), _make_receipt()) is TransactionType.TRANSFER

    def test_empty_calldata_to_dex_still_transfer(self, classifier):
        assert classifier.classify(_make_tx(to=PANCAKE_ROUTER), _make_receipt()) is TransactionType.TRANSFER

    def test_approve(self, classifier):
        assert classifier.classify(_make_tx(input_data=_call(APPROVE_SELECTOR)), _make_receipt()) is TransactionType.APPROVAL

    def test_approve_wins_over_swap_event(self, classifier):
        tx = _make_tx(input_data=_call(APPROVE_SELECTOR))
        assert classifier.classify(tx, _make_receipt([_event(SWAP_V2_TOPIC)])) is TransactionType.APPROVAL

    def test_unknown_call_is_generic(self, classifier):
        assert classifier.classify(_make_tx(input_data=_call(UNKNOWN_SELECTOR)), _make_receipt()) is TransactionType.GENERIC

    def test_short_calldata_is_generic(self, classifier):
        assert classifier.classify(_make_tx(input_data="0x1234"), _make_receipt()) is TransactionType.GENERIC


class TestEventLayer:
    @pytest.mark.parametrize("topic", [SWAP_V2_TOPIC, SWAP_V3_TOPIC])
    def test_swap_events(self, classifier, topic):
        tx = _make_tx(input_data=_call(UNKNOWN_SELECTOR))
        assert classifier.classify(tx, _make_receipt([_event(topic)])) is TransactionType.SWAP

    def test_mint_is_liquidity_add(self, classifier):
        tx = _make_tx(input_data=_call(UNKNOWN_SELECTOR))
        assert classifier.classify(tx, _make_receipt([_event(MINT_V2_TOPIC)])) is TransactionType.LIQUIDITY_ADD

    def test_burn_is_liquidity_remove(self, classifier):
        tx = _make_tx(input_data=_call(UNKNOWN_SELECTOR))
        assert classifier.classify(tx, _make_receipt([_event(BURN_V2_TOPIC)])) is TransactionType.LIQUIDITY_REMOVE

    def test_swap_event_beats_selector(self, classifier):
        tx = _make_tx(input_data=_call(CLAIM_REWARDS_SELECTOR))
        assert classifier.classify(tx, _make_receipt([_event(SWAP_V2_TOPIC)])) is TransactionType.SWAP


class TestSelectorLayer:
    def test_token_transfer(self, classifier):
        assert classifier.classify(_make_tx(input_data=_call(TRANSFER_SELECTOR)), _make_receipt()) is TransactionType.TRANSFER

    def test_transfer_with_indexed_log_is_nft(self, classifier):
        tx = _make_tx(input_data=_call(TRANSFER_SELECTOR))
        assert classifier.classify(tx, _make_receipt([_nft_log()])) is TransactionType.NFT_TRANSFER

    def test_v2_swap_selector(self, classifier):
        tx = _make_tx(input_data=_call(SWAP_EXACT_TOKENS_FOR_TOKENS))
        assert classifier.classify(tx, _make_receipt()) is TransactionType.SWAP

    def test_multicall_without_swap_is_generic(self, classifier):
        tx = _make_tx(to=PANCAKE_ROUTER, input_data=_call(MULTICALL_SELECTOR))
        assert classifier.classify(tx, _make_receipt()) is TransactionType.GENERIC

    def test_unstake(self, classifier):
        tx = _make_tx(input_data=_call(UNSTAKE_SELECTOR))
        assert classifier.classify(tx, _make_receipt()) is TransactionType.UNSTAKE

    def test_withdraw_on_lending_pool(self, classifier):
        tx = _make_tx(to=VENUS, input_data=_call(WITHDRAW_SELECTOR))
        assert classifier.classify(tx, _make_receipt()) is TransactionType.WITHDRAW

    def test_withdraw_elsewhere_is_unstake(self, classifier):
        tx = _make_tx(to=CAKE_POOL, input_data=_call(WITHDRAW_SELECTOR))
        assert classifier.classify(tx, _make_receipt()) is TransactionType.UNSTAKE

    def test_claim(self, classifier):
        tx = _make_tx(input_data=_call(CLAIM_REWARDS_SELECTOR))
        assert classifier.classify(tx, _make_receipt()) is TransactionType.CLAIM_REWARDS

    @pytest.mark.parametrize("selector,expected", [
        ("0xa694fc3a", TransactionType.STAKE),
        ("0xb6b55f25", TransactionType.STAKE),
        ("0xe8e33700", TransactionType.LIQUIDITY_ADD),
        ("0xf305d719", TransactionType.LIQUIDITY_ADD),
        ("0xbaa2abde", TransactionType.LIQUIDITY_REMOVE),
        ("0x02751cec", TransactionType.LIQUIDITY_REMOVE),
        ("0x9fbf10fc", TransactionType.BRIDGE),
        ("0xc19d93fb", TransactionType.BRIDGE),
    ])
    def test_selector_table(self, classifier, selector, expected):
        assert classifier.classify(_make_tx(input_data=_call(selector)), _make_receipt()) is expected


class TestAddressLayer:
    @pytest.mark.parametrize("to,expected", [
        (STARGATE, TransactionType.BRIDGE),
        (CAKE_POOL, TransactionType.STAKE),
        (PANCAKE_ROUTER, TransactionType.SWAP),
        (OPENSEA, TransactionType.NFT_PURCHASE),
    ])
    def test_known_destination(self, classifier, to, expected):
        tx = _make_tx(to=to, input_data=_call(UNKNOWN_SELECTOR))
        assert classifier.classify(tx, _make_receipt()) is expected

    def test_destination_case_insensitive(self, classifier):
        tx = _make_tx(to=PANCAKE_ROUTER.upper().replace("0X", "0x"), input_data=_call(UNKNOWN_SELECTOR))
        assert classifier.classify(tx, _make_receipt()) is TransactionType.SWAP

    @pytest.mark.parametrize("selector,expected", [
        ("0xa0712d68", TransactionType.SUPPLY),     # mint(uint256)
        ("0xdb006a75", TransactionType.WITHDRAW),   # redeem(uint256)
        ("0xc5ebeaec", TransactionType.BORROW),     # borrow(uint256)
        ("0x0e752702", TransactionType.REPAY),      # repayBorrow(uint256)
        ("0x617ba037", TransactionType.SUPPLY),     # supply(...)
    ])
    def test_lending_verbs(self, classifier, selector, expected):
        tx = _make_tx(to=VENUS, input_data=_call(selector))
        assert classifier.classify(tx, _make_receipt()) is expected

    def test_lending_without_verb_is_generic(self, classifier):
        tx = _make_tx(to=VENUS, input_data=_call(UNKNOWN_SELECTOR))
        assert classifier.classify(tx, _make_receipt()) is TransactionType.GENERIC


class TestNftEvents:
    def test_indexed_transfer(self, classifier):
        tx = _make_tx(input_data=_call(UNKNOWN_SELECTOR))
        assert classifier.classify(tx, _make_receipt([_nft_log()])) is TransactionType.NFT_TRANSFER

    def test_multi_token_batch(self, classifier):
        tx = _make_tx(input_data=_call(UNKNOWN_SELECTOR))
        assert classifier.classify(tx, _make_receipt([_event(TRANSFER_BATCH_TOPIC)])) is TransactionType.NFT_TRANSFER

    def test_marketplace_beats_nft_events(self, classifier):
        tx = _make_tx(to=OPENSEA, input_data=_call(UNKNOWN_SELECTOR))
        assert classifier.classify(tx, _make_receipt([_nft_log()])) is TransactionType.NFT_PURCHASE


class TestLendingVerb:
    def test_repay_borrow_resolves_to_repay(self):
        assert lending_verb("0x0e752702", "0x") is TransactionType.REPAY

    def test_redeem_underlying(self):
        assert lending_verb("0x852a12e3", "0x") is TransactionType.WITHDRAW

    def test_unknown_selector(self):
        assert lending_verb(UNKNOWN_SELECTOR, "0xdeadbeef") is None


class TestClassifierIsPure:
    def test_same_answer_twice(self, protocols):
        classifier = TransactionClassifier(protocols)
        tx = _make_tx(to=PANCAKE_ROUTER, input_data=_call(SWAP_EXACT_TOKENS_FOR_TOKENS))
        receipt = _make_receipt([_event(SWAP_V2_TOPIC)])
        assert classifier.classify(tx, receipt) is classifier.classify(tx, receipt)
