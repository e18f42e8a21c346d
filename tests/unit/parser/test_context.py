from txexplainer.domain.enums import TransferShape
from txexplainer.parser.utils.abi import SWAP_V2_TOPIC, SWAP_V3_TOPIC, TRANSFER_TOPIC
from txexplainer.parser.utils.context import TransactionContext, decode_transfers
from txexplainer.parser.utils.types import RawReceipt, RawTransaction

WALLET = "0x1111111111111111111111111111111111111111"
OTHER = "0x2222222222222222222222222222222222222222"
USDT = "0x55d398326f99059ff775485246999027b3197955"
NFT = "0x3333333333333333333333333333333333333333"
UNKNOWN_TOKEN = "0x9999999999999999999999999999999999999999"


def _addr_topic(address: str) -> str:
    return "0x" + address[2:].rjust(64, "0")


def _word(value: int) -> str:
    return "0x" + format(value, "064x")


def _transfer_log(token: str, src: str, dst: str, value: int, index: int = 0) -> dict:
    return {
        "address": token,
        "topics": [TRANSFER_TOPIC, _addr_topic(src), _addr_topic(dst)],
        "data": _word(value),
        "logIndex": index,
    }


def _nft_log(collection: str, src: str, dst: str, token_id: int) -> dict:
    return {
        "address": collection,
        "topics": [TRANSFER_TOPIC, _addr_topic(src), _addr_topic(dst), _word(token_id)],
        "data": "0x",
    }


def _make_ctx(tokens, logs: list[dict], input_data: str = "0x") -> TransactionContext:
    tx = RawTransaction.model_validate({"hash": "0xabc", "from": WALLET, "to": OTHER, "input": input_data})
    receipt = RawReceipt.model_validate({"status": "success", "gasUsed": 21000, "logs": logs})
    return TransactionContext(tx, receipt, tokens)


class TestDecodeTransfers:
    def test_value_transfer(self, tokens):
        receipt = RawReceipt.model_validate({"status": 1, "gasUsed": 0, "logs": [_transfer_log(USDT, WALLET, OTHER, 5 * 10**18, 7)]})
        [t] = decode_transfers(receipt, tokens)
        assert t.shape is TransferShape.VALUE
        assert t.from_address == WALLET
        assert t.to_address == OTHER
        assert t.value == 5 * 10**18
        assert t.symbol == "USDT"
        assert t.decimals == 18
        assert t.log_index == 7
        assert t.token_id is None

    def test_indexed_transfer(self, tokens):
        receipt = RawReceipt.model_validate({"status": 1, "gasUsed": 0, "logs": [_nft_log(NFT, OTHER, WALLET, 42)]})
        [t] = decode_transfers(receipt, tokens)
        assert t.shape is TransferShape.INDEXED
        assert t.token_id == 42
        assert t.value == 1

    def test_unknown_token_uses_fallbacks(self, tokens):
        receipt = RawReceipt.model_validate({"status": 1, "gasUsed": 0, "logs": [_transfer_log(UNKNOWN_TOKEN, WALLET, OTHER, 1)]})
        [t] = decode_transfers(receipt, tokens)
        assert t.symbol == "0x9999...9999"
        assert t.decimals == 18
        assert t.logo is None

    def test_non_transfer_logs_skipped(self, tokens):
        receipt = RawReceipt.model_validate({"status": 1, "gasUsed": 0, "logs": [{"address": OTHER, "topics": [SWAP_V2_TOPIC], "data": "0x"}]})
        assert decode_transfers(receipt, tokens) == []

    def test_empty_data_is_zero(self, tokens):
        log = _transfer_log(USDT, WALLET, OTHER, 0)
        log["data"] = "0x"
        receipt = RawReceipt.model_validate({"status": 1, "gasUsed": 0, "logs": [log]})
        assert decode_transfers(receipt, tokens)[0].value == 0


class TestTransactionContext:
    def test_sender_and_selector(self, tokens):
        ctx = _make_ctx(tokens, [], input_data="0xa9059cbb" + "00" * 64)
        assert ctx.sender == WALLET
        assert ctx.to == OTHER
        assert ctx.selector == "0xa9059cbb"
        assert ctx.has_calldata

    def test_no_calldata(self, tokens):
        ctx = _make_ctx(tokens, [])
        assert not ctx.has_calldata
        assert ctx.selector == ""

    def test_is_sender(self, tokens):
        ctx = _make_ctx(tokens, [])
        assert ctx.is_sender(WALLET.upper().replace("0X", "0x"))
        assert not ctx.is_sender(OTHER)
        assert not ctx.is_sender(None)

    def test_peek_transfers_filters(self, tokens):
        ctx = _make_ctx(tokens, [
            _transfer_log(USDT, WALLET, OTHER, 1),
            _transfer_log(USDT, OTHER, WALLET, 2),
            _nft_log(NFT, OTHER, WALLET, 3),
        ])
        assert len(ctx.peek_transfers(from_address=WALLET)) == 1
        assert len(ctx.peek_transfers(to_address=WALLET)) == 2
        assert len(ctx.peek_transfers(to_address=WALLET, shape=TransferShape.VALUE)) == 1
        assert len(ctx.peek_transfers(token_address=NFT)) == 1

    def test_peek_does_not_consume(self, tokens):
        ctx = _make_ctx(tokens, [_transfer_log(USDT, WALLET, OTHER, 1)])
        ctx.peek_transfers(from_address=WALLET)
        assert len(ctx.transfers()) == 1

    def test_first_and_last(self, tokens):
        ctx = _make_ctx(tokens, [
            _transfer_log(USDT, OTHER, WALLET, 1),
            _transfer_log(USDT, OTHER, WALLET, 2),
        ])
        assert ctx.first_transfer(to_address=WALLET).value == 1
        assert ctx.last_transfer(to_address=WALLET).value == 2
        assert ctx.first_transfer(from_address=WALLET) is None

    def test_topics(self, tokens):
        ctx = _make_ctx(tokens, [
            {"address": OTHER, "topics": [SWAP_V2_TOPIC], "data": "0x"},
            {"address": OTHER, "topics": [SWAP_V3_TOPIC], "data": "0x"},
            {"address": OTHER, "topics": [], "data": "0x"},
        ])
        assert ctx.has_topic(SWAP_V2_TOPIC)
        assert not ctx.has_topic(TRANSFER_TOPIC)
        assert len(ctx.filter_logs(SWAP_V3_TOPIC)) == 1
        assert ctx.swap_event_count() == 2
