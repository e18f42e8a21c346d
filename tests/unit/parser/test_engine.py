"""End-to-end tests: raw JSON-RPC dicts in, ParsedTransaction out."""

import json

import pytest

from txexplainer.domain.enums import TransactionType, TxStatus
from txexplainer.parser.registry import RESERVED_TYPES
from txexplainer.parser.utils.abi import APPROVE_SELECTOR, SWAP_V2_TOPIC, TRANSFER_TOPIC
from txexplainer.parser.utils.types import RawReceipt, RawTransaction
from txexplainer.registry.tokens import NATIVE

WALLET = "0x1111111111111111111111111111111111111111"
OTHER = "0x2222222222222222222222222222222222222222"
PAIR = "0x6666666666666666666666666666666666666666"
PANCAKE_ROUTER = "0x10ed43c718714eb63d5aa57b78b54704e256024e"
USDT = "0x55d398326f99059ff775485246999027b3197955"
CAKE = "0x0e09fabb73bd3ade0a17ecc321fd13a19e81ce82"
TX_HASH = "0x" + "ab" * 32
GWEI = 10**9


def _addr_topic(address: str) -> str:
    return "0x" + address[2:].rjust(64, "0")


def _word(value: int) -> str:
    return format(value, "064x")


def _transfer_log(token: str, src: str, dst: str, value: int, index: int) -> dict:
    return {
        "address": token,
        "topics": [TRANSFER_TOPIC, _addr_topic(src), _addr_topic(dst)],
        "data": "0x" + _word(value),
        "logIndex": hex(index),
    }


def _make_tx(to: str | None = OTHER, value: int = 0, input_data: str = "0x") -> dict:
    return {
        "hash": TX_HASH,
        "from": WALLET,
        "to": to,
        "value": hex(value),
        "input": input_data,
        "gasPrice": hex(5 * GWEI),
        "gas": hex(300000),
    }


def _make_receipt(logs: list[dict] | None = None, status: str = "0x1", gas_used: int = 21000, **extra) -> dict:
    receipt = {
        "status": status,
        "gasUsed": hex(gas_used),
        "effectiveGasPrice": hex(5 * GWEI),
        "logs": logs or [],
        "blockNumber": hex(35_000_000),
    }
    receipt.update(extra)
    return receipt


BLOCK = {"number": hex(35_000_000), "timestamp": hex(1_700_000_000)}


def _swap_receipt() -> dict:
    return _make_receipt([
        _transfer_log(USDT, WALLET, PAIR, 300 * 10**18, 0),
        {"address": PAIR, "topics": [SWAP_V2_TOPIC, _addr_topic(PANCAKE_ROUTER), _addr_topic(WALLET)], "data": "0x", "logIndex": "0x1"},
        _transfer_log(CAKE, PAIR, WALLET, 100 * 10**18, 2),
    ], gas_used=150000)


class TestNativeTransferScenario:
    def test_classification_and_summary(self, engine):
        parsed = engine.parse_transaction(_make_tx(value=2 * 10**18), _make_receipt(), BLOCK)
        assert parsed.explanation.type is TransactionType.TRANSFER
        assert "2.0000 BNB" in parsed.explanation.summary

    def test_balance_changes(self, engine):
        parsed = engine.parse_transaction(_make_tx(value=2 * 10**18), _make_receipt(), BLOCK)
        sender, recipient = parsed.balance_changes
        assert sender.owner == WALLET
        assert sender.is_positive is False
        assert sender.amount == "-2.0001"
        assert recipient.owner == OTHER
        assert recipient.amount == "2.0000"
        assert recipient.is_positive is True
        assert recipient.coin_type == NATIVE

    def test_envelope(self, engine):
        parsed = engine.parse_transaction(_make_tx(value=2 * 10**18), _make_receipt(), BLOCK)
        assert parsed.digest == TX_HASH
        assert parsed.sender == WALLET
        assert parsed.status is TxStatus.SUCCESS
        assert parsed.error is None
        assert parsed.timestamp == "1700000000000"
        assert parsed.block_number == "35000000"
        assert parsed.gas_info.total_gas == "0.0001"
        assert parsed.gas_info.gas_price == "5.00"


class TestSwapScenario:
    def test_swap(self, engine):
        tx = _make_tx(to=PANCAKE_ROUTER, input_data="0x38ed1739" + _word(0) * 5)
        parsed = engine.parse_transaction(tx, _swap_receipt(), BLOCK)
        explanation = parsed.explanation
        assert explanation.type is TransactionType.SWAP
        action = explanation.actions[0]
        assert action.from_token == "USDT"
        assert action.to_token == "CAKE"
        assert action.dex == "PancakeSwap"

    def test_swap_classified_by_event_for_unknown_selector(self, engine):
        tx = _make_tx(to=PANCAKE_ROUTER, input_data="0x12345678")
        assert engine.classify(tx, _swap_receipt()) is TransactionType.SWAP

    def test_token_balance_changes(self, engine):
        tx = _make_tx(to=PANCAKE_ROUTER, input_data="0x38ed1739")
        changes = engine.extract_balance_changes(tx, _swap_receipt())
        assert [(c.coin_name, c.amount) for c in changes] == [
            ("BNB", "-0.0008"),
            ("USDT", "-300.00"),
            ("CAKE", "100.00"),
        ]

    def test_balance_changes_for_other_subject(self, engine):
        tx = _make_tx(to=PANCAKE_ROUTER, input_data="0x38ed1739")
        changes = engine.extract_balance_changes(tx, _swap_receipt(), subject=PAIR)
        assert [(c.coin_name, c.is_positive) for c in changes[1:]] == [("USDT", True), ("CAKE", False)]


class TestUnlimitedApprovalScenario:
    def test_unlimited(self, engine):
        data = APPROVE_SELECTOR + _addr_topic(PANCAKE_ROUTER)[2:] + "f" * 64
        explanation = engine.explain(_make_tx(to=USDT, input_data=data), _make_receipt(gas_used=46000))
        assert explanation.type is TransactionType.APPROVAL
        assert explanation.actions[0].is_unlimited is True
        assert any("unlimited approval" in d for d in explanation.details)

    def test_approval_with_swap_log_stays_approval(self, engine):
        data = APPROVE_SELECTOR + _addr_topic(PANCAKE_ROUTER)[2:] + _word(1)
        assert engine.classify(_make_tx(to=USDT, input_data=data), _swap_receipt()) is TransactionType.APPROVAL


class TestUnknownCallScenario:
    def test_generic(self, engine):
        explanation = engine.explain(_make_tx(input_data="0xcafebabe" + _word(1)), _make_receipt())
        assert explanation.type is TransactionType.GENERIC
        assert "Method: 0xcafebabe" in explanation.details


class TestFailedTransaction:
    def test_revert_hint(self, engine):
        tx = _make_tx(to=USDT, input_data="0xa9059cbb" + _addr_topic(OTHER)[2:] + _word(10**18))
        parsed = engine.parse_transaction(tx, _make_receipt(status="0x0", gas_used=30000), BLOCK)
        assert parsed.status is TxStatus.FAILURE
        assert parsed.error == "Transfer failed - insufficient balance or not approved"
        assert parsed.explanation.type is TransactionType.TRANSFER
        assert parsed.explanation.actions[0].amount == "1.00"

    def test_gas_still_charged(self, engine):
        parsed = engine.parse_transaction(_make_tx(input_data="0xdeadbeef"), _make_receipt(status="0x0"), BLOCK)
        assert parsed.balance_changes[0].is_positive is False


class TestContractCreation:
    def test_publish(self, engine):
        tx = _make_tx(to=None, input_data="0x608060405234801561001057600080fd5b50")
        receipt = _make_receipt(gas_used=500000, contractAddress=PAIR)
        parsed = engine.parse_transaction(tx, receipt, BLOCK)
        assert parsed.explanation.type is TransactionType.PUBLISH
        assert parsed.explanation.actions[0].contract_address == PAIR


class TestEngineBoundary:
    def test_models_and_dicts_agree(self, engine):
        tx = _make_tx(to=PANCAKE_ROUTER, input_data="0x38ed1739")
        receipt = _swap_receipt()
        from_dicts = engine.parse_transaction(tx, receipt, BLOCK)
        from_models = engine.parse_transaction(RawTransaction.model_validate(tx), RawReceipt.model_validate(receipt), BLOCK)
        assert from_dicts == from_models

    def test_idempotent(self, engine):
        tx = _make_tx(value=10**18)
        assert engine.parse_transaction(tx, _make_receipt(), BLOCK) == engine.parse_transaction(tx, _make_receipt(), BLOCK)

    def test_json_serialisable(self, engine):
        parsed = engine.parse_transaction(_make_tx(value=2 * 10**18), _make_receipt(), BLOCK)
        payload = json.loads(json.dumps(parsed.to_json_dict()))
        assert payload["raw_transaction"]["tx"]["value"] == "2000000000000000000"
        assert payload["raw_transaction"]["receipt"]["gasUsed"] == "21000"
        assert payload["explanation"]["type"] == "transfer"

    def test_missing_timestamp(self, engine):
        parsed = engine.parse_transaction(_make_tx(), _make_receipt(), {"number": 1})
        assert parsed.timestamp is None

    def test_zero_timestamp_treated_as_missing(self, engine):
        parsed = engine.parse_transaction(_make_tx(), _make_receipt(), {"number": 1, "timestamp": "0x0"})
        assert parsed.timestamp is None

    def test_block_number_from_block_when_receipt_lacks_it(self, engine):
        receipt = _make_receipt()
        del receipt["blockNumber"]
        parsed = engine.parse_transaction(_make_tx(), receipt, {"number": "0x2a", "timestamp": 1})
        assert parsed.block_number == "42"
        assert parsed.timestamp == "1000"

    def test_unknown_tokens_never_raise(self, engine):
        stranger = "0x9999999999999999999999999999999999999999"
        receipt = _make_receipt([_transfer_log(stranger, WALLET, OTHER, 5, 0)])
        explanation = engine.explain(_make_tx(to=stranger, input_data="0xa9059cbb"), receipt)
        assert explanation.actions[0].token == "0x9999...9999"


class TestTotality:
    @pytest.mark.parametrize("tx_type", sorted(RESERVED_TYPES, key=lambda t: t.value))
    def test_reserved_types_have_explainer(self, engine, tx_type):
        assert engine._explainers.get(tx_type).TX_TYPE is TransactionType.GENERIC

    @pytest.mark.parametrize("input_data", ["0x", "0x12", "0xdeadbeef", APPROVE_SELECTOR, "0x38ed1739", "0x2e1a7d4d"])
    def test_odd_calldata_always_explained(self, engine, input_data):
        explanation = engine.explain(_make_tx(input_data=input_data), _make_receipt())
        assert explanation.summary
        assert len(explanation.actions) >= 1
