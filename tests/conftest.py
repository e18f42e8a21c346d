import pytest

from txexplainer.parser.engine import TransactionEngine
from txexplainer.registry.protocols import build_protocol_registry
from txexplainer.registry.tokens import build_token_registry


@pytest.fixture(scope="session")
def tokens():
    return build_token_registry()


@pytest.fixture(scope="session")
def protocols():
    return build_protocol_registry()


@pytest.fixture(scope="session")
def engine(tokens, protocols):
    return TransactionEngine(tokens, protocols, chain="bsc")
