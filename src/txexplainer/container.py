from dependency_injector import containers, providers

from txexplainer.config import Settings
from txexplainer.parser.engine import TransactionEngine
from txexplainer.parser.registry import build_default_registry
from txexplainer.registry.protocols import build_protocol_registry
from txexplainer.registry.tokens import build_token_registry


class Container(containers.DeclarativeContainer):
    settings = providers.Singleton(Settings)

    token_registry = providers.Singleton(
        build_token_registry,
        native_symbol=settings.provided.native_symbol,
        native_name=settings.provided.native_name,
        native_decimals=settings.provided.native_decimals,
        native_logo=settings.provided.native_logo,
    )

    protocol_registry = providers.Singleton(build_protocol_registry)

    explainer_registry = providers.Singleton(
        build_default_registry,
        tokens=token_registry,
        protocols=protocol_registry,
        chain=settings.provided.chain,
    )

    engine = providers.Singleton(
        TransactionEngine,
        tokens=token_registry,
        protocols=protocol_registry,
        explainers=explainer_registry,
        chain=settings.provided.chain,
    )
