"""TransactionContext: read-only working set for explaining one transaction."""

from txexplainer.domain.enums import TransferShape
from txexplainer.parser.utils.abi import (
    SWAP_TOPICS,
    CalldataReader,
    is_empty_calldata,
    selector_of,
    topic_to_address,
    topic_to_int,
    transfer_shape,
)
from txexplainer.parser.utils.types import LogEntry, RawReceipt, RawTransaction, TokenTransfer
from txexplainer.registry.tokens import TokenRegistry


def decode_transfers(receipt: RawReceipt, tokens: TokenRegistry) -> list[TokenTransfer]:
    """Decode every `Transfer` log in the receipt, in log order.

    VALUE transfers carry the amount in the data field; INDEXED transfers carry
    the token id in topic 3 and count as a single unit.
    """
    transfers: list[TokenTransfer] = []
    for log in receipt.logs:
        shape = transfer_shape(log.topics)
        if shape is None:
            continue
        token_id = None
        if shape is TransferShape.VALUE:
            value = CalldataReader(log.data).read_uint(0)
        else:
            token_id = topic_to_int(log.topics[3])
            value = 1
        transfers.append(TokenTransfer(
            token_address=log.address,
            from_address=topic_to_address(log.topics[1]),
            to_address=topic_to_address(log.topics[2]),
            value=value,
            shape=shape,
            token_id=token_id,
            decimals=tokens.decimals(log.address),
            symbol=tokens.symbol(log.address),
            logo=tokens.image(log.address),
            log_index=log.log_index,
        ))
    return transfers


class TransactionContext:
    """Decoded view over one (tx, receipt) pair that explainers query.

    Unlike a consuming context, nothing is removed on lookup: every explainer
    re-derives what it needs from the same logs the classifier saw.
    """

    def __init__(self, tx: RawTransaction, receipt: RawReceipt, tokens: TokenRegistry) -> None:
        self.tx = tx
        self.receipt = receipt
        self.tokens = tokens
        self.sender = tx.from_address.lower()
        self.to = tx.to_address.lower() if tx.to_address else None
        self.selector = selector_of(tx.input)
        self.calldata = CalldataReader(tx.input)
        self._transfers: tuple[TokenTransfer, ...] = tuple(decode_transfers(receipt, tokens))

    @property
    def logs(self) -> tuple[LogEntry, ...]:
        return self.receipt.logs

    @property
    def has_calldata(self) -> bool:
        return not is_empty_calldata(self.tx.input)

    def is_sender(self, address: str | None) -> bool:
        return bool(address) and address.lower() == self.sender

    def transfers(self) -> list[TokenTransfer]:
        return list(self._transfers)

    def peek_transfers(
        self,
        *,
        from_address: str | None = None,
        to_address: str | None = None,
        token_address: str | None = None,
        shape: TransferShape | None = None,
    ) -> list[TokenTransfer]:
        """Return matching transfers in log order."""
        result = []
        for t in self._transfers:
            if from_address is not None and t.from_address != from_address.lower():
                continue
            if to_address is not None and t.to_address != to_address.lower():
                continue
            if token_address is not None and t.token_address != token_address.lower():
                continue
            if shape is not None and t.shape is not shape:
                continue
            result.append(t)
        return result

    def first_transfer(self, **filters) -> TokenTransfer | None:
        matches = self.peek_transfers(**filters)
        return matches[0] if matches else None

    def last_transfer(self, **filters) -> TokenTransfer | None:
        matches = self.peek_transfers(**filters)
        return matches[-1] if matches else None

    # --- Log support ---

    def has_topic(self, *topics: str) -> bool:
        """True if any log's topic 0 is one of `topics`."""
        wanted = {t.lower() for t in topics}
        return any(log.topics and log.topics[0] in wanted for log in self.logs)

    def filter_logs(self, *topics: str) -> list[LogEntry]:
        wanted = {t.lower() for t in topics}
        return [log for log in self.logs if log.topics and log.topics[0] in wanted]

    def swap_event_count(self) -> int:
        return len(self.filter_logs(*SWAP_TOPICS))
