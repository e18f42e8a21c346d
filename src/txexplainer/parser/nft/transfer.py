"""NftTransferExplainer: ERC-721 `Transfer` and ERC-1155 `TransferSingle` / `TransferBatch`."""

import logging

from txexplainer.domain.enums import ParticipantRole, TransactionType, TransferShape
from txexplainer.parser.generic.base import BaseExplainer
from txexplainer.parser.generic.contract import GenericExplainer
from txexplainer.parser.utils.abi import (
    TRANSFER_BATCH_TOPIC,
    TRANSFER_SINGLE_TOPIC,
    WORD_SIZE,
    CalldataReader,
    topic_to_address,
)
from txexplainer.parser.utils.actions import NftTransferAction
from txexplainer.parser.utils.format import shorten_address
from txexplainer.parser.utils.types import ExplanationResult, LogEntry, Participant, RawReceipt, RawTransaction

logger = logging.getLogger(__name__)

# TransferSingle/TransferBatch(operator, from, to, ...)
_MULTI_TOKEN_TOPIC_COUNT = 4


def decode_batch_ids(data: str) -> list[int]:
    """Token ids of a `TransferBatch(…, uint256[] ids, uint256[] values)` log."""
    reader = CalldataReader(data)
    offset = reader.read_uint(0)
    count = reader.read_uint(offset)
    # A corrupt length can't exceed what the buffer actually holds.
    count = min(count, max(len(reader) - offset - WORD_SIZE, 0) // WORD_SIZE)
    return [reader.read_uint(offset + WORD_SIZE * (i + 1)) for i in range(count)]


class NftTransferExplainer(BaseExplainer):
    EXPLAINER_NAME = "NftTransferExplainer"
    TX_TYPE = TransactionType.NFT_TRANSFER

    def explain(self, tx: RawTransaction, receipt: RawReceipt) -> ExplanationResult:
        ctx = self._context(tx, receipt)

        indexed = ctx.first_transfer(shape=TransferShape.INDEXED)
        if indexed is not None:
            return self._result(tx.from_address, indexed.to_address, indexed.token_address, str(indexed.token_id))

        for log in ctx.filter_logs(TRANSFER_SINGLE_TOPIC, TRANSFER_BATCH_TOPIC):
            if len(log.topics) < _MULTI_TOKEN_TOPIC_COUNT:
                continue
            return self._multi_token_result(tx, log)

        logger.warning("No NFT transfer log in %s, falling back to generic explanation", tx.hash)
        return GenericExplainer(self._tokens, self._protocols).explain(tx, receipt)

    def _multi_token_result(self, tx: RawTransaction, log: LogEntry) -> ExplanationResult:
        recipient = topic_to_address(log.topics[3])
        if log.topics[0] == TRANSFER_SINGLE_TOPIC:
            reader = CalldataReader(log.data)
            token_id = reader.read_uint(0)
            amount = reader.read_uint(WORD_SIZE)
            return self._result(tx.from_address, recipient, log.address, str(token_id), amount=amount)

        ids = decode_batch_ids(log.data)
        return self._result(
            tx.from_address,
            recipient,
            log.address,
            ",".join(str(i) for i in ids),
            batch_size=len(ids),
        )

    def _result(
        self,
        sender: str,
        recipient: str,
        collection: str,
        object_id: str,
        amount: int | None = None,
        batch_size: int | None = None,
    ) -> ExplanationResult:
        if batch_size is not None:
            what = f"a batch of {batch_size} NFTs"
        elif amount is not None and amount > 1:
            what = f"{amount}x NFT #{object_id}"
        else:
            what = f"NFT #{object_id}"

        details = [
            f"NFT Contract: {shorten_address(collection)}",
            f"Token ID: {object_id}" if batch_size is None else f"Token IDs: {object_id}",
        ]
        if amount is not None:
            details.append(f"Quantity: {amount}")
        details.extend([f"From: {shorten_address(sender)}", f"To: {shorten_address(recipient)}"])

        return self._make_result(
            summary=f"{shorten_address(sender)} transferred {what} to {shorten_address(recipient)}.",
            details=details,
            actions=[NftTransferAction(
                from_address=sender,
                to_address=recipient,
                object_id=object_id,
                object_type=collection,
            )],
            participants=[
                Participant(address=sender, role=ParticipantRole.SENDER),
                Participant(address=recipient, role=ParticipantRole.RECIPIENT),
            ],
        )
