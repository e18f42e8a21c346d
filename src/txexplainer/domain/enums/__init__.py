from txexplainer.domain.enums.participant import ParticipantRole
from txexplainer.domain.enums.protocol import ProtocolCategory
from txexplainer.domain.enums.status import TxStatus
from txexplainer.domain.enums.transaction_type import TransactionType
from txexplainer.domain.enums.transfer_shape import TransferShape

__all__ = [
    "ParticipantRole",
    "ProtocolCategory",
    "TransactionType",
    "TransferShape",
    "TxStatus",
]
