from enum import Enum


class TxStatus(str, Enum):
    """Receipt execution status."""

    SUCCESS = "success"
    FAILURE = "failure"
