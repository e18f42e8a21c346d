from enum import Enum


class ParticipantRole(str, Enum):
    SENDER = "sender"
    RECIPIENT = "recipient"
    TRADER = "trader"
    CREATOR = "creator"
    VALIDATOR = "validator"
    SPONSOR = "sponsor"
    BUYER = "buyer"
    SELLER = "seller"
    BORROWER = "borrower"
    LENDER = "lender"
    LIQUIDATOR = "liquidator"
    VOTER = "voter"
    PROPOSER = "proposer"
    SIGNER = "signer"
    ARBITRAGEUR = "arbitrageur"
    OWNER = "owner"
    SPENDER = "spender"
    STAKER = "staker"
    CLAIMER = "claimer"
    PROVIDER = "provider"
