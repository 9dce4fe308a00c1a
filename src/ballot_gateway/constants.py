"""Constants shared by the ballot chain gateway."""

from enum import IntEnum

from web3 import Web3

# Token amounts are carried at native precision and scaled at the query boundary
TOKEN_DECIMALS = 18

# Every mint request issues this many whole tokens to the recipient
MINT_AMOUNT_TOKENS = 50

# Width of the fixed bytes fields used for proposal names
BYTES32_SIZE = 32

# OpenZeppelin AccessControl role identifier for minters
MINTER_ROLE = Web3.keccak(text="MINTER_ROLE")

DEFAULT_PROPOSAL_COUNT = 3


class ChainId(IntEnum):
    """Networks the gateway knows how to target."""

    SEPOLIA = 11155111


DEFAULT_CHAIN_ID = ChainId.SEPOLIA


class ConfigKey:
    """Environment keys read by the configuration resolver."""

    RPC_BASE_URL = "INFURA_RPC_URL"
    RPC_API_KEY = "INFURA_API_KEY"
    PRIVATE_KEY = "PRIVATE_KEY"
    TOKEN_ADDRESS = "TOKEN_ADDRESS"
    BALLOT_ADDRESS = "BALLOT_ADDRESS"
    REQUEST_TIMEOUT = "REQUEST_TIMEOUT"
    RECEIPT_TIMEOUT = "RECEIPT_TIMEOUT"
