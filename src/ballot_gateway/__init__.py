"""Ballot chain gateway.

Backend service logic for a token-weighted voting DApp: read queries against an
ERC20Votes token and a tokenized ballot, a server-signed token mint, and JSON-safe
normalization of the results.
"""

from .chain import (
    ChainConnections,
    ChainGateway,
    GatewayConfig,
    ReadClient,
    ReceiptResolver,
    WriteClient,
    resolve_config,
)
from .chain.transactions import MINT_AMOUNT
from .constants import MINT_AMOUNT_TOKENS, TOKEN_DECIMALS
from .exceptions import (
    ConfigError,
    GatewayError,
    NetworkError,
    ReadError,
    ReceiptError,
    ReceiptFailure,
    ValidationError,
    WriteError,
    WriteFailure,
)
from .types import Address, ContractCallSpec, MintResponse, ProposalInfo, TokenAmount, TxState
from .utils import (
    decode_bytes32,
    format_units,
    normalize_value,
    parse_units,
    same_address,
    to_checksum,
)

__version__ = "0.1.0"

__all__ = [
    # Gateway and clients
    "ChainGateway",
    "ChainConnections",
    "ReadClient",
    "WriteClient",
    "ReceiptResolver",
    # Configuration
    "GatewayConfig",
    "resolve_config",
    "MINT_AMOUNT",
    "MINT_AMOUNT_TOKENS",
    "TOKEN_DECIMALS",
    # Types
    "Address",
    "ContractCallSpec",
    "MintResponse",
    "ProposalInfo",
    "TokenAmount",
    "TxState",
    # Exceptions
    "GatewayError",
    "ConfigError",
    "NetworkError",
    "ValidationError",
    "ReadError",
    "WriteError",
    "WriteFailure",
    "ReceiptError",
    "ReceiptFailure",
    # Utility functions
    "normalize_value",
    "format_units",
    "parse_units",
    "decode_bytes32",
    "to_checksum",
    "same_address",
]
