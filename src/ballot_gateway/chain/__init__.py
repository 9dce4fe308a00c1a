"""Async web3 clients behind the ballot chain gateway."""

from .client import ChainGateway
from .config import GatewayConfig, resolve_config
from .connections import ChainConnections
from .reads import ReadClient
from .receipts import ReceiptResolver
from .transactions import WriteClient

__all__ = [
    "ChainConnections",
    "ChainGateway",
    "GatewayConfig",
    "ReadClient",
    "ReceiptResolver",
    "WriteClient",
    "resolve_config",
]
