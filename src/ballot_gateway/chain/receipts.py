"""Transaction receipt lookups for the ballot chain gateway."""

from __future__ import annotations

import logging
from typing import Any

from web3.exceptions import TransactionNotFound

from ..exceptions import ReceiptError, ReceiptFailure, ValidationError
from ..utils import normalize_value, to_tx_hash
from .connections import ChainConnections

logger = logging.getLogger(__name__)


class ReceiptResolver:
    """Fetch mined transaction receipts by hash. Receipts are never cached."""

    def __init__(self, connections: ChainConnections) -> None:
        self._connections = connections

    async def get_receipt(self, tx_hash: str) -> dict[str, Any]:
        try:
            hash_bytes = to_tx_hash(tx_hash)
        except ValidationError as exc:
            raise ReceiptError(
                "Invalid transaction hash",
                reason=ReceiptFailure.INVALID_HASH,
                tx_hash=str(tx_hash),
            ) from exc

        tx_hex = hash_bytes.to_0x_hex()
        try:
            receipt = await self._connections.web3.eth.get_transaction_receipt(hash_bytes)
        except TransactionNotFound as exc:
            raise ReceiptError(
                "Transaction receipt not found",
                reason=ReceiptFailure.NOT_FOUND,
                tx_hash=tx_hex,
            ) from exc
        except Exception as exc:  # pragma: no cover - defensive
            logger.error("Error fetching transaction receipt %s: %s", tx_hex, exc)
            raise ReceiptError(
                "Failed to fetch transaction receipt",
                reason=ReceiptFailure.NETWORK,
                tx_hash=tx_hex,
                details={"error": str(exc)},
            ) from exc

        if not receipt:
            raise ReceiptError(
                "Transaction receipt not found",
                reason=ReceiptFailure.NOT_FOUND,
                tx_hash=tx_hex,
            )

        return normalize_value(receipt)
