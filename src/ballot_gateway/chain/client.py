"""Chain gateway that serves token and ballot queries and token mints."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ..constants import DEFAULT_PROPOSAL_COUNT
from ..exceptions import ValidationError, WriteError, WriteFailure
from ..types import MintResponse, ProposalInfo, TxState
from ..utils import format_units
from .config import GatewayConfig, resolve_config
from .connections import ChainConnections
from .reads import ReadClient
from .receipts import ReceiptResolver
from .transactions import MINT_AMOUNT, WriteClient

logger = logging.getLogger(__name__)

_FAILURE_STATES = {
    WriteFailure.SUBMISSION_REJECTED: TxState.FAILED,
    WriteFailure.REVERTED: TxState.REVERTED,
    # The transaction was broadcast but we stopped waiting before it was mined
    WriteFailure.UNCONFIRMED: TxState.PENDING,
}


class ChainGateway:
    """Query and mutation entry points consumed by the HTTP layer.

    The configuration is resolved once and the connections and clients are
    built in the constructor. After that the instance is only read, so a single
    gateway can serve concurrent requests on one event loop.
    """

    def __init__(
        self,
        config: GatewayConfig,
        *,
        connections: ChainConnections | None = None,
    ) -> None:
        self._config = config
        if connections is None:
            connections = ChainConnections(config)
        if not connections.is_open():
            connections.open()
        self._connections = connections
        self._reader = ReadClient(connections)
        self._writer = WriteClient(
            connections,
            receipt_timeout=config.receipt_timeout,
            poll_interval=config.receipt_poll_interval,
        )
        self._receipts = ReceiptResolver(connections)

    @classmethod
    def from_env(cls, source: Mapping[str, str] | None = None) -> ChainGateway:
        """Build a gateway from environment variables (and ``.env``)."""

        return cls(resolve_config(source))

    # ------------------------------------------------------------------
    # Connection management
    # ------------------------------------------------------------------
    async def verify_connection(self) -> int:
        return await self._connections.verify()

    async def close(self) -> None:
        await self._connections.close()

    async def __aenter__(self) -> ChainGateway:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    @property
    def config(self) -> GatewayConfig:
        return self._config

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def token_contract_address(self) -> str:
        return self._config.token_address

    def ballot_contract_address(self) -> str | None:
        return self._config.ballot_address

    def server_wallet_address(self) -> str:
        return self._writer.signer_address

    async def token_name(self) -> str:
        return await self._reader.token_name()

    async def total_supply(self) -> str:
        return await self._reader.total_supply()

    async def token_balance(self, address: str) -> str:
        return await self._reader.balance_of(address)

    async def has_minter_role(self, address: str) -> bool:
        return await self._reader.has_minter_role(address)

    async def proposal(self, index: int) -> dict[str, Any]:
        return (await self._reader.proposal(index)).to_dict()

    async def proposals(self, count: int = DEFAULT_PROPOSAL_COUNT) -> list[dict[str, Any]]:
        items: list[ProposalInfo] = await self._reader.proposals(count)
        return [item.to_dict() for item in items]

    async def target_block_number(self) -> int:
        return await self._reader.target_block_number()

    async def voting_power(self, address: str, block_number: int | None = None) -> str:
        """Voting power of ``address`` at ``block_number``, defaulting to the ballot snapshot."""

        if block_number is None:
            block_number = await self._reader.target_block_number()
        return await self._reader.voting_power_at_snapshot(address, block_number)

    async def vote_power_spent(self, address: str) -> str:
        return await self._reader.vote_power_spent(address)

    async def winning_proposal_name(self) -> str:
        return await self._reader.winning_proposal_name()

    async def transaction_receipt(self, tx_hash: str) -> dict[str, Any]:
        return await self._receipts.get_receipt(tx_hash)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    async def mint(self, recipient: str) -> dict[str, Any]:
        """Mint 50 tokens to ``recipient``; raises on any failure."""

        return await self._writer.mint(recipient)

    async def mint_tokens(self, address: str) -> MintResponse:
        """Mint 50 tokens to ``address`` and describe the outcome instead of raising."""

        amount = format_units(MINT_AMOUNT)
        try:
            receipt = await self._writer.mint(address)
        except ValidationError as exc:
            logger.info("Rejected mint request for %r: %s", address, exc)
            return MintResponse(success=False, recipient=address, amount=amount, error=str(exc))
        except WriteError as exc:
            error = str(exc)
            cause = exc.details.get("error")
            if cause:
                error = f"{error}: {cause}"
            logger.error("Mint to %s failed (%s): %s", address, exc.reason.value, error)
            return MintResponse(
                success=False,
                recipient=address,
                amount=amount,
                transaction_hash=exc.tx_hash,
                state=_FAILURE_STATES[exc.reason],
                error=error,
                receipt=exc.receipt,
            )
        except Exception as exc:  # pragma: no cover - defensive
            logger.exception("Unexpected mint failure")
            return MintResponse(
                success=False,
                recipient=address,
                amount=amount,
                error=str(exc),
            )

        return MintResponse(
            success=True,
            recipient=address,
            amount=amount,
            transaction_hash=receipt.get("transactionHash"),
            block_number=receipt.get("blockNumber"),
            state=TxState.CONFIRMED,
            receipt=receipt,
        )
