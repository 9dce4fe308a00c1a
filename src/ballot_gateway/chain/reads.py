"""Read-only contract queries for the ballot chain gateway."""

from __future__ import annotations

import logging
from typing import Any

from ..constants import MINTER_ROLE
from ..exceptions import ReadError, ValidationError
from ..types import ContractCallSpec, ProposalInfo
from ..utils import decode_bytes32, format_units, to_checksum
from .connections import ChainConnections

logger = logging.getLogger(__name__)


class ReadClient:
    """Execute read-only calls against the token and ballot contracts.

    Token amounts come back from the chain at native precision and are returned
    as decimal strings scaled by ``10**18``. Failures are wrapped in
    :class:`ReadError` and never retried here.
    """

    def __init__(self, connections: ChainConnections) -> None:
        self._connections = connections

    async def call(self, spec: ContractCallSpec) -> Any:
        """Invoke ``spec`` with ``eth_call`` and return the decoded result."""

        try:
            contract = self._connections.contract_for(spec.contract_address)
            contract_function = getattr(contract.functions, spec.function_name)(*spec.args)
        except Exception as exc:
            raise ReadError(
                f"Failed to build read call {spec.function_name}",
                operation=spec.function_name,
                address=spec.contract_address,
                details={"args": list(spec.args), "error": str(exc)},
            ) from exc

        logger.debug("Calling %s on %s", spec.function_name, spec.contract_address)
        try:
            return await contract_function.call()
        except Exception as exc:
            raise ReadError(
                f"Failed to read {spec.function_name}",
                operation=spec.function_name,
                address=spec.contract_address,
                details={"args": list(spec.args), "error": str(exc)},
            ) from exc

    # ------------------------------------------------------------------
    # Token queries
    # ------------------------------------------------------------------
    async def token_name(self) -> str:
        return await self._token_call("name")

    async def total_supply(self) -> str:
        raw = await self._token_call("totalSupply")
        return self._format_amount(raw, "totalSupply", self._token_address)

    async def balance_of(self, address: str) -> str:
        account = to_checksum(address)
        raw = await self._token_call("balanceOf", account)
        return self._format_amount(raw, "balanceOf", self._token_address)

    async def voting_power_at_snapshot(self, address: str, block_number: int) -> str:
        account = to_checksum(address)
        if isinstance(block_number, bool) or not isinstance(block_number, int) or block_number < 0:
            raise ValidationError(
                "Block number must be a non-negative integer",
                field="block_number",
                value=block_number,
            )
        raw = await self._token_call("getPastVotes", account, block_number)
        return self._format_amount(raw, "getPastVotes", self._token_address)

    async def has_minter_role(self, address: str) -> bool:
        account = to_checksum(address)
        return bool(await self._token_call("hasRole", MINTER_ROLE, account))

    # ------------------------------------------------------------------
    # Ballot queries
    # ------------------------------------------------------------------
    async def proposal(self, index: int) -> ProposalInfo:
        if isinstance(index, bool) or not isinstance(index, int) or index < 0:
            raise ValidationError(
                "Proposal index must be a non-negative integer", field="index", value=index
            )

        raw = await self._ballot_call("proposals", index)
        try:
            name_field, vote_count = raw
            name = decode_bytes32(name_field)
        except (TypeError, ValueError, ValidationError) as exc:
            raise ReadError(
                "Unexpected proposal payload",
                operation="proposals",
                address=self._ballot_address,
                details={"index": index, "error": str(exc)},
            ) from exc

        return ProposalInfo(
            index=index,
            name=name,
            vote_count=self._format_amount(vote_count, "proposals", self._ballot_address),
        )

    async def proposals(self, count: int) -> list[ProposalInfo]:
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise ValidationError(
                "Proposal count must be a non-negative integer", field="count", value=count
            )
        return [await self.proposal(index) for index in range(count)]

    async def target_block_number(self) -> int:
        raw = await self._ballot_call("targetBlockNumber")
        return int(raw)

    async def vote_power_spent(self, address: str) -> str:
        account = to_checksum(address)
        raw = await self._ballot_call("votePowerSpent", account)
        return self._format_amount(raw, "votePowerSpent", self._ballot_address)

    async def winning_proposal_name(self) -> str:
        raw = await self._ballot_call("winnerName")
        try:
            return decode_bytes32(raw)
        except ValidationError as exc:
            raise ReadError(
                "Unexpected winner name payload",
                operation="winnerName",
                address=self._ballot_address,
                details={"error": str(exc)},
            ) from exc

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @property
    def _token_address(self) -> str:
        return self._connections.config.token_address

    @property
    def _ballot_address(self) -> str | None:
        return self._connections.config.ballot_address

    async def _token_call(self, function_name: str, *args: Any) -> Any:
        return await self.call(ContractCallSpec(self._token_address, function_name, args))

    async def _ballot_call(self, function_name: str, *args: Any) -> Any:
        if self._ballot_address is None:
            raise ReadError(
                "Ballot contract address is not configured",
                operation=function_name,
            )
        return await self.call(ContractCallSpec(self._ballot_address, function_name, args))

    @staticmethod
    def _format_amount(raw: Any, operation: str, contract_address: str | None) -> str:
        try:
            return format_units(raw)
        except ValidationError as exc:
            raise ReadError(
                "Contract returned a non-integer amount",
                operation=operation,
                address=contract_address,
                details={"value": repr(raw)},
            ) from exc
