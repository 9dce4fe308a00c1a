"""Transaction dispatch helpers for the ballot chain gateway."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from web3.exceptions import TimeExhausted

from ..constants import MINT_AMOUNT_TOKENS
from ..exceptions import WriteError, WriteFailure
from ..types import ContractCallSpec, TokenAmount, TxState
from ..utils import normalize_value, parse_units, to_checksum
from .config import DEFAULT_RECEIPT_POLL_INTERVAL, DEFAULT_RECEIPT_TIMEOUT
from .connections import ChainConnections

logger = logging.getLogger(__name__)

MINT_AMOUNT: TokenAmount = parse_units(MINT_AMOUNT_TOKENS)


class WriteClient:
    """Sign, broadcast and confirm the gateway's single state-changing call.

    A mint moves through ``BUILT -> SUBMITTED -> PENDING -> MINED`` and ends in
    ``CONFIRMED``, ``REVERTED`` or ``FAILED``. Nothing is retried: each call to
    :meth:`mint` issues exactly one transaction.

    Nonces are handed out under a lock held only for allocation and broadcast,
    so concurrent mints from the one signer get consecutive nonces while their
    receipt waits still overlap.
    """

    def __init__(
        self,
        connections: ChainConnections,
        *,
        receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT,
        poll_interval: float = DEFAULT_RECEIPT_POLL_INTERVAL,
    ) -> None:
        self._connections = connections
        self._receipt_timeout = receipt_timeout
        self._poll_interval = poll_interval
        # Resolving the signer up front fails fast when no key is available
        self.signer_address = connections.account.address
        self._nonce_lock = asyncio.Lock()
        self._next_nonce: int | None = None

    def build_mint(self, recipient: str) -> ContractCallSpec:
        to = to_checksum(recipient, field="recipient")
        return ContractCallSpec(
            contract_address=self._connections.config.token_address,
            function_name="mint",
            args=(to, MINT_AMOUNT),
        )

    async def mint(self, recipient: str) -> dict[str, Any]:
        """Mint the fixed token amount to ``recipient`` and return the normalized receipt.

        Raises:
            ValidationError: If ``recipient`` is not a valid address.
            WriteError: If the broadcast is rejected, the transaction reverts, or
                no receipt arrives within the receipt timeout.
        """

        spec = self.build_mint(recipient)
        return await self.send(spec, action="mint")

    async def send(self, spec: ContractCallSpec, *, action: str) -> dict[str, Any]:
        web3 = self._connections.web3
        contract = self._connections.contract_for(spec.contract_address)

        context = {"contract": spec.contract_address, "args": normalize_value(spec.args)}
        self._transition(action, TxState.BUILT, context)

        try:
            contract_function = getattr(contract.functions, spec.function_name)(*spec.args)
            async with self._nonce_lock:
                nonce = await self._allocate_nonce(web3)
                context["nonce"] = nonce
                self._transition(action, TxState.SUBMITTED, context)
                try:
                    tx_hash = await contract_function.transact(
                        {"from": self.signer_address, "nonce": nonce}
                    )
                except Exception:
                    # Resync with the node on the next send
                    self._next_nonce = None
                    raise
                self._next_nonce = nonce + 1
        except Exception as exc:
            self._transition(action, TxState.FAILED, context)
            raise WriteError(
                f"Failed to submit transaction for {action}",
                reason=WriteFailure.SUBMISSION_REJECTED,
                details={**context, "function": spec.function_name, "error": str(exc)},
            ) from exc

        tx_hex = tx_hash.to_0x_hex()
        context["tx_hash"] = tx_hex
        self._transition(action, TxState.PENDING, context)

        try:
            receipt = await web3.eth.wait_for_transaction_receipt(
                tx_hash, timeout=self._receipt_timeout, poll_latency=self._poll_interval
            )
        except TimeExhausted as exc:
            raise WriteError(
                f"Transaction for {action} was not mined within {self._receipt_timeout}s",
                reason=WriteFailure.UNCONFIRMED,
                tx_hash=tx_hex,
                details={**context, "error": str(exc)},
            ) from exc
        except Exception as exc:  # pragma: no cover - defensive
            raise WriteError(
                f"Failed to fetch receipt for {action}",
                reason=WriteFailure.UNCONFIRMED,
                tx_hash=tx_hex,
                details={**context, "error": str(exc)},
            ) from exc

        self._transition(action, TxState.MINED, context)
        serialised_receipt = normalize_value(receipt)

        if _receipt_status(receipt) != 1:
            self._transition(action, TxState.REVERTED, context)
            raise WriteError(
                f"Transaction for {action} reverted",
                reason=WriteFailure.REVERTED,
                tx_hash=tx_hex,
                receipt=serialised_receipt,
                details=context,
            )

        self._transition(action, TxState.CONFIRMED, context)
        logger.info(
            "Transaction confirmed for action=%s hash=%s block=%s",
            action,
            tx_hex,
            _receipt_field(receipt, "blockNumber"),
        )
        return serialised_receipt

    async def _allocate_nonce(self, web3: Any) -> int:
        pending = await web3.eth.get_transaction_count(self.signer_address, "pending")
        if self._next_nonce is not None and self._next_nonce > pending:
            return self._next_nonce
        return int(pending)

    @staticmethod
    def _transition(action: str, state: TxState, context: Mapping[str, Any]) -> None:
        level = logging.WARNING if state in (TxState.FAILED, TxState.REVERTED) else logging.INFO
        logger.log(
            level,
            "Transaction %s for action=%s contract=%s hash=%s",
            state.value,
            action,
            context.get("contract"),
            context.get("tx_hash"),
        )


def _receipt_field(receipt: Any, name: str) -> Any:
    if isinstance(receipt, Mapping):
        return receipt.get(name)
    return getattr(receipt, name, None)


def _receipt_status(receipt: Any) -> int | None:
    status = _receipt_field(receipt, "status")
    return None if status is None else int(status)
