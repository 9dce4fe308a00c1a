"""Connection helpers for the ballot chain gateway."""

from __future__ import annotations

import logging
from typing import cast

from aiohttp import ClientTimeout
from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.contract import AsyncContract
from web3.middleware import SignAndSendRawMiddlewareBuilder
from web3.types import ChecksumAddress

from ..abi import MyToken_abi, TokenizedBallot_abi
from ..constants import ConfigKey
from ..exceptions import ConfigError, NetworkError, ValidationError
from ..utils import same_address, to_checksum
from .config import GatewayConfig

logger = logging.getLogger(__name__)


class ChainConnections:
    """Own the provider, signer account and contract handles for one gateway.

    Everything is built once by :meth:`open` and only read afterwards, so the
    same instance can be shared by concurrent requests.
    """

    def __init__(self, config: GatewayConfig):
        self.config = config
        self._provider: AsyncHTTPProvider | None = None
        self._web3: AsyncWeb3 | None = None
        self._account: LocalAccount | None = None
        self._token_contract: AsyncContract | None = None
        self._ballot_contract: AsyncContract | None = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def open(self) -> None:
        """Derive the signer and build the provider and contract handles.

        No network traffic happens here; use :meth:`verify` to probe the RPC.
        """

        if not self.config.private_key:
            raise ConfigError(
                "Private key not found in configuration", key=ConfigKey.PRIVATE_KEY
            )

        try:
            signer = cast(LocalAccount, Account.from_key(self.config.private_key))
        except Exception as exc:  # pragma: no cover - defensive
            raise ConfigError(
                "Failed to derive signer account from provided private key",
                key=ConfigKey.PRIVATE_KEY,
                details={"error": str(exc)},
            ) from exc

        provider = AsyncHTTPProvider(
            self.config.rpc_url,
            request_kwargs={"timeout": ClientTimeout(total=self.config.request_timeout)},
        )
        web3 = AsyncWeb3(provider)
        self._apply_account_middleware(web3, signer)

        self._token_contract = web3.eth.contract(
            address=self.config.token_address, abi=MyToken_abi
        )
        if self.config.ballot_address is not None:
            self._ballot_contract = web3.eth.contract(
                address=self.config.ballot_address, abi=TokenizedBallot_abi
            )
        else:
            self._ballot_contract = None

        self._account = signer
        self._provider = provider
        self._web3 = web3
        logger.info(
            "Prepared RPC client for %s with signer %s", self.config.rpc_base_url, signer.address
        )

    async def verify(self) -> int:
        """Check the RPC endpoint is reachable and serves the configured chain."""

        web3 = self.web3
        try:
            connected = await web3.is_connected()
            chain_id = await web3.eth.chain_id if connected else None
        except Exception as exc:
            raise NetworkError(
                "Unable to reach RPC endpoint",
                endpoint=self.config.rpc_base_url,
                details={"error": str(exc)},
            ) from exc

        if chain_id is None:
            raise NetworkError("Unable to connect to RPC", endpoint=self.config.rpc_base_url)

        if chain_id != self.config.chain_id:
            raise ConfigError(
                "RPC endpoint serves an unexpected chain",
                key=ConfigKey.RPC_BASE_URL,
                details={"expected": int(self.config.chain_id), "actual": chain_id},
            )

        logger.info("Connected to chain %s at %s", chain_id, self.config.rpc_base_url)
        return chain_id

    async def close(self) -> None:
        provider = self._provider
        self._provider = None
        self._web3 = None
        self._account = None
        self._token_contract = None
        self._ballot_contract = None
        if provider is not None:
            await provider.disconnect()

    def is_open(self) -> bool:
        return self._web3 is not None and self._account is not None

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def web3(self) -> AsyncWeb3:
        if self._web3 is None:
            raise NetworkError("RPC provider not connected", endpoint=self.config.rpc_base_url)
        return self._web3

    @property
    def account(self) -> LocalAccount:
        if self._account is None:
            raise NetworkError(
                "Signer account is not initialised; call open() first",
                endpoint=self.config.rpc_base_url,
            )
        return self._account

    @property
    def token_contract(self) -> AsyncContract:
        if self._token_contract is None:
            raise NetworkError(
                "Token contract not available; call open() first",
                endpoint=self.config.rpc_base_url,
            )
        return self._token_contract

    @property
    def ballot_contract(self) -> AsyncContract:
        if self.config.ballot_address is None:
            raise ConfigError(
                "Ballot contract address is not configured", key=ConfigKey.BALLOT_ADDRESS
            )
        if self._ballot_contract is None:
            raise NetworkError(
                "Ballot contract not available; call open() first",
                endpoint=self.config.rpc_base_url,
            )
        return self._ballot_contract

    def contract_for(self, address: str) -> AsyncContract:
        """Return the known contract handle deployed at ``address``."""

        target: ChecksumAddress = to_checksum(address, field="contract_address")
        if same_address(target, self.config.token_address):
            return self.token_contract
        if self.config.ballot_address is not None and same_address(
            target, self.config.ballot_address
        ):
            return self.ballot_contract
        raise ValidationError(
            "No ABI is registered for this contract", field="contract_address", value=target
        )

    # ------------------------------------------------------------------
    # Internal wiring
    # ------------------------------------------------------------------
    def _apply_account_middleware(self, web3: AsyncWeb3, account: LocalAccount) -> None:
        web3.middleware_onion.add(SignAndSendRawMiddlewareBuilder.build(account))  # type: ignore[arg-type]
        web3.eth.default_account = account.address
