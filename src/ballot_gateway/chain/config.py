"""Configuration container and resolver for the ballot chain gateway."""

from __future__ import annotations

import logging
import math
import os
from collections.abc import Mapping
from dataclasses import dataclass

from dotenv import load_dotenv
from web3.types import ChecksumAddress

from ..constants import DEFAULT_CHAIN_ID, ConfigKey
from ..exceptions import ConfigError, ValidationError
from ..utils import to_checksum

logger = logging.getLogger(__name__)

DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_RECEIPT_TIMEOUT = 120.0
DEFAULT_RECEIPT_POLL_INTERVAL = 0.5


@dataclass(frozen=True)
class GatewayConfig:
    """Immutable settings the gateway is built from once at startup."""

    rpc_base_url: str
    private_key: str
    token_address: ChecksumAddress
    rpc_api_key: str = ""
    ballot_address: ChecksumAddress | None = None
    chain_id: int = DEFAULT_CHAIN_ID
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT
    receipt_poll_interval: float = DEFAULT_RECEIPT_POLL_INTERVAL

    @property
    def rpc_url(self) -> str:
        """Endpoint URL with the API key appended, e.g. ``https://sepolia.infura.io/v3/<key>``."""

        return f"{self.rpc_base_url}{self.rpc_api_key}"

    def __repr__(self) -> str:
        return (
            f"GatewayConfig(rpc_base_url={self.rpc_base_url!r}, "
            f"token_address={self.token_address!r}, "
            f"ballot_address={self.ballot_address!r}, chain_id={self.chain_id})"
        )


def resolve_config(
    source: Mapping[str, str] | None = None,
    *,
    load_env_file: bool = True,
) -> GatewayConfig:
    """Build a :class:`GatewayConfig` from environment-style keys.

    Args:
        source: Mapping to read keys from. Defaults to ``os.environ``.
        load_env_file: Load a ``.env`` file into the environment first. Only
            applies when reading from ``os.environ``.

    Raises:
        ConfigError: If ``PRIVATE_KEY``, ``INFURA_RPC_URL`` or ``TOKEN_ADDRESS``
            is absent or blank, or if any value is malformed.
    """

    if source is None:
        if load_env_file:
            load_dotenv()
        source = os.environ

    rpc_base_url = _required(source, ConfigKey.RPC_BASE_URL)
    private_key = _required(source, ConfigKey.PRIVATE_KEY)
    token_address = _address(source, ConfigKey.TOKEN_ADDRESS, required=True)
    ballot_address = _address(source, ConfigKey.BALLOT_ADDRESS, required=False)

    config = GatewayConfig(
        rpc_base_url=rpc_base_url,
        rpc_api_key=(source.get(ConfigKey.RPC_API_KEY) or "").strip(),
        private_key=private_key,
        token_address=token_address,  # type: ignore[arg-type]
        ballot_address=ballot_address,
        request_timeout=_timeout(source, ConfigKey.REQUEST_TIMEOUT, DEFAULT_REQUEST_TIMEOUT),
        receipt_timeout=_timeout(source, ConfigKey.RECEIPT_TIMEOUT, DEFAULT_RECEIPT_TIMEOUT),
    )
    logger.info("Resolved gateway configuration: %r", config)
    return config


def _required(source: Mapping[str, str], key: str) -> str:
    value = (source.get(key) or "").strip()
    if not value:
        raise ConfigError(f"{key} not found in configuration", key=key)
    return value


def _address(source: Mapping[str, str], key: str, *, required: bool) -> ChecksumAddress | None:
    if required:
        raw = _required(source, key)
    else:
        raw = (source.get(key) or "").strip()
        if not raw:
            return None

    try:
        return to_checksum(raw, field=key)
    except ValidationError as exc:
        raise ConfigError(f"{key} is not a valid address", key=key, details={"value": raw}) from exc


def _timeout(source: Mapping[str, str], key: str, default: float) -> float:
    raw = (source.get(key) or "").strip()
    if not raw:
        return default

    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError(f"{key} must be a number of seconds", key=key) from exc

    if not math.isfinite(value) or value <= 0:
        raise ConfigError(f"{key} must be positive", key=key, details={"value": value})
    return value
