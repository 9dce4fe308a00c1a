"""Tests for provider, signer and contract wiring."""

from __future__ import annotations

import asyncio
from dataclasses import replace

import pytest
from eth_account import Account
from fakes import BALLOT_ADDRESS, TEST_PRIVATE_KEY, TOKEN_ADDRESS

from ballot_gateway.chain.config import GatewayConfig
from ballot_gateway.chain.connections import ChainConnections
from ballot_gateway.constants import ChainId
from ballot_gateway.exceptions import ConfigError, NetworkError, ValidationError


class FakeChainEth:
    def __init__(self, chain_id: int) -> None:
        self._chain_id = chain_id

    @property
    def chain_id(self):
        async def _chain_id() -> int:
            return self._chain_id

        return _chain_id()


class FakeNode:
    def __init__(self, *, connected: bool = True, chain_id: int = ChainId.SEPOLIA) -> None:
        self._connected = connected
        self.eth = FakeChainEth(chain_id)

    async def is_connected(self) -> bool:
        if isinstance(self._connected, Exception):
            raise self._connected
        return self._connected


def test_open_builds_signer_and_contracts(config: GatewayConfig) -> None:
    connections = ChainConnections(config)
    assert not connections.is_open()

    connections.open()

    assert connections.is_open()
    assert connections.account.address == Account.from_key(TEST_PRIVATE_KEY).address
    assert connections.web3.eth.default_account == connections.account.address
    assert connections.token_contract.address == TOKEN_ADDRESS
    assert connections.ballot_contract.address == BALLOT_ADDRESS


def test_accessors_before_open(config: GatewayConfig) -> None:
    connections = ChainConnections(config)

    with pytest.raises(NetworkError):
        connections.web3
    with pytest.raises(NetworkError):
        connections.account
    with pytest.raises(NetworkError):
        connections.token_contract


def test_ballot_contract_requires_address(config: GatewayConfig) -> None:
    connections = ChainConnections(replace(config, ballot_address=None))
    connections.open()

    with pytest.raises(ConfigError) as excinfo:
        connections.ballot_contract

    assert excinfo.value.key == "BALLOT_ADDRESS"


def test_contract_for_matches_case_insensitively(connections: ChainConnections) -> None:
    assert connections.contract_for(TOKEN_ADDRESS.lower()) is connections.token_contract
    assert connections.contract_for(BALLOT_ADDRESS) is connections.ballot_contract


def test_contract_for_unknown_address(connections: ChainConnections) -> None:
    with pytest.raises(ValidationError):
        connections.contract_for("0x" + "12" * 20)


def test_verify_reports_chain_id(connections: ChainConnections) -> None:
    connections._web3 = FakeNode()  # type: ignore[assignment]
    assert asyncio.run(connections.verify()) == ChainId.SEPOLIA


def test_verify_rejects_wrong_chain(connections: ChainConnections) -> None:
    connections._web3 = FakeNode(chain_id=1)  # type: ignore[assignment]

    with pytest.raises(ConfigError) as excinfo:
        asyncio.run(connections.verify())

    assert excinfo.value.details == {"expected": ChainId.SEPOLIA, "actual": 1}


def test_verify_unreachable(connections: ChainConnections) -> None:
    connections._web3 = FakeNode(connected=False)  # type: ignore[assignment]
    with pytest.raises(NetworkError):
        asyncio.run(connections.verify())


def test_verify_transport_error(connections: ChainConnections) -> None:
    connections._web3 = FakeNode(connected=OSError("dns failure"))  # type: ignore[arg-type, assignment]
    with pytest.raises(NetworkError) as excinfo:
        asyncio.run(connections.verify())
    assert "dns failure" in excinfo.value.details["error"]
