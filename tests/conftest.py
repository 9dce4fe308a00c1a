from __future__ import annotations

from types import SimpleNamespace

import pytest
from fakes import (
    BALLOT_ADDRESS,
    SIGNER_ADDRESS,
    TEST_PRIVATE_KEY,
    TOKEN_ADDRESS,
    FakeContract,
    FakeEth,
)

from ballot_gateway.chain.config import GatewayConfig
from ballot_gateway.chain.connections import ChainConnections


@pytest.fixture
def config() -> GatewayConfig:
    return GatewayConfig(
        rpc_base_url="https://sepolia.example.io/v3/",
        rpc_api_key="test-key",
        private_key=TEST_PRIVATE_KEY,
        token_address=TOKEN_ADDRESS,
        ballot_address=BALLOT_ADDRESS,
        receipt_timeout=1.0,
        receipt_poll_interval=0.01,
    )


@pytest.fixture
def eth() -> FakeEth:
    return FakeEth()


@pytest.fixture
def token() -> FakeContract:
    return FakeContract(TOKEN_ADDRESS)


@pytest.fixture
def ballot() -> FakeContract:
    return FakeContract(BALLOT_ADDRESS)


@pytest.fixture
def connections(
    config: GatewayConfig, eth: FakeEth, token: FakeContract, ballot: FakeContract
) -> ChainConnections:
    """Real connection object wired to in-memory fakes instead of an RPC node."""

    conn = ChainConnections(config)
    conn._web3 = SimpleNamespace(eth=eth)  # type: ignore[assignment]
    conn._account = SimpleNamespace(address=SIGNER_ADDRESS)  # type: ignore[assignment]
    conn._token_contract = token  # type: ignore[assignment]
    conn._ballot_contract = ballot  # type: ignore[assignment]
    return conn
