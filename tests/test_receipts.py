"""Tests for transaction receipt lookups."""

from __future__ import annotations

import asyncio
import json

import pytest
from fakes import FakeEth, make_receipt
from hexbytes import HexBytes

from ballot_gateway.chain.connections import ChainConnections
from ballot_gateway.chain.receipts import ReceiptResolver
from ballot_gateway.exceptions import ReceiptError, ReceiptFailure

TX_HASH = "0x" + "ab" * 32


@pytest.fixture
def resolver(connections: ChainConnections) -> ReceiptResolver:
    return ReceiptResolver(connections)


def test_receipt_is_normalized(resolver: ReceiptResolver, eth: FakeEth) -> None:
    eth.receipts[TX_HASH] = make_receipt(HexBytes(TX_HASH), block_number=6_000_000)

    receipt = asyncio.run(resolver.get_receipt(TX_HASH))

    assert receipt["transactionHash"] == TX_HASH
    assert receipt["blockNumber"] == "6000000"
    assert receipt["effectiveGasPrice"] == str(2**70 + 3)
    assert receipt["logs"][0]["removed"] is False
    json.dumps(receipt)


def test_receipt_object_is_not_mutated(resolver: ReceiptResolver, eth: FakeEth) -> None:
    original = make_receipt(HexBytes(TX_HASH))
    eth.receipts[TX_HASH] = original

    asyncio.run(resolver.get_receipt(TX_HASH))

    assert original["blockNumber"] == 7_000_001
    assert isinstance(original["transactionHash"], HexBytes)


def test_receipt_hash_is_case_insensitive(resolver: ReceiptResolver, eth: FakeEth) -> None:
    eth.receipts[TX_HASH] = make_receipt(HexBytes(TX_HASH))
    receipt = asyncio.run(resolver.get_receipt(TX_HASH.upper().replace("0X", "0x")))
    assert receipt["transactionHash"] == TX_HASH


def test_unknown_hash_not_found(resolver: ReceiptResolver) -> None:
    with pytest.raises(ReceiptError) as excinfo:
        asyncio.run(resolver.get_receipt(TX_HASH))

    assert excinfo.value.reason is ReceiptFailure.NOT_FOUND
    assert excinfo.value.tx_hash == TX_HASH


def test_empty_receipt_not_found(resolver: ReceiptResolver, eth: FakeEth) -> None:
    eth.receipts[TX_HASH] = None
    with pytest.raises(ReceiptError) as excinfo:
        asyncio.run(resolver.get_receipt(TX_HASH))
    assert excinfo.value.reason is ReceiptFailure.NOT_FOUND


@pytest.mark.parametrize("value", ["", "0x1234", "hello", "ab" * 32])
def test_malformed_hash(resolver: ReceiptResolver, value: str) -> None:
    with pytest.raises(ReceiptError) as excinfo:
        asyncio.run(resolver.get_receipt(value))
    assert excinfo.value.reason is ReceiptFailure.INVALID_HASH


def test_provider_failure(resolver: ReceiptResolver, eth: FakeEth) -> None:
    eth.lookup_error = ConnectionError("connection refused")

    with pytest.raises(ReceiptError) as excinfo:
        asyncio.run(resolver.get_receipt(TX_HASH))

    assert excinfo.value.reason is ReceiptFailure.NETWORK
    assert "connection refused" in excinfo.value.details["error"]
