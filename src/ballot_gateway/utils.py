"""Utility functions for the ballot chain gateway."""

from collections.abc import Mapping, Sequence
from decimal import Decimal, InvalidOperation, localcontext
from typing import Any

from eth_typing import ChecksumAddress, HexStr
from hexbytes import HexBytes
from web3 import Web3

from .constants import BYTES32_SIZE, TOKEN_DECIMALS
from .exceptions import ValidationError

_BYTE_TYPES = (bytes, bytearray, memoryview)


def normalize_value(value: Any) -> Any:
    """Return a JSON-safe copy of ``value`` with wide integers as decimal strings.

    Integers (but not booleans) become base-10 strings and byte strings become
    ``0x`` hex. Mappings and sequences are rebuilt rather than mutated, so the
    provider's objects are never touched. The walk uses an explicit stack, so
    nesting depth is limited only by the payload itself.
    """
    holder: list[Any] = [None]
    stack: list[tuple[Any, Any, Any]] = [(value, holder, 0)]

    while stack:
        item, target, slot = stack.pop()
        if isinstance(item, Mapping):
            node: dict[Any, Any] = {}
            target[slot] = node
            for key, child in item.items():
                node[key] = None
                stack.append((child, node, key))
        elif _is_sequence(item):
            items = list(item)
            seq: list[Any] = [None] * len(items)
            target[slot] = seq
            for index, child in enumerate(items):
                stack.append((child, seq, index))
        else:
            target[slot] = _normalize_scalar(item)

    return holder[0]


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, *_BYTE_TYPES))


def _normalize_scalar(value: Any) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return str(int(value))
    if isinstance(value, _BYTE_TYPES):
        return HexBytes(bytes(value)).to_0x_hex()
    return value


def format_units(value: int, decimals: int = TOKEN_DECIMALS) -> str:
    """Render a smallest-unit integer as a decimal string without rounding.

    ``format_units(50 * 10**18)`` returns ``"50"`` and trailing fractional
    zeros are trimmed, matching ``formatEther`` semantics.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("Amount must be an integer", field="value", value=value)
    if decimals < 0:
        raise ValidationError("Decimals cannot be negative", field="decimals", value=decimals)

    whole, fraction = divmod(abs(value), 10**decimals)
    text = str(whole)
    if fraction:
        text = f"{text}.{str(fraction).rjust(decimals, '0').rstrip('0')}"
    return f"-{text}" if value < 0 else text


def parse_units(amount: int | str | Decimal, decimals: int = TOKEN_DECIMALS) -> int:
    """Convert a human decimal amount to its smallest-unit integer."""
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError("Amount must be numeric", field="amount", value=amount) from exc

    if not value.is_finite():
        raise ValidationError("Amount must be finite", field="amount", value=amount)
    if value < 0:
        raise ValidationError("Amount cannot be negative", field="amount", value=amount)

    with localcontext() as ctx:
        ctx.prec = max(78, len(value.as_tuple().digits) + decimals)
        scaled = value.scaleb(decimals)
    if scaled != scaled.to_integral_value():
        raise ValidationError(
            f"Amount has more than {decimals} decimal places", field="amount", value=amount
        )
    return int(scaled)


def decode_bytes32(value: bytes | str) -> str:
    """Decode a fixed-width bytes field to text, stripping trailing zero padding only."""
    if isinstance(value, str):
        try:
            raw = bytes(HexBytes(value))
        except ValueError as exc:
            raise ValidationError("Value is not valid hex", field="value", value=value) from exc
    elif isinstance(value, _BYTE_TYPES):
        raw = bytes(value)
    else:
        raise ValidationError("Value must be bytes or hex", field="value", value=value)

    if len(raw) > BYTES32_SIZE:
        raise ValidationError(
            f"Value exceeds {BYTES32_SIZE} bytes", field="value", value=HexBytes(raw).to_0x_hex()
        )

    return raw.rstrip(b"\x00").decode("utf-8", errors="replace")


def to_checksum(value: Any, field: str = "address") -> ChecksumAddress:
    """Validate an address and return its checksummed form."""
    if isinstance(value, str) and Web3.is_address(value):
        return Web3.to_checksum_address(value)
    raise ValidationError("Invalid Ethereum address", field=field, value=value)


def same_address(left: str, right: str) -> bool:
    """Compare two addresses by their canonical lowercase hex form."""
    return left.lower() == right.lower()


def to_tx_hash(value: str | bytes) -> HexBytes:
    """Validate a 32-byte transaction hash."""
    try:
        if isinstance(value, str):
            if not value.startswith(("0x", "0X")):
                raise ValueError("missing 0x prefix")
            tx_hash = HexBytes(Web3.to_bytes(hexstr=HexStr(value)))
        else:
            tx_hash = HexBytes(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(
            "Transaction hash must be 0x-prefixed hex", field="tx_hash", value=value
        ) from exc

    if len(tx_hash) != 32:
        raise ValidationError("Transaction hash must be 32 bytes", field="tx_hash", value=value)
    return tx_hash
