"""Type definitions and data models for the ballot chain gateway."""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

Address = str  # Ethereum address
TokenAmount = int  # Smallest-unit token amount
TxHash = str  # 0x-prefixed transaction hash


class TxState(str, Enum):
    """Lifecycle states of a state-changing call."""

    BUILT = "built"
    SUBMITTED = "submitted"
    PENDING = "pending"
    MINED = "mined"
    CONFIRMED = "confirmed"
    REVERTED = "reverted"
    FAILED = "failed"


@dataclass(frozen=True)
class ContractCallSpec:
    """A contract invocation, used for both reads and writes."""

    contract_address: Address
    function_name: str
    args: tuple[Any, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ProposalInfo:
    """Decoded ballot proposal."""

    index: int
    name: str
    vote_count: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class MintResponse:
    """Status object returned to the HTTP layer for a mint request."""

    success: bool
    recipient: Address | None = None
    amount: str | None = None
    transaction_hash: TxHash | None = None
    block_number: str | None = None
    state: TxState | None = None
    error: str | None = None
    receipt: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        if self.state is not None:
            data["state"] = self.state.value
        return data
