"""Contract ABIs consumed by the gateway.

Only the entries the gateway calls are listed; both contracts are treated as
fixed external schemas.
"""

from typing import Any


def _fn(
    name: str,
    inputs: list[tuple[str, str]],
    outputs: list[tuple[str, str]],
    mutability: str = "view",
) -> dict[str, Any]:
    return {
        "type": "function",
        "name": name,
        "stateMutability": mutability,
        "inputs": [{"name": arg, "type": typ, "internalType": typ} for arg, typ in inputs],
        "outputs": [{"name": arg, "type": typ, "internalType": typ} for arg, typ in outputs],
    }


MyToken_abi: list[dict[str, Any]] = [
    _fn("name", [], [("", "string")]),
    _fn("symbol", [], [("", "string")]),
    _fn("decimals", [], [("", "uint8")]),
    _fn("totalSupply", [], [("", "uint256")]),
    _fn("balanceOf", [("account", "address")], [("", "uint256")]),
    _fn("getVotes", [("account", "address")], [("", "uint256")]),
    _fn(
        "getPastVotes",
        [("account", "address"), ("timepoint", "uint256")],
        [("", "uint256")],
    ),
    _fn("delegates", [("account", "address")], [("", "address")]),
    _fn("MINTER_ROLE", [], [("", "bytes32")]),
    _fn("hasRole", [("role", "bytes32"), ("account", "address")], [("", "bool")]),
    _fn("mint", [("to", "address"), ("amount", "uint256")], [], "nonpayable"),
    _fn("delegate", [("delegatee", "address")], [], "nonpayable"),
]


TokenizedBallot_abi: list[dict[str, Any]] = [
    _fn(
        "proposals",
        [("", "uint256")],
        [("name", "bytes32"), ("voteCount", "uint256")],
    ),
    _fn("targetBlockNumber", [], [("", "uint256")]),
    _fn("tokenContract", [], [("", "address")]),
    _fn("votePowerSpent", [("", "address")], [("", "uint256")]),
    _fn("winningProposal", [], [("winningProposal_", "uint256")]),
    _fn("winnerName", [], [("winnerName_", "bytes32")]),
    _fn("vote", [("proposal", "uint256"), ("amount", "uint256")], [], "nonpayable"),
]
