"""Example: Inspect proposals and voting power on the ballot contract."""

from __future__ import annotations

import asyncio
import logging
import os

from dotenv import load_dotenv

from ballot_gateway import ChainGateway, GatewayError

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOGLEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


async def main() -> None:
    """List proposals, the snapshot block and the current winner."""

    async with ChainGateway.from_env() as gateway:
        if gateway.ballot_contract_address() is None:
            raise ValueError("BALLOT_ADDRESS not found in environment variables")

        print(f"Ballot contract: {gateway.ballot_contract_address()}")
        print(f"Snapshot block:  {await gateway.target_block_number()}")

        for proposal in await gateway.proposals():
            print(f"  #{proposal['index']} {proposal['name']}: {proposal['vote_count']} votes")

        print(f"Winning proposal: {await gateway.winning_proposal_name()}")

        voter = os.getenv("VOTER_ADDRESS", gateway.server_wallet_address())
        print(f"Voting power of {voter}: {await gateway.voting_power(voter)}")
        print(f"Vote power spent by {voter}: {await gateway.vote_power_spent(voter)}")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except GatewayError as exc:
        print(f"Query failed: {exc}")
        raise SystemExit(1) from exc
