"""Example: Read token metadata and balances through the chain gateway."""

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
    """Print the token name, total supply and the server wallet's balance."""

    async with ChainGateway.from_env() as gateway:
        chain_id = await gateway.verify_connection()
        print(f"Connected to chain {chain_id}")

        wallet = gateway.server_wallet_address()
        print(f"Token contract: {gateway.token_contract_address()}")
        print(f"Server wallet:  {wallet}")
        print(f"Token name:     {await gateway.token_name()}")
        print(f"Total supply:   {await gateway.total_supply()}")
        print(f"Wallet balance: {await gateway.token_balance(wallet)}")
        print(f"Wallet can mint: {await gateway.has_minter_role(wallet)}")

        holder = os.getenv("HOLDER_ADDRESS")
        if holder:
            print(f"Balance of {holder}: {await gateway.token_balance(holder)}")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except GatewayError as exc:
        print(f"Query failed: {exc}")
        raise SystemExit(1) from exc
