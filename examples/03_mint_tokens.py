"""Example: Mint voting tokens to an address and look up the receipt."""

from __future__ import annotations

import asyncio
import json
import logging
import os
import sys

from dotenv import load_dotenv

from ballot_gateway import ChainGateway

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOGLEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


async def main(recipient: str) -> int:
    """Mint the fixed amount to ``recipient`` and print the outcome."""

    async with ChainGateway.from_env() as gateway:
        await gateway.verify_connection()

        print(f"Minting to {recipient} from {gateway.server_wallet_address()}")
        response = await gateway.mint_tokens(recipient)
        print(json.dumps(response.to_dict(), indent=2))

        if not response.success:
            print(f"Mint failed: {response.error}")
            return 1

        receipt = await gateway.transaction_receipt(response.transaction_hash or "")
        print(f"Receipt status={receipt['status']} gasUsed={receipt['gasUsed']}")
        print(f"New balance: {await gateway.token_balance(recipient)}")
        return 0


if __name__ == "__main__":
    target = sys.argv[1] if len(sys.argv) > 1 else os.getenv("RECIPIENT_ADDRESS")
    if not target:
        raise ValueError("Pass a recipient address or set RECIPIENT_ADDRESS")
    raise SystemExit(asyncio.run(main(target)))
