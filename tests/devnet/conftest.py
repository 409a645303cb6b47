"""Devnet fixtures: read-only checks against a live Solana RPC.

Run with ``pytest -m devnet``. Point SQUADS_RENT_DEVNET_RPC at a private
endpoint to avoid public rate limits.
"""

from __future__ import annotations

import os

import httpx
import pytest

from squads_rent.squads.rpc import SolanaAccountFetcher

RPC_URL = os.environ.get("SQUADS_RENT_DEVNET_RPC", "https://api.devnet.solana.com")


@pytest.fixture(scope="session")
def devnet_reachable():
    """Gate: skip all devnet tests if the RPC is unreachable."""
    try:
        r = httpx.post(
            RPC_URL,
            json={"jsonrpc": "2.0", "id": 1, "method": "getHealth"},
            timeout=10,
        )
        data = r.json()
        if data.get("result") == "ok":
            return True
        pytest.skip(f"Solana devnet RPC not healthy: {data}")
    except (httpx.ConnectError, httpx.TimeoutException) as exc:
        pytest.skip(f"Solana devnet RPC unreachable: {exc}")


@pytest.fixture
async def fetcher(devnet_reachable):
    f = SolanaAccountFetcher(RPC_URL, timeout=15)
    yield f
    await f.close()
