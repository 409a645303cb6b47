"""AccountFetcher protocol - reads accounts and chain metadata from an RPC node."""

from __future__ import annotations

from typing import Protocol

from solders.pubkey import Pubkey

from squads_rent.models.accounts import AccountSnapshot
from squads_rent.models.batch import FreshnessToken


class AccountFetcher(Protocol):
    """Network reads needed by the reclaimer.

    Implementations raise UpstreamTransportError on transport failures and
    return None for accounts that do not exist.
    """

    async def fetch_account(self, address: Pubkey) -> AccountSnapshot | None:
        """Fetch one account's owner, lamports and data."""
        ...

    async def fetch_freshness_token(self) -> FreshnessToken:
        """Latest blockhash and its validity horizon."""
        ...

    async def close(self) -> None:
        """Release the underlying connection."""
        ...
