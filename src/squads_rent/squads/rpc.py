"""Solana JSON-RPC access via solana-py's async client."""

from __future__ import annotations

import logging

import httpx
from solana.exceptions import SolanaRpcException
from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment
from solana.rpc.core import RPCException
from solders.pubkey import Pubkey

from squads_rent.errors import UpstreamTransportError
from squads_rent.models.accounts import AccountSnapshot
from squads_rent.models.batch import FreshnessToken

log = logging.getLogger(__name__)

_TRANSPORT_ERRORS = (SolanaRpcException, RPCException, httpx.HTTPError)


class SolanaAccountFetcher:
    """AccountFetcher backed by a single AsyncClient.

    Missing accounts come back as None; anything that goes wrong on the wire
    is raised as UpstreamTransportError. No retries.
    """

    def __init__(
        self,
        rpc_url: str,
        commitment: str = "confirmed",
        timeout: int = 30,
    ) -> None:
        self._rpc_url = rpc_url
        self._client = AsyncClient(rpc_url, commitment=Commitment(commitment), timeout=timeout)

    async def close(self) -> None:
        await self._client.close()

    async def fetch_account(self, address: Pubkey) -> AccountSnapshot | None:
        try:
            resp = await self._client.get_account_info(address)
        except _TRANSPORT_ERRORS as exc:
            log.warning("getAccountInfo(%s) failed: %s", str(address)[:16], exc)
            raise UpstreamTransportError(f"getAccountInfo({address}) failed: {exc}") from exc

        account = resp.value
        if account is None:
            return None
        return AccountSnapshot(
            address=address,
            owner=account.owner,
            lamports=account.lamports,
            data=bytes(account.data),
        )

    async def fetch_freshness_token(self) -> FreshnessToken:
        try:
            resp = await self._client.get_latest_blockhash()
        except _TRANSPORT_ERRORS as exc:
            log.warning("getLatestBlockhash failed: %s", exc)
            raise UpstreamTransportError(f"getLatestBlockhash failed: {exc}") from exc

        return FreshnessToken(
            blockhash=resp.value.blockhash,
            last_valid_block_height=resp.value.last_valid_block_height,
        )
