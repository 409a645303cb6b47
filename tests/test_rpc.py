"""Tests for the Solana RPC fetcher, with the AsyncClient replaced."""

from __future__ import annotations

from types import SimpleNamespace

import httpx
import pytest
from solana.exceptions import SolanaRpcException
from solana.rpc.async_api import AsyncClient

from squads_rent.errors import UpstreamTransportError
from squads_rent.squads.rpc import SolanaAccountFetcher

from tests.factories import MULTISIG_A, PROGRAM_ID
from tests.mocks import TEST_BLOCKHASH


class FakeClient:
    def __init__(self, account=None, error: Exception | None = None) -> None:
        self.account = account
        self.error = error
        self.closed = False

    async def get_account_info(self, address):
        if self.error:
            raise self.error
        return SimpleNamespace(value=self.account)

    async def get_latest_blockhash(self):
        if self.error:
            raise self.error
        return SimpleNamespace(
            value=SimpleNamespace(blockhash=TEST_BLOCKHASH, last_valid_block_height=42)
        )

    async def close(self):
        self.closed = True


def make_fetcher(client: FakeClient) -> SolanaAccountFetcher:
    fetcher = SolanaAccountFetcher("http://localhost:8899")
    fetcher._client = client
    return fetcher


async def test_fetch_existing_account():
    account = SimpleNamespace(owner=PROGRAM_ID, lamports=1234, data=b"\x01\x02")
    fetcher = make_fetcher(FakeClient(account=account))

    snap = await fetcher.fetch_account(MULTISIG_A)

    assert snap.address == MULTISIG_A
    assert snap.owner == PROGRAM_ID
    assert snap.lamports == 1234
    assert snap.data == b"\x01\x02"


async def test_missing_account_is_none():
    fetcher = make_fetcher(FakeClient(account=None))
    assert await fetcher.fetch_account(MULTISIG_A) is None


@pytest.mark.parametrize("error", [
    httpx.ConnectError("connection refused"),
    httpx.ReadTimeout("timed out"),
    SolanaRpcException(httpx.ConnectError("rpc down"), AsyncClient.get_account_info, None, None),
])
async def test_transport_errors_are_wrapped(error):
    fetcher = make_fetcher(FakeClient(error=error))

    with pytest.raises(UpstreamTransportError):
        await fetcher.fetch_account(MULTISIG_A)
    with pytest.raises(UpstreamTransportError):
        await fetcher.fetch_freshness_token()


async def test_freshness_token():
    fetcher = make_fetcher(FakeClient())
    token = await fetcher.fetch_freshness_token()
    assert token.blockhash == TEST_BLOCKHASH
    assert token.last_valid_block_height == 42


async def test_close():
    client = FakeClient()
    await make_fetcher(client).close()
    assert client.closed
