"""Tests for the eligibility resolver."""

from __future__ import annotations

import pytest

from squads_rent.errors import (
    InvalidIdentifier,
    MultisigUnreadable,
    NotEligible,
    UpstreamTransportError,
)
from squads_rent.reclaim.eligibility import EligibilityResolver

from tests.factories import (
    MULTISIG_A,
    RENT_COLLECTOR,
    multisig_snapshot,
    snapshot,
    vault_transaction_snapshot,
)


@pytest.fixture
def resolver(chain, decoder):
    return EligibilityResolver(chain, decoder)


async def test_resolve_eligible_multisig(chain, resolver):
    chain.add(multisig_snapshot(MULTISIG_A, stale_index=2, current_index=6))

    eligible = await resolver.resolve(str(MULTISIG_A))

    assert eligible.rent_collector == RENT_COLLECTOR
    assert eligible.state.stale_index == 2
    assert eligible.state.current_index == 6
    assert chain.fetch_calls == [MULTISIG_A]


async def test_missing_account_is_unreadable(chain, resolver):
    with pytest.raises(MultisigUnreadable, match="not found"):
        await resolver.resolve(MULTISIG_A)


async def test_wrong_layout_is_unreadable(chain, resolver):
    """An account that exists but is some other Squads account."""
    other = vault_transaction_snapshot(MULTISIG_A, 1)
    chain.add(snapshot(MULTISIG_A, other.data))

    with pytest.raises(MultisigUnreadable):
        await resolver.resolve(MULTISIG_A)


async def test_no_rent_collector_is_not_eligible(chain, resolver):
    chain.add(multisig_snapshot(MULTISIG_A, rent_collector=None))

    with pytest.raises(NotEligible) as exc_info:
        await resolver.resolve(MULTISIG_A)
    assert exc_info.value.multisig == str(MULTISIG_A)


@pytest.mark.parametrize("bad", ["", "   ", "not-base58-0OIl", "abc", None, 12])
async def test_invalid_identifier_before_any_fetch(chain, resolver, bad):
    with pytest.raises(InvalidIdentifier):
        await resolver.resolve(bad)
    assert chain.network_calls == 0


async def test_transport_error_propagates(chain, resolver):
    chain.fail(MULTISIG_A)
    with pytest.raises(UpstreamTransportError):
        await resolver.resolve(MULTISIG_A)
