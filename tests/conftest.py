"""Shared fixtures for squads_rent tests."""

from __future__ import annotations

import pytest
from pytest_metadata.plugin import metadata_key

from squads_rent.models.config import SQUADS_V4_PROGRAM_ID
from squads_rent.reclaim.service import RentReclaimer
from squads_rent.squads.instructions import SquadsCloseInstructionBuilder
from squads_rent.squads.layouts import SquadsAccountDecoder
from squads_rent.squads.pda import SquadsAddresses
from squads_rent.squads.proposals import SquadsProposalReader

from tests.factories import PROGRAM_ID
from tests.mocks import MockChain


def pytest_configure(config):
    """Add program info to the HTML report Environment table."""
    meta = config.stash.setdefault(metadata_key, {})
    meta["Squads Program"] = SQUADS_V4_PROGRAM_ID


def make_reclaimer(chain: MockChain, decoder=None, builder=None, **overrides) -> RentReclaimer:
    """Build a RentReclaimer over the mock chain with real Squads codecs."""
    decoder = decoder or SquadsAccountDecoder(PROGRAM_ID)
    addresses = SquadsAddresses(PROGRAM_ID)
    defaults = dict(
        fetcher=chain,
        decoder=decoder,
        proposals=SquadsProposalReader(chain, decoder, addresses),
        builder=builder or SquadsCloseInstructionBuilder(PROGRAM_ID),
        addresses=addresses,
        max_targets=3,
        max_concurrent_fetches=4,
    )
    defaults.update(overrides)
    return RentReclaimer(**defaults)


@pytest.fixture
def chain():
    return MockChain()


@pytest.fixture
def decoder():
    return SquadsAccountDecoder(PROGRAM_ID)


@pytest.fixture
def addresses():
    return SquadsAddresses(PROGRAM_ID)


@pytest.fixture
def builder():
    return SquadsCloseInstructionBuilder(PROGRAM_ID)


@pytest.fixture
def reclaimer(chain):
    """RentReclaimer wired to the mock chain."""
    return make_reclaimer(chain)
