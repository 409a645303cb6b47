"""Solana / Squads v4 integration components."""

from squads_rent.squads.instructions import SquadsCloseInstructionBuilder
from squads_rent.squads.layouts import SquadsAccountDecoder
from squads_rent.squads.pda import SquadsAddresses
from squads_rent.squads.proposals import SquadsProposalReader
from squads_rent.squads.rpc import SolanaAccountFetcher

__all__ = [
    "SolanaAccountFetcher",
    "SquadsAccountDecoder",
    "SquadsAddresses",
    "SquadsCloseInstructionBuilder",
    "SquadsProposalReader",
]
