"""Protocol interfaces for the reclaimer's external collaborators."""

from squads_rent.interfaces.addresses import AddressDeriver
from squads_rent.interfaces.builder import CloseInstructionBuilder
from squads_rent.interfaces.chain import AccountFetcher
from squads_rent.interfaces.decoder import AccountDecoder
from squads_rent.interfaces.proposals import ProposalReader

__all__ = [
    "AccountFetcher",
    "AccountDecoder",
    "AddressDeriver",
    "CloseInstructionBuilder",
    "ProposalReader",
]
