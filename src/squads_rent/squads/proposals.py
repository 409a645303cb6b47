"""Proposal reader - derive, fetch and decode a transaction's proposal."""

from __future__ import annotations

import logging

from solders.pubkey import Pubkey

from squads_rent.errors import DecodeError
from squads_rent.interfaces.addresses import AddressDeriver
from squads_rent.interfaces.chain import AccountFetcher
from squads_rent.interfaces.decoder import AccountDecoder
from squads_rent.models.accounts import ProposalStatus

log = logging.getLogger(__name__)


class SquadsProposalReader:
    """ProposalReader over the Squads proposal PDA.

    A proposal that belongs to another multisig or index is treated the same
    as a missing one.
    """

    def __init__(
        self,
        fetcher: AccountFetcher,
        decoder: AccountDecoder,
        addresses: AddressDeriver,
    ) -> None:
        self._fetcher = fetcher
        self._decoder = decoder
        self._addresses = addresses

    async def fetch_status(self, multisig: Pubkey, index: int) -> ProposalStatus | None:
        address = self._addresses.proposal_address(multisig, index)
        snapshot = await self._fetcher.fetch_account(address)
        if snapshot is None:
            log.debug("No proposal at index %d of %s", index, str(multisig)[:16])
            return None

        try:
            proposal = self._decoder.decode_proposal(snapshot)
        except DecodeError as exc:
            log.debug("Proposal %d of %s undecodable: %s", index, str(multisig)[:16], exc)
            return None

        if proposal.multisig != multisig or proposal.transaction_index != index:
            log.debug(
                "Proposal at %s belongs to %s/%d, expected %s/%d",
                str(address)[:16], str(proposal.multisig)[:16], proposal.transaction_index,
                str(multisig)[:16], index,
            )
            return None
        return proposal.status
