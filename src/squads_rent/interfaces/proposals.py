"""ProposalReader protocol - looks up the approval status of a transaction."""

from __future__ import annotations

from typing import Protocol

from solders.pubkey import Pubkey

from squads_rent.models.accounts import ProposalStatus


class ProposalReader(Protocol):
    """Reads the proposal that belongs to one transaction index."""

    async def fetch_status(self, multisig: Pubkey, index: int) -> ProposalStatus | None:
        """Current status, or None if the proposal is missing or unreadable."""
        ...
