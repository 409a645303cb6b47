"""AddressDeriver protocol - deterministic account addresses, no network access."""

from __future__ import annotations

from typing import Protocol

from solders.pubkey import Pubkey


class AddressDeriver(Protocol):
    """Derives program addresses from (multisig, transaction index)."""

    def transaction_address(self, multisig: Pubkey, index: int) -> Pubkey:
        ...

    def proposal_address(self, multisig: Pubkey, index: int) -> Pubkey:
        ...
