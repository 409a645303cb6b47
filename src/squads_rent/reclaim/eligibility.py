"""Eligibility resolver - is rent reclamation enabled for a multisig?"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from solders.pubkey import Pubkey

from squads_rent.errors import DecodeError, MultisigUnreadable, NotEligible
from squads_rent.interfaces.chain import AccountFetcher
from squads_rent.interfaces.decoder import AccountDecoder
from squads_rent.models.accounts import MultisigState
from squads_rent.reclaim.validation import parse_address

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class EligibleMultisig:
    """A multisig with a configured rent collector."""

    state: MultisigState
    rent_collector: Pubkey


class EligibilityResolver:
    """Fetches multisig state and extracts its rent collector.

    Raises:
        InvalidIdentifier: malformed address (before any fetch).
        MultisigUnreadable: account missing or not a multisig.
        NotEligible: no rent collector configured.
        UpstreamTransportError: propagated from the fetcher.
    """

    def __init__(self, fetcher: AccountFetcher, decoder: AccountDecoder) -> None:
        self._fetcher = fetcher
        self._decoder = decoder

    async def resolve(self, multisig: Pubkey | str) -> EligibleMultisig:
        address = parse_address(multisig, "multisig")

        snapshot = await self._fetcher.fetch_account(address)
        if snapshot is None:
            raise MultisigUnreadable(address, "account not found")

        try:
            state = self._decoder.decode_multisig(snapshot)
        except DecodeError as exc:
            raise MultisigUnreadable(address, str(exc)) from exc

        if state.rent_collector is None:
            log.info("Multisig %s has no rent collector, skipping", str(address)[:16])
            raise NotEligible(address)

        log.debug(
            "Multisig %s eligible (window %d..%d, collector %s)",
            str(address)[:16], state.stale_index, state.current_index,
            str(state.rent_collector)[:16],
        )
        return EligibleMultisig(state=state, rent_collector=state.rent_collector)
