"""Batch aggregator - folds per-multisig scans into one reclamation batch."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from solders.pubkey import Pubkey

from squads_rent.errors import NothingToClaim
from squads_rent.interfaces.chain import AccountFetcher
from squads_rent.models.batch import MultisigOutcome, MultisigScan, ReclamationBatch

log = logging.getLogger(__name__)


class BatchAggregator:
    """Merges scans and stamps fee payer and blockhash.

    The emptiness check runs before the blockhash fetch, and the blockhash is
    fetched once per batch.
    """

    def __init__(self, fetcher: AccountFetcher) -> None:
        self._fetcher = fetcher

    async def aggregate(
        self,
        scans: Sequence[MultisigScan],
        claimer: Pubkey,
        multisig_count: int | None = None,
        outcomes: Sequence[MultisigOutcome] = (),
    ) -> ReclamationBatch:
        instructions = [ci for scan in scans for ci in scan.instructions]
        if not instructions:
            log.info("Nothing to claim across %d multisigs", multisig_count or len(scans))
            raise NothingToClaim(list(outcomes))

        total = sum(scan.rent_lamports for scan in scans)
        freshness = await self._fetcher.fetch_freshness_token()

        batch = ReclamationBatch(
            instructions=instructions,
            total_rent_lamports=total,
            fee_payer=claimer,
            freshness=freshness,
            multisig_count=multisig_count or len(scans),
            outcomes=list(outcomes),
        )
        log.info(
            "Built reclamation batch: %d instructions, %d lamports, fee payer %s",
            len(instructions), total, str(claimer)[:16],
        )
        return batch
