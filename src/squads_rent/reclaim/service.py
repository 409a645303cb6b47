"""Rent reclaimer - the single entry point that turns a request into a batch."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable

from solders.pubkey import Pubkey

from squads_rent.errors import (
    InvalidIdentifier,
    MultisigUnreadable,
    NotEligible,
    ReclamationError,
    UpstreamTransportError,
)
from squads_rent.interfaces.addresses import AddressDeriver
from squads_rent.interfaces.builder import CloseInstructionBuilder
from squads_rent.interfaces.chain import AccountFetcher
from squads_rent.interfaces.decoder import AccountDecoder
from squads_rent.interfaces.proposals import ProposalReader
from squads_rent.models.batch import (
    MultisigOutcome,
    MultisigScan,
    ReclamationBatch,
    TransactionTarget,
)
from squads_rent.models.config import MAX_TARGETS_PER_REQUEST, ReclaimConfig, ScanMode
from squads_rent.reclaim.aggregator import BatchAggregator
from squads_rent.reclaim.eligibility import EligibilityResolver
from squads_rent.reclaim.scanner import RangeScanner
from squads_rent.reclaim.validation import authorize, parse_address, parse_targets
from squads_rent.squads.instructions import SquadsCloseInstructionBuilder
from squads_rent.squads.layouts import SquadsAccountDecoder
from squads_rent.squads.pda import SquadsAddresses
from squads_rent.squads.proposals import SquadsProposalReader
from squads_rent.squads.rpc import SolanaAccountFetcher

log = logging.getLogger(__name__)


class RentReclaimer:
    """Builds reclamation batches for one or more Squads multisigs.

    Window-scan mode runs one pipeline (resolve, then scan) per multisig,
    all concurrently, and waits for every pipeline before aggregating. A
    multisig that is not eligible, unreadable or fails mid-scan is left out
    of the batch and reported in ``batch.outcomes``.

    Single-target mode closes one declared transaction record and fails the
    whole request on any multisig-level error.
    """

    def __init__(
        self,
        fetcher: AccountFetcher,
        decoder: AccountDecoder,
        proposals: ProposalReader,
        builder: CloseInstructionBuilder,
        addresses: AddressDeriver,
        max_targets: int = MAX_TARGETS_PER_REQUEST,
        max_concurrent_fetches: int = 8,
    ) -> None:
        self.fetcher = fetcher
        self._max_targets = min(max_targets, MAX_TARGETS_PER_REQUEST)

        self.resolver = EligibilityResolver(fetcher, decoder)
        self.scanner = RangeScanner(
            fetcher=fetcher,
            decoder=decoder,
            proposals=proposals,
            builder=builder,
            addresses=addresses,
            max_concurrent=max_concurrent_fetches,
        )
        self.aggregator = BatchAggregator(fetcher)

    @classmethod
    def from_config(cls, cfg: ReclaimConfig) -> RentReclaimer:
        """Wire the Solana RPC client and Squads codecs from configuration."""
        program_id = Pubkey.from_string(cfg.program_id)
        fetcher = SolanaAccountFetcher(cfg.rpc_url, cfg.commitment, cfg.request_timeout)
        decoder = SquadsAccountDecoder(program_id)
        addresses = SquadsAddresses(program_id)
        return cls(
            fetcher=fetcher,
            decoder=decoder,
            proposals=SquadsProposalReader(fetcher, decoder, addresses),
            builder=SquadsCloseInstructionBuilder(program_id),
            addresses=addresses,
            max_targets=cfg.max_targets,
            max_concurrent_fetches=cfg.max_concurrent_fetches,
        )

    async def close(self) -> None:
        await self.fetcher.close()

    async def build_reclamation_request(
        self,
        claimer: str | Pubkey,
        targets: str | Iterable[str | Pubkey] | TransactionTarget,
        mode: ScanMode | str = ScanMode.WINDOW_SCAN,
    ) -> ReclamationBatch:
        """Build a ready-to-sign batch, or raise a ReclamationError."""
        mode = ScanMode(mode)
        if mode is ScanMode.SINGLE_TARGET:
            if not isinstance(targets, TransactionTarget):
                raise InvalidIdentifier(targets, "target", "single-target mode takes a TransactionTarget")
            return await self.reclaim_single(claimer, targets)

        if isinstance(targets, TransactionTarget):
            raise InvalidIdentifier(targets, "multisig list", "window-scan mode takes multisig addresses")
        return await self.reclaim_window(claimer, targets)

    # ── Window scan ───────────────────────────────────────

    async def reclaim_window(
        self,
        claimer: str | Pubkey,
        multisigs: str | Iterable[str | Pubkey],
    ) -> ReclamationBatch:
        claimer_key = parse_address(claimer, "account")
        addresses = parse_targets(multisigs, self._max_targets)

        log.info("Reclaiming rent for %d multisig(s) on behalf of %s", len(addresses), str(claimer_key)[:16])
        results = await asyncio.gather(*(self._run_pipeline(m, claimer_key) for m in addresses))

        scans = [scan for scan, _ in results if scan is not None]
        outcomes = [outcome for _, outcome in results]

        transport_failures = [o for o in outcomes if o.status == "transport_error"]
        if transport_failures and len(transport_failures) == len(outcomes):
            # Every pipeline died on the wire: report that, not NothingToClaim.
            raise UpstreamTransportError(transport_failures[0].error)

        return await self.aggregator.aggregate(
            scans, claimer_key, multisig_count=len(addresses), outcomes=outcomes,
        )

    async def _run_pipeline(
        self, multisig: Pubkey, claimer: Pubkey,
    ) -> tuple[MultisigScan | None, MultisigOutcome]:
        """Resolve + scan one multisig. Never raises ReclamationError."""
        name = str(multisig)
        try:
            eligible = await self.resolver.resolve(multisig)
        except NotEligible as exc:
            return None, MultisigOutcome(multisig=name, status="not_eligible", error=str(exc))
        except MultisigUnreadable as exc:
            log.warning("Excluding multisig %s: %s", name[:16], exc.reason)
            return None, MultisigOutcome(multisig=name, status="unreadable", error=str(exc))
        except UpstreamTransportError as exc:
            log.warning("Excluding multisig %s: %s", name[:16], exc)
            return None, MultisigOutcome(multisig=name, status="transport_error", error=str(exc))

        state = eligible.state
        try:
            scan = await self.scanner.scan(
                multisig, eligible.rent_collector, claimer, state.stale_index, state.current_index,
            )
        except ReclamationError as exc:
            log.warning("Scan of multisig %s failed: %s", name[:16], exc)
            return None, MultisigOutcome(multisig=name, status="scan_failed", error=str(exc))

        return scan, MultisigOutcome(
            multisig=name,
            status="included" if scan.instructions else "empty",
            instructions=len(scan.instructions),
            rent_lamports=scan.rent_lamports,
        )

    # ── Single target ─────────────────────────────────────

    async def reclaim_single(
        self,
        claimer: str | Pubkey,
        target: TransactionTarget,
    ) -> ReclamationBatch:
        claimer_key = parse_address(claimer, "account")
        declared = parse_address(target.account, "target account")
        multisig = parse_address(target.multisig, "multisig")
        index = target.transaction_index
        if isinstance(index, bool) or not isinstance(index, int) or index < 0:
            raise InvalidIdentifier(index, "transaction index")

        authorize(claimer_key, declared)

        eligible = await self.resolver.resolve(multisig)
        state = eligible.state

        scan = MultisigScan(multisig=multisig, indices_checked=1)
        instruction = None
        if state.stale_index <= index <= state.current_index:
            instruction = await self.scanner.scan_index(multisig, index, eligible.rent_collector, claimer_key)
        else:
            log.info(
                "Index %d outside window %d..%d of %s",
                index, state.stale_index, state.current_index, str(multisig)[:16],
            )

        if instruction is None:
            scan.indices_skipped = 1
        else:
            scan.instructions.append(instruction)
            scan.rent_lamports = instruction.rent_lamports

        outcome = MultisigOutcome(
            multisig=str(multisig),
            status="included" if scan.instructions else "empty",
            instructions=len(scan.instructions),
            rent_lamports=scan.rent_lamports,
        )
        return await self.aggregator.aggregate(
            [scan], claimer_key, multisig_count=1, outcomes=[outcome],
        )
