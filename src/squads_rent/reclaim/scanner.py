"""Range scanner - walks a multisig's transaction window and picks closable records."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from solders.pubkey import Pubkey

from squads_rent.errors import DecodeError, UpstreamTransportError
from squads_rent.interfaces.addresses import AddressDeriver
from squads_rent.interfaces.builder import CloseInstructionBuilder
from squads_rent.interfaces.chain import AccountFetcher
from squads_rent.interfaces.decoder import AccountDecoder
from squads_rent.interfaces.proposals import ProposalReader
from squads_rent.models.accounts import (
    AccountSnapshot,
    ConfigurationChange,
    FundedOperation,
    TransactionRecord,
    Undecodable,
)
from squads_rent.models.batch import CloseInstruction, MultisigScan

log = logging.getLogger(__name__)


class RangeScanner:
    """Turns transaction indices into close instructions.

    For each index:
    1. Derive the transaction record address
    2. Decode it, vault transaction first, config transaction second
    3. Look up the proposal status
    4. Emit a close instruction if the status is Executed, Cancelled or Rejected

    Indices are fetched concurrently (bounded by ``max_concurrent``); the
    result is re-sorted by index, so completion order never leaks out.
    Any failure local to one index skips that index.
    """

    def __init__(
        self,
        fetcher: AccountFetcher,
        decoder: AccountDecoder,
        proposals: ProposalReader,
        builder: CloseInstructionBuilder,
        addresses: AddressDeriver,
        max_concurrent: int = 8,
    ) -> None:
        self._fetcher = fetcher
        self._proposals = proposals
        self._builder = builder
        self._addresses = addresses
        self._max_concurrent = max(1, max_concurrent)
        # Priority order matters: a lenient decoder could accept the wrong kind.
        self._decode_attempts: tuple[Callable[[AccountSnapshot], FundedOperation | ConfigurationChange], ...] = (
            decoder.decode_funded_operation,
            decoder.decode_configuration_change,
        )

    async def scan(
        self,
        multisig: Pubkey,
        rent_collector: Pubkey,
        claimer: Pubkey,
        start: int,
        end: int,
    ) -> MultisigScan:
        """Scan ``[start, end]`` inclusive. An inverted window yields nothing."""
        result = MultisigScan(multisig=multisig)
        if end < start:
            log.debug("Empty window %d..%d for %s", start, end, str(multisig)[:16])
            return result

        semaphore = asyncio.Semaphore(self._max_concurrent)

        async def _scan_one(index: int) -> tuple[int, CloseInstruction | None]:
            async with semaphore:
                return index, await self.scan_index(multisig, index, rent_collector, claimer)

        scanned = await asyncio.gather(*(_scan_one(i) for i in range(start, end + 1)))
        scanned.sort(key=lambda item: item[0])

        for _, instruction in scanned:
            result.indices_checked += 1
            if instruction is None:
                result.indices_skipped += 1
                continue
            result.instructions.append(instruction)
            result.rent_lamports += instruction.rent_lamports

        log.info(
            "Scanned %s indices %d..%d: %d closable, %d skipped, %d lamports",
            str(multisig)[:16], start, end,
            len(result.instructions), result.indices_skipped, result.rent_lamports,
        )
        return result

    async def scan_index(
        self,
        multisig: Pubkey,
        index: int,
        rent_collector: Pubkey,
        claimer: Pubkey,
    ) -> CloseInstruction | None:
        """Decode, check the proposal and build the close for a single index."""
        record = await self.classify(multisig, index)
        if isinstance(record, Undecodable):
            log.debug("Index %d of %s skipped: %s", index, str(multisig)[:16], record.reason)
            return None

        if not self._builder.is_closable(record):
            log.debug("Index %d of %s: %s records are not closable", index, str(multisig)[:16], record.kind)
            return None

        try:
            status = await self._proposals.fetch_status(multisig, index)
        except UpstreamTransportError as exc:
            log.debug("Index %d of %s: proposal fetch failed: %s", index, str(multisig)[:16], exc)
            return None

        if status is None:
            log.debug("Index %d of %s: no proposal", index, str(multisig)[:16])
            return None
        if not status.is_reclaimable:
            log.debug("Index %d of %s: proposal %s", index, str(multisig)[:16], status.value)
            return None

        return self._builder.build(record, multisig, claimer, rent_collector)

    async def classify(self, multisig: Pubkey, index: int) -> TransactionRecord:
        """Fetch and decode the record at ``index``; never raises."""
        address = self._addresses.transaction_address(multisig, index)
        try:
            snapshot = await self._fetcher.fetch_account(address)
        except UpstreamTransportError as exc:
            return Undecodable(index=index, reason=f"fetch_failed: {exc}")
        if snapshot is None:
            return Undecodable(index=index, reason="not_found")

        for attempt in self._decode_attempts:
            try:
                record = attempt(snapshot)
            except DecodeError:
                continue
            if record.multisig != multisig or record.index != index:
                # Right layout, wrong owner multisig or index: not ours to close.
                return Undecodable(index=index, reason="mismatched_record")
            return record

        return Undecodable(index=index, reason="unknown_layout")
