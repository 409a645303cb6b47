"""CloseInstructionBuilder protocol - encodes close operations for records."""

from __future__ import annotations

from typing import Protocol

from solders.pubkey import Pubkey

from squads_rent.models.accounts import ConfigurationChange, FundedOperation
from squads_rent.models.batch import CloseInstruction


class CloseInstructionBuilder(Protocol):
    """Builds the instruction that closes a record and pays out its rent."""

    def is_closable(self, record: FundedOperation | ConfigurationChange) -> bool:
        """Whether this builder has a close instruction for the record's kind."""
        ...

    def build(
        self,
        record: FundedOperation | ConfigurationChange,
        multisig: Pubkey,
        claimer: Pubkey,
        rent_collector: Pubkey,
    ) -> CloseInstruction:
        ...
