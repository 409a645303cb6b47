"""AccountDecoder protocol - turns raw Squads accounts into typed records."""

from __future__ import annotations

from typing import Protocol

from squads_rent.models.accounts import (
    AccountSnapshot,
    ConfigurationChange,
    FundedOperation,
    MultisigState,
    ProposalInfo,
)


class AccountDecoder(Protocol):
    """Decodes account snapshots. Every method raises DecodeError on mismatch."""

    def decode_multisig(self, snapshot: AccountSnapshot) -> MultisigState:
        ...

    def decode_funded_operation(self, snapshot: AccountSnapshot) -> FundedOperation:
        ...

    def decode_configuration_change(self, snapshot: AccountSnapshot) -> ConfigurationChange:
        ...

    def decode_proposal(self, snapshot: AccountSnapshot) -> ProposalInfo:
        ...
