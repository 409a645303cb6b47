"""On-chain account snapshots decoded from the Squads v4 program."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from solders.pubkey import Pubkey


@dataclass(frozen=True)
class AccountSnapshot:
    """Raw account as returned by the RPC node."""

    address: Pubkey
    owner: Pubkey
    lamports: int
    data: bytes


@dataclass(frozen=True)
class MultisigMember:
    """A multisig member and its permission mask."""

    key: Pubkey
    permissions: int  # bitmask: 1=initiate, 2=vote, 4=execute

    @property
    def permission_names(self) -> list[str]:
        names = []
        if self.permissions & 1:
            names.append("Proposer")
        if self.permissions & 2:
            names.append("Voter")
        if self.permissions & 4:
            names.append("Executor")
        return names or ["None"]


@dataclass(frozen=True)
class MultisigState:
    """Decoded Squads v4 multisig account.

    Transaction records with an index in ``[stale_index, current_index]`` are
    the only ones still worth looking at. ``rent_collector`` is ``None`` when
    the multisig never opted into rent reclamation.
    """

    address: Pubkey
    create_key: Pubkey
    config_authority: Pubkey | None
    threshold: int
    time_lock: int  # seconds
    current_index: int
    stale_index: int
    rent_collector: Pubkey | None
    bump: int
    members: tuple[MultisigMember, ...] = ()

    @property
    def window(self) -> range:
        """Inclusive index window, empty when current_index < stale_index."""
        return range(self.stale_index, self.current_index + 1)


# ── Transaction records ───────────────────────────────────


@dataclass(frozen=True)
class FundedOperation:
    """A vault transaction record. Closing it refunds ``rent_lamports``."""

    address: Pubkey
    multisig: Pubkey
    index: int
    rent_lamports: int
    kind: str = field(default="vault_transaction", init=False)


@dataclass(frozen=True)
class ConfigurationChange:
    """A config transaction record. Closable, but not counted as rent."""

    address: Pubkey
    multisig: Pubkey
    index: int
    kind: str = field(default="config_transaction", init=False)


@dataclass(frozen=True)
class Undecodable:
    """No known layout matched the account at this index (or it is gone)."""

    index: int
    reason: str = "unknown_layout"
    kind: str = field(default="undecodable", init=False)


TransactionRecord = Union[FundedOperation, ConfigurationChange, Undecodable]


# ── Proposals ─────────────────────────────────────────────


class ProposalStatus(str, Enum):
    """Squads v4 proposal status, in on-chain variant order.

    DRAFT and ACTIVE are the pending states. Tags the client does not know
    about decode as UNKNOWN and are never reclaimable.
    """

    DRAFT = "draft"
    ACTIVE = "active"
    REJECTED = "rejected"
    APPROVED = "approved"
    EXECUTING = "executing"
    EXECUTED = "executed"
    CANCELLED = "cancelled"
    UNKNOWN = "unknown"

    @classmethod
    def from_tag(cls, tag: int) -> ProposalStatus:
        if 0 <= tag < len(_STATUS_BY_TAG):
            return _STATUS_BY_TAG[tag]
        return cls.UNKNOWN

    @property
    def is_reclaimable(self) -> bool:
        return self in RECLAIMABLE_STATUSES


_STATUS_BY_TAG = (
    ProposalStatus.DRAFT,
    ProposalStatus.ACTIVE,
    ProposalStatus.REJECTED,
    ProposalStatus.APPROVED,
    ProposalStatus.EXECUTING,
    ProposalStatus.EXECUTED,
    ProposalStatus.CANCELLED,
)

RECLAIMABLE_STATUSES = frozenset(
    {ProposalStatus.EXECUTED, ProposalStatus.CANCELLED, ProposalStatus.REJECTED}
)


@dataclass(frozen=True)
class ProposalInfo:
    """Header fields of a proposal account."""

    address: Pubkey
    multisig: Pubkey
    transaction_index: int
    status: ProposalStatus
