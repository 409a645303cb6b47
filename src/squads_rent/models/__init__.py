"""Data models for squads_rent."""

from squads_rent.models.accounts import (
    AccountSnapshot,
    ConfigurationChange,
    FundedOperation,
    MultisigMember,
    MultisigState,
    ProposalInfo,
    ProposalStatus,
    RECLAIMABLE_STATUSES,
    TransactionRecord,
    Undecodable,
)
from squads_rent.models.batch import (
    CloseInstruction,
    FreshnessToken,
    LAMPORTS_PER_SOL,
    MultisigOutcome,
    MultisigScan,
    ReclamationBatch,
    TransactionTarget,
)
from squads_rent.models.config import ReclaimConfig, ScanMode, SQUADS_V4_PROGRAM_ID

__all__ = [
    "AccountSnapshot", "MultisigMember", "MultisigState",
    "FundedOperation", "ConfigurationChange", "Undecodable", "TransactionRecord",
    "ProposalInfo", "ProposalStatus", "RECLAIMABLE_STATUSES",
    "CloseInstruction", "FreshnessToken", "MultisigOutcome", "MultisigScan",
    "ReclamationBatch", "TransactionTarget", "LAMPORTS_PER_SOL",
    "ReclaimConfig", "ScanMode", "SQUADS_V4_PROGRAM_ID",
]
