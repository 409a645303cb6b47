"""Reclamation results: close instructions, per-multisig scans, the final batch."""

from __future__ import annotations

import base64
from dataclasses import dataclass, field

from solders.hash import Hash
from solders.instruction import Instruction
from solders.message import Message
from solders.pubkey import Pubkey
from solders.transaction import Transaction

LAMPORTS_PER_SOL = 1_000_000_000


@dataclass(frozen=True)
class CloseInstruction:
    """One close operation for a transaction record and its proposal.

    ``rent_lamports`` is the rent the record refunds to the rent collector;
    config transaction records contribute zero.
    """

    multisig: Pubkey
    transaction_index: int
    claimer: Pubkey
    rent_collector: Pubkey
    record_kind: str
    instruction: Instruction
    rent_lamports: int = 0


@dataclass(frozen=True)
class TransactionTarget:
    """Single-target request: one transaction record, claimed for ``account``."""

    account: str
    multisig: str
    transaction_index: int


@dataclass(frozen=True)
class FreshnessToken:
    """Recent blockhash plus the last block height it stays valid for."""

    blockhash: Hash
    last_valid_block_height: int


@dataclass
class MultisigScan:
    """Close instructions collected from one multisig, ascending by index."""

    multisig: Pubkey
    instructions: list[CloseInstruction] = field(default_factory=list)
    rent_lamports: int = 0
    indices_checked: int = 0
    indices_skipped: int = 0


@dataclass
class MultisigOutcome:
    """What happened to one requested multisig.

    status: "included", "empty", "not_eligible", "unreadable",
    "transport_error" or "scan_failed".
    """

    multisig: str
    status: str
    instructions: int = 0
    rent_lamports: int = 0
    error: str | None = None


@dataclass
class ReclamationBatch:
    """A ready-to-sign reclamation request. Never empty."""

    instructions: list[CloseInstruction]
    total_rent_lamports: int
    fee_payer: Pubkey
    freshness: FreshnessToken
    multisig_count: int = 1
    outcomes: list[MultisigOutcome] = field(default_factory=list)

    @property
    def total_rent_sol(self) -> float:
        return self.total_rent_lamports / LAMPORTS_PER_SOL

    def summary(self) -> str:
        return (
            f"Rent claim transaction created for {len(self.instructions)} transactions "
            f"across {self.multisig_count} multisigs. "
            f"Total rent collected: {self.total_rent_sol:.4f} SOL."
        )

    def to_transaction(self) -> Transaction:
        """Unsigned legacy transaction with the fee payer and blockhash stamped."""
        message = Message.new_with_blockhash(
            [ci.instruction for ci in self.instructions],
            self.fee_payer,
            self.freshness.blockhash,
        )
        return Transaction.new_unsigned(message)

    def serialize(self) -> str:
        """Base64 wire form, ready for a wallet to sign."""
        return base64.b64encode(bytes(self.to_transaction())).decode("ascii")

    def to_dict(self) -> dict:
        return {
            "transaction": self.serialize(),
            "message": self.summary(),
            "fee_payer": str(self.fee_payer),
            "recent_blockhash": str(self.freshness.blockhash),
            "last_valid_block_height": self.freshness.last_valid_block_height,
            "total_rent_lamports": self.total_rent_lamports,
            "instructions": [
                {
                    "multisig": str(ci.multisig),
                    "transaction_index": ci.transaction_index,
                    "kind": ci.record_kind,
                    "rent_lamports": ci.rent_lamports,
                }
                for ci in self.instructions
            ],
            "outcomes": [
                {
                    "multisig": o.multisig,
                    "status": o.status,
                    "instructions": o.instructions,
                    "rent_lamports": o.rent_lamports,
                    "error": o.error,
                }
                for o in self.outcomes
            ],
        }
