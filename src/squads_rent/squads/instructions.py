"""Close-instruction encoding for Squads v4 transaction records."""

from __future__ import annotations

import hashlib

from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey
from solders.system_program import ID as SYSTEM_PROGRAM_ID

from squads_rent.models.accounts import ConfigurationChange, FundedOperation
from squads_rent.models.batch import CloseInstruction
from squads_rent.squads.pda import proposal_pda, transaction_pda


def sighash(name: str) -> bytes:
    return hashlib.sha256(f"global:{name}".encode()).digest()[:8]


# Both close instructions take the same accounts and no arguments; only
# the instruction discriminator depends on the record kind.
CLOSE_INSTRUCTIONS = {
    "vault_transaction": "vault_transaction_accounts_close",
    "config_transaction": "config_transaction_accounts_close",
}


def accounts_close_instruction(
    name: str,
    multisig: Pubkey,
    index: int,
    rent_collector: Pubkey,
    program_id: Pubkey,
) -> Instruction:
    """Close the proposal + transaction accounts at ``index``, paying rent to the collector."""
    return Instruction(
        program_id=program_id,
        data=sighash(name),
        accounts=[
            AccountMeta(pubkey=multisig, is_signer=False, is_writable=False),
            AccountMeta(pubkey=proposal_pda(multisig, index, program_id), is_signer=False, is_writable=True),
            AccountMeta(pubkey=transaction_pda(multisig, index, program_id), is_signer=False, is_writable=True),
            AccountMeta(pubkey=rent_collector, is_signer=False, is_writable=True),
            AccountMeta(pubkey=SYSTEM_PROGRAM_ID, is_signer=False, is_writable=False),
        ],
    )


class SquadsCloseInstructionBuilder:
    """CloseInstructionBuilder for Squads v4.

    The close instructions are permissionless: the claimer only pays the
    transaction fee and does not appear in the instruction accounts.
    """

    def __init__(self, program_id: Pubkey) -> None:
        self.program_id = program_id

    def is_closable(self, record: FundedOperation | ConfigurationChange) -> bool:
        return record.kind in CLOSE_INSTRUCTIONS

    def build(
        self,
        record: FundedOperation | ConfigurationChange,
        multisig: Pubkey,
        claimer: Pubkey,
        rent_collector: Pubkey,
    ) -> CloseInstruction:
        name = CLOSE_INSTRUCTIONS.get(record.kind)
        if name is None:
            raise ValueError(f"No close instruction for record kind {record.kind!r}")

        rent = record.rent_lamports if isinstance(record, FundedOperation) else 0
        return CloseInstruction(
            multisig=multisig,
            transaction_index=record.index,
            claimer=claimer,
            rent_collector=rent_collector,
            record_kind=record.kind,
            instruction=accounts_close_instruction(
                name, multisig, record.index, rent_collector, self.program_id,
            ),
            rent_lamports=rent,
        )
