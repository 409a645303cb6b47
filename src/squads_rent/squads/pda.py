"""Program-derived addresses for Squads v4 transaction and proposal accounts."""

from __future__ import annotations

from solders.pubkey import Pubkey

SEED_PREFIX = b"multisig"
SEED_TRANSACTION = b"transaction"
SEED_PROPOSAL = b"proposal"


def _index_seed(index: int) -> bytes:
    return index.to_bytes(8, "little")


def transaction_pda(multisig: Pubkey, index: int, program_id: Pubkey) -> Pubkey:
    return Pubkey.find_program_address(
        [SEED_PREFIX, bytes(multisig), SEED_TRANSACTION, _index_seed(index)],
        program_id,
    )[0]


def proposal_pda(multisig: Pubkey, index: int, program_id: Pubkey) -> Pubkey:
    return Pubkey.find_program_address(
        [SEED_PREFIX, bytes(multisig), SEED_TRANSACTION, _index_seed(index), SEED_PROPOSAL],
        program_id,
    )[0]


class SquadsAddresses:
    """AddressDeriver bound to one Squads program id."""

    def __init__(self, program_id: Pubkey) -> None:
        self.program_id = program_id

    def transaction_address(self, multisig: Pubkey, index: int) -> Pubkey:
        return transaction_pda(multisig, index, self.program_id)

    def proposal_address(self, multisig: Pubkey, index: int) -> Pubkey:
        return proposal_pda(multisig, index, self.program_id)
