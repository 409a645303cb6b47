"""Synthetic Squads account factories for testing."""

from __future__ import annotations

import struct

from solders.pubkey import Pubkey

from squads_rent.models.accounts import AccountSnapshot, ProposalStatus
from squads_rent.models.config import SQUADS_V4_PROGRAM_ID
from squads_rent.squads.layouts import (
    CONFIG_TRANSACTION_DISCRIMINATOR,
    ConfigTransactionHeader,
    MULTISIG_DISCRIMINATOR,
    MultisigLayout,
    PROPOSAL_DISCRIMINATOR,
    VAULT_TRANSACTION_DISCRIMINATOR,
    VaultTransactionHeader,
)
from squads_rent.squads.pda import proposal_pda, transaction_pda

PROGRAM_ID = Pubkey.from_string(SQUADS_V4_PROGRAM_ID)


def key(n: int) -> Pubkey:
    """Deterministic, distinct test pubkey."""
    return Pubkey.from_bytes(bytes([n]) * 32)


CLAIMER = key(1)
RENT_COLLECTOR = key(2)
MULTISIG_A = key(10)
MULTISIG_B = key(11)
MULTISIG_C = key(12)
CREATOR = key(20)

VAULT_TX_RENT = 2_039_280
CONFIG_TX_RENT = 1_600_000
PROPOSAL_RENT = 1_113_600

_STATUS_TAGS = {
    ProposalStatus.DRAFT: 0,
    ProposalStatus.ACTIVE: 1,
    ProposalStatus.REJECTED: 2,
    ProposalStatus.APPROVED: 3,
    ProposalStatus.EXECUTING: 4,
    ProposalStatus.EXECUTED: 5,
    ProposalStatus.CANCELLED: 6,
}


def multisig_bytes(
    stale_index: int = 0,
    current_index: int = 0,
    rent_collector: Pubkey | None = RENT_COLLECTOR,
    threshold: int = 2,
    time_lock: int = 0,
    config_authority: Pubkey | None = None,
    members: list[tuple[Pubkey, int]] | None = None,
) -> bytes:
    if members is None:
        members = [(key(30), 7), (key(31), 2), (key(32), 2)]
    body = MultisigLayout.build({
        "create_key": list(bytes(key(40))),
        "config_authority": list(bytes(config_authority or Pubkey.default())),
        "threshold": threshold,
        "time_lock": time_lock,
        "transaction_index": current_index,
        "stale_transaction_index": stale_index,
        "rent_collector": list(bytes(rent_collector)) if rent_collector else None,
        "bump": 255,
        "members": [{"key": list(bytes(k)), "permissions": p} for k, p in members],
    })
    return MULTISIG_DISCRIMINATOR + body


def vault_transaction_bytes(multisig: Pubkey, index: int) -> bytes:
    body = VaultTransactionHeader.build({
        "multisig": list(bytes(multisig)),
        "creator": list(bytes(CREATOR)),
        "index": index,
        "bump": 254,
        "vault_index": 0,
        "vault_bump": 253,
    })
    # Trailing message bytes are never parsed
    return VAULT_TRANSACTION_DISCRIMINATOR + body + b"\x00" * 64


def config_transaction_bytes(multisig: Pubkey, index: int) -> bytes:
    body = ConfigTransactionHeader.build({
        "multisig": list(bytes(multisig)),
        "creator": list(bytes(CREATOR)),
        "index": index,
        "bump": 254,
    })
    return CONFIG_TRANSACTION_DISCRIMINATOR + body + b"\x00" * 4


def proposal_bytes(multisig: Pubkey, index: int, status: ProposalStatus | int) -> bytes:
    tag = status if isinstance(status, int) else _STATUS_TAGS[status]
    return (
        PROPOSAL_DISCRIMINATOR
        + bytes(multisig)
        + struct.pack("<QBq", index, tag, 1_700_000_000)
        + b"\xfe"  # bump
        + struct.pack("<I", 0) * 3  # approved / rejected / cancelled
    )


def snapshot(
    address: Pubkey,
    data: bytes,
    lamports: int = 1_000_000,
    owner: Pubkey = PROGRAM_ID,
) -> AccountSnapshot:
    return AccountSnapshot(address=address, owner=owner, lamports=lamports, data=data)


def multisig_snapshot(multisig: Pubkey = MULTISIG_A, **kwargs) -> AccountSnapshot:
    return snapshot(multisig, multisig_bytes(**kwargs), lamports=5_000_000)


def vault_transaction_snapshot(
    multisig: Pubkey, index: int, rent: int = VAULT_TX_RENT,
) -> AccountSnapshot:
    return snapshot(
        transaction_pda(multisig, index, PROGRAM_ID),
        vault_transaction_bytes(multisig, index),
        lamports=rent,
    )


def config_transaction_snapshot(multisig: Pubkey, index: int) -> AccountSnapshot:
    return snapshot(
        transaction_pda(multisig, index, PROGRAM_ID),
        config_transaction_bytes(multisig, index),
        lamports=CONFIG_TX_RENT,
    )


def proposal_snapshot(
    multisig: Pubkey, index: int, status: ProposalStatus | int,
) -> AccountSnapshot:
    return snapshot(
        proposal_pda(multisig, index, PROGRAM_ID),
        proposal_bytes(multisig, index, status),
        lamports=PROPOSAL_RENT,
    )
