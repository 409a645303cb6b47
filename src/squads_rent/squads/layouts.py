"""Borsh layouts and decoders for Squads v4 accounts.

Every Anchor account starts with an 8-byte discriminator,
``sha256("account:<Name>")[:8]``. Only the fields the reclaimer needs are
described for transaction and proposal accounts; trailing bytes are ignored.

Multisig layout (after the discriminator):
- create_key: Pubkey
- config_authority: Pubkey (default pubkey = autonomous multisig)
- threshold: u16
- time_lock: u32
- transaction_index: u64
- stale_transaction_index: u64
- rent_collector: Option<Pubkey>
- bump: u8
- members: Vec<Member{key: Pubkey, permissions: u8}>
"""

from __future__ import annotations

import hashlib

from borsh_construct import CStruct, Option, U8, U16, U32, U64, Vec
from construct import ConstructError
from solders.pubkey import Pubkey

from squads_rent.errors import DecodeError
from squads_rent.models.accounts import (
    AccountSnapshot,
    ConfigurationChange,
    FundedOperation,
    MultisigMember,
    MultisigState,
    ProposalInfo,
    ProposalStatus,
)

DISCRIMINATOR_SIZE = 8

PUBKEY = U8[32]


def account_discriminator(name: str) -> bytes:
    return hashlib.sha256(f"account:{name}".encode()).digest()[:DISCRIMINATOR_SIZE]


MULTISIG_DISCRIMINATOR = account_discriminator("Multisig")
VAULT_TRANSACTION_DISCRIMINATOR = account_discriminator("VaultTransaction")
CONFIG_TRANSACTION_DISCRIMINATOR = account_discriminator("ConfigTransaction")
PROPOSAL_DISCRIMINATOR = account_discriminator("Proposal")

MemberLayout = CStruct(
    "key" / PUBKEY,
    "permissions" / U8,
)

MultisigLayout = CStruct(
    "create_key" / PUBKEY,
    "config_authority" / PUBKEY,
    "threshold" / U16,
    "time_lock" / U32,
    "transaction_index" / U64,
    "stale_transaction_index" / U64,
    "rent_collector" / Option(PUBKEY),
    "bump" / U8,
    "members" / Vec(MemberLayout),
)

VaultTransactionHeader = CStruct(
    "multisig" / PUBKEY,
    "creator" / PUBKEY,
    "index" / U64,
    "bump" / U8,
    "vault_index" / U8,
    "vault_bump" / U8,
)

ConfigTransactionHeader = CStruct(
    "multisig" / PUBKEY,
    "creator" / PUBKEY,
    "index" / U64,
    "bump" / U8,
)

# The status is a Borsh enum; only its variant tag is read so that
# variants added later decode as UNKNOWN instead of failing.
ProposalHeader = CStruct(
    "multisig" / PUBKEY,
    "transaction_index" / U64,
    "status_tag" / U8,
)


def _pubkey(raw) -> Pubkey:
    return Pubkey.from_bytes(bytes(raw))


class SquadsAccountDecoder:
    """AccountDecoder for accounts owned by one Squads program."""

    def __init__(self, program_id: Pubkey) -> None:
        self.program_id = program_id

    def _body(self, snapshot: AccountSnapshot, discriminator: bytes, name: str) -> bytes:
        if snapshot.owner != self.program_id:
            raise DecodeError(f"{name}: account {snapshot.address} owned by {snapshot.owner}")
        if snapshot.data[:DISCRIMINATOR_SIZE] != discriminator:
            raise DecodeError(f"{name}: discriminator mismatch for {snapshot.address}")
        return snapshot.data[DISCRIMINATOR_SIZE:]

    def decode_multisig(self, snapshot: AccountSnapshot) -> MultisigState:
        body = self._body(snapshot, MULTISIG_DISCRIMINATOR, "Multisig")
        try:
            raw = MultisigLayout.parse(body)
        except ConstructError as exc:
            raise DecodeError(f"Multisig: {exc}") from exc

        config_authority = _pubkey(raw.config_authority)
        if config_authority == Pubkey.default():
            config_authority = None
        rent_collector = _pubkey(raw.rent_collector) if raw.rent_collector is not None else None

        return MultisigState(
            address=snapshot.address,
            create_key=_pubkey(raw.create_key),
            config_authority=config_authority,
            threshold=raw.threshold,
            time_lock=raw.time_lock,
            current_index=raw.transaction_index,
            stale_index=raw.stale_transaction_index,
            rent_collector=rent_collector,
            bump=raw.bump,
            members=tuple(
                MultisigMember(key=_pubkey(m.key), permissions=m.permissions)
                for m in raw.members
            ),
        )

    def decode_funded_operation(self, snapshot: AccountSnapshot) -> FundedOperation:
        body = self._body(snapshot, VAULT_TRANSACTION_DISCRIMINATOR, "VaultTransaction")
        try:
            raw = VaultTransactionHeader.parse(body)
        except ConstructError as exc:
            raise DecodeError(f"VaultTransaction: {exc}") from exc
        return FundedOperation(
            address=snapshot.address,
            multisig=_pubkey(raw.multisig),
            index=raw.index,
            rent_lamports=snapshot.lamports,
        )

    def decode_configuration_change(self, snapshot: AccountSnapshot) -> ConfigurationChange:
        body = self._body(snapshot, CONFIG_TRANSACTION_DISCRIMINATOR, "ConfigTransaction")
        try:
            raw = ConfigTransactionHeader.parse(body)
        except ConstructError as exc:
            raise DecodeError(f"ConfigTransaction: {exc}") from exc
        return ConfigurationChange(
            address=snapshot.address,
            multisig=_pubkey(raw.multisig),
            index=raw.index,
        )

    def decode_proposal(self, snapshot: AccountSnapshot) -> ProposalInfo:
        body = self._body(snapshot, PROPOSAL_DISCRIMINATOR, "Proposal")
        try:
            raw = ProposalHeader.parse(body)
        except ConstructError as exc:
            raise DecodeError(f"Proposal: {exc}") from exc
        return ProposalInfo(
            address=snapshot.address,
            multisig=_pubkey(raw.multisig),
            transaction_index=raw.transaction_index,
            status=ProposalStatus.from_tag(raw.status_tag),
        )
