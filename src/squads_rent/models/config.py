"""Configuration models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

SQUADS_V4_PROGRAM_ID = "SQDS4ep65T869zMMBKyuUq6aD6EgTu8psMjkvj52pCf"

# Hard ceiling on multisigs per request; config can only lower it.
MAX_TARGETS_PER_REQUEST = 3


class ScanMode(str, Enum):
    """How a reclamation request picks its transaction records."""

    WINDOW_SCAN = "window"  # walk [stale_index, current_index] of each multisig
    SINGLE_TARGET = "single"  # one declared transaction record


@dataclass
class ReclaimConfig:
    """Complete client configuration."""

    # Solana
    network: str = "mainnet"
    rpc_url: str = "https://api.mainnet-beta.solana.com"
    commitment: str = "confirmed"

    # Squads
    program_id: str = SQUADS_V4_PROGRAM_ID

    # Reclaim
    max_targets: int = MAX_TARGETS_PER_REQUEST
    max_concurrent_fetches: int = 8
    request_timeout: int = 30  # seconds per RPC call
    log_level: str = "info"
