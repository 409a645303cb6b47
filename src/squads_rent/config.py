"""Configuration loading: TOML file + environment variables."""

from __future__ import annotations

import os
from pathlib import Path

try:
    import tomllib  # Python 3.11+
except ModuleNotFoundError:
    import tomli as tomllib  # type: ignore[no-redef]

from squads_rent.models.config import MAX_TARGETS_PER_REQUEST, ReclaimConfig

NETWORK_RPC_URLS = {
    "mainnet": "https://api.mainnet-beta.solana.com",
    "devnet": "https://api.devnet.solana.com",
    "testnet": "https://api.testnet.solana.com",
}


def load_config(
    config_path: str | Path | None = None,
    env_prefix: str = "SQUADS_RENT_",
) -> ReclaimConfig:
    """Load configuration from a TOML file and env vars.

    Priority (highest wins):
        1. Environment variables (SQUADS_RENT_RPC_URL, etc.)
        2. TOML config file
        3. Defaults from ReclaimConfig
    """
    raw: dict = {}
    if config_path is not None:
        p = Path(config_path).expanduser()
        if p.exists():
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    cfg = ReclaimConfig()
    rpc_url_set = False

    # ── Solana section ─────────────────────────────────────
    solana = raw.get("solana", {})
    if v := solana.get("network"):
        cfg.network = str(v)
    if v := solana.get("rpc_url"):
        cfg.rpc_url = str(v)
        rpc_url_set = True
    if v := solana.get("commitment"):
        cfg.commitment = str(v)

    # ── Squads section ─────────────────────────────────────
    squads = raw.get("squads", {})
    if v := squads.get("program_id"):
        cfg.program_id = str(v)

    # ── Reclaim section ────────────────────────────────────
    reclaim = raw.get("reclaim", {})
    if v := reclaim.get("max_targets"):
        cfg.max_targets = min(int(v), MAX_TARGETS_PER_REQUEST)
    if v := reclaim.get("max_concurrent_fetches"):
        cfg.max_concurrent_fetches = int(v)
    if v := reclaim.get("request_timeout"):
        cfg.request_timeout = int(v)
    if v := reclaim.get("log_level"):
        cfg.log_level = str(v)

    # ── Environment variable overrides (highest priority) ──
    if net := os.environ.get(f"{env_prefix}NETWORK"):
        cfg.network = net
    if rpc := os.environ.get(f"{env_prefix}RPC_URL"):
        cfg.rpc_url = rpc
        rpc_url_set = True
    if commitment := os.environ.get(f"{env_prefix}COMMITMENT"):
        cfg.commitment = commitment
    if program := os.environ.get(f"{env_prefix}PROGRAM_ID"):
        cfg.program_id = program
    if level := os.environ.get(f"{env_prefix}LOG_LEVEL"):
        cfg.log_level = level

    # Pick the public endpoint for the network unless a URL was given
    if not rpc_url_set:
        cfg.rpc_url = NETWORK_RPC_URLS.get(cfg.network, cfg.rpc_url)

    return cfg
