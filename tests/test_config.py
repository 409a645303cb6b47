"""Tests for configuration loading."""

from __future__ import annotations

import pytest

from squads_rent.config import NETWORK_RPC_URLS, load_config
from squads_rent.models.config import SQUADS_V4_PROGRAM_ID


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("NETWORK", "RPC_URL", "COMMITMENT", "PROGRAM_ID", "LOG_LEVEL"):
        monkeypatch.delenv(f"SQUADS_RENT_{name}", raising=False)


def test_defaults():
    cfg = load_config()
    assert cfg.network == "mainnet"
    assert cfg.rpc_url == NETWORK_RPC_URLS["mainnet"]
    assert cfg.program_id == SQUADS_V4_PROGRAM_ID
    assert cfg.max_targets == 3


def test_missing_file_uses_defaults(tmp_path):
    cfg = load_config(tmp_path / "nope.toml")
    assert cfg.network == "mainnet"


def test_toml_sections(tmp_path):
    path = tmp_path / "squads-rent.toml"
    path.write_text(
        '[solana]\n'
        'network = "devnet"\n'
        'commitment = "finalized"\n'
        '\n'
        '[reclaim]\n'
        'max_concurrent_fetches = 2\n'
        'request_timeout = 5\n'
        'log_level = "debug"\n'
    )

    cfg = load_config(path)

    assert cfg.network == "devnet"
    assert cfg.rpc_url == NETWORK_RPC_URLS["devnet"]
    assert cfg.commitment == "finalized"
    assert cfg.max_concurrent_fetches == 2
    assert cfg.request_timeout == 5
    assert cfg.log_level == "debug"


def test_explicit_rpc_url_beats_network_default(tmp_path):
    path = tmp_path / "squads-rent.toml"
    path.write_text('[solana]\nnetwork = "devnet"\nrpc_url = "http://localhost:8899"\n')

    cfg = load_config(path)
    assert cfg.rpc_url == "http://localhost:8899"


def test_env_overrides_toml(tmp_path, monkeypatch):
    path = tmp_path / "squads-rent.toml"
    path.write_text('[solana]\nnetwork = "devnet"\n[squads]\nprogram_id = "from-toml"\n')
    monkeypatch.setenv("SQUADS_RENT_NETWORK", "testnet")
    monkeypatch.setenv("SQUADS_RENT_PROGRAM_ID", "from-env")

    cfg = load_config(path)

    assert cfg.network == "testnet"
    assert cfg.rpc_url == NETWORK_RPC_URLS["testnet"]
    assert cfg.program_id == "from-env"


def test_env_rpc_url(monkeypatch):
    monkeypatch.setenv("SQUADS_RENT_RPC_URL", "https://rpc.example.org")
    assert load_config().rpc_url == "https://rpc.example.org"


def test_max_targets_capped_at_three(tmp_path):
    """Config can lower the per-request multisig limit but not raise it."""
    path = tmp_path / "squads-rent.toml"
    path.write_text("[reclaim]\nmax_targets = 10\n")
    assert load_config(path).max_targets == 3

    path.write_text("[reclaim]\nmax_targets = 2\n")
    assert load_config(path).max_targets == 2
