"""CLI entry point for squads_rent."""

from __future__ import annotations

import asyncio
import json
import logging
import sys

import click
from solders.pubkey import Pubkey

from squads_rent.config import load_config
from squads_rent.errors import DecodeError, NothingToClaim, ReclamationError
from squads_rent.models.batch import LAMPORTS_PER_SOL, ReclamationBatch, TransactionTarget
from squads_rent.models.config import ScanMode
from squads_rent.reclaim.service import RentReclaimer
from squads_rent.reclaim.validation import parse_address
from squads_rent.squads.layouts import SquadsAccountDecoder
from squads_rent.squads.rpc import SolanaAccountFetcher

EXIT_ERROR = 1
EXIT_NOTHING_TO_CLAIM = 2


def _sol(lamports: int) -> str:
    return f"{lamports / LAMPORTS_PER_SOL:.9f} SOL"


def _fail(exc: ReclamationError) -> None:
    """Print a taxonomy error to stderr and exit."""
    click.echo(f"Error [{exc.code}]: {exc}", err=True)
    if isinstance(exc, NothingToClaim):
        for outcome in exc.outcomes:
            reason = f" ({outcome.error})" if outcome.error else ""
            click.echo(f"  {outcome.multisig}: {outcome.status}{reason}", err=True)
        sys.exit(EXIT_NOTHING_TO_CLAIM)
    sys.exit(EXIT_ERROR)


def _print_batch(batch: ReclamationBatch, as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps(batch.to_dict(), indent=2))
        return

    click.echo(batch.summary())
    for ci in batch.instructions:
        click.echo(
            f"  {ci.multisig} #{ci.transaction_index:<6} {ci.record_kind:<20} {_sol(ci.rent_lamports)}"
        )
    skipped = [o for o in batch.outcomes if o.status != "included"]
    for outcome in skipped:
        reason = f" ({outcome.error})" if outcome.error else ""
        click.echo(f"  skipped {outcome.multisig}: {outcome.status}{reason}")
    click.echo("")
    click.echo(f"Fee payer:    {batch.fee_payer}")
    click.echo(f"Blockhash:    {batch.freshness.blockhash}")
    click.echo(f"Valid until:  block {batch.freshness.last_valid_block_height}")
    click.echo("Transaction (base64, unsigned):")
    click.echo(batch.serialize())


async def _build(cfg, claimer, targets, mode: ScanMode) -> ReclamationBatch:
    reclaimer = RentReclaimer.from_config(cfg)
    try:
        return await reclaimer.build_reclamation_request(claimer, targets, mode)
    finally:
        await reclaimer.close()


@click.group()
@click.option("-c", "--config", "config_path", default=None, help="Path to config TOML file")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """squads-rent - reclaim rent from closed Squads multisig transactions."""
    ctx.ensure_object(dict)
    cfg = load_config(config_path)
    ctx.obj["config"] = cfg

    level = logging.DEBUG if verbose else getattr(logging, cfg.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


# ── Claims ─────────────────────────────────────────────


@cli.command()
@click.argument("claimer")
@click.argument("multisigs")
@click.option("--json", "as_json", is_flag=True, help="Print the batch as JSON")
@click.pass_context
def claim(ctx: click.Context, claimer: str, multisigs: str, as_json: bool) -> None:
    """Build a rent claim transaction for up to three multisigs.

    MULTISIGS is a comma-separated list of multisig addresses. The
    transaction is printed unsigned; CLAIMER pays the fee.
    """
    cfg = ctx.obj["config"]
    try:
        batch = asyncio.run(_build(cfg, claimer, multisigs, ScanMode.WINDOW_SCAN))
    except ReclamationError as exc:
        _fail(exc)
        return
    _print_batch(batch, as_json)


@cli.command("claim-one")
@click.argument("claimer")
@click.option("--target", "target_account", required=True, help="Account the claim is made for")
@click.option("--multisig", required=True, help="Multisig address")
@click.option("--index", "transaction_index", required=True, type=int, help="Transaction index")
@click.option("--json", "as_json", is_flag=True, help="Print the batch as JSON")
@click.pass_context
def claim_one(
    ctx: click.Context,
    claimer: str,
    target_account: str,
    multisig: str,
    transaction_index: int,
    as_json: bool,
) -> None:
    """Build a rent claim transaction for a single transaction record."""
    cfg = ctx.obj["config"]
    target = TransactionTarget(
        account=target_account, multisig=multisig, transaction_index=transaction_index,
    )
    try:
        batch = asyncio.run(_build(cfg, claimer, target, ScanMode.SINGLE_TARGET))
    except ReclamationError as exc:
        _fail(exc)
        return
    _print_batch(batch, as_json)


# ── Info ───────────────────────────────────────────────


@cli.command()
@click.argument("multisig")
@click.pass_context
def inspect(ctx: click.Context, multisig: str) -> None:
    """Show a multisig's decoded state."""
    cfg = ctx.obj["config"]

    async def _fetch(address: Pubkey):
        fetcher = SolanaAccountFetcher(cfg.rpc_url, cfg.commitment, cfg.request_timeout)
        try:
            return await fetcher.fetch_account(address)
        finally:
            await fetcher.close()

    try:
        address = parse_address(multisig, "multisig")
        snapshot = asyncio.run(_fetch(address))
    except ReclamationError as exc:
        _fail(exc)
        return

    if snapshot is None:
        click.echo(f"Account not found: {address}", err=True)
        sys.exit(EXIT_ERROR)

    decoder = SquadsAccountDecoder(Pubkey.from_string(cfg.program_id))
    try:
        state = decoder.decode_multisig(snapshot)
    except DecodeError as exc:
        click.echo(f"Not a Squads multisig: {exc}", err=True)
        sys.exit(EXIT_ERROR)

    click.echo(f"Multisig:         {state.address}")
    click.echo(f"Balance:          {_sol(snapshot.lamports)}")
    click.echo(f"Threshold:        {state.threshold} of {len(state.members)}")
    click.echo(f"Time lock:        {state.time_lock}s")
    click.echo(f"Create key:       {state.create_key}")
    click.echo(f"Config authority: {state.config_authority or '(autonomous)'}")
    click.echo(f"Rent collector:   {state.rent_collector or '(not set - not eligible)'}")
    click.echo(f"Stale index:      {state.stale_index}")
    click.echo(f"Current index:    {state.current_index}")
    click.echo(f"Window size:      {len(state.window)}")
    click.echo("Members:")
    for member in state.members:
        click.echo(f"  {member.key}  {', '.join(member.permission_names)}")


@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show effective configuration."""
    cfg = ctx.obj["config"]
    click.echo(f"Network:      {cfg.network}")
    click.echo(f"RPC URL:      {cfg.rpc_url}")
    click.echo(f"Commitment:   {cfg.commitment}")
    click.echo(f"Program:      {cfg.program_id}")
    click.echo(f"Max targets:  {cfg.max_targets}")
    click.echo(f"Concurrency:  {cfg.max_concurrent_fetches}")
    click.echo(f"Timeout:      {cfg.request_timeout}s")


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
