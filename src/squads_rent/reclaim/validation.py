"""Input validation and authorization. Nothing here touches the network."""

from __future__ import annotations

from collections.abc import Iterable

from solders.pubkey import Pubkey

from squads_rent.errors import InvalidIdentifier, TooManyTargets, Unauthorized
from squads_rent.models.config import MAX_TARGETS_PER_REQUEST


def parse_address(value: object, field: str = "address") -> Pubkey:
    """Parse a base58 address, raising InvalidIdentifier when malformed."""
    if isinstance(value, Pubkey):
        return value
    if not isinstance(value, str) or not value.strip():
        raise InvalidIdentifier(value, field)
    try:
        return Pubkey.from_string(value.strip())
    except ValueError as exc:
        raise InvalidIdentifier(value, field, str(exc)) from exc


def parse_targets(
    targets: str | Iterable[str | Pubkey],
    limit: int = MAX_TARGETS_PER_REQUEST,
) -> list[Pubkey]:
    """Parse the requested multisig list.

    Accepts a comma-separated string, a single Pubkey or an iterable.
    Blank entries are dropped and duplicates collapse to their first
    occurrence.
    """
    if isinstance(targets, str):
        raw: list[str | Pubkey] = [t for t in targets.split(",")]
    elif isinstance(targets, Pubkey):
        raw = [targets]
    else:
        try:
            raw = list(targets)
        except TypeError as exc:
            raise InvalidIdentifier(targets, "multisig list", "expected addresses") from exc

    parsed: list[Pubkey] = []
    for item in raw:
        if isinstance(item, str) and not item.strip():
            continue
        address = parse_address(item, "multisig")
        if address not in parsed:
            parsed.append(address)

    if not parsed:
        raise InvalidIdentifier(targets, "multisig list", "no multisig addresses given")
    if len(parsed) > limit:
        raise TooManyTargets(len(parsed), limit)
    return parsed


def authorize(claimer: Pubkey, declared_target: Pubkey) -> None:
    """Single-target mode: only the declared account may claim."""
    if claimer != declared_target:
        raise Unauthorized(claimer, declared_target)
