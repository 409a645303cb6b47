"""Error taxonomy for reclamation requests.

Every failure a caller can see is a ``ReclamationError`` subclass. Failures
local to one transaction index never surface here: the scanner skips the
index instead.
"""

from __future__ import annotations

from squads_rent.models.batch import MultisigOutcome


class ReclamationError(Exception):
    """Base class for request-level failures."""

    code = "reclamation_error"


class InvalidIdentifier(ReclamationError):
    """Malformed input. Raised before any network access."""

    code = "invalid_identifier"

    def __init__(self, value: object, field: str = "address", detail: str | None = None) -> None:
        self.value = value
        self.field = field
        msg = f"Invalid {field}: {value!r}"
        if detail:
            msg = f"{msg} ({detail})"
        super().__init__(msg)


class TooManyTargets(InvalidIdentifier):
    code = "too_many_targets"

    def __init__(self, count: int, limit: int) -> None:
        self.count = count
        self.limit = limit
        super().__init__(
            count, "multisig list",
            f"{count} given, at most {limit} multisigs per request",
        )


class MultisigUnreadable(ReclamationError):
    """The multisig account is missing or does not decode."""

    code = "multisig_unreadable"

    def __init__(self, multisig: object, reason: str) -> None:
        self.multisig = str(multisig)
        self.reason = reason
        super().__init__(f"Multisig {self.multisig} unreadable: {reason}")


class NotEligible(ReclamationError):
    """The multisig has no rent collector configured. Expected, not a fault."""

    code = "not_eligible"

    def __init__(self, multisig: object) -> None:
        self.multisig = str(multisig)
        super().__init__(f"Multisig {self.multisig} has no rent collector configured")


class Unauthorized(ReclamationError):
    """Single-target mode: the claimer is not the declared target account."""

    code = "unauthorized"

    def __init__(self, claimer: object, declared: object) -> None:
        self.claimer = str(claimer)
        self.declared = str(declared)
        super().__init__(
            f"Account {self.claimer} is not authorized to claim for {self.declared}"
        )


class NothingToClaim(ReclamationError):
    """No eligible close operation was found across all requested multisigs."""

    code = "nothing_to_claim"

    def __init__(self, outcomes: list[MultisigOutcome] | None = None) -> None:
        self.outcomes = list(outcomes or [])
        super().__init__("No transactions to claim rent from")


class UpstreamTransportError(ReclamationError):
    """RPC or network failure, surfaced as-is without retry."""

    code = "upstream_transport_error"


class DecodeError(Exception):
    """An account's bytes do not match the expected layout.

    Raised by decoders; never leaves the scanner or resolver as-is.
    """
