"""Rent reclamation core - eligibility, range scanning and batch aggregation."""

from squads_rent.reclaim.aggregator import BatchAggregator
from squads_rent.reclaim.eligibility import EligibilityResolver, EligibleMultisig
from squads_rent.reclaim.scanner import RangeScanner
from squads_rent.reclaim.service import RentReclaimer

__all__ = [
    "BatchAggregator",
    "EligibilityResolver",
    "EligibleMultisig",
    "RangeScanner",
    "RentReclaimer",
]
