"""squads_rent - reclaim rent from closed Squads v4 multisig transactions."""

__version__ = "0.1.0"
