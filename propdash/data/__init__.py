"""Static seed data for the prop-firm dashboard."""

from propdash.data.seed import SEED_ACCOUNTS, SEED_EVENTS, seed_accounts, seed_events

__all__ = ["SEED_ACCOUNTS", "SEED_EVENTS", "seed_accounts", "seed_events"]
