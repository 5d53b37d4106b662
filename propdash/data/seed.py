"""Seed events and accounts.

One row per event in the prop journey and one row per account.
Replace these with real numbers, or import events from CSV.
"""

from propdash.models import Account, Event

SEED_EVENTS: list[dict] = [
    {"date": "2025-09-22", "propFirm": "FTMO", "type": "fee", "amount": 522.2},
    {"date": "2025-09-09", "propFirm": "FTMO", "type": "fee", "amount": 1279.64},
    {"date": "2025-09-10", "propFirm": "5ERS", "type": "fee", "amount": 505},
    {"date": "2025-07-10", "propFirm": "5ERS", "type": "fee", "amount": 545},
    {"date": "2025-02-03", "propFirm": "5ERS", "type": "fee", "amount": 165},
    {"date": "2025-01-01", "propFirm": "5ERS", "type": "fee", "amount": 440.5},
    {"date": "2025-08-21", "propFirm": "5ERS", "type": "payout", "amount": 4233},
    {"date": "2025-09-25", "propFirm": "5ERS", "type": "payout", "amount": 4184},
    {"date": "2025-08-22", "propFirm": "E8", "type": "fee", "amount": 471},
    {"date": "2025-08-25", "propFirm": "THINK CAPITAL", "type": "fee", "amount": 523},
    {"date": "2025-05-05", "propFirm": "BRIGHTFUNDED", "type": "fee", "amount": 473.51},
    {"date": "2025-11-28", "propFirm": "BRIGHTFUNDED", "type": "fee", "amount": 401.98},
]

SEED_ACCOUNTS: list[dict] = [
    {
        "id": "FTMO-100-1",
        "propFirm": "FTMO",
        "size": 100000,
        "type": "evaluation",
        "stage": "phase1",
        "isActive": True,
    },
    {
        "id": "FTMO-200-2",
        "propFirm": "FTMO",
        "size": 100000,
        "type": "evaluation",
        "stage": "phase1",
        "isActive": True,
    },
    {
        "id": "ACG-200-1",
        "propFirm": "5ERS",
        "size": 200000,
        "type": "evaluation",
        "stage": "phase1",
        "isActive": True,
    },
    {
        "id": "BrightFunded-100-1",
        "propFirm": "BrightFunded",
        "size": 100000,
        "type": "evaluation",
        "stage": "phase1",
        "isActive": True,
    },
]


def seed_events() -> list[Event]:
    """Build the seed events."""
    return [Event.model_validate(row) for row in SEED_EVENTS]


def seed_accounts() -> list[Account]:
    """Build the seed accounts."""
    return [Account.model_validate(row) for row in SEED_ACCOUNTS]
