"""Events emitted by the claim contract and their JSON form."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Union

from sweatclaim.model import TokensAmount, UnixTimestamp

PACKAGE_NAME = "sweat_claim"
VERSION = "1.0.0"
EVENT_PREFIX = "EVENT_JSON:"

_logger = logging.getLogger(__name__)


@dataclass
class BurnData:
    """Tokens burnt in one burn operation."""

    burnt_amount: TokensAmount


@dataclass
class ClaimData:
    """Tokens claimed by an account, per accrual timestamp."""

    account_id: str
    details: list[tuple[UnixTimestamp, TokensAmount]]
    total_claimed: TokensAmount


@dataclass
class CleanData:
    """Accounts whose records were removed."""

    account_ids: list[str]


@dataclass
class RecordData:
    """Amounts recorded for accounts at one timestamp."""

    timestamp: UnixTimestamp
    amounts: list[tuple[str, TokensAmount]] = field(default_factory=list)


Event = Union[BurnData, ClaimData, CleanData, RecordData]


def _event_payload(event: Event) -> tuple[str, dict[str, Any]]:
    if isinstance(event, BurnData):
        return "burn", {"burnt_amount": str(event.burnt_amount)}
    if isinstance(event, ClaimData):
        return "claim", {
            "account_id": event.account_id,
            "details": [[timestamp, str(amount)] for timestamp, amount in event.details],
            "total_claimed": str(event.total_claimed),
        }
    if isinstance(event, CleanData):
        return "clean", {"account_ids": list(event.account_ids)}
    if isinstance(event, RecordData):
        return "record", {
            "timestamp": event.timestamp,
            "amounts": [[account_id, str(amount)] for account_id, amount in event.amounts],
        }
    raise TypeError(f"Unsupported event: {event!r}")


def event_to_dict(event: Event) -> dict[str, Any]:
    """Return the full event envelope as a dictionary."""
    kind, data = _event_payload(event)
    return {"standard": PACKAGE_NAME, "version": VERSION, "event": kind, "data": data}


def to_json_event_string(event: Event) -> str:
    """Return the event as a prefixed, pretty-printed JSON log line."""
    return EVENT_PREFIX + json.dumps(event_to_dict(event), indent=2)


def emit(event: Event) -> str:
    """Log the event and return the logged line."""
    line = to_json_event_string(event)
    _logger.info("%s", line)
    return line