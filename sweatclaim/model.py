"""Core data types shared by the claim contract and its views."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

UnixTimestamp = int
AccrualIndex = int
TokensAmount = int
Duration = int  # period in seconds


class ClaimStatus(Enum):
    """Whether an account may claim its tokens right now."""

    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"
    UNREGISTERED = "unregistered"


@dataclass(frozen=True)
class ClaimAvailability:
    """Claim status of an account.

    ``refreshed_at`` and ``claim_period`` are set only when the status is
    ``UNAVAILABLE``; they tell when the claim period was last reset and how
    long it lasts.
    """

    status: ClaimStatus
    refreshed_at: UnixTimestamp | None = None
    claim_period: Duration | None = None

    def __post_init__(self) -> None:
        has_details = self.refreshed_at is not None or self.claim_period is not None
        if self.status is ClaimStatus.UNAVAILABLE:
            if self.refreshed_at is None or self.claim_period is None:
                raise ValueError("Unavailable claim status needs a timestamp and a claim period")
        elif has_details:
            raise ValueError(f"Claim status {self.status.value!r} carries no details")

    def to_dict(self) -> dict[str, Any]:
        """Return the tagged form: ``{"type": ..., "data": [timestamp, period]}``."""
        result: dict[str, Any] = {"type": self.status.value}
        if self.status is ClaimStatus.UNAVAILABLE:
            result["data"] = [self.refreshed_at, self.claim_period]
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ClaimAvailability":
        """Build a value from its tagged form."""
        try:
            status = ClaimStatus(data["type"])
        except (KeyError, ValueError) as err:
            raise ValueError(f"Unknown claim availability: {data!r}") from err

        if status is not ClaimStatus.UNAVAILABLE:
            if "data" in data:
                raise ValueError(f"Claim status {status.value!r} carries no data")
            return cls(status)

        details = data.get("data")
        if not isinstance(details, (list, tuple)) or len(details) != 2:
            raise ValueError(f"Malformed unavailable claim data: {details!r}")
        refreshed_at, claim_period = details
        return cls(status, int(refreshed_at), int(claim_period))


@dataclass(frozen=True)
class ClaimResult:
    """Outcome of a claim: the total amount of tokens transferred."""

    total: TokensAmount

    def to_dict(self) -> dict[str, str]:
        """Return the serialized form, with the amount as a decimal string."""
        return {"total": str(self.total)}


@dataclass
class AccountRecord:
    """State of a registered account.

    ``accruals`` holds ``(timestamp, index)`` pairs pointing into the
    contract's accrual ledger.
    """

    claim_period_refreshed_at: UnixTimestamp
    accruals: list[tuple[UnixTimestamp, AccrualIndex]] = field(default_factory=list)
    is_enabled: bool = True
    is_locked: bool = False

    @classmethod
    def new(cls, now: UnixTimestamp) -> "AccountRecord":
        """Create a fresh, enabled and unlocked record created at ``now``."""
        return cls(claim_period_refreshed_at=now)