"""Execution environment of the contract: caller, clock and log."""

from __future__ import annotations

from dataclasses import dataclass, field

from sweatclaim.model import Duration, UnixTimestamp

_MAX_TIMESTAMP = 2**32 - 1


class ContractError(Exception):
    """Raised when a contract call is rejected."""


def ms_timestamp_to_seconds(ms: int) -> UnixTimestamp:
    """Convert milliseconds to a 32-bit Unix timestamp in seconds."""
    seconds = ms // 1000
    if not 0 <= seconds <= _MAX_TIMESTAMP:
        raise ContractError(
            "Failed to get convert milliseconds to Unix timestamp: "
            f"{seconds} is out of range for a 32-bit timestamp"
        )
    return seconds


def is_within_period(timestamp: UnixTimestamp, now: UnixTimestamp, period: Duration) -> bool:
    """Tell whether less than ``period`` seconds passed between ``timestamp`` and ``now``."""
    return now - timestamp < period


@dataclass
class Environment:
    """The account the contract runs as, the caller, the block time and the log."""

    current_account_id: str
    predecessor_account_id: str | None = None
    block_timestamp_ms: int = 0
    logs: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.predecessor_account_id is None:
            self.predecessor_account_id = self.current_account_id

    def now_seconds(self) -> UnixTimestamp:
        """Current block time in seconds."""
        return ms_timestamp_to_seconds(self.block_timestamp_ms)

    def switch_account(self, account_id: str) -> None:
        """Make ``account_id`` the caller of the following calls."""
        self.predecessor_account_id = account_id

    def set_block_timestamp_in_seconds(self, seconds: int) -> None:
        """Move the block clock to ``seconds``."""
        if seconds < 0:
            raise ValueError("Block timestamp cannot be negative")
        self.block_timestamp_ms = seconds * 1000

    def log(self, message: str) -> None:
        """Append a message to the log."""
        self.logs.append(message)