"""Accrual ledger: recorded amounts per timestamp and per-account references."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from sweatclaim.events import RecordData
from sweatclaim.model import (
    AccountRecord,
    ClaimAvailability,
    ClaimResult,
    ClaimStatus,
    Duration,
    TokensAmount,
    UnixTimestamp,
)
from sweatclaim.runtime import ContractError, is_within_period


@dataclass
class _DailyAccruals:
    amounts: list[TokensAmount] = field(default_factory=list)
    total: TokensAmount = 0

    def push(self, amount: TokensAmount) -> int:
        self.amounts.append(amount)
        self.total += amount
        return len(self.amounts) - 1


class AccrualLedger:
    """Amounts accrued to accounts, grouped by the timestamp they were recorded at.

    Each account record holds ``(timestamp, index)`` pairs that point at one
    amount in the list of amounts recorded at that timestamp.
    """

    def __init__(self) -> None:
        self._accruals: dict[UnixTimestamp, _DailyAccruals] = {}
        self._accounts: dict[str, AccountRecord] = {}

    def account(self, account_id: str) -> AccountRecord | None:
        """Return the record of ``account_id``, or ``None`` if it is not registered."""
        return self._accounts.get(account_id)

    def accrual(self, timestamp: UnixTimestamp) -> tuple[tuple[TokensAmount, ...], TokensAmount] | None:
        """Return the amounts recorded at ``timestamp`` and their total, or ``None``."""
        entry = self._accruals.get(timestamp)
        if entry is None:
            return None
        return tuple(entry.amounts), entry.total

    def record(self, now: UnixTimestamp, amounts: Iterable[tuple[str, TokensAmount]]) -> RecordData:
        """Add amounts for accounts at ``now`` and return the event describing it."""
        event_data = RecordData(now)
        balances = self._accruals.setdefault(now, _DailyAccruals())

        for account_id, amount in amounts:
            event_data.amounts.append((account_id, amount))
            index = balances.push(amount)

            record = self._accounts.get(account_id)
            if record is None:
                record = AccountRecord.new(now)
                self._accounts[account_id] = record
            record.accruals.append((now, index))

        return event_data

    def claimable_balance(self, account_id: str, now: UnixTimestamp, burn_period: Duration) -> TokensAmount:
        """Sum of the account's amounts that are not older than ``burn_period``."""
        record = self._accounts.get(account_id)
        if record is None:
            return 0

        total = 0
        for timestamp, index in record.accruals:
            if not is_within_period(timestamp, now, burn_period):
                continue
            entry = self._accruals.get(timestamp)
            if entry is None or index >= len(entry.amounts):
                continue
            total += entry.amounts[index]
        return total

    def claim_availability(
        self, account_id: str, now: UnixTimestamp, claim_period: Duration
    ) -> ClaimAvailability:
        """Tell whether the account may claim at ``now``."""
        record = self._accounts.get(account_id)
        if record is None:
            return ClaimAvailability(ClaimStatus.UNREGISTERED)

        refreshed_at = record.claim_period_refreshed_at
        if now - refreshed_at > claim_period:
            return ClaimAvailability(ClaimStatus.AVAILABLE)
        return ClaimAvailability(ClaimStatus.UNAVAILABLE, refreshed_at, claim_period)

    def take_claimable(
        self, account_id: str, now: UnixTimestamp, burn_period: Duration
    ) -> tuple[TokensAmount, list[tuple[UnixTimestamp, TokensAmount]]]:
        """Withdraw the account's claimable amounts and return their total and details.

        The account is left locked when anything was withdrawn; the claim must
        then be finished with :meth:`settle_claim`.
        """
        record = self._accounts.get(account_id)
        if record is None:
            raise ContractError("Account data is not found")
        if record.is_locked:
            raise ContractError("Another operation is running")

        record.is_locked = True

        total = 0
        details: list[tuple[UnixTimestamp, TokensAmount]] = []
        for timestamp, index in record.accruals:
            if not is_within_period(timestamp, now, burn_period):
                continue
            entry = self._accruals.get(timestamp)
            if entry is None or index >= len(entry.amounts):
                continue

            amount = entry.amounts[index]
            details.append((timestamp, amount))
            total += amount
            entry.total -= amount
            entry.amounts[index] = 0

        record.accruals.clear()

        if total == 0:
            record.is_locked = False
        return total, details

    def settle_claim(
        self,
        account_id: str,
        now: UnixTimestamp,
        total: TokensAmount,
        details: Iterable[tuple[UnixTimestamp, TokensAmount]],
        success: bool,
    ) -> ClaimResult:
        """Finish a claim: on success reset the claim period, otherwise restore the amounts."""
        record = self._accounts.get(account_id)
        if record is None:
            raise ContractError("Account not found")
        record.is_locked = False

        if success:
            record.claim_period_refreshed_at = now
            return ClaimResult(total)

        for timestamp, amount in details:
            entry = self._accruals.setdefault(timestamp, _DailyAccruals())
            index = entry.push(amount)
            record.accruals.append((timestamp, index))

        return ClaimResult(0)

    def collect_expired(
        self, now: UnixTimestamp, burn_period: Duration
    ) -> tuple[TokensAmount, list[UnixTimestamp]]:
        """Return the total of entries older than ``burn_period`` and their timestamps."""
        total = 0
        keys: list[UnixTimestamp] = []
        for timestamp, entry in self._accruals.items():
            if not is_within_period(timestamp, now, burn_period):
                keys.append(timestamp)
                total += entry.total
        return total, keys

    def remove_accruals(self, keys: Iterable[UnixTimestamp]) -> None:
        """Drop the accrual entries recorded at the given timestamps."""
        for key in keys:
            self._accruals.pop(key, None)

    def remove_accounts(self, account_ids: Iterable[str]) -> None:
        """Drop the records of the given accounts."""
        for account_id in account_ids:
            self._accounts.pop(account_id, None)