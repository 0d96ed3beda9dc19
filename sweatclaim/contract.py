"""The claim contract: oracles, configuration, recording, claiming and burning."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from sweatclaim.events import BurnData, ClaimData, CleanData, Event, emit
from sweatclaim.ledger import AccrualLedger
from sweatclaim.model import ClaimAvailability, ClaimResult, ClaimStatus, Duration, TokensAmount
from sweatclaim.runtime import ContractError, Environment

INITIAL_CLAIM_PERIOD: Duration = 24 * 60 * 60
INITIAL_BURN_PERIOD: Duration = 30 * 24 * 60 * 60


@dataclass
class TokenGateway:
    """In-memory fungible token contract that the claim contract burns and transfers through.

    ``succeed`` decides the outcome of every call; successful calls are recorded.
    """

    succeed: bool = True
    burnt: list[TokensAmount] = field(default_factory=list)
    transfers: list[tuple[str, TokensAmount, str]] = field(default_factory=list)

    def burn(self, amount: TokensAmount) -> bool:
        """Burn ``amount`` tokens held by the claim contract; return whether it succeeded."""
        if self.succeed:
            self.burnt.append(amount)
        return self.succeed

    def transfer(self, receiver_id: str, amount: TokensAmount, memo: str) -> bool:
        """Transfer ``amount`` tokens to ``receiver_id``; return whether it succeeded."""
        if self.succeed:
            self.transfers.append((receiver_id, amount, memo))
        return self.succeed


class Contract:
    """Holds deferred token accruals until their owners claim them or they are burnt."""

    def __init__(
        self,
        env: Environment,
        token_account_id: str,
        token: TokenGateway | None = None,
    ) -> None:
        self.env = env
        self._assert_private()

        self.token_account_id = token_account_id
        self.token = token if token is not None else TokenGateway()
        self.ledger = AccrualLedger()
        self._oracles: dict[str, None] = {}
        self.claim_period: Duration = INITIAL_CLAIM_PERIOD
        self.burn_period: Duration = INITIAL_BURN_PERIOD
        self.is_service_call_running = False

    # access checks

    def _assert_private(self) -> None:
        if self.env.current_account_id != self.env.predecessor_account_id:
            raise ContractError("Method is private")

    def _assert_oracle(self) -> None:
        if self.env.predecessor_account_id not in self._oracles:
            raise ContractError("Unauthorized access! Only oracle can do this!")

    def _emit(self, event: Event) -> None:
        self.env.log(emit(event))

    # oracles

    def add_oracle(self, account_id: str) -> None:
        """Authorize ``account_id`` as an oracle; only the contract account may do this."""
        self._assert_private()
        if account_id in self._oracles:
            raise ContractError("Already exists")
        self._oracles[account_id] = None
        self.env.log(f"Oracle {account_id} was added")

    def remove_oracle(self, account_id: str) -> None:
        """Revoke the oracle ``account_id``; only the contract account may do this."""
        self._assert_private()
        if account_id not in self._oracles:
            raise ContractError("No such oracle")
        del self._oracles[account_id]
        self.env.log(f"Oracle {account_id} was removed")

    def get_oracles(self) -> list[str]:
        """Return the registered oracles."""
        return list(self._oracles)

    # configuration

    def set_claim_period(self, period: Duration) -> None:
        """Set the time in seconds that must pass between claims."""
        self._assert_oracle()
        self.claim_period = period

    def set_burn_period(self, period: Duration) -> None:
        """Set the age in seconds after which unclaimed tokens may be burnt."""
        self._assert_oracle()
        self.burn_period = period

    # recording and claiming

    def record_batch_for_hold(self, amounts: Iterable[tuple[str, TokensAmount]]) -> None:
        """Add amounts to the balances of a batch of accounts at the current block time."""
        self._assert_oracle()
        batch = list(amounts)
        for account_id, amount in batch:
            if amount < 0:
                raise ValueError(f"Negative amount for {account_id}: {amount}")
        self._emit(self.ledger.record(self.env.now_seconds(), batch))

    def get_claimable_balance_for_account(self, account_id: str) -> TokensAmount:
        """Return the tokens the account could claim now."""
        return self.ledger.claimable_balance(account_id, self.env.now_seconds(), self.burn_period)

    def is_claim_available(self, account_id: str) -> ClaimAvailability:
        """Tell whether the account may claim now."""
        return self.ledger.claim_availability(account_id, self.env.now_seconds(), self.claim_period)

    def claim(self) -> ClaimResult:
        """Transfer all claimable tokens to the caller."""
        account_id = self.env.predecessor_account_id
        if self.is_claim_available(account_id).status is not ClaimStatus.AVAILABLE:
            raise ContractError("Claim is not available at the moment")

        now = self.env.now_seconds()
        total, details = self.ledger.take_claimable(account_id, now, self.burn_period)
        if total == 0:
            return ClaimResult(0)

        success = self.token.transfer(account_id, total, "")
        result = self.ledger.settle_claim(account_id, now, total, details, success)
        if success:
            self._emit(ClaimData(account_id, list(details), total))
        return result

    # maintenance

    def burn(self) -> TokensAmount:
        """Burn all accruals older than the burn period and return the amount burnt."""
        self._assert_oracle()
        if self.is_service_call_running:
            raise ContractError("Another service call is running")

        self.is_service_call_running = True
        total, keys = self.ledger.collect_expired(self.env.now_seconds(), self.burn_period)
        if total <= 0:
            self.is_service_call_running = False
            return 0

        success = self.token.burn(total)
        self.is_service_call_running = False
        if not success:
            return 0

        self.ledger.remove_accruals(keys)
        self._emit(BurnData(total))
        return total

    def clean(self, account_ids: Iterable[str]) -> None:
        """Remove the records of the given accounts."""
        self._assert_oracle()
        ids = list(account_ids)
        self.ledger.remove_accounts(ids)
        self._emit(CleanData(ids))