# sweatclaim

A ledger that keeps deferred token accruals for accounts until those accounts claim them,
and burns the accruals nobody claimed in time.

## How it works

- **Oracles** are trusted accounts. Only the account that owns the contract can add or remove
  them.
- An oracle records batches of `(account_id, amount)` pairs with
  `Contract.record_batch_for_hold`. The batches are grouped by the current timestamp in seconds.
- An account may claim once per **claim period**. `Contract.claim` sends everything that
  account has accrued within the **burn period** through a `TokenGateway`. If the transfer
  fails, the amounts go back into the ledger.
- `Contract.burn` removes all accrual buckets older than the burn period. It asks the gateway
  to burn their total.
- `Contract.clean` removes account records.

The ledger code is in `sweatclaim.ledger.AccrualLedger`. Time and the calling account come
from `sweatclaim.runtime.Environment`. Each operation emits an `EVENT_JSON:` log line that
`sweatclaim.events` builds.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from sweatclaim.contract import Contract, TokenGateway
from sweatclaim.model import ClaimStatus
from sweatclaim.runtime import Environment


class Token(TokenGateway):
    def burn(self, amount):
        return True

    def transfer(self, receiver_id, amount, memo):
        return True


env = Environment(current_account_id="claim.example")
contract = Contract(env, "token.example", Token())

contract.add_oracle("oracle.example")  # called by the owner account

env.switch_account("oracle.example")
contract.set_claim_period(60)
contract.record_batch_for_hold([("alice.example", 1_000_000)])

env.set_block_timestamp_in_seconds(120)
env.switch_account("alice.example")
if contract.is_claim_available("alice.example").status is ClaimStatus.AVAILABLE:
    print(contract.claim().total)  # 1000000
```

Any call that is not allowed raises `sweatclaim.runtime.ContractError`. Examples are an
unauthorized caller, an oracle registered twice, or a claim made before the claim period has
passed.