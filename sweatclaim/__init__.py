"""Deferred token accrual ledger with claim and burn periods."""

__version__ = "1.0.0"
__all__ = ["contract", "events", "ledger", "model", "runtime"]