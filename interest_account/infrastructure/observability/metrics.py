"""Prometheus metrics for monitoring account activity and statistics API health"""

from typing import Optional

from prometheus_client import Counter

# Account metrics
account_activation_counter = Counter(
    "interest_account_activations_total",
    "Accounts made active on an engine",
    ["path"],  # new | load | attach
)

deposit_counter = Counter(
    "interest_account_deposits_total",
    "Deposits made",
)

deposit_amount_counter = Counter(
    "interest_account_deposited_pence_total",
    "Total amount deposited in pence",
)

# Interest metrics
interest_posting_counter = Counter(
    "interest_account_interest_postings_total",
    "Interest transactions posted",
)

interest_amount_counter = Counter(
    "interest_account_interest_pence_total",
    "Total interest posted in pence",
)

# Statistics API metrics
lookup_failures_counter = Counter(
    "statistics_lookup_failures_total",
    "Failed statistics API lookups",
    ["status"],
)


def record_activation(path: str) -> None:
    account_activation_counter.labels(path=path).inc()


def record_deposit(amount: int) -> None:
    deposit_counter.inc()
    # Counters cannot go down, zero deposits only count as events
    if amount > 0:
        deposit_amount_counter.inc(amount)


def record_interest(amount: int) -> None:
    interest_posting_counter.inc()
    interest_amount_counter.inc(amount)


def record_lookup_failure(status_code: Optional[int]) -> None:
    """Count a failed lookup, bucketed by status ("unavailable" when no response arrived)"""
    status = str(status_code) if status_code is not None else "unavailable"
    lookup_failures_counter.labels(status=status).inc()
