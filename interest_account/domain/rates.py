"""Income-tiered interest rate table"""

from typing import Optional, Tuple

from interest_account.domain.exceptions import UnknownRateError
from interest_account.domain.models import Account, RateTier

DAYS_IN_YEAR = 365
DAYS_IN_LEAP_YEAR = 366
COMPOUNDING_PERIOD_DAYS = 3


def build_tier(name: str, annual_rate: float, minimum_income: Optional[int]) -> RateTier:
    """Create a tier with its daily and three-day rates precomputed for both year lengths"""
    daily_rate = annual_rate / 100 / DAYS_IN_YEAR
    leap_daily_rate = annual_rate / 100 / DAYS_IN_LEAP_YEAR
    return RateTier(
        name=name,
        annual_rate=annual_rate,
        minimum_income=minimum_income,
        daily_rate=daily_rate,
        three_day_rate=daily_rate * COMPOUNDING_PERIOD_DAYS,
        leap_daily_rate=leap_daily_rate,
        leap_three_day_rate=leap_daily_rate * COMPOUNDING_PERIOD_DAYS,
    )


# Ordered by minimum income, highest first. Incomes are monthly, in pence.
RATE_TIERS: Tuple[RateTier, ...] = (
    build_tier("high", 1.02, 500_000),  # £5000+
    build_tier("low", 0.93, 0),
    build_tier("default", 0.5, None),  # Missing income data
)

DEFAULT_TIER = next(tier for tier in RATE_TIERS if tier.minimum_income is None)


def select_tier(income: Optional[int]) -> RateTier:
    """
    Pick the rate tier for a monthly income.

    Tiers are checked from the highest threshold down and the first one the
    income reaches wins. Unknown income (None) always gets the default tier.
    """
    if income is not None:
        for tier in RATE_TIERS:
            if tier.minimum_income is not None and income >= tier.minimum_income:
                return tier
    return DEFAULT_TIER


def tier_for_rate(rate: float) -> RateTier:
    """Reverse lookup of an annual rate previously assigned from this table"""
    for tier in RATE_TIERS:
        if tier.annual_rate == rate:
            return tier
    raise UnknownRateError(rate)


def get_tier(name: str) -> RateTier:
    for tier in RATE_TIERS:
        if tier.name == name:
            return tier
    raise UnknownRateError(name)


def resolve_tier(account: Account) -> RateTier:
    """
    Tier for an account's current interest rate.

    The stored tier key is used when it still agrees with the rate; a key
    that is missing, unknown or belongs to another rate falls back to
    matching the rate itself.
    """
    if account.tier is not None:
        for tier in RATE_TIERS:
            if tier.name == account.tier and tier.annual_rate == account.interest_rate:
                return tier
    return tier_for_rate(account.interest_rate)
