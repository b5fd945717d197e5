"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Protocol


class TransactionKind(str, Enum):
    """Transaction kinds posted by the account engine"""

    DEPOSIT = "Deposit"
    INTEREST = "Interest"


@dataclass(frozen=True)
class Transaction:
    """Single ledger entry, amount in pence"""

    kind: str
    amount: int


@dataclass(frozen=True)
class RateTier:
    """Interest rate bracket keyed by minimum monthly income"""

    name: str
    annual_rate: float  # percent, e.g. 0.93 for 0.93%
    minimum_income: Optional[int]  # None marks the catch-all default tier
    daily_rate: float
    three_day_rate: float
    leap_daily_rate: float
    leap_three_day_rate: float

    def period_rate(self, leap_year: bool) -> float:
        """Rate applied to one three-day compounding step"""
        return self.leap_three_day_rate if leap_year else self.three_day_rate


@dataclass
class Account:
    """Savings account state owned by a single caller"""

    user_id: str
    income: Optional[int]
    balance: int
    interest_rate: float
    tier: Optional[str] = None
    pending_interest: float = 0.0  # Interest below one penny, not yet posted
    transactions: List[Transaction] = field(default_factory=list)


@dataclass(frozen=True)
class LookupRequest:
    """Request sent to the statistics API"""

    method: str
    resource_path: str
    payload: Any


@dataclass(frozen=True)
class LookupResponse:
    """Response from the statistics API: a user record on 200, otherwise an error message"""

    status_code: int
    body: Any


class UserLookup(Protocol):
    """Anything able to answer statistics API requests"""

    def send_request(self, request: LookupRequest) -> LookupResponse:
        ...
