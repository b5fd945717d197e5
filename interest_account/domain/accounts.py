"""Interest account engine - tiered rates, deposits and three-day compounding"""

import logging
import math
from typing import Any, Mapping, Optional, Tuple, Union

from interest_account.config import settings
from interest_account.domain.exceptions import (
    AccountNotActiveError,
    InvalidDepositError,
    RemoteLookupError,
)
from interest_account.domain.models import (
    Account,
    LookupRequest,
    Transaction,
    TransactionKind,
    UserLookup,
)
from interest_account.domain.rates import COMPOUNDING_PERIOD_DAYS, resolve_tier, select_tier
from interest_account.infrastructure.clients.statistics import StatisticsClient
from interest_account.infrastructure.observability.logging import log_account_event, log_interest_run
from interest_account.infrastructure.observability.metrics import (
    record_activation,
    record_deposit,
    record_interest,
    record_lookup_failure,
)
from interest_account.schemas import AccountSnapshot, AccountView, parse_snapshot
from interest_account.utils.date_utils import compounding_steps, is_leap_year
from interest_account.utils.identifiers import validate_user_id

USERS_RESOURCE = "users"
STATUS_OK = 200


def deposit(account: Account, amount: int) -> Account:
    """
    Add funds to an account and record a Deposit transaction.

    Raises:
        InvalidDepositError: If amount is not a whole number of pence, or is negative
    """
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidDepositError(f"Deposit amount must be whole pence, got {amount!r}")
    if amount < 0:
        raise InvalidDepositError(f"Deposit amount must not be negative, got {amount}")

    account.balance += amount
    account.transactions.append(Transaction(kind=TransactionKind.DEPOSIT.value, amount=amount))
    return account


def accrue_interest(account: Account, days: int, leap_year: bool, carry_over: bool = False) -> int:
    """
    Compound interest on an account in three-day steps.

    Each step earns ``balance * three_day_rate`` plus whatever was left over
    from the previous step. Once that exceeds one penny the whole pence are
    posted as an Interest transaction and the leftover is cleared; below
    that it is held back for the next step.

    Requirements:
    - ``days // 3`` steps, trailing days are ignored
    - Tier is resolved before anything changes, so an unknown rate leaves the account untouched
    - Leftover carry is dropped at the end unless ``carry_over`` is set

    Args:
        account: Account to update in place
        days: Number of days to accrue for
        leap_year: Use the 366-day rates
        carry_over: Start from and keep ``account.pending_interest`` between calls

    Returns:
        Total interest posted in pence
    """
    tier = resolve_tier(account)
    rate = tier.period_rate(leap_year)
    steps = compounding_steps(days, COMPOUNDING_PERIOD_DAYS)

    pending = account.pending_interest if carry_over else 0.0
    total_posted = 0

    for _ in range(steps):
        interest = account.balance * rate + pending

        if interest > 1:
            posted = math.floor(interest)
            account.balance += posted
            account.transactions.append(Transaction(kind=TransactionKind.INTEREST.value, amount=posted))
            record_interest(posted)
            total_posted += posted
            pending = 0.0
        else:
            # Less than a penny, hold it for the next step
            pending = interest

    account.pending_interest = pending if carry_over else 0.0
    return total_posted


def _error_message(body: Any) -> str:
    if isinstance(body, Mapping):
        return str(body.get("message") or body)
    if body:
        return str(body)
    return "Unexpected error"


class InterestAccount:
    """
    Savings account engine holding one account at a time.

    The engine starts unset; ``new_account``, ``load_account`` or
    ``set_account`` make it active. Every other operation needs an active
    account and raises AccountNotActiveError otherwise.
    """

    def __init__(
        self,
        lookup: Optional[UserLookup] = None,
        account: Optional[Account] = None,
        carry_interest: Optional[bool] = None,
    ):
        self.lookup = lookup if lookup is not None else StatisticsClient()
        self._account = account
        self.carry_interest = (
            settings.carry_interest_between_calls if carry_interest is None else carry_interest
        )

    @property
    def is_active(self) -> bool:
        return self._account is not None

    @property
    def account(self) -> Account:
        """The active account value"""
        return self._require_account()

    def _require_account(self) -> Account:
        if self._account is None:
            raise AccountNotActiveError("No active account, create or set one first")
        return self._account

    def new_account(self, user_id: str) -> Tuple[str, float]:
        """
        Create a user on the statistics API and open an account for them.

        Returns:
            (user_id, interest_rate) of the new account

        Raises:
            InvalidIdentifierError: Malformed user ID
            RemoteLookupError: Statistics API refused or failed the request
        """
        return self._activate_remote("POST", user_id, path="new")

    def load_account(self, user_id: str) -> Tuple[str, float]:
        """Open an account for a user that already exists on the statistics API"""
        return self._activate_remote("GET", user_id, path="load")

    def _activate_remote(self, method: str, user_id: str, path: str) -> Tuple[str, float]:
        validate_user_id(user_id)

        # 1. Resolve the user and their income
        response = self.lookup.send_request(
            LookupRequest(method=method, resource_path=USERS_RESOURCE, payload=user_id)
        )
        if response.status_code != STATUS_OK:
            record_lookup_failure(response.status_code)
            message = _error_message(response.body)
            logging.warning(
                f"Statistics lookup failed: {message}",
                extra={"user_id": user_id, "status_code": response.status_code},
            )
            raise RemoteLookupError(response.status_code, message)

        body = response.body
        income = body.get("income") if isinstance(body, Mapping) else None
        valid_income = income is None or (isinstance(income, int) and not isinstance(income, bool))
        if not isinstance(body, Mapping) or not body.get("id") or not valid_income:
            record_lookup_failure(response.status_code)
            raise RemoteLookupError(response.status_code, f"Invalid user data from statistics API: {body!r}")

        # 2. Pick the rate tier and open the account
        tier = select_tier(income)
        self._account = Account(
            user_id=body["id"],
            income=income,
            balance=0,
            interest_rate=tier.annual_rate,
            tier=tier.name,
        )

        record_activation(path)
        log_account_event(
            self._account.user_id,
            f"account_{path}",
            "Account opened",
            tier=tier.name,
            interest_rate=tier.annual_rate,
        )
        return self._account.user_id, self._account.interest_rate

    def set_account(self, snapshot: Union[AccountSnapshot, Mapping[str, Any]]) -> AccountView:
        """
        Attach an existing account, replacing whatever the engine held.

        Raises:
            IncompleteAccountError: id, balance or interestRate missing
            InvalidIdentifierError: Malformed id
        """
        parsed = parse_snapshot(snapshot)
        self._account = parsed.to_account()

        record_activation("attach")
        log_account_event(
            self._account.user_id,
            "account_attach",
            "Account attached",
            balance=self._account.balance,
            transaction_count=len(self._account.transactions),
        )
        return AccountView.from_account(self._account)

    def get_account(self) -> AccountView:
        return AccountView.from_account(self._require_account())

    def export_account(self) -> AccountSnapshot:
        """Full snapshot of the active account, accepted back by set_account"""
        return AccountSnapshot.from_account(self._require_account())

    def deposit_funds(self, amount: int) -> AccountView:
        account = self._require_account()
        deposit(account, amount)

        record_deposit(amount)
        log_account_event(account.user_id, "deposit", "Funds deposited", amount=amount, balance=account.balance)
        return AccountView.from_account(account)

    def calculate_interest(self, days: int, leap_year: Optional[bool] = None) -> AccountView:
        """
        Accrue interest for ``days`` days in three-day compounding steps.

        Args:
            days: Days to accrue for; trailing days short of a full step are ignored
            leap_year: Force the leap (True) or regular (False) year rates;
                None uses the current calendar year
        """
        account = self._require_account()
        use_leap_rates = is_leap_year() if leap_year is None else leap_year

        posted = accrue_interest(account, days, use_leap_rates, carry_over=self.carry_interest)

        log_interest_run(
            user_id=account.user_id,
            days=days,
            steps=compounding_steps(days, COMPOUNDING_PERIOD_DAYS),
            leap_year=use_leap_rates,
            interest_posted=posted,
            pending_interest=account.pending_interest,
        )
        return AccountView.from_account(account)

    def get_transactions(self) -> Tuple[Transaction, ...]:
        return tuple(self._require_account().transactions)
