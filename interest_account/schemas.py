"""Pydantic schemas for account views and snapshots"""

from typing import Any, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from interest_account.domain.exceptions import IncompleteAccountError
from interest_account.domain.models import Account, Transaction
from interest_account.utils.identifiers import validate_user_id

# (canonical key, accepted aliases)
REQUIRED_SNAPSHOT_FIELDS = (
    ("id", ("id",)),
    ("balance", ("balance",)),
    ("interestRate", ("interestRate", "interest_rate")),
)


class AccountView(BaseModel):
    """Public view of an account returned by engine operations"""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    balance: int
    interest_rate: float = Field(..., alias="interestRate")
    income: Optional[int] = None

    @classmethod
    def from_account(cls, account: Account) -> "AccountView":
        return cls(
            id=account.user_id,
            balance=account.balance,
            interest_rate=account.interest_rate,
            income=account.income,
        )


class AccountSnapshot(AccountView):
    """Full account state, accepted by InterestAccount.set_account"""

    balance: int = Field(..., ge=0)  # Pence, never negative
    transactions: List[Tuple[str, int]] = Field(default_factory=list)
    tier: Optional[str] = None
    pending_interest: float = Field(0.0, alias="pendingInterest")

    @classmethod
    def from_account(cls, account: Account) -> "AccountSnapshot":
        return cls(
            id=account.user_id,
            balance=account.balance,
            interest_rate=account.interest_rate,
            income=account.income,
            transactions=[(t.kind, t.amount) for t in account.transactions],
            tier=account.tier,
            pending_interest=account.pending_interest,
        )

    def to_account(self) -> Account:
        return Account(
            user_id=self.id,
            income=self.income,
            balance=self.balance,
            interest_rate=self.interest_rate,
            tier=self.tier,
            pending_interest=self.pending_interest,
            transactions=[Transaction(kind=kind, amount=amount) for kind, amount in self.transactions],
        )


def parse_snapshot(data: Union[AccountSnapshot, Mapping[str, Any]]) -> AccountSnapshot:
    """
    Validate an account snapshot.

    ``id``, ``balance`` and ``interestRate`` must be present and not None;
    ``income`` and ``transactions`` are optional.

    Raises:
        IncompleteAccountError: When a required field is missing
        InvalidIdentifierError: When id is not a valid user ID
    """
    if isinstance(data, AccountSnapshot):
        validate_user_id(data.id)
        return data

    missing = [
        name
        for name, aliases in REQUIRED_SNAPSHOT_FIELDS
        if all(data.get(alias) is None for alias in aliases)
    ]
    if missing:
        raise IncompleteAccountError(missing)
    validate_user_id(data["id"])

    payload = dict(data)
    if payload.get("transactions") is None:
        payload.pop("transactions", None)
    return AccountSnapshot.model_validate(payload)
