"""Pytest fixtures for testing"""

import pytest
from typing import Any, Dict, List, Tuple
from interest_account.domain.accounts import InterestAccount
from interest_account.domain.models import LookupRequest, LookupResponse


LOW_INCOME_USER = "332705c0-fadd-4663-ace4-6ea1c3297566"
HIGH_INCOME_USER = "3567bd11-03c5-44ad-ae5d-5021ac26d210"
NO_INCOME_USER = "e0c1c412-823e-4af8-b256-2d1c22b3b376"
EXISTING_USER = "46437aa0-2386-4c90-b789-8513a47fda27"


class FakeStatisticsAPI:
    """In-memory stand-in for the statistics API, recording every request"""

    def __init__(self) -> None:
        self.requests: List[LookupRequest] = []
        self.responses: Dict[Tuple[str, str], LookupResponse] = {}

    def add_user(self, method: str, user_id: str, income: Any) -> None:
        self.responses[(method, user_id)] = LookupResponse(200, {"id": user_id, "income": income})

    def add_error(self, method: str, user_id: str, status_code: int, message: str) -> None:
        self.responses[(method, user_id)] = LookupResponse(
            status_code, {"code": status_code, "message": message}
        )

    def send_request(self, request: LookupRequest) -> LookupResponse:
        self.requests.append(request)
        return self.responses.get(
            (request.method, request.payload),
            LookupResponse(404, {"code": 404, "message": "Account not found"}),
        )


@pytest.fixture
def statistics_api() -> FakeStatisticsAPI:
    """Statistics API with the standard test users"""
    api = FakeStatisticsAPI()
    api.add_user("POST", LOW_INCOME_USER, 20000)  # £200
    api.add_user("POST", HIGH_INCOME_USER, 600000)  # £6000
    api.add_user("POST", NO_INCOME_USER, None)
    api.add_error("POST", EXISTING_USER, 409, "User Account exists.")
    api.add_user("GET", EXISTING_USER, 20000)
    return api


@pytest.fixture
def engine(statistics_api: FakeStatisticsAPI) -> InterestAccount:
    """Unset engine wired to the fake statistics API"""
    return InterestAccount(lookup=statistics_api, carry_interest=False)


@pytest.fixture
def account_snapshot() -> Dict[str, Any]:
    """Snapshot of an existing low tier account"""
    return {
        "id": LOW_INCOME_USER,
        "income": 20000,
        "balance": 200,
        "interestRate": 0.93,
        "transactions": [["Deposit", 200]],
    }


@pytest.fixture
def active_engine(engine: InterestAccount, account_snapshot: Dict[str, Any]) -> InterestAccount:
    """Engine with the low tier snapshot attached"""
    engine.set_account(account_snapshot)
    return engine
