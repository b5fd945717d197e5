"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidIdentifierError(DomainException):
    """User ID is not a hyphenated 8-4-4-4-12 hex identifier"""

    def __init__(self, user_id: object):
        self.user_id = user_id
        super().__init__(f"Invalid user ID: {user_id!r}")


class IncompleteAccountError(DomainException):
    """Account snapshot is missing required fields"""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"Account snapshot is missing: {', '.join(missing)}")


class AccountNotActiveError(DomainException):
    """Operation requires an active account"""

    pass


class RemoteLookupError(DomainException):
    """Statistics API returned an error or is unavailable"""

    def __init__(self, status_code: int | None, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"Statistics API error ({status_code}): {message}")


class UnknownRateError(DomainException):
    """Interest rate does not belong to any known tier"""

    def __init__(self, rate: object):
        self.rate = rate
        super().__init__(f"No interest tier matches rate {rate!r}")


class InvalidDepositError(DomainException):
    """Deposit amount is negative"""

    pass
