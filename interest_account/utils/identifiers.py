"""User identifier validation"""

import re

from interest_account.domain.exceptions import InvalidIdentifierError

USER_ID_PATTERN = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)


def is_valid_user_id(user_id: object) -> bool:
    return isinstance(user_id, str) and USER_ID_PATTERN.fullmatch(user_id) is not None


def validate_user_id(user_id: object) -> str:
    """Return ``user_id`` unchanged, or raise InvalidIdentifierError"""
    if not is_valid_user_id(user_id):
        raise InvalidIdentifierError(user_id)
    return user_id
