"""
Filtering of the admin user directory.
"""

from typing import List, Sequence

from .records import User


def matches_search(user: User, term: str) -> bool:
    term = (term or '').strip().lower()
    if not term:
        return True
    return any(
        term in (value or '').lower()
        for value in (user.email, user.first_name, user.last_name)
    )


def filter_users(users: Sequence[User], search: str = '', role: str = '') -> List[User]:
    """Users matching ``search`` (email, first or last name) and ``role``."""
    return [
        user for user in users
        if matches_search(user, search) and (not role or user.role == role)
    ]
