# services/learning-service/src/apps/core/services/access.py
"""
Caller access checks for learner-scoped operations.
"""

from typing import Any, Optional

from common.authentication import Principal

from .exceptions import PermissionDeniedError


def ensure_can_access_user(principal: Optional[Principal], user_id: Any) -> None:
    """
    Allow admins to act on any learner and learners only on themselves.

    A missing principal means an internal call and is always allowed.
    """
    if principal is None or principal.can_access_user(user_id):
        return
    raise PermissionDeniedError(
        "You may only access your own records",
        details={'user_id': str(user_id)}
    )
