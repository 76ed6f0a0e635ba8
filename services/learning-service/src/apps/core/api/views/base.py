# services/learning-service/src/apps/core/api/views/base.py
"""
Base Views and Mixins

Common functionality for Learning Service API views.
"""

from common.authentication import Principal


class PrincipalMixin:
    """
    Mixin for building the caller principal from the authenticated user.

    Service calls take the principal explicitly instead of reading the
    request.
    """

    def get_principal(self) -> Principal:
        return Principal.from_user(self.request.user)
