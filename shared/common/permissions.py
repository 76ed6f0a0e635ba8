# shared/common/permissions.py
"""
Custom Permission Classes for Role-Based Access Control (RBAC)
"""

import logging
from typing import List
from rest_framework import permissions
from rest_framework.request import Request
from rest_framework.views import APIView

from .constants import Roles
from .validators import same_uuid

logger = logging.getLogger(__name__)


class BasePermission(permissions.BasePermission):
    """Base permission class with utility methods"""

    def get_user_roles(self, request: Request) -> List[str]:
        """Get roles from user object or JWT payload"""
        if hasattr(request.user, 'roles'):
            return request.user.roles
        if hasattr(request, 'auth') and isinstance(request.auth, dict):
            return request.auth.get('roles', [])
        return []

    def is_authenticated(self, request: Request) -> bool:
        return bool(
            request.user and
            getattr(request.user, 'is_authenticated', False)
        )


class HasRole(BasePermission):
    """Check if user has required role(s)"""

    required_roles: List[str] = []
    require_all: bool = False  # If True, user must have ALL roles

    def has_permission(self, request: Request, view: APIView) -> bool:
        if not self.is_authenticated(request):
            return False

        user_roles = self.get_user_roles(request)

        if self.require_all:
            return set(self.required_roles).issubset(set(user_roles))
        return bool(set(self.required_roles) & set(user_roles))


class IsAdmin(HasRole):
    """Only administrators"""
    required_roles = [Roles.ADMIN]


class IsAdminOrReadOnly(BasePermission):
    """
    Full access for admins, read-only for other authenticated users.
    """

    def has_permission(self, request: Request, view: APIView) -> bool:
        if request.method in permissions.SAFE_METHODS:
            return self.is_authenticated(request)

        return self.is_authenticated(request) and Roles.ADMIN in self.get_user_roles(request)


class IsSelfOrAdmin(BasePermission):
    """
    Allow access to a user-scoped resource only to that user or an admin.

    The target user is read from the view's ``user_id_kwarg`` URL kwarg;
    routes without it are treated as "the caller".
    """

    message = 'You may only access your own records.'

    def has_permission(self, request: Request, view: APIView) -> bool:
        if not self.is_authenticated(request):
            return False

        kwarg = getattr(view, 'user_id_kwarg', 'user_id')
        target_user_id = view.kwargs.get(kwarg) if hasattr(view, 'kwargs') else None
        if target_user_id is None:
            return True

        if Roles.ADMIN in self.get_user_roles(request):
            return True
        return same_uuid(target_user_id, request.user.id)
