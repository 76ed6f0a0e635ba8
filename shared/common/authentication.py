# shared/common/authentication.py
"""
JWT Authentication and Caller Principal
"""

import jwt
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Dict, Any, Tuple, List
from django.conf import settings
from rest_framework import authentication, exceptions
from rest_framework.request import Request

from .constants import Roles
from .validators import same_uuid

logger = logging.getLogger(__name__)


class JWTAuthentication(authentication.BaseAuthentication):
    """
    JWT Token Authentication for API requests.
    Tokens are issued by the identity service and signed with the shared key.
    """

    keyword = 'Bearer'

    def authenticate(self, request: Request) -> Optional[Tuple[Any, Dict]]:
        auth_header = authentication.get_authorization_header(request)

        if not auth_header:
            return None

        try:
            auth_parts = auth_header.decode('utf-8').split()
        except UnicodeDecodeError:
            raise exceptions.AuthenticationFailed('Invalid token header encoding')

        if len(auth_parts) != 2:
            raise exceptions.AuthenticationFailed('Invalid token header format')

        if auth_parts[0].lower() != self.keyword.lower():
            return None

        token = auth_parts[1]
        return self.authenticate_token(token)

    def authenticate_token(self, token: str) -> Tuple[Any, Dict]:
        """Validate and decode JWT token"""
        try:
            payload = jwt.decode(
                token,
                settings.JWT_SETTINGS['VERIFYING_KEY'],
                algorithms=[settings.JWT_SETTINGS['ALGORITHM']],
                issuer=settings.JWT_SETTINGS['ISSUER'],
                options={
                    'require': ['exp', 'iat', 'sub', 'iss'],
                    'verify_exp': True,
                    'verify_iat': True,
                    'verify_iss': True,
                }
            )
        except jwt.ExpiredSignatureError:
            raise exceptions.AuthenticationFailed('Token has expired')
        except jwt.InvalidTokenError as e:
            logger.warning(f"Invalid token: {e}")
            raise exceptions.AuthenticationFailed('Invalid token')

        return (TokenUser(payload), payload)

    def authenticate_header(self, request: Request) -> str:
        return self.keyword


class TokenUser:
    """
    User object created from JWT token payload.
    Provides a consistent interface for accessing user data.
    """

    def __init__(self, payload: Dict):
        self.payload = payload
        self.id = payload.get('sub')
        self.user_id = payload.get('sub')
        self.email = payload.get('email')
        self.username = payload.get('username')
        self.roles = payload.get('roles', [])
        self.is_active = True
        self.is_authenticated = True
        self.is_anonymous = False

    def __str__(self) -> str:
        return f"TokenUser({self.email or self.id})"


@dataclass(frozen=True)
class Principal:
    """
    Authenticated caller identity handed to service calls.

    Services never read request or token state themselves; views build a
    principal once and pass it down.
    """
    user_id: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == Roles.ADMIN

    def can_access_user(self, user_id: Any) -> bool:
        """Admins may act on any learner, everyone else only on themselves."""
        return self.is_admin or same_uuid(user_id, self.user_id)

    @classmethod
    def from_user(cls, user: Any) -> 'Principal':
        roles = getattr(user, 'roles', None) or []
        role = Roles.ADMIN if Roles.ADMIN in roles else (roles[0] if roles else Roles.STUDENT)
        return cls(user_id=str(user.id), role=role)


class JWTTokenGenerator:
    """
    Generate JWT tokens. Used by tooling and tests; production tokens come
    from the identity service.
    """

    @staticmethod
    def generate_access_token(
        user_id: str,
        roles: List[str],
        email: str = None,
        extra_claims: Dict = None
    ) -> str:
        """Generate an access token"""
        now = datetime.now(timezone.utc)

        payload = {
            'sub': str(user_id),
            'email': email,
            'roles': roles,
            'iat': now,
            'exp': now + settings.JWT_SETTINGS['ACCESS_TOKEN_LIFETIME'],
            'iss': settings.JWT_SETTINGS['ISSUER'],
            'type': 'access',
        }

        if extra_claims:
            payload.update(extra_claims)

        return jwt.encode(
            payload,
            settings.JWT_SETTINGS['SIGNING_KEY'],
            algorithm=settings.JWT_SETTINGS['ALGORITHM']
        )
