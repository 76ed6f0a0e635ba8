# Shared Common Library for the LearnWise services.
# Authentication, permissions, error handling, caching and other
# cross-cutting components used by every service.
#
# Modules are imported directly (``from common.authentication import ...``).
# DRF loads ``common.authentication`` while ``rest_framework.views`` is
# still initializing, so this package must not import DRF views eagerly.

__version__ = "1.0.0"

from .constants import Roles
from .validators import validate_uuid, same_uuid

__all__ = [
    '__version__',
    'Roles',
    'validate_uuid',
    'same_uuid',
]
