# shared/common/constants.py
"""
Shared constants. Kept free of DRF imports so authentication classes can
use them while rest_framework is still loading its settings.
"""


class Roles:
    """
    Role constants for the system.
    """

    ADMIN = 'admin'
    STUDENT = 'student'
