# Overview: Permission system package.
# Re-exports all public APIs.

from .categories import PermissionCategory
from .definitions import (
    PERMISSION_DEFINITIONS,
    MOVEMENT_PERMISSIONS,
    VIEW_PERMISSIONS,
    REPORT_PERMISSIONS,
)
from .roles import DEFAULT_ROLE_PERMISSIONS
from .helpers import (
    RECORD_PERMISSION_BY_KIND,
    VIEW_PERMISSION_BY_KIND,
    get_all_permission_codes,
    validate_permission_code,
    role_has_permission,
)

__all__ = [
    "PermissionCategory",
    "PERMISSION_DEFINITIONS",
    "MOVEMENT_PERMISSIONS",
    "VIEW_PERMISSIONS",
    "REPORT_PERMISSIONS",
    "DEFAULT_ROLE_PERMISSIONS",
    "RECORD_PERMISSION_BY_KIND",
    "VIEW_PERMISSION_BY_KIND",
    "get_all_permission_codes",
    "validate_permission_code",
    "role_has_permission",
]
