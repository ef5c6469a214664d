# Overview: Utility functions for permission lookups and validation.

from armory.records import RecordKind, Role

from .definitions import PERMISSION_DEFINITIONS
from .roles import DEFAULT_ROLE_PERMISSIONS


RECORD_PERMISSION_BY_KIND = {
    RecordKind.PURCHASE: "RECORD_PURCHASE",
    RecordKind.TRANSFER: "RECORD_TRANSFER",
    RecordKind.ASSIGNMENT: "RECORD_ASSIGNMENT",
}

VIEW_PERMISSION_BY_KIND = {
    RecordKind.PURCHASE: "VIEW_PURCHASES",
    RecordKind.TRANSFER: "VIEW_TRANSFERS",
    RecordKind.ASSIGNMENT: "VIEW_ASSIGNMENTS",
}


def get_all_permission_codes():
    """Get list of all permission codes."""
    return [perm[0] for perm in PERMISSION_DEFINITIONS]


def validate_permission_code(code):
    """Check if a permission code is valid."""
    return code in get_all_permission_codes()


def role_has_permission(role, code) -> bool:
    return code in DEFAULT_ROLE_PERMISSIONS.get(Role.coerce(role), set())
