# Overview: All permission definitions organized by category.
# Each permission is defined as: (code, name, description, category)

from .categories import PermissionCategory


# -- MOVEMENTS --

MOVEMENT_PERMISSIONS = [
    (
        "RECORD_PURCHASE",
        "Record Purchase",
        "Record equipment acquired by a base",
        PermissionCategory.MOVEMENTS,
    ),
    (
        "RECORD_TRANSFER",
        "Record Transfer",
        "Record equipment moving from one base to another",
        PermissionCategory.MOVEMENTS,
    ),
    (
        "RECORD_ASSIGNMENT",
        "Record Assignment",
        "Record equipment issued to personnel or expended",
        PermissionCategory.MOVEMENTS,
    ),
]


# -- VIEWS --

VIEW_PERMISSIONS = [
    (
        "VIEW_PURCHASES",
        "View Purchases",
        "List purchases within the viewer's visibility scope",
        PermissionCategory.VIEWS,
    ),
    (
        "VIEW_TRANSFERS",
        "View Transfers",
        "List transfers touching bases within the viewer's visibility scope",
        PermissionCategory.VIEWS,
    ),
    (
        "VIEW_ASSIGNMENTS",
        "View Assignments",
        "List assignments and expenditures within the viewer's visibility scope",
        PermissionCategory.VIEWS,
    ),
]


# -- REPORTS --

REPORT_PERMISSIONS = [
    (
        "VIEW_BALANCE_REPORT",
        "View Balance Report",
        "View opening/closing balance, net movement, assigned and expended figures",
        PermissionCategory.REPORTS,
    ),
]


PERMISSION_DEFINITIONS = (
    MOVEMENT_PERMISSIONS
    + VIEW_PERMISSIONS
    + REPORT_PERMISSIONS
)
