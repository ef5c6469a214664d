# Overview: Default permission grants per role.

from armory.records import Role


DEFAULT_ROLE_PERMISSIONS = {
    Role.ADMIN: {
        "RECORD_PURCHASE",
        "RECORD_TRANSFER",
        "RECORD_ASSIGNMENT",
        "VIEW_PURCHASES",
        "VIEW_TRANSFERS",
        "VIEW_ASSIGNMENTS",
        "VIEW_BALANCE_REPORT",
    },
    Role.BASE_COMMANDER: {
        "RECORD_PURCHASE",
        "RECORD_TRANSFER",
        "RECORD_ASSIGNMENT",
        "VIEW_PURCHASES",
        "VIEW_TRANSFERS",
        "VIEW_ASSIGNMENTS",
        "VIEW_BALANCE_REPORT",
    },
    # Purchases only; assignments stay with the bases holding the equipment
    Role.LOGISTICS_OFFICER: {
        "RECORD_PURCHASE",
        "VIEW_PURCHASES",
        "VIEW_TRANSFERS",
        "VIEW_BALANCE_REPORT",
    },
}
