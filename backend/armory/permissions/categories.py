# Overview: Permission category constants for grouping related permissions.


class PermissionCategory:
    """Permission categories for organization and display."""
    MOVEMENTS = "MOVEMENTS"
    VIEWS = "VIEWS"
    REPORTS = "REPORTS"
