from __future__ import annotations

from ..records import Viewer
from ..validation import UnauthenticatedError


def resolve_viewer(username: str | None, directory: dict) -> Viewer:
    """
    Resolve a caller-supplied username against the viewer directory.

    Raises UnauthenticatedError for a missing or unknown username.
    """
    if not username or not username.strip():
        raise UnauthenticatedError("Unauthorized: provide a valid X-Username header")

    entry = directory.get(username.strip())
    if entry is None:
        raise UnauthenticatedError("Unauthorized: provide a valid X-Username header")

    return Viewer(
        username=username.strip(),
        role=entry["role"],
        home_base=entry.get("home_base"),
    )
