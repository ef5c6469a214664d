# Overview: Request identity and permission decorators for API routes.

from functools import wraps
from flask import current_app, g, jsonify, request

from .permissions import role_has_permission, validate_permission_code
from .services import identity_service
from .validation import ERROR_FORBIDDEN, UnauthenticatedError


USERNAME_HEADER = "X-Username"


def _is_authenticated() -> bool:
    return hasattr(g, "viewer")


def require_viewer(f):
    """
    Resolve the caller and establish viewer context.

    Sets g.viewer (a Viewer: username, role, home base).

    Returns 401 if the X-Username header is missing or unknown.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        try:
            viewer = identity_service.resolve_viewer(
                request.headers.get(USERNAME_HEADER),
                current_app.config["VIEWERS"],
            )
        except UnauthenticatedError as e:
            return jsonify(e.to_dict()), e.status_code

        g.viewer = viewer
        return f(*args, **kwargs)

    return decorated_function


def require_permission(permission_code: str):
    """Require the viewer's role to grant a specific permission."""
    if not validate_permission_code(permission_code):
        raise ValueError(f"Unknown permission code: {permission_code}")

    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            # Ensure @require_viewer was called first
            if not _is_authenticated():
                return jsonify({"error": "Authentication required"}), 401

            viewer = g.viewer
            if not role_has_permission(viewer.role, permission_code):
                current_app.logger.warning(
                    "Permission denied: user=%s role=%s permission=%s path=%s",
                    viewer.username,
                    viewer.role.value,
                    permission_code,
                    request.path,
                )
                return jsonify({
                    "error": "Permission denied",
                    "code": ERROR_FORBIDDEN,
                    "required_permission": permission_code,
                    "message": f"{viewer.role.value} lacks {permission_code}",
                }), 403

            return f(*args, **kwargs)

        return decorated_function
    return decorator
