"""Error handlers - map domain exceptions to HTTP responses."""

import falcon
import falcon.asgi

from staffhousing.domain.exceptions import (
    Conflict,
    MinimumAccessViolation,
    NotFound,
    PermissionDenied,
    StaffHousingError,
    ValidationError,
)
from staffhousing.logging_config import get_logger

log = get_logger(__name__)


def _not_found_message(ex: NotFound) -> str:
    if len(ex.args) == 2:
        return f"{ex.args[0]} {ex.args[1]} not found"
    return str(ex) or "Not found"


async def handle_domain_error(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: StaffHousingError, params
) -> None:
    """Render domain errors as JSON with a status matching the error kind."""
    if isinstance(ex, MinimumAccessViolation):
        resp.status = falcon.HTTP_422
        resp.media = {
            "error": ex.message,
            "code": "minimum_access",
            "property_id": ex.property_id,
            "user_id": ex.user_id,
        }
    elif isinstance(ex, ValidationError):
        resp.status = falcon.HTTP_400
        resp.media = {"error": str(ex)}
    elif isinstance(ex, PermissionDenied):
        resp.status = falcon.HTTP_403
        resp.media = {"error": str(ex) or "Permission denied"}
    elif isinstance(ex, NotFound):
        resp.status = falcon.HTTP_404
        resp.media = {"error": _not_found_message(ex)}
    elif isinstance(ex, Conflict):
        resp.status = falcon.HTTP_409
        resp.media = {"error": str(ex)}
    else:
        resp.status = falcon.HTTP_500
        resp.media = {"error": str(ex)}


async def handle_unexpected_error(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: Exception, params
) -> None:
    log.exception("Unhandled error on %s %s", req.method, req.path)
    resp.status = falcon.HTTP_500
    resp.media = {"title": "500 Internal Server Error"}


def register_error_handlers(app: falcon.asgi.App) -> None:
    app.add_error_handler(Exception, handle_unexpected_error)
    app.add_error_handler(StaffHousingError, handle_domain_error)


def require_user(req: falcon.asgi.Request):
    """Acting user from the identity middleware, or raise 401."""
    user = getattr(req.context, "user", None)
    if not user:
        raise falcon.HTTPUnauthorized(title="Unauthorized")
    return user


def acting_property(req: falcon.asgi.Request, user) -> int:
    """Property the actor is working in; required for authorization."""
    if user.property_id is None:
        raise falcon.HTTPBadRequest(title="Missing X-Property-Id header")
    return user.property_id
